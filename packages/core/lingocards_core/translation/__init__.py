"""Translation evaluation and generation with provider fallback."""

from lingocards_core.translation.baseline import (
    BaselineTranslator,
    is_close_match,
    is_untranslated,
)
from lingocards_core.translation.evaluator import TranslationEvaluator
from lingocards_core.translation.generator import GenerationOutcome, TranslationGenerator
from lingocards_core.translation.registry import ProviderRegistry, create_providers
from lingocards_core.translation.service import TranslationService

__all__ = [
    "BaselineTranslator",
    "is_close_match",
    "is_untranslated",
    "ProviderRegistry",
    "create_providers",
    "TranslationEvaluator",
    "GenerationOutcome",
    "TranslationGenerator",
    "TranslationService",
]
