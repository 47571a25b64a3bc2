"""Translation facade combining evaluation and generation."""

from lingocards_core.config import Settings, get_settings
from lingocards_core.schemas.evaluation import (
    EvaluationRequest,
    EvaluationResult,
    GenerationRequest,
)
from lingocards_core.translation.baseline import BaselineTranslator
from lingocards_core.translation.evaluator import TranslationEvaluator
from lingocards_core.translation.generator import GenerationOutcome, TranslationGenerator
from lingocards_core.translation.registry import ProviderRegistry, create_providers
from lingocards_core.utils.retry import total_backoff


def chain_timeout(settings: Settings) -> float:
    """Seconds a provider gets before the chain moves on.

    Covers every attempt the provider makes on its own plus the backoff
    between them, so retries still happen for slow calls.
    """
    attempts = settings.translation_max_retries + 1
    return settings.translation_timeout * attempts + total_backoff(attempts)


class TranslationService:
    """Entry point for evaluating and generating translations."""

    def __init__(
        self,
        registry: ProviderRegistry | None = None,
        settings: Settings | None = None,
        strict: bool | None = None,
    ):
        """Initialize the service.

        Args:
            registry: Providers to use; built from settings when omitted
            settings: Application settings (defaults to ``get_settings()``)
            strict: Override ``settings.strict_translation_errors``
        """
        settings = settings or get_settings()
        self.registry = registry if registry is not None else create_providers(settings)
        strict = settings.strict_translation_errors if strict is None else strict
        baseline = BaselineTranslator()
        timeout = chain_timeout(settings)

        self.evaluator = TranslationEvaluator(
            self.registry,
            baseline=baseline,
            timeout=timeout,
            strict=strict,
        )
        self.generator = TranslationGenerator(
            self.registry,
            baseline=baseline,
            timeout=timeout,
            strict=strict,
        )

    @property
    def primary_provider(self) -> str:
        return self.registry.primary

    async def evaluate_translation(self, request: EvaluationRequest) -> EvaluationResult:
        return await self.evaluator.evaluate_translation(request)

    async def generate_translation(self, request: GenerationRequest) -> str:
        return await self.generator.generate_translation(request)

    async def generate(self, request: GenerationRequest) -> GenerationOutcome:
        """Generate a translation along with any provider error absorbed."""
        return await self.generator.generate(request)
