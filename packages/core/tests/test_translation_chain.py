"""Tests for provider fallback in translation evaluation and generation."""

import asyncio

import pytest

from lingocards_core.config import Settings
from lingocards_core.errors import ProviderError, TranslationError
from lingocards_core.schemas.evaluation import (
    EvaluationRequest,
    EvaluationResult,
    GenerationRequest,
)
from lingocards_core.translation.baseline import BaselineTranslator
from lingocards_core.translation.evaluator import TranslationEvaluator
from lingocards_core.translation.generator import TranslationGenerator
from lingocards_core.translation.providers.base import BaseTranslationProvider
from lingocards_core.translation.registry import ProviderRegistry
from lingocards_core.translation.service import TranslationService, chain_timeout


class FakeProvider(BaseTranslationProvider):
    """Provider returning canned results or raising a canned error."""

    def __init__(
        self,
        name: str,
        error: Exception | None = None,
        translation: str = "Servus",
        delay: float = 0.0,
    ):
        self.name = name
        self.error = error
        self.translation = translation
        self.delay = delay
        self.calls = 0

    async def _maybe_fail(self) -> None:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error

    async def evaluate_translation(self, request: EvaluationRequest) -> EvaluationResult:
        await self._maybe_fail()
        return EvaluationResult(
            correct=True,
            score=0.9,
            feedback=f"Evaluated by {self.name}",
            suggested_translation=request.user_translation,
        )

    async def generate_translation(self, request: GenerationRequest) -> str:
        await self._maybe_fail()
        return self.translation


class ContentProvider(FakeProvider):
    """Provider that fails for content it has no translation for."""

    def __init__(self, name: str, translations: dict[str, tuple[str, float]]):
        super().__init__(name)
        self.translations = translations

    async def generate_translation(self, request: GenerationRequest) -> str:
        self.calls += 1
        translation, delay = self.translations.get(request.content, ("", 0.01))
        await asyncio.sleep(delay)
        if not translation:
            raise ProviderError(f"cannot translate {request.content}", self.name)
        return translation


EVALUATION = EvaluationRequest(
    source_content="Hello",
    source_language="en",
    target_language="de",
    user_translation="Hallo",
    reference_translation="Hallo",
)

GENERATION = GenerationRequest(
    content="zzz unknown", source_language="en", target_language="de"
)


def _registry(*providers: FakeProvider, primary: str = "gemini") -> ProviderRegistry:
    return ProviderRegistry({p.name: p for p in providers}, primary=primary)


class TestEvaluationChain:
    """Tests for TranslationEvaluator."""

    @pytest.mark.asyncio
    async def test_no_providers_matches_baseline_shape(self) -> None:
        evaluator = TranslationEvaluator(ProviderRegistry())

        result = await evaluator.evaluate_translation(EVALUATION)
        baseline = BaselineTranslator().evaluate_translation(EVALUATION)

        assert set(result.model_dump()) == set(baseline.model_dump())
        assert result.correct == baseline.correct
        assert result.score == baseline.score
        assert result.fallback
        assert not result.error
        assert result.warning is None

    @pytest.mark.asyncio
    async def test_primary_used_first(self) -> None:
        primary = FakeProvider("gemini")
        fallback = FakeProvider("openai")
        evaluator = TranslationEvaluator(_registry(primary, fallback))

        result = await evaluator.evaluate_translation(EVALUATION)

        assert result.feedback == "Evaluated by gemini"
        assert not result.fallback
        assert fallback.calls == 0

    @pytest.mark.asyncio
    async def test_fallback_provider_after_primary_failure(self) -> None:
        primary = FakeProvider("gemini", error=ProviderError("boom", "gemini"))
        fallback = FakeProvider("openai")
        evaluator = TranslationEvaluator(_registry(primary, fallback))

        result = await evaluator.evaluate_translation(EVALUATION)

        assert result.feedback == "Evaluated by openai"
        assert primary.calls == 1
        assert not result.fallback
        assert result.error is False

    @pytest.mark.asyncio
    async def test_baseline_after_all_providers_fail(self) -> None:
        primary = FakeProvider("gemini", error=ProviderError("boom", "gemini"))
        fallback = FakeProvider("openai", error=ProviderError("bang", "openai"))
        evaluator = TranslationEvaluator(_registry(primary, fallback))

        result = await evaluator.evaluate_translation(EVALUATION)

        assert result.fallback
        assert result.error
        assert result.correct
        assert result.score == 1.0
        assert result.warning == "Translation evaluation failed: boom"
        assert fallback.calls == 1

    @pytest.mark.asyncio
    async def test_api_key_error_rewritten(self) -> None:
        primary = FakeProvider("gemini", error=ProviderError("401 Unauthorized"))
        evaluator = TranslationEvaluator(_registry(primary))

        result = await evaluator.evaluate_translation(EVALUATION)

        assert result.warning is not None
        assert result.warning.startswith("Translation API key error")
        assert "gemini" in result.warning

        error = evaluator.enrich_error(ProviderError("401 Unauthorized"), "en", "de")
        assert error.api_key_error
        assert error.context["source_language"] == "en"
        assert error.context["api_available"] is True

    @pytest.mark.asyncio
    async def test_strict_mode_raises(self) -> None:
        primary = FakeProvider("gemini", error=ProviderError("invalid api key"))
        evaluator = TranslationEvaluator(_registry(primary), strict=True)

        with pytest.raises(TranslationError) as exc_info:
            await evaluator.evaluate_translation(EVALUATION)

        assert exc_info.value.api_key_error
        assert exc_info.value.context["provider"] == "gemini"
        assert exc_info.value.context["has_providers"] is True
        assert exc_info.value.to_dict()["api_key_error"] is True

    @pytest.mark.asyncio
    async def test_strict_mode_without_providers_uses_baseline(self) -> None:
        evaluator = TranslationEvaluator(ProviderRegistry(), strict=True)
        result = await evaluator.evaluate_translation(EVALUATION)
        assert result.fallback

    @pytest.mark.asyncio
    async def test_timeout_counts_as_failure(self) -> None:
        slow = FakeProvider("gemini", delay=1.0)
        evaluator = TranslationEvaluator(_registry(slow), timeout=0.01)

        result = await evaluator.evaluate_translation(EVALUATION)

        assert result.fallback
        assert result.error
        assert "timed out" in (result.warning or "")

    @pytest.mark.asyncio
    async def test_unregistered_primary_uses_fallback(self) -> None:
        fallback = FakeProvider("openai")
        evaluator = TranslationEvaluator(_registry(fallback, primary="gemini"))

        result = await evaluator.evaluate_translation(EVALUATION)

        assert result.feedback == "Evaluated by openai"


class TestGenerationChain:
    """Tests for TranslationGenerator."""

    @pytest.mark.asyncio
    async def test_no_providers_uses_phrase_table(self) -> None:
        generator = TranslationGenerator(ProviderRegistry())
        assert await generator.generate_translation(GENERATION) == "[zzz unknown]"

    @pytest.mark.asyncio
    async def test_provider_result(self) -> None:
        generator = TranslationGenerator(_registry(FakeProvider("gemini")))
        assert await generator.generate_translation(GENERATION) == "Servus"

    @pytest.mark.asyncio
    async def test_failure_records_error(self) -> None:
        primary = FakeProvider("gemini", error=ConnectionError("offline"))
        generator = TranslationGenerator(_registry(primary))

        outcome = await generator.generate(GENERATION)

        assert outcome.translation == "[zzz unknown]"
        assert outcome.error is not None
        assert outcome.error.context["content_length"] == len("zzz unknown")
        assert not outcome.error.api_key_error

    @pytest.mark.asyncio
    async def test_concurrent_outcomes_are_independent(self) -> None:
        provider = ContentProvider("gemini", {"good": ("Gut", 0.05)})
        generator = TranslationGenerator(_registry(provider))

        good, bad = await asyncio.gather(
            generator.generate(GENERATION.model_copy(update={"content": "good"})),
            generator.generate(GENERATION.model_copy(update={"content": "bad"})),
        )

        assert good.translation == "Gut"
        assert good.error is None
        assert bad.translation == "[bad]"
        assert bad.error is not None
        assert "cannot translate bad" in str(bad.error)

    @pytest.mark.asyncio
    async def test_strict_mode_raises(self) -> None:
        primary = FakeProvider("gemini", error=ConnectionError("offline"))
        generator = TranslationGenerator(_registry(primary), strict=True)

        with pytest.raises(TranslationError):
            await generator.generate_translation(GENERATION)


class TestTranslationService:
    """Tests for the facade."""

    @pytest.mark.asyncio
    async def test_shares_registry(self) -> None:
        settings = Settings(_env_file=None, translation_timeout=5.0)
        service = TranslationService(
            registry=_registry(FakeProvider("gemini")), settings=settings
        )

        assert service.primary_provider == "gemini"
        assert service.evaluator.timeout == 18.0
        result = await service.evaluate_translation(EVALUATION)
        assert result.feedback == "Evaluated by gemini"
        assert await service.generate_translation(GENERATION) == "Servus"
        outcome = await service.generate(GENERATION)
        assert outcome.translation == "Servus"
        assert outcome.error is None

    @pytest.mark.asyncio
    async def test_strict_override(self) -> None:
        settings = Settings(_env_file=None, strict_translation_errors=False)
        service = TranslationService(
            registry=ProviderRegistry(), settings=settings, strict=True
        )
        assert service.evaluator.strict
        assert service.generator.strict

    def test_chain_timeout_covers_retries(self) -> None:
        settings = Settings(
            _env_file=None, translation_timeout=10.0, translation_max_retries=2
        )

        # three attempts of 10s plus 1s and 2s of backoff
        assert chain_timeout(settings) == 33.0
        service = TranslationService(registry=ProviderRegistry(), settings=settings)
        assert service.evaluator.timeout == 33.0
        assert service.generator.timeout == 33.0

    def test_chain_timeout_without_retries(self) -> None:
        settings = Settings(
            _env_file=None, translation_timeout=4.0, translation_max_retries=0
        )
        assert chain_timeout(settings) == 4.0
