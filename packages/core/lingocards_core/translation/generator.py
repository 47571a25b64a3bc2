"""Reference translation generation through the provider chain."""

from dataclasses import dataclass

from lingocards_core.errors import TranslationError
from lingocards_core.schemas.evaluation import GenerationRequest
from lingocards_core.translation.chain import ProviderChain
from lingocards_core.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class GenerationOutcome:
    """A generated translation and the provider error absorbed producing it."""

    translation: str
    error: TranslationError | None = None


class TranslationGenerator(ProviderChain):
    """Generates translations, degrading to the baseline phrase table."""

    operation = "generation"

    async def generate(self, request: GenerationRequest) -> GenerationOutcome:
        """Translate content, reporting any provider failure with the result.

        The baseline returns the content in square brackets when it has no
        translation.

        Raises:
            TranslationError: Only in strict mode, when every provider failed
        """
        result, failures = await self._run(
            lambda provider: provider.generate_translation(request)
        )
        if result is not None:
            return GenerationOutcome(translation=result)

        error = None
        if failures:
            _, first_failure = failures[0]
            error = self.enrich_error(
                first_failure,
                request.source_language,
                request.target_language,
                content_length=len(request.content),
            )
            logger.error(f"Translation generation error: {error}")
            if self.strict:
                raise error from first_failure
        else:
            logger.warning(
                "No translation providers available. Using baseline translation generation."
            )

        return GenerationOutcome(
            translation=self.baseline.generate_translation(request), error=error
        )

    async def generate_translation(self, request: GenerationRequest) -> str:
        """Translate content, returning only the text."""
        outcome = await self.generate(request)
        return outcome.translation
