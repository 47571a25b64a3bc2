"""Translation evaluation through the provider chain."""

from lingocards_core.schemas.evaluation import EvaluationRequest, EvaluationResult
from lingocards_core.translation.chain import ProviderChain
from lingocards_core.utils.logging import get_logger

logger = get_logger(__name__)


class TranslationEvaluator(ProviderChain):
    """Evaluates translations, degrading to the baseline translator."""

    operation = "evaluation"

    async def evaluate_translation(self, request: EvaluationRequest) -> EvaluationResult:
        """Evaluate a user translation.

        Args:
            request: Source content, languages, answer and optional reference

        Returns:
            Provider result on success, otherwise the baseline result flagged
            with ``fallback`` (and ``error``/``warning`` when a provider failed)

        Raises:
            TranslationError: Only in strict mode, when every provider failed
        """
        result, failures = await self._run(
            lambda provider: provider.evaluate_translation(request)
        )
        if result is not None:
            return result

        error = None
        if failures:
            _, first_failure = failures[0]
            error = self.enrich_error(
                first_failure, request.source_language, request.target_language
            )
            logger.error(f"Translation evaluation error: {error}")
            if self.strict:
                raise error from first_failure
        else:
            logger.warning(
                "No translation providers available. Using baseline evaluation."
            )

        baseline = self.baseline.evaluate_translation(request)
        return baseline.model_copy(
            update={
                "fallback": True,
                "error": error is not None,
                "warning": error.message if error else None,
            }
        )
