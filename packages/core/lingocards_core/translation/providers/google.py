"""Google Gemini translation provider."""

import asyncio
from typing import Any

from lingocards_core.errors import ProviderError
from lingocards_core.schemas.evaluation import (
    EvaluationRequest,
    EvaluationResult,
    GenerationRequest,
)
from lingocards_core.translation.providers.base import (
    EVALUATION_CRITERIA,
    BaseTranslationProvider,
    build_evaluation_context,
    clean_translation,
    evaluator_role,
    language_name,
    parse_evaluation,
)
from lingocards_core.utils.logging import get_logger
from lingocards_core.utils.retry import RateLimitError, format_exception, with_retry

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_MODEL = "gemini-1.5-pro"


def _wrap_google_error(e: Exception) -> Exception:
    """Convert Google API errors to standard exceptions for retry handling.

    Args:
        e: Original exception from Google API

    Returns:
        Wrapped exception (RateLimitError for rate limits, original otherwise)
    """
    error_str = str(e).lower()
    error_type = type(e).__name__

    if any(
        indicator in error_str
        for indicator in [
            "resource exhausted",
            "quota",
            "rate limit",
            "429",
            "too many requests",
        ]
    ) or error_type in ("ResourceExhausted", "TooManyRequests"):
        return RateLimitError(f"Google API rate limit: {e}")

    if any(
        indicator in error_str
        for indicator in ["503", "500", "internal", "unavailable", "deadline"]
    ) or error_type in (
        "ServiceUnavailable",
        "InternalServerError",
        "DeadlineExceeded",
    ):
        return ConnectionError(f"Google API server error: {e}")

    return e


class GoogleProvider(BaseTranslationProvider):
    """Provider backed by Google Gemini models."""

    name = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = 2,
    ):
        """Initialize the Gemini provider.

        Args:
            api_key: Google AI API key
            model: Gemini model name
            timeout: Request timeout in seconds
            max_retries: Additional attempts for transient failures

        Raises:
            ValueError: If no API key is given
        """
        if not api_key:
            raise ValueError("Gemini API key is required")

        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.max_retries = max_retries

        self._client: Any = None
        logger.info(f"Initialized Gemini provider (model={model})")

    @property
    def client(self) -> Any:
        """Lazy-load the Google Generative AI client."""
        if self._client is None:
            import google.generativeai as genai

            genai.configure(api_key=self.api_key)
            self._client = genai
        return self._client

    async def _call_api(
        self,
        prompt: str,
        operation_name: str,
        json_response: bool = False,
    ) -> str:
        """Call the Gemini API with retry logic.

        Args:
            prompt: Prompt text
            operation_name: Name for logging
            json_response: Ask for an application/json response

        Returns:
            Response text
        """

        async def _make_request() -> str:
            try:
                generation_config: dict[str, Any] = {
                    "temperature": 0.2,
                    "top_k": 40,
                    "top_p": 0.95,
                    "max_output_tokens": 1024,
                }
                if json_response:
                    generation_config["response_mime_type"] = "application/json"
                model_instance = self.client.GenerativeModel(
                    model_name=self.model,
                    generation_config=generation_config,
                )
                response = await asyncio.wait_for(
                    asyncio.to_thread(model_instance.generate_content, prompt),
                    timeout=self.timeout,
                )
                if not response.candidates:
                    logger.warning(f"{operation_name}: No candidates in response")
                    return ""
                candidate = response.candidates[0]
                if not candidate.content or not candidate.content.parts:
                    logger.warning(f"{operation_name}: No content parts in response")
                    return ""
                return "".join(
                    part.text for part in candidate.content.parts if hasattr(part, "text")
                )
            except Exception as e:
                raise _wrap_google_error(e) from e

        logger.debug(f"Starting {operation_name} with model {self.model}")
        result = await with_retry(
            _make_request,
            max_attempts=self.max_retries + 1,
            operation_name=operation_name,
        )
        logger.debug(f"Completed {operation_name}")
        return result

    async def evaluate_translation(self, request: EvaluationRequest) -> EvaluationResult:
        """Evaluate a translation with Gemini."""
        prompt = (
            f"{evaluator_role(request)}\n\n"
            f"{build_evaluation_context(request)}\n\n"
            f"{EVALUATION_CRITERIA}"
        )
        try:
            content = await self._call_api(
                prompt, "evaluate_translation", json_response=True
            )
        except Exception as e:
            logger.error(f"Gemini translation evaluation error: {format_exception(e)}")
            raise ProviderError(
                f"Gemini API evaluation failed: {format_exception(e)}",
                provider=self.name,
            ) from e
        return parse_evaluation(content, request)

    async def generate_translation(self, request: GenerationRequest) -> str:
        """Translate content with Gemini."""
        prompt = (
            f"Translate the following text from {language_name(request.source_language)} "
            f"to {language_name(request.target_language)}:\n"
            f'"{request.content}"\n\n'
            "Provide only the translation itself without explanations or notes."
        )
        try:
            content = await self._call_api(prompt, "generate_translation")
        except Exception as e:
            logger.error(f"Gemini translation generation error: {format_exception(e)}")
            raise ProviderError(
                f"Gemini API translation failed: {format_exception(e)}",
                provider=self.name,
            ) from e

        translation = clean_translation(content)
        if not translation:
            raise ProviderError(
                "Failed to extract translation from API response", provider=self.name
            )
        return translation
