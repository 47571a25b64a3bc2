"""OpenAI translation provider."""

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
DEFAULT_MODEL = "gpt-4o-mini"


def _wrap_openai_error(e: Exception) -> Exception:
    """Map OpenAI client errors onto the retryable exception types."""
    error_type = type(e).__name__
    if error_type == "RateLimitError":
        return RateLimitError(f"OpenAI API rate limit: {e}")
    if error_type in ("APIConnectionError", "APITimeoutError", "InternalServerError"):
        return ConnectionError(f"OpenAI API server error: {e}")
    return e


class OpenAIProvider(BaseTranslationProvider):
    """Provider backed by the OpenAI chat completions API."""

    name = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = 2,
    ):
        """Initialize the OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Chat model name
            base_url: Optional custom base URL
            timeout: Request timeout in seconds
            max_retries: Additional attempts for transient failures

        Raises:
            ValueError: If no API key is given
        """
        if not api_key:
            raise ValueError("OpenAI API key is required")

        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.timeout = timeout
        self.max_retries = max_retries

        self._client: Any = None
        logger.info(f"Initialized OpenAI provider (model={model})")

    @property
    def client(self) -> Any:
        """Lazy-load the OpenAI client."""
        if self._client is None:
            from openai import AsyncOpenAI

            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    async def _call_api(
        self,
        messages: list[dict[str, Any]],
        operation_name: str,
        json_response: bool = False,
    ) -> str:
        """Call the chat completions API with retry logic.

        Args:
            messages: Chat messages
            operation_name: Name for logging
            json_response: Request a JSON object response

        Returns:
            Response content string
        """

        async def _make_request() -> str:
            kwargs: dict[str, Any] = {
                "model": self.model,
                "messages": messages,
                "temperature": 0.2,
                "max_tokens": 1024,
                "top_p": 0.95,
            }
            if json_response:
                kwargs["response_format"] = {"type": "json_object"}
            try:
                response = await asyncio.wait_for(
                    self.client.chat.completions.create(**kwargs),
                    timeout=self.timeout,
                )
            except Exception as e:
                raise _wrap_openai_error(e) from e
            return response.choices[0].message.content or ""

        logger.debug(f"Starting {operation_name} with model {self.model}")
        result = await with_retry(
            _make_request,
            max_attempts=self.max_retries + 1,
            operation_name=operation_name,
        )
        logger.debug(f"Completed {operation_name}")
        return result

    async def evaluate_translation(self, request: EvaluationRequest) -> EvaluationResult:
        """Evaluate a translation with the chat model."""
        messages = [
            {
                "role": "system",
                "content": f"{evaluator_role(request)}\n{EVALUATION_CRITERIA}",
            },
            {"role": "user", "content": build_evaluation_context(request)},
        ]
        try:
            content = await self._call_api(
                messages, "evaluate_translation", json_response=True
            )
        except Exception as e:
            logger.error(f"OpenAI translation evaluation error: {format_exception(e)}")
            raise ProviderError(
                f"OpenAI API evaluation failed: {format_exception(e)}",
                provider=self.name,
            ) from e
        return parse_evaluation(content, request)

    async def generate_translation(self, request: GenerationRequest) -> str:
        """Translate content with the chat model."""
        messages = [
            {
                "role": "system",
                "content": (
                    "You are a professional translator from "
                    f"{language_name(request.source_language)} to "
                    f"{language_name(request.target_language)}. "
                    "Translate the text provided by the user. Provide only the "
                    "translation itself without explanations or notes."
                ),
            },
            {"role": "user", "content": request.content},
        ]
        try:
            content = await self._call_api(messages, "generate_translation")
        except Exception as e:
            logger.error(f"OpenAI translation generation error: {format_exception(e)}")
            raise ProviderError(
                f"OpenAI API translation failed: {format_exception(e)}",
                provider=self.name,
            ) from e

        translation = clean_translation(content)
        if not translation:
            raise ProviderError(
                "Failed to extract translation from API response", provider=self.name
            )
        return translation
