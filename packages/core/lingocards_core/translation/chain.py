"""Primary → fallback → baseline provider chain shared by evaluation and generation."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from lingocards_core.errors import TranslationError, is_api_key_error
from lingocards_core.translation.baseline import BaselineTranslator
from lingocards_core.translation.providers.base import BaseTranslationProvider
from lingocards_core.translation.registry import ProviderRegistry
from lingocards_core.utils.logging import get_logger
from lingocards_core.utils.retry import format_exception

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_PROVIDER_TIMEOUT = 30.0  # seconds


class ProviderChain:
    """Runs an operation against the primary provider, then the fallback.

    Subclasses decide what to do when every provider failed. Errors from
    provider calls are converted into ``TranslationError`` with context so
    callers can report misconfiguration.
    """

    operation = "translation"

    def __init__(
        self,
        registry: ProviderRegistry | None = None,
        baseline: BaselineTranslator | None = None,
        timeout: float = DEFAULT_PROVIDER_TIMEOUT,
        strict: bool = False,
    ):
        """Initialize the chain.

        Args:
            registry: Named providers and the primary name
            baseline: Translator of last resort
            timeout: Seconds before a provider call counts as failed
            strict: Raise the enriched error instead of using the baseline
                when every provider failed
        """
        self.registry = registry or ProviderRegistry()
        self.baseline = baseline or BaselineTranslator()
        self.timeout = timeout
        self.strict = strict

    def _candidates(self) -> list[tuple[str, BaseTranslationProvider]]:
        candidates = []
        primary = self.registry.primary_provider()
        if primary is not None:
            candidates.append((self.registry.primary, primary))
        fallback = self.registry.fallback_provider()
        if fallback is not None:
            candidates.append((self.registry.fallback_name() or "", fallback))
        return candidates

    async def _run(
        self,
        call: Callable[[BaseTranslationProvider], Awaitable[T]],
    ) -> tuple[T | None, list[tuple[str, BaseException]]]:
        """Try each candidate provider in order.

        Returns:
            The first successful result (or None) and the failures seen
        """
        failures: list[tuple[str, BaseException]] = []
        for name, provider in self._candidates():
            try:
                result = await asyncio.wait_for(call(provider), timeout=self.timeout)
            except asyncio.TimeoutError as e:
                logger.warning(
                    f"{self.operation} with {name} timed out after {self.timeout}s"
                )
                failures.append((name, e))
                continue
            except Exception as e:
                logger.warning(
                    f"{self.operation} with {name} failed: {format_exception(e)}"
                )
                failures.append((name, e))
                continue

            if failures:
                logger.info(f"{self.operation} recovered with fallback provider {name}")
            return result, failures
        return None, failures

    def enrich_error(
        self,
        error: BaseException,
        source_language: str,
        target_language: str,
        **extra_context: Any,
    ) -> TranslationError:
        """Wrap a provider failure with translation context."""
        context = {
            "provider": self.registry.primary,
            "has_providers": self.registry.has_providers,
            "source_language": source_language,
            "target_language": target_language,
            "api_available": self.registry.primary_provider() is not None,
            **extra_context,
        }
        if is_api_key_error(error):
            message = (
                f"Translation API key error: The API key for {self.registry.primary} "
                "is missing or invalid. Please check your API key in settings."
            )
            api_key_error = True
        else:
            reason = format_exception(error)
            if isinstance(error, asyncio.TimeoutError):
                reason = f"provider call timed out after {self.timeout}s"
            message = f"Translation {self.operation} failed: {reason}"
            api_key_error = False

        return TranslationError(
            message,
            original_error=error,
            context=context,
            api_key_error=api_key_error,
        )
