"""Retry helpers for translation provider calls."""

import asyncio
from collections.abc import Callable
from typing import Any

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from lingocards_core.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_MIN_WAIT = 1  # seconds
DEFAULT_MAX_WAIT = 8  # seconds


class RateLimitError(Exception):
    """Raised when a provider rejects a call because of rate limiting."""

    def __init__(
        self, message: str = "Rate limit exceeded", retry_after: float | None = None
    ):
        super().__init__(message)
        self.retry_after = retry_after


# Only transient failures are retried; auth and payload errors fail fast.
RETRYABLE_EXCEPTIONS = (
    ConnectionError,
    TimeoutError,
    asyncio.TimeoutError,
    RateLimitError,
)


def get_async_retry(
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    min_wait: float = DEFAULT_MIN_WAIT,
    max_wait: float = DEFAULT_MAX_WAIT,
) -> AsyncRetrying:
    """Create an async retry controller.

    Args:
        max_attempts: Maximum number of attempts
        min_wait: Minimum wait time in seconds
        max_wait: Maximum wait time in seconds

    Returns:
        AsyncRetrying instance
    """
    return AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(RETRYABLE_EXCEPTIONS),
        reraise=True,
    )


def total_backoff(
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    min_wait: float = DEFAULT_MIN_WAIT,
    max_wait: float = DEFAULT_MAX_WAIT,
) -> float:
    """Longest total time ``get_async_retry`` sleeps between attempts.

    Mirrors ``wait_exponential(multiplier=1)``: the wait after attempt ``n``
    is ``2 ** (n - 1)`` clamped to ``[min_wait, max_wait]``.
    """
    return sum(
        min(max(2 ** (attempt - 1), min_wait), max_wait)
        for attempt in range(1, max_attempts)
    )


def format_exception(e: BaseException) -> str:
    """Format an exception for logging, including causes and status codes."""
    msg = str(e).strip() or type(e).__name__

    if e.__cause__ is not None:
        cause_msg = str(e.__cause__).strip()
        if cause_msg:
            msg = f"{msg} (caused by: {cause_msg})"

    status_code = getattr(e, "status_code", None)
    if status_code is not None:
        msg = f"HTTP {status_code}: {msg}"

    return msg


async def with_retry(
    func: Callable[..., Any],
    *args: Any,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    min_wait: float = DEFAULT_MIN_WAIT,
    max_wait: float = DEFAULT_MAX_WAIT,
    operation_name: str = "operation",
    **kwargs: Any,
) -> Any:
    """Execute an async function with retry logic.

    Args:
        func: Async function to execute
        *args: Positional arguments for the function
        max_attempts: Maximum number of attempts
        min_wait: Minimum backoff in seconds
        max_wait: Maximum backoff in seconds
        operation_name: Name for logging purposes
        **kwargs: Keyword arguments for the function

    Returns:
        Result of the function

    Raises:
        The last exception if all retries fail
    """
    attempt = 0

    async for attempt_ctx in get_async_retry(
        max_attempts=max_attempts, min_wait=min_wait, max_wait=max_wait
    ):
        with attempt_ctx:
            attempt += 1
            if attempt > 1:
                logger.info(
                    f"Retrying {operation_name} (attempt {attempt}/{max_attempts})"
                )
            try:
                return await func(*args, **kwargs)
            except RETRYABLE_EXCEPTIONS as e:
                logger.warning(
                    f"{operation_name} failed (attempt {attempt}/{max_attempts}): "
                    f"{format_exception(e)}"
                )
                raise
            except Exception as e:
                logger.error(
                    f"{operation_name} failed with non-retryable error: "
                    f"{format_exception(e)}"
                )
                raise

    raise RuntimeError(f"{operation_name} failed after {max_attempts} attempts")
