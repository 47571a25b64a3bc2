"""Utility functions."""

from lingocards_core.utils.logging import get_logger, log_exceptions
from lingocards_core.utils.retry import RateLimitError, with_retry

__all__ = [
    "get_logger",
    "log_exceptions",
    "RateLimitError",
    "with_retry",
]
