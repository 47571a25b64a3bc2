"""Tests for retry utilities."""

import pytest

from lingocards_core.utils.retry import (
    RateLimitError,
    format_exception,
    total_backoff,
    with_retry,
)


class TestRetry:
    """Tests for retry logic."""

    @pytest.mark.asyncio
    async def test_success_on_first_try(self) -> None:
        """Test that successful calls don't retry."""
        call_count = 0

        async def success() -> str:
            nonlocal call_count
            call_count += 1
            return "success"

        result = await with_retry(success, operation_name="test")

        assert result == "success"
        assert call_count == 1

    @pytest.mark.asyncio
    async def test_retry_on_connection_error(self) -> None:
        """Test that ConnectionError triggers retry."""
        call_count = 0

        async def fail_then_succeed() -> str:
            nonlocal call_count
            call_count += 1
            if call_count < 2:
                raise ConnectionError("Network failed")
            return "success"

        result = await with_retry(
            fail_then_succeed,
            max_attempts=3,
            min_wait=0,
            max_wait=0,
            operation_name="test",
        )

        assert result == "success"
        assert call_count == 2

    @pytest.mark.asyncio
    async def test_retry_on_rate_limit(self) -> None:
        """Test that provider rate limiting triggers retry."""
        call_count = 0

        async def limited_then_succeed() -> str:
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise RateLimitError()
            return "success"

        result = await with_retry(
            limited_then_succeed,
            max_attempts=3,
            min_wait=0,
            max_wait=0,
            operation_name="test",
        )

        assert result == "success"
        assert call_count == 3

    @pytest.mark.asyncio
    async def test_max_retries_exhausted(self) -> None:
        """Test that exception is raised after max retries."""
        call_count = 0

        async def always_fail() -> str:
            nonlocal call_count
            call_count += 1
            raise TimeoutError("Always times out")

        with pytest.raises(TimeoutError):
            await with_retry(
                always_fail,
                max_attempts=3,
                min_wait=0,
                max_wait=0,
                operation_name="test",
            )

        assert call_count == 3

    @pytest.mark.asyncio
    async def test_non_retryable_error_not_retried(self) -> None:
        """Test that non-retryable errors are not retried."""
        call_count = 0

        async def value_error() -> str:
            nonlocal call_count
            call_count += 1
            raise ValueError("Invalid API key")

        with pytest.raises(ValueError):
            await with_retry(value_error, max_attempts=3, operation_name="test")

        # Authentication problems must fail fast
        assert call_count == 1


class TestFormatException:
    """Tests for exception formatting."""

    def test_includes_cause(self) -> None:
        try:
            try:
                raise KeyError("missing")
            except KeyError as inner:
                raise RuntimeError("outer") from inner
        except RuntimeError as e:
            message = format_exception(e)

        assert message.startswith("outer")
        assert "caused by" in message

    def test_empty_message_uses_type_name(self) -> None:
        assert format_exception(ConnectionError()) == "ConnectionError"


class TestTotalBackoff:
    """Tests for the retry sleep budget."""

    def test_default_attempts(self) -> None:
        assert total_backoff(3) == 3

    def test_single_attempt_never_sleeps(self) -> None:
        assert total_backoff(1) == 0

    def test_waits_are_capped(self) -> None:
        # 1 + 2 + 4 + 8 + 8
        assert total_backoff(6, max_wait=8) == 23
