"""Unit tests for retry and backoff."""

from unittest.mock import MagicMock, patch

import pytest

from sam_fetcher.retry import (
    MAX_ATTEMPTS,
    RetryableStatusError,
    RetryExhaustedError,
    backoff_delay,
    is_retryable_status,
    retry_call,
)


class TestIsRetryableStatus:
    """Tests for status classification."""

    @pytest.mark.parametrize("status", [429, 500, 502, 503, 504, 599])
    def test_retryable(self, status: int) -> None:
        assert is_retryable_status(status)

    @pytest.mark.parametrize("status", [200, 204, 400, 401, 403, 404, 422])
    def test_not_retryable(self, status: int) -> None:
        assert not is_retryable_status(status)


class TestBackoffDelay:
    """Tests for backoff_delay."""

    def test_doubles_from_floor_without_jitter(self) -> None:
        with patch("sam_fetcher.retry.random.uniform", return_value=1.0):
            delays = [backoff_delay(n) for n in range(1, 8)]
        assert delays == [2.0, 4.0, 8.0, 16.0, 30.0, 30.0, 30.0]

    def test_jitter_bounds(self) -> None:
        """Jitter scales the delay by [1, 2) and never exceeds the ceiling."""
        for n in range(1, 10):
            d = backoff_delay(n)
            base = 2.0 * 2 ** (n - 1)
            assert min(base, 30.0) <= d <= min(base * 2, 30.0)

    def test_max_jitter_capped(self) -> None:
        with patch("sam_fetcher.retry.random.uniform", return_value=1.99):
            assert backoff_delay(4) == 30.0


class TestRetryCall:
    """Tests for retry_call."""

    def test_success_first_try(self, no_sleep: MagicMock) -> None:
        func = MagicMock(return_value="ok")
        assert retry_call(func) == "ok"
        func.assert_called_once()
        no_sleep.assert_not_called()

    def test_retries_then_succeeds(self, no_sleep: MagicMock) -> None:
        """Two transient failures then success: three calls, two sleeps."""
        func = MagicMock(side_effect=[RetryableStatusError(503), RetryableStatusError(503), "ok"])
        with patch("sam_fetcher.retry.random.uniform", return_value=1.0):
            assert retry_call(func) == "ok"
        assert func.call_count == 3
        assert [c.args[0] for c in no_sleep.call_args_list] == [2.0, 4.0]

    def test_non_retryable_propagates(self, no_sleep: MagicMock) -> None:
        func = MagicMock(side_effect=KeyError("boom"))
        with pytest.raises(KeyError):
            retry_call(func)
        func.assert_called_once()
        no_sleep.assert_not_called()

    def test_exhaustion(self, no_sleep: MagicMock) -> None:
        """After max_attempts transient failures, RetryExhaustedError chains the last error."""
        func = MagicMock(side_effect=RetryableStatusError(429))
        with pytest.raises(RetryExhaustedError) as exc_info:
            retry_call(func)
        assert func.call_count == MAX_ATTEMPTS == 10
        assert no_sleep.call_count == MAX_ATTEMPTS - 1
        assert exc_info.value.attempts == 10
        assert isinstance(exc_info.value.__cause__, RetryableStatusError)
        assert exc_info.value.__cause__.status_code == 429

    def test_custom_retryable_exceptions(self, no_sleep: MagicMock) -> None:
        func = MagicMock(side_effect=[ConnectionError("reset"), "ok"])
        assert retry_call(func, retryable_exceptions=(ConnectionError,)) == "ok"
        assert no_sleep.call_count == 1

    def test_single_attempt(self, no_sleep: MagicMock) -> None:
        func = MagicMock(side_effect=RetryableStatusError(500))
        with pytest.raises(RetryExhaustedError):
            retry_call(func, max_attempts=1)
        no_sleep.assert_not_called()
