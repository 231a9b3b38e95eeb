"""Bounded exponential backoff with jitter for transient upstream failures."""

import logging
import random
import time
from typing import Callable, Sequence, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_ATTEMPTS = 10
BACKOFF_FACTOR = 2.0
MIN_DELAY = 2.0
MAX_DELAY = 30.0


class RetryableStatusError(RuntimeError):
    """Upstream answered with a status worth retrying (429 or 5xx)."""

    def __init__(self, status_code: int):
        super().__init__(f"Retryable upstream status {status_code}")
        self.status_code = status_code


class RetryExhaustedError(RuntimeError):
    """All attempts failed with transient errors."""

    def __init__(self, attempts: int, last_error: Exception):
        super().__init__(f"Failed after {attempts} attempts: {last_error}")
        self.attempts = attempts


def is_retryable_status(status_code: int) -> bool:
    """429 and every 5xx are transient."""
    return status_code == 429 or status_code >= 500


def backoff_delay(
    retry_number: int,
    *,
    factor: float = BACKOFF_FACTOR,
    min_delay: float = MIN_DELAY,
    max_delay: float = MAX_DELAY,
) -> float:
    """
    Delay in seconds before the given retry (1-based).
    min_delay * factor^(n-1), scaled by a random factor in [1, 2), capped at max_delay.
    """
    jitter = random.uniform(1.0, 2.0)
    return min(max_delay, min_delay * factor ** (retry_number - 1) * jitter)


def retry_call(
    func: Callable[[], T],
    *,
    max_attempts: int = MAX_ATTEMPTS,
    retryable_exceptions: Sequence[Type[Exception]] = (RetryableStatusError,),
    description: str = "request",
) -> T:
    """
    Call func until it returns, retrying only on retryable_exceptions.
    Any other exception propagates immediately. Raises RetryExhaustedError
    when max_attempts calls have failed.
    """
    retryable = tuple(retryable_exceptions)
    for attempt in range(1, max_attempts + 1):
        try:
            return func()
        except retryable as exc:
            if attempt >= max_attempts:
                logger.error("%s failed after %d attempts: %s", description, attempt, exc)
                raise RetryExhaustedError(attempt, exc) from exc
            delay = backoff_delay(attempt)
            logger.warning(
                "Retry %d/%d for %s (%s: %s), waiting %.1fs",
                attempt,
                max_attempts - 1,
                description,
                type(exc).__name__,
                exc,
                delay,
            )
            time.sleep(delay)
    raise ValueError("max_attempts must be at least 1")
