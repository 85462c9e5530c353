"""
Retry Policy for Catalog Store Round Trips

Every search query is a read, so retrying a failed round trip is idempotent.

Features:
- Exponential backoff retry (base, 2x base, 4x base)
- Only TransientStoreError is retried; anything else is raised at once
"""

import time
import logging
from typing import Any, Callable

from catalog_search.errors import TransientStoreError

logger = logging.getLogger(__name__)


def is_retryable_error(error: Exception) -> bool:
    """
    Determine if error is retryable.

    Retryable:
    - Connection failures, timeouts, deadlocks and lock contention
      (surfaced by the store as TransientStoreError)

    Not retryable:
    - Input errors
    - SQL or data errors
    - Programming errors
    """
    return isinstance(error, TransientStoreError)


def retry_with_backoff(
    func: Callable[[], Any],
    max_retries: int = 3,
    base_delay: float = 0.2,
    sleep: Callable[[float], None] = time.sleep,
) -> Any:
    """
    Retry function with exponential backoff.

    Args:
        func: Zero-argument callable performing one round trip
        max_retries: Max retry attempts after the first call
        base_delay: Initial delay in seconds
        sleep: Sleep function (injectable for tests)

    Returns:
        Function result

    Raises:
        Last exception if all retries fail, or the first non-retryable one
    """
    for attempt in range(max_retries + 1):
        try:
            result = func()

            if attempt > 0:
                logger.info(f"Retry succeeded on attempt {attempt + 1}")

            return result

        except Exception as e:
            error_code = type(e).__name__

            if not is_retryable_error(e):
                raise

            if attempt >= max_retries:
                logger.error(f"All {max_retries + 1} attempts failed: {error_code} - {e}")
                raise

            delay = base_delay * (2 ** attempt)
            logger.warning(
                f"Attempt {attempt + 1}/{max_retries + 1} failed: {error_code}. "
                f"Retrying in {delay}s..."
            )
            sleep(delay)


def estimate_retry_time(max_retries: int = 3, base_delay: float = 0.2) -> float:
    """
    Estimate total backoff time if all attempts fail.

    Args:
        max_retries: Max retry attempts
        base_delay: Base delay in seconds

    Returns:
        Total sleep time in seconds
    """
    total = 0.0
    for attempt in range(max_retries):
        total += base_delay * (2 ** attempt)
    return total
