"""
Retry logic with a fixed delay for handling transient failures.

Provides a helper for retrying coroutines that may fail due to network
issues, rate limiting, or temporary errors. Waiting goes
through an awaitable ``pause`` so callers control time.
"""

import asyncio
from typing import Awaitable, Callable, Optional, Tuple, Type

Pause = Callable[[float], Awaitable[None]]


class RetryError(Exception):
    """Raised when all retry attempts are exhausted."""

    def __init__(self, message: str, attempts: int = 0):
        super().__init__(message)
        self.attempts = attempts


async def call_with_retry(
    func: Callable[..., Awaitable],
    *args,
    max_retries: int = 2,
    delay: float = 30.0,
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
    on_retry: Optional[Callable] = None,
    pause: Optional[Pause] = None,
    **kwargs,
):
    """
    Await ``func(*args, **kwargs)``, retrying on the given exceptions.

    Args:
        func: Coroutine function to call
        max_retries: Maximum number of retry attempts (0 = no retries)
        delay: Delay between attempts in seconds
        exceptions: Tuple of exceptions to catch and retry
        on_retry: Optional callback function(attempt, exception, delay)
        pause: Awaitable sleep used between attempts (default asyncio.sleep)

    Raises:
        RetryError: chained from the last exception once attempts run out
    """
    pause = pause or asyncio.sleep

    for attempt in range(max_retries + 1):
        try:
            return await func(*args, **kwargs)
        except exceptions as e:
            # Don't sleep after the last attempt
            if attempt < max_retries:
                if on_retry:
                    on_retry(attempt + 1, e, delay)

                await pause(delay)
            else:
                raise RetryError(
                    f"Failed after {max_retries + 1} attempts: {str(e)}",
                    attempts=max_retries + 1,
                ) from e


def should_retry_http_status(status_code: int) -> bool:
    """
    Check if HTTP status code indicates a retryable error.

    Args:
        status_code: HTTP status code

    Returns:
        True if should retry
    """
    # Retry on server errors and rate limiting
    retryable_codes = {
        408,  # Request Timeout
        429,  # Too Many Requests
        500,  # Internal Server Error
        502,  # Bad Gateway
        503,  # Service Unavailable (free-tier API hibernating)
        504,  # Gateway Timeout
    }

    return status_code in retryable_codes
