"""
Retry-with-backoff for outbound HTTP calls.

One helper serves every provider call that can be throttled (Mapbox
geocoding, Mapbox directions). The caller supplies the coroutine factory and
a predicate deciding which failures deserve another attempt.

Policy:
- attempt the operation up to ``attempts`` times
- after a retryable failure wait ``delay`` ms, then double ``delay``
- no wait after the last attempt; the last error is re-raised
- non-retryable errors propagate immediately
"""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

import httpx

logger = logging.getLogger(__name__)

T = TypeVar("T")

SleepFunc = Callable[[float], Awaitable[None]]


def is_rate_limited(error: BaseException) -> bool:
    """True when the provider answered HTTP 429 Too Many Requests."""
    return (
        isinstance(error, httpx.HTTPStatusError)
        and error.response.status_code == 429
    )


def is_transient_http_error(error: BaseException) -> bool:
    """
    Default retry predicate for provider calls.

    Rate limiting, other non-2xx answers, network failures and undecodable
    bodies (json raises ValueError) all count as a failed attempt.
    """
    return isinstance(error, (httpx.HTTPError, ValueError))


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    *,
    attempts: int = 3,
    base_delay_ms: int = 1000,
    is_retryable: Callable[[BaseException], bool] = is_transient_http_error,
    sleep: SleepFunc = asyncio.sleep,
    description: str = "request",
) -> T:
    """
    Run ``operation`` until it succeeds or ``attempts`` are used up.

    Args:
        operation: Zero-argument callable returning a fresh awaitable per attempt
        attempts: Maximum number of attempts (>= 1)
        base_delay_ms: Wait before the second attempt; doubled after each retry
        is_retryable: Predicate for errors that deserve another attempt
        sleep: Awaitable sleep taking seconds (injected in tests)
        description: Label used in log lines

    Returns:
        Whatever ``operation`` returns on the first successful attempt.

    Raises:
        The last error raised by ``operation``.
    """
    if attempts < 1:
        raise ValueError("attempts must be >= 1")

    delay_ms = base_delay_ms

    for attempt in range(1, attempts + 1):
        try:
            return await operation()
        except Exception as e:
            if not is_retryable(e) or attempt == attempts:
                raise

            if is_rate_limited(e):
                logger.warning(
                    f"Rate limit hit on {description} (attempt {attempt}/{attempts}), "
                    f"waiting {delay_ms}ms before retry"
                )
            else:
                logger.warning(
                    f"{description} failed on attempt {attempt}/{attempts}: {e}. "
                    f"Retrying in {delay_ms}ms"
                )

            await sleep(delay_ms / 1000)
            delay_ms *= 2

    # The loop either returns or raises
    raise AssertionError("unreachable")
