"""Retry with exponential backoff for outbound calls.

Used for optional third-party lookups (avatars), so attempts are few and
delays short.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

DEFAULT_ATTEMPTS = 2
DEFAULT_BASE_DELAY = 0.2  # seconds

T = TypeVar("T")


def _calculate_delay(attempt: int, base_delay: float = DEFAULT_BASE_DELAY) -> float:
    """Backoff before retrying after zero-indexed ``attempt``: base * 2^attempt."""
    return base_delay * (2**attempt)


async def with_retry(
    fn: Callable[[], Awaitable[T]],
    attempts: int = DEFAULT_ATTEMPTS,
    exceptions: tuple[type[Exception], ...] = (Exception,),
    base_delay: float = DEFAULT_BASE_DELAY,
    retry_if: Callable[[T], bool] | None = None,
) -> T:
    """Call ``fn`` until it succeeds or ``attempts`` run out.

    A call fails when it raises one of ``exceptions`` or when ``retry_if``
    returns True for its result. After the last attempt a raised exception
    propagates, while a rejected result is returned as-is so the caller can
    inspect it.

    Example:
        response = await with_retry(
            lambda: client.head(avatar_url),
            exceptions=(httpx.TransportError,),
            retry_if=lambda r: r.status_code >= 500,
        )
    """
    for attempt in range(attempts):
        last_attempt = attempt == attempts - 1
        try:
            result = await fn()
        except exceptions as e:
            if last_attempt:
                raise
            logger.debug("Attempt %d failed: %s", attempt + 1, e)
        else:
            if retry_if is None or last_attempt or not retry_if(result):
                return result
            logger.debug("Attempt %d returned a retryable result", attempt + 1)

        await asyncio.sleep(_calculate_delay(attempt, base_delay))

    raise ValueError("attempts must be at least 1")
