import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    max_retries: int = 3,
    base_delay: float = 1.0,
) -> T:
    """
    Awaits `operation` until it succeeds, up to max_retries + 1 attempts.

    Sleeps base_delay * 2^attempt between attempts (with 1.0: 1s, 2s, 4s).
    Every exception is retried the same way; once attempts run out the last
    one is re-raised unchanged.
    """
    if max_retries < 0:
        raise ValueError("max_retries cannot be negative")
    for attempt in range(max_retries + 1):
        try:
            return await operation()
        except Exception as e:
            if attempt >= max_retries:
                raise
            wait = base_delay * (2 ** attempt)
            logger.warning(
                "Attempt %d/%d failed (%s), retrying in %.2fs",
                attempt + 1, max_retries + 1, e, wait,
            )
            await asyncio.sleep(wait)
