import asyncio
import logging
import os
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# WooCommerce rejects batch requests with more than 100 objects.
MAX_BATCH_SIZE = 100
DEFAULT_DELAY = 0.1


@dataclass(frozen=True)
class BatchConfig:
    """ Chunking and pacing for batch submissions. `delay` is in seconds. """
    chunk_size: int = MAX_BATCH_SIZE
    delay: float = DEFAULT_DELAY

    def __post_init__(self):
        if not 1 <= self.chunk_size <= MAX_BATCH_SIZE:
            raise ValueError(f"chunk_size must be between 1 and {MAX_BATCH_SIZE}")
        if self.delay < 0:
            raise ValueError("delay cannot be negative")

    @classmethod
    def from_env(cls) -> "BatchConfig":
        """ Reads WOOCOMMERCE_RATE_LIMIT_DELAY_MS (milliseconds), defaulting to 100. """
        delay_ms = os.getenv("WOOCOMMERCE_RATE_LIMIT_DELAY_MS")
        if delay_ms is None or delay_ms.strip() == "":
            return cls()
        try:
            return cls(delay=int(delay_ms) / 1000)
        except ValueError as e:
            raise ValueError(f"Invalid WOOCOMMERCE_RATE_LIMIT_DELAY_MS: {delay_ms!r}") from e


def chunked(items: Sequence, size: int = MAX_BATCH_SIZE) -> list[list]:
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


async def submit_in_chunks(
    items: Sequence,
    submit: Callable[[list], Awaitable[list]],
    config: BatchConfig | None = None,
) -> list:
    """
    Submits items in consecutive chunks, strictly one chunk at a time.

    Waits config.delay between chunks (not after the last) to stay under the
    store's rate limits. Results are concatenated in chunk order.
    """
    config = config or BatchConfig()
    chunks = chunked(items, config.chunk_size)
    results: list = []

    for index, chunk in enumerate(chunks):
        logger.info("Submitting batch %d/%d (%d items)", index + 1, len(chunks), len(chunk))
        results.extend(await submit(chunk))
        if index < len(chunks) - 1:
            await asyncio.sleep(config.delay)

    return results
