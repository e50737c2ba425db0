import logging
from collections.abc import AsyncIterator, Awaitable, Callable

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 100

FetchPage = Callable[[int, int], Awaitable[list]]


async def iter_pages(fetch_page: FetchPage, per_page: int = DEFAULT_PER_PAGE) -> AsyncIterator[list]:
    """
    Yields pages 1, 2, 3, ... from fetch_page(page, per_page), one request at a time.

    Stops after the first page shorter than per_page. When the total is an
    exact multiple of per_page that means one extra request for an empty page.
    """
    page = 1
    while True:
        items = await fetch_page(page, per_page)
        logger.debug("Fetched page %d (%d items)", page, len(items))
        yield items
        if len(items) < per_page:
            return
        page += 1


async def fetch_all(fetch_page: FetchPage, per_page: int = DEFAULT_PER_PAGE) -> list:
    results: list = []
    async for items in iter_pages(fetch_page, per_page):
        results.extend(items)
    return results
