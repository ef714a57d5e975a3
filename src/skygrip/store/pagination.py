"""Offset pagination over search results.

``paginate`` turns a page-fetching function into one lazy stream of
documents. The caller never sees page boundaries:

    async for document in paginate(fetch_page):
        ...

Pages are requested one at a time, only once the previous page has been
consumed, so breaking out of the loop means later pages are never fetched.
The stream reflects the store as it is when each page is read; documents
written or removed mid-stream may or may not appear.
"""

from typing import Any, AsyncIterator, Awaitable, Callable

from loguru import logger

from ..core.types import SearchPage

PAGE_SIZE = 100

PageFetcher = Callable[[int, int], Awaitable[SearchPage]]


async def paginate(fetch_page: PageFetcher, page_size: int = PAGE_SIZE) -> AsyncIterator[dict[str, Any]]:
    """Stream every document of a paginated query.

    Args:
        fetch_page: Called as ``fetch_page(offset, limit)``; returns one page
            and the total number of matches.
        page_size: Documents requested per page.

    Yields:
        Raw documents in the order the engine returns them.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")

    offset = 0
    while True:
        page = await fetch_page(offset, page_size)
        logger.debug(f"Fetched page: offset={offset}, size={len(page.documents)}, total={page.total}")

        for document in page.documents:
            yield document

        if page.total <= offset + page_size:
            break
        offset += page_size
