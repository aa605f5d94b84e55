"""
Cursor pagination shared by every list endpoint.

A walk starts with no cursor and requests pages strictly in order, because
the cursor for page N+1 comes from the contents of page N:

- every record of a page is emitted, in server order, before deciding
  whether to continue;
- the walk stops when has_more is false or the page is empty, so an empty
  page claiming has_more cannot cause an endless loop;
- the next cursor is the page's last_id, or the id of its last record when
  the envelope leaves last_id out.

Errors from fetch_page propagate unchanged. Records emitted before the
failing page stay emitted, and nothing is retried, since resuming from an
unknown cursor could skip or duplicate records.
"""

import logging
from typing import Any, Callable, Dict, Iterator, Optional

from ..schemas.common import ListPage, ResourceRecord


logger = logging.getLogger(__name__)


MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100


FetchPage = Callable[[Dict[str, Any]], ListPage]


def clamp_page_size(page_size: Optional[int]) -> int:
    """Out-of-range, non-positive or missing page sizes become MAX_PAGE_SIZE."""
    if page_size is None or page_size < MIN_PAGE_SIZE or page_size > MAX_PAGE_SIZE:
        return MAX_PAGE_SIZE
    return page_size


def next_cursor(page: ListPage) -> str:
    """
    Cursor for the page after this one.

    Some families omit last_id from the envelope even though it is documented
    as always present, so fall back to the id of the page's final record.
    """
    if page.last_id:
        return page.last_id
    return page.data[-1].id


def iter_pages(
    fetch_page: FetchPage,
    page_size: Optional[int] = None
) -> Iterator[ListPage]:
    """
    Walk a paginated list endpoint one page at a time.

    Args:
        fetch_page: Called with the query parameters for each page
            ("limit", plus "after" once a cursor is known)
        page_size: Requested records per page, clamped into 1..100

    Yields:
        Pages in request order
    """
    limit = clamp_page_size(page_size)
    cursor = ""
    page_number = 0

    while True:
        params: Dict[str, Any] = {"limit": limit}
        if cursor:
            params["after"] = cursor

        page = fetch_page(params)
        page_number += 1
        logger.debug(
            f"Fetched page {page_number}: {len(page.data)} records, has_more={page.has_more}"
        )

        yield page

        if not page.has_more or not page.data:
            break
        cursor = next_cursor(page)


def list_all(
    fetch_page: FetchPage,
    page_size: Optional[int] = None
) -> Iterator[ResourceRecord]:
    """
    Lazily yield every record across all pages.

    Each call starts a fresh walk from the first page.
    """
    for page in iter_pages(fetch_page, page_size):
        yield from page.data
