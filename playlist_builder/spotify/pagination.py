"""Paged fetcher: drives one paginated pathfinder operation to completion.

The first page tells us `totalCount`; the remaining pages are requested
strictly one after another at increasing offsets. Failures are handled as a
soft stop:

- first page fails      -> None (nothing is known, not even the total)
- a later page fails    -> everything gathered so far is returned
- a page has no items   -> stop, the upstream total was wrong
- offset reaches cap    -> stop, bounds work on very large collections

The cap is checked before every follow-up page, including the first one, so
`max_items` is a hard upper bound on what is requested: with a cap equal to
the page size (the default for albums and playlists) a 60-track album yields
its first 50 tracks only.

Nothing is retried.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from playlist_builder.config import ITEMS_PER_PAGE
from playlist_builder.core import FetchFailure, PageCursor, get_logger

from .queries import SpotifyRequest
from .transport import Transport

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """
    One decoded page.

    items are already filtered; raw_count is the number of entries Spotify
    returned before filtering and drives the empty-page guard.
    """

    items: List[T]
    total_count: int
    raw_count: int
    extra: Any = None


@dataclass
class PagedResult(Generic[T]):
    items: List[T]
    total_count: int
    # non-item payload of the first page (e.g. the playlist owner)
    extra: Any = None


RequestBuilder = Callable[[PageCursor], SpotifyRequest]
PageParser = Callable[[Dict[str, Any]], Page[T]]


def _fetch_page(
    transport: Transport,
    build_request: RequestBuilder,
    parse_page: PageParser,
    cursor: PageCursor,
) -> Page:
    request = build_request(cursor)
    body = transport.execute(request)
    return parse_page(body)


def fetch_all_pages(
    transport: Transport,
    build_request: RequestBuilder,
    parse_page: PageParser,
    *,
    page_size: int = ITEMS_PER_PAGE,
    max_items: Optional[int] = None,
    label: str = "items",
) -> Optional[PagedResult]:
    """
    Fetch every page of a collection and return the accumulated items.

    build_request(cursor) builds the request for cursor.limit/cursor.offset.
    parse_page(body) decodes a body into a Page. Either may raise
    FetchFailure; both are treated the same way.

    max_items caps the offset: no page starting at or beyond it is requested.
    """
    cursor = PageCursor(limit=page_size)

    try:
        first = _fetch_page(transport, build_request, parse_page, cursor)
    except FetchFailure as e:
        logger.warning("Cannot fetch first page of %s: %s", label, e)
        return None

    cursor.total_count = first.total_count
    logger.debug("%s: %d items, %d pages", label, first.total_count, cursor.pages)

    items = list(first.items)
    if first.total_count <= page_size:
        return PagedResult(items=items, total_count=first.total_count, extra=first.extra)

    cursor.advance()
    while cursor.offset < cursor.total_count:
        if max_items is not None and cursor.offset >= max_items:
            logger.info(
                "Too many %s (%d), limit %d", label, cursor.total_count, max_items
            )
            break

        try:
            page = _fetch_page(transport, build_request, parse_page, cursor)
        except FetchFailure as e:
            logger.warning(
                "Stopped fetching %s at offset %d, keeping %d: %s",
                label,
                cursor.offset,
                len(items),
                e,
            )
            break

        if page.raw_count == 0:
            logger.info("Spotify returned empty items list for %s", label)
            break

        items.extend(page.items)
        cursor.advance()

    return PagedResult(items=items, total_count=first.total_count, extra=first.extra)
