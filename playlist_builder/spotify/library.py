from typing import Any, Dict, List

from playlist_builder.config import (
    ID_PREFIX_ALBUM,
    ID_PREFIX_PLAYLIST,
    OPERATION_LIBRARY_V3,
)
from playlist_builder.core import PageCursor, SourceKind, get_logger

from .ids import strip_prefix
from .pagination import Page, fetch_all_pages
from .queries import SpotifyRequest, build_get_request, library_variables
from .schemas import LibraryResponse, parse_body
from .transport import Transport

logger = get_logger(__name__)

_PREFIXES = {
    SourceKind.ALBUMS: ID_PREFIX_ALBUM,
    SourceKind.PLAYLISTS: ID_PREFIX_PLAYLIST,
}


def list_sources(transport: Transport, kind: SourceKind) -> List[str]:
    """
    Return the IDs of all albums or all playlists saved in the user library.

    IDs come back without their spotify:album: / spotify:playlist: prefix.
    Library entries of another type (e.g. the Liked Songs collection) are
    dropped. An empty list means nothing was found or the first page failed.
    """
    prefix = _PREFIXES[kind]

    def build_request(cursor: PageCursor) -> SpotifyRequest:
        return build_get_request(
            OPERATION_LIBRARY_V3,
            library_variables(kind, cursor.limit, cursor.offset),
        )

    def parse_page(body: Dict[str, Any]) -> Page[str]:
        library = parse_body(LibraryResponse, body).data.me.library_v3
        ids = [
            strip_prefix(entry.item.data.uri, prefix)
            for entry in library.items
            if entry.item.data.uri.startswith(prefix)
        ]
        return Page(items=ids, total_count=library.total_count, raw_count=len(library.items))

    result = fetch_all_pages(
        transport,
        build_request,
        parse_page,
        label=f"library {kind.value.lower()}",
    )
    if result is None:
        return []

    logger.info("Total %s: %d", kind.value.lower(), len(result.items))
    return result.items
