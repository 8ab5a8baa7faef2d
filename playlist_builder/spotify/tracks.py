from typing import Any, Dict, List, Optional

from playlist_builder.config import (
    ID_PREFIX_ALBUM,
    ID_PREFIX_PLAYLIST,
    ID_PREFIX_TRACK,
    MAX_TRACKS_PER_ALBUM,
    MAX_TRACKS_PER_PLAYLIST,
    OPERATION_FETCH_PLAYLIST,
    OPERATION_GET_ALBUM,
)
from playlist_builder.core import PageCursor, PlaylistTracks, get_logger

from .ids import strip_prefix
from .pagination import Page, fetch_all_pages
from .queries import SpotifyRequest, build_get_request, source_tracks_variables
from .schemas import (
    AlbumTracksResponse,
    PlaylistItem,
    PlaylistResponse,
    parse_body,
)
from .transport import Transport

logger = get_logger(__name__)


def fetch_album_tracks(
    transport: Transport,
    album_id: str,
    max_items: int = MAX_TRACKS_PER_ALBUM,
) -> List[str]:
    """
    Return the IDs of the playable tracks of an album.

    Returns an empty list if the album cannot be fetched.
    """
    album_uri = f"{ID_PREFIX_ALBUM}{album_id}"

    def build_request(cursor: PageCursor) -> SpotifyRequest:
        return build_get_request(
            OPERATION_GET_ALBUM,
            source_tracks_variables(album_uri, cursor.limit, cursor.offset),
        )

    def parse_page(body: Dict[str, Any]) -> Page[str]:
        tracks = parse_body(AlbumTracksResponse, body).data.album_union.tracks
        ids = [
            strip_prefix(item.track.uri, ID_PREFIX_TRACK)
            for item in tracks.items
            if item.track.playability.playable
        ]
        return Page(items=ids, total_count=tracks.total_count, raw_count=len(tracks.items))

    result = fetch_all_pages(
        transport,
        build_request,
        parse_page,
        max_items=max_items,
        label=f"album {album_id}",
    )
    if result is None:
        return []

    logger.debug("Playable tracks in %s: %d", album_id, len(result.items))
    return result.items


def _playlist_track_id(item: PlaylistItem) -> Optional[str]:
    """
    Track ID of a playlist entry, or None if the entry must be skipped.

    Entries can be episodes or deleted tracks; the latter have no data at all.
    """
    data = item.item_v2.data
    if data is None or not data.uri:
        return None
    if data.playability is None or not data.playability.playable:
        return None
    if not data.uri.startswith(ID_PREFIX_TRACK):
        return None
    return strip_prefix(data.uri, ID_PREFIX_TRACK)


def fetch_playlist_tracks(
    transport: Transport,
    playlist_id: str,
    max_items: int = MAX_TRACKS_PER_PLAYLIST,
) -> Optional[PlaylistTracks]:
    """
    Return the playable track IDs of a playlist together with its owner URI.

    Returns None if the first page cannot be fetched.
    """
    playlist_uri = f"{ID_PREFIX_PLAYLIST}{playlist_id}"

    def build_request(cursor: PageCursor) -> SpotifyRequest:
        return build_get_request(
            OPERATION_FETCH_PLAYLIST,
            source_tracks_variables(playlist_uri, cursor.limit, cursor.offset),
        )

    def parse_page(body: Dict[str, Any]) -> Page[str]:
        playlist = parse_body(PlaylistResponse, body).data.playlist_v2
        ids = [
            track_id
            for track_id in (_playlist_track_id(item) for item in playlist.content.items)
            if track_id is not None
        ]
        return Page(
            items=ids,
            total_count=playlist.content.total_count,
            raw_count=len(playlist.content.items),
            extra=playlist.owner_v2.data.uri,
        )

    result = fetch_all_pages(
        transport,
        build_request,
        parse_page,
        max_items=max_items,
        label=f"playlist {playlist_id}",
    )
    if result is None:
        return None

    logger.debug(
        "Playable tracks in %s: %d, owner: %s", playlist_id, len(result.items), result.extra
    )
    return PlaylistTracks(tracks=result.items, owner_uri=result.extra)
