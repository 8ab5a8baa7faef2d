from typing import Iterator, List, Sequence

from playlist_builder.config import (
    ADD_TRACKS_BATCH_SIZE,
    ID_PREFIX_PLAYLIST,
    ID_PREFIX_TRACK,
    OPERATION_ADD_TO_PLAYLIST,
)
from playlist_builder.core import AddTracksResult, FetchFailure, get_logger

from .queries import add_to_playlist_variables, build_post_request
from .transport import Transport

logger = get_logger(__name__)


def _batches(items: Sequence[str], size: int) -> Iterator[List[str]]:
    for i in range(0, len(items), size):
        yield list(items[i : i + size])


def add_tracks_to_playlist(
    transport: Transport,
    playlist_id: str,
    track_ids: Sequence[str],
    batch_size: int = ADD_TRACKS_BATCH_SIZE,
) -> AddTracksResult:
    """
    Append tracks to the bottom of a playlist in batches.

    A failed batch is counted as missed and the next batch is still sent.
    Returns how many tracks were added and how many were missed.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")

    result = AddTracksResult()
    if not track_ids:
        logger.info("Nothing to add to playlist %s", playlist_id)
        return result

    playlist_uri = f"{ID_PREFIX_PLAYLIST}{playlist_id}"
    logger.info("Adding %d tracks to playlist %s", len(track_ids), playlist_id)

    for batch in _batches(track_ids, batch_size):
        uris = [f"{ID_PREFIX_TRACK}{tid}" for tid in batch]
        try:
            request = build_post_request(
                OPERATION_ADD_TO_PLAYLIST,
                add_to_playlist_variables(uris, playlist_uri),
            )
            transport.execute(request)
        except FetchFailure as e:
            result.missed += len(batch)
            logger.warning("Failed to add %d tracks: %s", len(batch), e)
            continue

        result.added += len(batch)
        logger.debug("Added %d tracks so far", result.added)

    logger.info("All tracks added: %d, missed: %d", result.added, result.missed)
    return result
