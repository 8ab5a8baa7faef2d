"""Run orchestration for "add random tracks to a playlist".

One run is a single sequential flow:

  1. fetch the target playlist (owner + track snapshot), check ownership
  2. list albums and playlists in the user library
  3. sample tracks from them (see selection.py)
  4. append the selection to the target playlist in batches

Each network round-trip happens one after another. Human-readable progress
messages are logged and passed to an optional callback so that the API layer
can show them to the user while the run is in progress.
"""

from dataclasses import dataclass
import random
from typing import Callable, List, Optional

from playlist_builder import config
from playlist_builder.core import (
    InvalidRequest,
    OwnershipMismatch,
    PlaylistBuilderError,
    RunResult,
    SourceKind,
    TargetPlaylist,
    TargetPlaylistUnavailable,
    log_error,
    log_info,
    log_section,
    log_success,
    log_warning,
)
from playlist_builder.spotify import (
    SpotifyCredentials,
    SpotifyTransport,
    Transport,
    add_tracks_to_playlist,
    fetch_album_tracks,
    fetch_playlist_tracks,
    list_sources,
    normalize_user_uri,
    parse_playlist_id,
)

from .selection import ProgressCallback, select_tracks


@dataclass
class RunOptions:
    quota: int = config.MIN_TRACKS_PER_SOURCE
    max_tracks_per_album: int = config.MAX_TRACKS_PER_ALBUM
    max_tracks_per_playlist: int = config.MAX_TRACKS_PER_PLAYLIST
    target_playlist_max_tracks: int = config.TARGET_PLAYLIST_MAX_TRACKS
    batch_size: int = config.ADD_TRACKS_BATCH_SIZE


def _reporter(progress: Optional[ProgressCallback]) -> Callable[[str], None]:
    def report(message: str) -> None:
        log_info(message)
        if progress is not None:
            progress(message)

    return report


def resolve_track_count(number_of_tracks: Optional[int]) -> int:
    """None means the default size; anything else must be a positive integer."""
    if number_of_tracks is None:
        return config.DEFAULT_PLAYLIST_SIZE
    if isinstance(number_of_tracks, bool) or not isinstance(number_of_tracks, int):
        raise InvalidRequest(f"Invalid number of tracks: {number_of_tracks!r}")
    if number_of_tracks < 1:
        raise InvalidRequest(f"Number of tracks must be positive, got {number_of_tracks}")
    return number_of_tracks


def fetch_target_playlist(
    transport: Transport, playlist_id: str, max_items: int
) -> TargetPlaylist:
    details = fetch_playlist_tracks(transport, playlist_id, max_items)
    if details is None:
        raise TargetPlaylistUnavailable(playlist_id)
    return TargetPlaylist(
        id=playlist_id,
        owner_uri=details.owner_uri,
        tracks=set(details.tracks),
    )


def generate_random_playlist(
    transport: Transport,
    playlist_id: str,
    user_uri: str,
    number_of_tracks: int,
    options: Optional[RunOptions] = None,
    rng: Optional[random.Random] = None,
    progress: Optional[ProgressCallback] = None,
) -> RunResult:
    """
    Append up to `number_of_tracks` random library tracks to a playlist.

    Raises TargetPlaylistUnavailable if the target cannot be fetched and
    OwnershipMismatch if it is not owned by `user_uri`; in both cases no
    library request is made. Failures of individual sources or batches do
    not stop the run.
    """
    opts = options or RunOptions()
    rng = rng or random.Random()
    report = _reporter(progress)
    result = RunResult(playlist_id=playlist_id, requested=number_of_tracks)

    report("Eclectic work started")
    report("Fetching details of the target playlist")
    log_info(f"User: {user_uri}, target playlist: {playlist_id}")

    target = fetch_target_playlist(transport, playlist_id, opts.target_playlist_max_tracks)
    report("Target playlist details fetched")

    if not target.is_owned_by(user_uri):
        log_error(f"Playlist owner mismatch: {target.owner_uri}/{user_uri}")
        raise OwnershipMismatch(target.owner_uri, user_uri)

    report(f"Found {len(target.tracks)} tracks in the target playlist")

    report("Fetching list of albums from My Library")
    album_ids = list_sources(transport, SourceKind.ALBUMS)
    result.albums_found = len(album_ids)
    report(f"Found {len(album_ids)} albums in the library")

    report("Fetching list of playlists from My Library")
    playlist_ids = [
        pid for pid in list_sources(transport, SourceKind.PLAYLISTS) if pid != playlist_id
    ]
    result.playlists_found = len(playlist_ids)
    report(f"Found {len(playlist_ids)} playlists in the library")

    def fetch_album(album_id: str) -> List[str]:
        return fetch_album_tracks(transport, album_id, opts.max_tracks_per_album)

    def fetch_playlist(source_id: str) -> Optional[List[str]]:
        details = fetch_playlist_tracks(transport, source_id, opts.max_tracks_per_playlist)
        return None if details is None else details.tracks

    selected, stats = select_tracks(
        album_ids=album_ids,
        playlist_ids=playlist_ids,
        fetch_album=fetch_album,
        fetch_playlist=fetch_playlist,
        existing_tracks=target.tracks,
        number_of_tracks=number_of_tracks,
        quota=opts.quota,
        rng=rng,
        report=report,
    )
    result.selected_from_albums = stats.selected_from_albums
    result.selected_from_playlists = stats.selected_from_playlists
    result.selected_from_stash = stats.selected_from_stash
    result.playlists_skipped = stats.playlists_skipped
    result.duplicates_removed = stats.duplicates_removed

    report(f"Adding {len(selected)} tracks to the target playlist")
    added = add_tracks_to_playlist(transport, playlist_id, selected, opts.batch_size)
    result.added = added.added
    result.missed = added.missed
    if added.missed:
        log_warning(f"{added.missed} tracks could not be added")

    result.message = f"Done: added {added.added} tracks"
    report(result.message)
    return result


def add_random_tracks(
    credentials: SpotifyCredentials,
    playlist: str,
    user: str,
    number_of_tracks: Optional[int] = None,
    *,
    transport: Optional[Transport] = None,
    options: Optional[RunOptions] = None,
    rng: Optional[random.Random] = None,
    progress: Optional[ProgressCallback] = None,
) -> RunResult:
    """
    Entry point: validate caller input, run, and report the outcome.

    `playlist` may be an ID, URI or open.spotify.com URL; `user` an ID or
    spotify:user: URI. Any PlaylistBuilderError is reported through
    `progress` as a short message and then re-raised.
    """
    log_section("Eclectic playlist builder")

    owns_transport = transport is None
    try:
        playlist_id = parse_playlist_id(playlist)
        user_uri = normalize_user_uri(user)
        count = resolve_track_count(number_of_tracks)

        if transport is None:
            transport = SpotifyTransport(credentials)

        result = generate_random_playlist(
            transport,
            playlist_id,
            user_uri,
            count,
            options=options,
            rng=rng,
            progress=progress,
        )
    except PlaylistBuilderError as e:
        log_error(str(e))
        if progress is not None:
            progress(str(e))
        raise
    finally:
        if owns_transport and isinstance(transport, SpotifyTransport):
            transport.close()

    log_success(f"Run finished for playlist {result.playlist_id}")
    return result
