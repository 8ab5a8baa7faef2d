"""Random track selection across the sources of a user library.

Every album and playlist contributes a small fixed quota of random tracks so
that one huge playlist cannot dominate the result. What a source has beyond
its quota goes into a stash, which is used to top up the selection when the
library runs out of sources before the requested size is reached.

Albums are visited first, then playlists, each list in its own random order.
The selection is greedy and single-pass: it bounds what each source gives,
it does not sample uniformly over all tracks in the library.
"""

from dataclasses import dataclass
from itertools import islice
import random
from typing import Callable, Iterable, KeysView, List, Optional, Sequence, Set

from playlist_builder.core import SourceKind, get_logger, log_progress, log_warning

logger = get_logger(__name__)

ProgressCallback = Callable[[str], None]


class SelectionPool:
    """
    Two disjoint sets of track IDs: `selected` and `stashed`.

    Tracks listed in `excluded` (the target playlist snapshot) never enter
    either set. Insertion order is kept so that a seeded run is repeatable.
    """

    def __init__(self, excluded: Optional[Iterable[str]] = None):
        self._selected: dict = {}
        self._stashed: dict = {}
        self.excluded: Set[str] = set(excluded or ())
        # excluded tracks that showed up in at least one source
        self.excluded_seen: Set[str] = set()

    @property
    def selected(self) -> KeysView:
        return self._selected.keys()

    @property
    def stashed(self) -> KeysView:
        return self._stashed.keys()

    def is_full(self, target: int) -> bool:
        return len(self._selected) >= target

    def _select(self, track_id: str) -> None:
        self._stashed.pop(track_id, None)
        self._selected[track_id] = None

    def add_source(self, tracks: Sequence[str], quota: int, rng: random.Random) -> int:
        """
        Take up to `quota` random tracks of one source into `selected` and
        stash the rest. Sources with `quota` tracks or fewer go in whole.

        Returns how many tracks were newly selected.
        """
        candidates = []
        # a playlist can hold the same track more than once
        for track_id in dict.fromkeys(tracks):
            if track_id in self.excluded:
                self.excluded_seen.add(track_id)
            else:
                candidates.append(track_id)
        if not candidates:
            return 0

        before = len(self._selected)

        if len(candidates) <= quota:
            picked, rest = candidates, []
        else:
            rng.shuffle(candidates)
            picked, rest = candidates[:quota], candidates[quota:]

        for track_id in picked:
            self._select(track_id)
        for track_id in rest:
            if track_id not in self._selected:
                self._stashed[track_id] = None

        return len(self._selected) - before

    def backfill(self, target: int) -> int:
        """Move stashed tracks into `selected` until it holds `target` tracks."""
        missing = target - len(self._selected)
        if missing <= 0:
            return 0

        moved = list(islice(self._stashed, missing))
        for track_id in moved:
            self._select(track_id)
        return len(moved)

    def remove_existing(self, existing: Iterable[str]) -> int:
        """Drop tracks already in the target playlist. Returns how many left `selected`."""
        removed = 0
        for track_id in existing:
            if track_id in self._selected:
                del self._selected[track_id]
                removed += 1
            self._stashed.pop(track_id, None)
        return removed

    def selected_tracks(self) -> List[str]:
        return list(self._selected)


@dataclass
class SelectionStats:
    selected_from_albums: int = 0
    selected_from_playlists: int = 0
    selected_from_stash: int = 0
    playlists_skipped: int = 0
    duplicates_removed: int = 0


def sample_sources(
    pool: SelectionPool,
    kind: SourceKind,
    source_ids: Sequence[str],
    fetch_tracks: Callable[[str], Optional[List[str]]],
    number_of_tracks: int,
    quota: int,
    rng: random.Random,
) -> int:
    """
    Visit sources in the given order and feed each into the pool.

    fetch_tracks returns None when a source cannot be fetched; such sources
    are skipped. Stops as soon as the pool holds `number_of_tracks` tracks.
    Returns the number of skipped sources.
    """
    label = "album" if kind == SourceKind.ALBUMS else "playlist"
    skipped = 0

    for index, source_id in enumerate(source_ids, start=1):
        if pool.is_full(number_of_tracks):
            break

        if index % 10 == 0:
            log_progress(index, len(source_ids), prefix=f"  {label.capitalize()}s")

        tracks = fetch_tracks(source_id)
        if tracks is None:
            log_warning(f"Skipping {label} {source_id}: cannot fetch its tracks")
            skipped += 1
            continue
        if not tracks:
            logger.debug("Empty %s %s", label, source_id)
            continue

        added = pool.add_source(tracks, quota, rng)
        logger.debug(
            "Sel: %d, stash: %d, added %d of %d tracks from %s %s",
            len(pool.selected),
            len(pool.stashed),
            added,
            len(tracks),
            label,
            source_id,
        )

    return skipped


def select_tracks(
    album_ids: Sequence[str],
    playlist_ids: Sequence[str],
    fetch_album: Callable[[str], Optional[List[str]]],
    fetch_playlist: Callable[[str], Optional[List[str]]],
    existing_tracks: Iterable[str],
    number_of_tracks: int,
    quota: int,
    rng: random.Random,
    report: ProgressCallback,
) -> tuple[List[str], SelectionStats]:
    """
    Build the list of tracks to append to the target playlist.

    Both source lists are shuffled independently, albums are sampled first,
    then playlists, the stash tops up any shortfall and tracks already in
    the target playlist are left out.
    """
    existing = set(existing_tracks)
    pool = SelectionPool(excluded=existing)
    stats = SelectionStats()

    albums = list(album_ids)
    playlists = list(playlist_ids)
    rng.shuffle(albums)
    rng.shuffle(playlists)

    report(f"Selecting random tracks from {len(albums)} albums")
    sample_sources(
        pool, SourceKind.ALBUMS, albums, fetch_album, number_of_tracks, quota, rng
    )
    stats.selected_from_albums = len(pool.selected)
    logger.info(
        "Selected tracks: %d, stashed tracks: %d", len(pool.selected), len(pool.stashed)
    )
    report(f"Selected {stats.selected_from_albums} tracks from albums")

    # TODO: merge with the album pass once there is a rule for how albums and
    # playlists should be weighted against each other
    report("Selecting random playlist tracks")
    stats.playlists_skipped = sample_sources(
        pool, SourceKind.PLAYLISTS, playlists, fetch_playlist, number_of_tracks, quota, rng
    )
    stats.selected_from_playlists = len(pool.selected) - stats.selected_from_albums
    logger.info(
        "Selected tracks: %d, stashed tracks: %d", len(pool.selected), len(pool.stashed)
    )
    report(f"Selected {stats.selected_from_playlists} tracks from playlists")

    stats.selected_from_stash = pool.backfill(number_of_tracks)
    if stats.selected_from_stash:
        logger.info("Added %d tracks from stash", stats.selected_from_stash)

    # The snapshot only covers the fetched part of the target playlist, so
    # duplicates beyond the fetch cap are not caught.
    pool.remove_existing(existing)
    stats.duplicates_removed = len(pool.excluded_seen)
    logger.info(
        "Left out %d tracks already in the target playlist", stats.duplicates_removed
    )

    return pool.selected_tracks(), stats
