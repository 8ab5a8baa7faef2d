from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set


class SourceKind(str, Enum):
    """Library filter values understood by the libraryV3 operation."""

    ALBUMS = "Albums"
    PLAYLISTS = "Playlists"


@dataclass
class PageCursor:
    """
    Position in a paginated collection.

    total_count is unknown until the first page has been decoded.
    """

    limit: int
    offset: int = 0
    total_count: Optional[int] = None

    @property
    def pages(self) -> int:
        if not self.total_count or self.limit <= 0:
            return 0
        return -(-self.total_count // self.limit)

    def advance(self) -> None:
        self.offset += self.limit


@dataclass
class PlaylistTracks:
    """Playable track IDs of a playlist plus the URI of its owner."""

    tracks: List[str]
    owner_uri: str


@dataclass
class TargetPlaylist:
    """
    The playlist being written to.

    tracks is a snapshot bounded by the fetch cap, not necessarily the whole
    playlist.
    """

    id: str
    owner_uri: str
    tracks: Set[str] = field(default_factory=set)

    def is_owned_by(self, user_uri: str) -> bool:
        return self.owner_uri == user_uri


@dataclass
class AddTracksResult:
    added: int = 0
    missed: int = 0


@dataclass
class RunResult:
    """Summary of one add-random-tracks run."""

    playlist_id: str
    requested: int
    albums_found: int = 0
    playlists_found: int = 0
    playlists_skipped: int = 0
    selected_from_albums: int = 0
    selected_from_playlists: int = 0
    selected_from_stash: int = 0
    duplicates_removed: int = 0
    added: int = 0
    missed: int = 0
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
