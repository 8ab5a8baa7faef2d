"""Public façade for the playlist_builder.core package.

This module exposes logging helpers, error types, filesystem utilities and
the plain data models that are safe to import from other packages. Callers
should import these cross-cutting concerns from this façade instead of the
internal submodules.
"""

from .errors import (
    FetchFailure,
    InvalidRequest,
    OwnershipMismatch,
    PlaylistBuilderError,
    RequestBuildFailure,
    SpotifyCredentialsMissing,
    TargetPlaylistUnavailable,
    TransportFailure,
)
from .fs_utils import ensure_dir, read_json, write_json
from .logging_config import configure_logging
from .logging_utils import (
    get_logger,
    log_error,
    log_info,
    log_progress,
    log_section,
    log_step,
    log_success,
    log_warning,
)
from .models import (
    AddTracksResult,
    PageCursor,
    PlaylistTracks,
    RunResult,
    SourceKind,
    TargetPlaylist,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "log_section",
    "log_info",
    "log_step",
    "log_success",
    "log_warning",
    "log_error",
    "log_progress",
    "ensure_dir",
    "write_json",
    "read_json",
    "PlaylistBuilderError",
    "FetchFailure",
    "RequestBuildFailure",
    "TransportFailure",
    "OwnershipMismatch",
    "TargetPlaylistUnavailable",
    "InvalidRequest",
    "SpotifyCredentialsMissing",
    "SourceKind",
    "PageCursor",
    "PlaylistTracks",
    "TargetPlaylist",
    "AddTracksResult",
    "RunResult",
]
