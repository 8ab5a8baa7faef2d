"""Public façade for the playlist_builder.spotify package.

This module exposes the partner (pathfinder) API integration: credentials,
request construction, the transport, the paged fetcher and the library,
track and playlist helpers built on it. Callers should import these symbols
from this façade instead of the internal modules.
"""

from .auth import (
    SpotifyCredentials,
    load_credentials_from_env,
    make_credentials,
    spotify_headers,
)
from .ids import normalize_user_uri, parse_playlist_id, strip_prefix
from .library import list_sources
from .pagination import Page, PagedResult, fetch_all_pages
from .playlists import add_tracks_to_playlist
from .queries import (
    SpotifyRequest,
    add_to_playlist_variables,
    build_get_request,
    build_post_request,
    library_variables,
    source_tracks_variables,
)
from .tracks import fetch_album_tracks, fetch_playlist_tracks
from .transport import SpotifyTransport, Transport

__all__ = [
    "SpotifyCredentials",
    "make_credentials",
    "load_credentials_from_env",
    "spotify_headers",
    "strip_prefix",
    "parse_playlist_id",
    "normalize_user_uri",
    "SpotifyRequest",
    "build_get_request",
    "build_post_request",
    "library_variables",
    "source_tracks_variables",
    "add_to_playlist_variables",
    "Transport",
    "SpotifyTransport",
    "Page",
    "PagedResult",
    "fetch_all_pages",
    "list_sources",
    "fetch_album_tracks",
    "fetch_playlist_tracks",
    "add_tracks_to_playlist",
]
