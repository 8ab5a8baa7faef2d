import re

from playlist_builder.config import ID_PREFIX_PLAYLIST, ID_PREFIX_USER
from playlist_builder.core import InvalidRequest

_PLAYLIST_URL_RE = re.compile(r"open\.spotify\.com/(?:[\w-]+/)?playlist/([A-Za-z0-9]+)")
_BARE_ID_RE = re.compile(r"^[A-Za-z0-9]+$")


def strip_prefix(uri: str, prefix: str) -> str:
    """Return the tail of a URI after its type prefix."""
    if uri.startswith(prefix):
        return uri[len(prefix):]
    return uri


def parse_playlist_id(value: str) -> str:
    """
    Accept a bare playlist ID, a spotify:playlist: URI or an
    open.spotify.com/playlist/ URL and return the bare ID.
    """
    value = (value or "").strip()
    if value.startswith(ID_PREFIX_PLAYLIST):
        value = value[len(ID_PREFIX_PLAYLIST):]
    else:
        match = _PLAYLIST_URL_RE.search(value)
        if match:
            value = match.group(1)

    if not _BARE_ID_RE.match(value):
        raise InvalidRequest(f"Not a Spotify playlist: {value!r}")
    return value


def normalize_user_uri(value: str) -> str:
    """Turn a bare user ID into a spotify:user: URI; URIs pass through."""
    value = (value or "").strip()
    if not value:
        raise InvalidRequest("A user ID is required to check playlist ownership.")
    if value.startswith(ID_PREFIX_USER):
        return value
    return f"{ID_PREFIX_USER}{value}"
