"""Request construction for the partner GraphQL API.

Spotify uses persisted queries: the client never sends query text, only the
operation name, its variables and the sha256 hash of a query the server
already knows. GET requests carry all three in the query string, POST
requests carry them in a JSON body sent to the same endpoint.

Example GET (libraryV3):

    <endpoint>?operationName=libraryV3
        &variables=%7B%22filters%22%3A%5B%22Playlists%22%5D%2C...%7D
        &extensions=%7B%22persistedQuery%22%3A%7B%22version%22%3A1%2C...%7D%7D
"""

from dataclasses import dataclass
import json
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from playlist_builder import config
from playlist_builder.core import RequestBuildFailure, SourceKind, get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SpotifyRequest:
    """A fully built request. GET when body is None, POST otherwise."""

    operation: str
    url: str
    body: Optional[Dict[str, Any]] = None

    @property
    def method(self) -> str:
        return "GET" if self.body is None else "POST"


def to_json(value: Any) -> str:
    """Compact JSON, the form Spotify's own client sends."""
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise RequestBuildFailure(f"Cannot serialize {value!r}: {e}") from e


def _persisted_query_hash(operation: str) -> str:
    try:
        return config.PERSISTED_QUERY_HASHES[operation]
    except KeyError as e:
        raise RequestBuildFailure(f"No persisted query hash for {operation!r}") from e


def persisted_query_extensions(operation: str) -> Dict[str, Any]:
    return {
        "persistedQuery": {
            "version": 1,
            "sha256Hash": _persisted_query_hash(operation),
        }
    }


def build_get_request(operation: str, variables: Dict[str, Any]) -> SpotifyRequest:
    """
    Build a GET request with operationName, variables and extensions in the
    query string. Everything except unreserved characters is percent-encoded.
    """
    encoded_variables = quote(to_json(variables), safe="")
    encoded_extensions = quote(to_json(persisted_query_extensions(operation)), safe="")
    url = (
        f"{config.SPOTIFY_PATHFINDER_URL}?operationName={operation}"
        f"&variables={encoded_variables}"
        f"&extensions={encoded_extensions}"
    )
    return SpotifyRequest(operation=operation, url=url)


def build_post_request(operation: str, variables: Dict[str, Any]) -> SpotifyRequest:
    body = {
        "variables": variables,
        "operationName": operation,
        "extensions": persisted_query_extensions(operation),
    }
    # fail here rather than inside the transport
    to_json(body)
    return SpotifyRequest(operation=operation, url=config.SPOTIFY_PATHFINDER_URL, body=body)


# ---------------------------------------------------------------------------
# Variables per operation. Key order matches what the web player sends.
# ---------------------------------------------------------------------------


def library_variables(kind: SourceKind, limit: int, offset: int) -> Dict[str, Any]:
    return {
        "filters": [kind.value],
        "order": None,
        "textFilter": "",
        "features": list(config.LIBRARY_FEATURES),
        "limit": limit,
        "offset": offset,
        "flatten": False,
        "expandedFolders": [],
        "folderUri": None,
        "includeFoldersWhenFlattening": True,
        "withCuration": False,
    }


def source_tracks_variables(uri: str, limit: int, offset: int) -> Dict[str, Any]:
    """Variables for getAlbum and fetchPlaylist."""
    return {
        "uri": uri,
        "locale": "",
        "offset": offset,
        "limit": limit,
    }


def add_to_playlist_variables(uris: List[str], playlist_uri: str) -> Dict[str, Any]:
    return {
        "uris": list(uris),
        "playlistUri": playlist_uri,
        "newPosition": {
            "moveType": config.ADD_POSITION_MOVE_TYPE,
            "fromUid": None,
        },
    }
