from typing import Any, Dict, Optional, Protocol

import requests

from playlist_builder import config
from playlist_builder.core import TransportFailure, get_logger

from .auth import SpotifyCredentials, spotify_headers
from .queries import SpotifyRequest, to_json

logger = get_logger(__name__)


class Transport(Protocol):
    """Anything that can perform one request and return the decoded body."""

    def execute(self, request: SpotifyRequest) -> Dict[str, Any]: ...


class SpotifyTransport:
    """
    Blocking transport over a requests.Session.

    One request at a time; no retries. Any failure (network, error status,
    undecodable body) is raised as TransportFailure.
    """

    def __init__(
        self,
        credentials: SpotifyCredentials,
        session: Optional[requests.Session] = None,
        timeout: float = config.REQUEST_TIMEOUT_SECONDS,
    ):
        self.credentials = credentials
        self.session = session or requests.Session()
        self.timeout = timeout

    def execute(self, request: SpotifyRequest) -> Dict[str, Any]:
        headers = spotify_headers(self.credentials, with_body=request.body is not None)

        try:
            if request.body is None:
                r = self.session.get(request.url, headers=headers, timeout=self.timeout)
            else:
                r = self.session.post(
                    request.url,
                    headers=headers,
                    data=to_json(request.body).encode("utf-8"),
                    timeout=self.timeout,
                )
            r.raise_for_status()
            data = r.json()
        except requests.RequestException as e:
            logger.warning("Spotify request %s failed: %s", request.operation, e)
            logger.debug("Failed URL: %s", request.url)
            raise TransportFailure(f"{request.operation}: {e}") from e
        except ValueError as e:
            logger.warning("Spotify response for %s is not JSON: %s", request.operation, e)
            raise TransportFailure(f"{request.operation}: invalid JSON") from e

        if not isinstance(data, dict):
            raise TransportFailure(f"{request.operation}: unexpected response type")
        return data

    def close(self) -> None:
        self.session.close()
