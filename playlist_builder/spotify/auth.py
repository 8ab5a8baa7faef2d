"""Web player session credentials.

The partner API accepts the same two header values the Spotify web player
sends: the bearer `authorization` value and the `client-token` value. This
module does not obtain them; callers copy them from an open.spotify.com
session and hand them in.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from playlist_builder import config
from playlist_builder.core import SpotifyCredentialsMissing


@dataclass(frozen=True)
class SpotifyCredentials:
    authorization: str
    client_token: str

    def __repr__(self) -> str:
        return "SpotifyCredentials(authorization=***, client_token=***)"


def make_credentials(
    authorization: Optional[str], client_token: Optional[str]
) -> SpotifyCredentials:
    """
    Build credentials, accepting a raw token in place of "Bearer <token>".
    """
    authorization = (authorization or "").strip()
    client_token = (client_token or "").strip()
    if not authorization or not client_token:
        raise SpotifyCredentialsMissing(
            "Both the authorization and client-token header values are required."
        )
    if not authorization.lower().startswith("bearer "):
        authorization = f"Bearer {authorization}"
    return SpotifyCredentials(authorization=authorization, client_token=client_token)


def load_credentials_from_env() -> SpotifyCredentials:
    """
    Read SPOTIFY_AUTHORIZATION / SPOTIFY_CLIENT_TOKEN (environment or .env).
    """
    return make_credentials(config.SPOTIFY_AUTHORIZATION, config.SPOTIFY_CLIENT_TOKEN)


def spotify_headers(credentials: SpotifyCredentials, with_body: bool = False) -> Dict:
    headers = {
        "Accept": "application/json",
        "authorization": credentials.authorization,
        "client-token": credentials.client_token,
    }
    if with_body:
        headers["content-type"] = "application/json"
    return headers
