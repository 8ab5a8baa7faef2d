"""Error types shared across the package.

Failures come in two flavours:

- FetchFailure and its subclasses end a single fetch. Callers that paginate
  or batch keep whatever they already have and carry on (soft stop).
- Everything else derived from PlaylistBuilderError ends the whole run and
  is reported to the user as a short message.

There is no retry state anywhere; a failed request is never repeated.
"""


class PlaylistBuilderError(Exception):
    """Base error for the playlist builder."""


class FetchFailure(PlaylistBuilderError):
    """A single request to Spotify did not produce a usable body."""


class RequestBuildFailure(FetchFailure):
    """Variables could not be serialized or the request URL could not be built."""


class TransportFailure(FetchFailure):
    """Network error, error status or a body that could not be decoded."""


class OwnershipMismatch(PlaylistBuilderError):
    """The target playlist belongs to someone other than the acting user."""

    def __init__(self, owner_uri: str, user_uri: str):
        super().__init__(
            "Cannot add tracks to someone else's playlist. "
            "Try again with a playlist you created yourself."
        )
        self.owner_uri = owner_uri
        self.user_uri = user_uri


class TargetPlaylistUnavailable(PlaylistBuilderError):
    """The target playlist could not be fetched."""

    def __init__(self, playlist_id: str):
        super().__init__("Cannot fetch target playlist details from Spotify")
        self.playlist_id = playlist_id


class InvalidRequest(PlaylistBuilderError):
    """Caller input (playlist id, user, track count) is unusable."""


class SpotifyCredentialsMissing(PlaylistBuilderError):
    """No authorization / client-token header values were supplied."""
