"""Pydantic models for the parts of pathfinder responses we read.

Only the fields the builder needs are declared; everything else is ignored.

    libraryV3     data -> me -> libraryV3 -> {totalCount, items[] -> item -> data -> uri}
    getAlbum      data -> albumUnion -> tracks -> {totalCount, items[] -> track -> {uri, playability}}
    fetchPlaylist data -> playlistV2 -> {ownerV2 -> data -> uri,
                                         content -> {totalCount, items[] -> itemV2 -> data}}
"""

from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from playlist_builder.core import TransportFailure


class _SpotifyModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Playability(_SpotifyModel):
    playable: bool = False


# libraryV3 ------------------------------------------------------------------


class LibraryItemData(_SpotifyModel):
    uri: str


class LibraryItemRef(_SpotifyModel):
    data: LibraryItemData


class LibraryItem(_SpotifyModel):
    item: LibraryItemRef


class LibraryV3(_SpotifyModel):
    items: List[LibraryItem] = Field(default_factory=list)
    total_count: int = Field(alias="totalCount")


class Me(_SpotifyModel):
    library_v3: LibraryV3 = Field(alias="libraryV3")


class LibraryData(_SpotifyModel):
    me: Me


class LibraryResponse(_SpotifyModel):
    data: LibraryData


# getAlbum -------------------------------------------------------------------


class AlbumTrack(_SpotifyModel):
    uri: str
    playability: Playability = Field(default_factory=Playability)


class AlbumTrackItem(_SpotifyModel):
    track: AlbumTrack


class AlbumTracks(_SpotifyModel):
    items: List[AlbumTrackItem] = Field(default_factory=list)
    total_count: int = Field(alias="totalCount")


class AlbumUnion(_SpotifyModel):
    tracks: AlbumTracks


class AlbumData(_SpotifyModel):
    album_union: AlbumUnion = Field(alias="albumUnion")


class AlbumTracksResponse(_SpotifyModel):
    data: AlbumData


# fetchPlaylist --------------------------------------------------------------


class PlaylistItemData(_SpotifyModel):
    # deleted / not-found entries come back with an empty data object
    uri: Optional[str] = None
    playability: Optional[Playability] = None


class PlaylistItemV2(_SpotifyModel):
    data: Optional[PlaylistItemData] = None


class PlaylistItem(_SpotifyModel):
    item_v2: PlaylistItemV2 = Field(alias="itemV2")


class PlaylistContent(_SpotifyModel):
    items: List[PlaylistItem] = Field(default_factory=list)
    total_count: int = Field(alias="totalCount")


class OwnerData(_SpotifyModel):
    uri: str


class Owner(_SpotifyModel):
    data: OwnerData


class PlaylistV2(_SpotifyModel):
    owner_v2: Owner = Field(alias="ownerV2")
    content: PlaylistContent


class PlaylistData(_SpotifyModel):
    playlist_v2: PlaylistV2 = Field(alias="playlistV2")


class PlaylistResponse(_SpotifyModel):
    data: PlaylistData


M = TypeVar("M", bound=BaseModel)


def parse_body(model: Type[M], body: Dict[str, Any]) -> M:
    """Validate a decoded body; a shape mismatch counts as a transport failure."""
    try:
        return model.model_validate(body)
    except ValidationError as e:
        raise TransportFailure(
            f"Unexpected {model.__name__} shape: {e.error_count()} errors"
        ) from e
