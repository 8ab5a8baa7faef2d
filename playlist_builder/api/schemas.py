from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class RandomTracksRequest(BaseModel):
    """
    Body of POST /playlists/{playlist_id}/random-tracks.

    authorization / client_token are the header values of a web player
    session; user_uri identifies the acting user (ID or spotify:user: URI).
    """

    authorization: str = ""
    client_token: str = ""
    user_uri: str
    number_of_tracks: Optional[int] = None
    seed: Optional[int] = None


class JobStatus(str, Enum):
    pending = "pending"
    running = "running"
    done = "done"
    error = "error"


class RunSummary(BaseModel):
    playlist_id: str
    requested: int
    albums_found: int
    playlists_found: int
    playlists_skipped: int
    selected_from_albums: int
    selected_from_playlists: int
    selected_from_stash: int
    duplicates_removed: int
    added: int
    missed: int
    message: str


class JobResponse(BaseModel):
    id: str
    step: str
    status: JobStatus
    created_at: datetime
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    progress: Optional[float] = None
    message: Optional[str] = None
    messages: List[str] = []
    payload: Optional[RunSummary] = None
    metadata: Optional[dict] = None


class JobListResponse(BaseModel):
    jobs: List[JobResponse]
