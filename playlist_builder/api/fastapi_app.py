from fastapi import FastAPI

from playlist_builder import __version__
from playlist_builder.api.health import router as health_router
from playlist_builder.api.jobs import router as jobs_router
from playlist_builder.api.playlists import router as playlists_router
from playlist_builder.core import configure_logging

configure_logging()

app = FastAPI(
    title="Eclectic Playlist Builder API",
    version=__version__,
    description="Adds a random selection of library tracks to a Spotify playlist.",
)

app.include_router(health_router, tags=["health"])
app.include_router(playlists_router, tags=["playlists"])
app.include_router(jobs_router, tags=["jobs"])
