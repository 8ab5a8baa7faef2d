"""HTTP surface of the playlist builder.

The FastAPI application lives in playlist_builder.api.fastapi_app; routers
are split per resource (health, playlists, jobs).
"""
