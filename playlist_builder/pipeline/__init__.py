"""Public façade for the playlist_builder.pipeline package.

This module exposes the track selection, the run orchestration and the job
runner entrypoint. Other packages should import pipeline behaviour from this
façade instead of the internal pipeline submodules.
"""

from .jobs_runner import ADD_RANDOM_TRACKS_STEP, run_add_random_tracks_job
from .orchestration import (
    RunOptions,
    add_random_tracks,
    fetch_target_playlist,
    generate_random_playlist,
    resolve_track_count,
)
from .selection import (
    ProgressCallback,
    SelectionPool,
    SelectionStats,
    sample_sources,
    select_tracks,
)

__all__ = [
    "ADD_RANDOM_TRACKS_STEP",
    "run_add_random_tracks_job",
    "RunOptions",
    "add_random_tracks",
    "fetch_target_playlist",
    "generate_random_playlist",
    "resolve_track_count",
    "ProgressCallback",
    "SelectionPool",
    "SelectionStats",
    "sample_sources",
    "select_tracks",
]
