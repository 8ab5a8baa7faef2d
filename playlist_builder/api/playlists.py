from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from playlist_builder.core import InvalidRequest, SpotifyCredentialsMissing, log_step
from playlist_builder.data import create_exclusive_job
from playlist_builder.pipeline import (
    ADD_RANDOM_TRACKS_STEP,
    resolve_track_count,
    run_add_random_tracks_job,
)
from playlist_builder.spotify import (
    Transport,
    make_credentials,
    normalize_user_uri,
    parse_playlist_id,
)

from .jobs import job_to_response
from .schemas import JobResponse, RandomTracksRequest

router = APIRouter()


def get_transport() -> Optional[Transport]:
    """
    Transport used by background runs. None means a fresh SpotifyTransport
    per run; tests override this dependency with a fake.
    """
    return None


@router.post(
    "/playlists/{playlist_id}/random-tracks",
    response_model=JobResponse,
    status_code=202,
)
def add_random_tracks_async(
    playlist_id: str,
    body: RandomTracksRequest,
    background_tasks: BackgroundTasks,
    transport: Optional[Transport] = Depends(get_transport),
) -> JobResponse:
    """
    Start adding random library tracks to a playlist the user owns.

    The run happens in the background; poll /jobs/{id} for progress messages
    and the final summary.
    """
    try:
        credentials = make_credentials(body.authorization, body.client_token)
    except SpotifyCredentialsMissing as e:
        raise HTTPException(
            status_code=401,
            detail={"status": "unauthenticated", "message": str(e)},
        )

    try:
        target_id = parse_playlist_id(playlist_id)
        user_uri = normalize_user_uri(body.user_uri)
        number_of_tracks = resolve_track_count(body.number_of_tracks)
    except InvalidRequest as e:
        raise HTTPException(status_code=400, detail=str(e))

    job, created = create_exclusive_job(
        ADD_RANDOM_TRACKS_STEP,
        target_id,
        metadata={"user_uri": user_uri, "number_of_tracks": number_of_tracks},
    )
    if not created:
        raise HTTPException(
            status_code=409,
            detail={
                "message": "Tracks are already being added to this playlist.",
                "job_id": job.id,
            },
        )

    log_step(f"Queued job {job.id} for playlist {target_id}")
    background_tasks.add_task(
        run_add_random_tracks_job,
        job.id,
        credentials,
        target_id,
        user_uri,
        number_of_tracks,
        body.seed,
        transport,
    )
    return job_to_response(job)
