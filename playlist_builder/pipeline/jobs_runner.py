from datetime import datetime, timezone
import random
from typing import Optional

from playlist_builder.core import PlaylistBuilderError, log_error, log_step
from playlist_builder.data import JobStatus, append_job_message, get_job, update_job
from playlist_builder.spotify import SpotifyCredentials, Transport

from .orchestration import RunOptions, add_random_tracks

ADD_RANDOM_TRACKS_STEP = "add_random_tracks"


def run_add_random_tracks_job(
    job_id: str,
    credentials: SpotifyCredentials,
    playlist_id: str,
    user: str,
    number_of_tracks: Optional[int] = None,
    seed: Optional[int] = None,
    transport: Optional[Transport] = None,
    options: Optional[RunOptions] = None,
) -> None:
    """
    Execute one run for a job and record its outcome on the job.

    Progress messages are appended to the job as they happen. Credentials are
    only held in memory for the duration of the run.
    """
    job = get_job(job_id)
    if job is None:
        return

    job.status = JobStatus.RUNNING
    job.started_at = datetime.now(timezone.utc)
    job.progress = 0.0
    update_job(job)

    log_step(f"Job {job_id}: adding random tracks to playlist {playlist_id}")

    def progress(message: str) -> None:
        append_job_message(job_id, message)

    status = JobStatus.DONE
    payload = None
    try:
        result = add_random_tracks(
            credentials,
            playlist_id,
            user,
            number_of_tracks,
            transport=transport,
            options=options,
            rng=random.Random(seed),
            progress=progress,
        )
        payload = result.to_dict()
    except PlaylistBuilderError:
        # already reported through progress()
        status = JobStatus.ERROR
    except Exception as exc:  # noqa: BLE001
        status = JobStatus.ERROR
        log_error(f"Job {job_id} crashed: {exc!r}")
        append_job_message(job_id, f"Unexpected error: {exc}")
    finally:
        job = get_job(job_id) or job
        job.status = status
        job.payload = payload
        job.progress = 1.0 if status == JobStatus.DONE else job.progress
        job.finished_at = datetime.now(timezone.utc)
        update_job(job)
