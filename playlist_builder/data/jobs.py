from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
import threading
from typing import Any, Dict, List, Optional
from uuid import uuid4

from playlist_builder import config
from playlist_builder.core import log_warning, read_json, write_json

# Background runs update their job from a worker thread while the API reads
# and creates jobs; every read-modify-write of the file goes through this lock.
_LOCK = threading.RLock()


class JobStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    DONE = "done"
    ERROR = "error"


ACTIVE_STATUSES = {JobStatus.PENDING, JobStatus.RUNNING}


@dataclass
class Job:
    id: str
    step: str
    status: JobStatus
    created_at: datetime
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    progress: Optional[float] = None
    message: Optional[str] = None
    messages: List[str] = field(default_factory=list)
    payload: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, Any]] = None
    # last time the job record was written while the job was active
    updated_at: Optional[datetime] = None


def _serialize_job(job: Job) -> Dict[str, Any]:
    return {
        "id": job.id,
        "step": job.step,
        "status": job.status.value,
        "created_at": job.created_at.isoformat(),
        "started_at": job.started_at.isoformat() if job.started_at else None,
        "finished_at": job.finished_at.isoformat() if job.finished_at else None,
        "progress": job.progress,
        "message": job.message,
        "messages": list(job.messages),
        "payload": job.payload,
        "metadata": job.metadata,
        "updated_at": job.updated_at.isoformat() if job.updated_at else None,
    }


def _parse_dt(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO datetime string and normalize it to UTC-aware."""
    if not value:
        return None

    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _deserialize_job(data: Dict[str, Any]) -> Job:
    created_at = _parse_dt(data["created_at"]) or datetime.now(timezone.utc)

    return Job(
        id=data["id"],
        step=data["step"],
        status=JobStatus(data.get("status", JobStatus.PENDING.value)),
        created_at=created_at,
        started_at=_parse_dt(data.get("started_at")),
        finished_at=_parse_dt(data.get("finished_at")),
        progress=data.get("progress"),
        message=data.get("message"),
        messages=list(data.get("messages") or []),
        payload=data.get("payload"),
        metadata=data.get("metadata"),
        updated_at=_parse_dt(data.get("updated_at")),
    )


def load_jobs() -> Dict[str, Job]:
    raw = read_json(config.JOBS_FILE, default={})
    if not isinstance(raw, dict):
        return {}

    jobs: Dict[str, Job] = {}
    for job_id, payload in raw.items():
        if not isinstance(payload, dict):
            continue
        payload = dict(payload)
        payload.setdefault("id", job_id)
        try:
            job = _deserialize_job(payload)
        except (KeyError, TypeError, ValueError):
            # malformed entry
            continue
        jobs[job.id] = job
    return jobs


def _prune_finished(jobs: Dict[str, Job]) -> Dict[str, Job]:
    """Keep every active job and the newest JOBS_KEEP_FINISHED finished ones."""
    finished = [job for job in jobs.values() if job.status not in ACTIVE_STATUSES]
    excess = len(finished) - max(config.JOBS_KEEP_FINISHED, 0)
    if excess <= 0:
        return jobs

    finished.sort(key=lambda j: j.finished_at or j.created_at)
    dropped = {job.id for job in finished[:excess]}
    return {job_id: job for job_id, job in jobs.items() if job_id not in dropped}


def save_jobs(jobs: Dict[str, Job]) -> None:
    kept = _prune_finished(jobs)
    serialised = {job_id: _serialize_job(job) for job_id, job in kept.items()}
    write_json(config.JOBS_FILE, serialised)


def get_job(job_id: str) -> Optional[Job]:
    return load_jobs().get(job_id)


def update_job(job: Job) -> None:
    if job.status in ACTIVE_STATUSES:
        job.updated_at = datetime.now(timezone.utc)
    with _LOCK:
        jobs = load_jobs()
        jobs[job.id] = job
        save_jobs(jobs)


def append_job_message(job_id: str, message: str) -> Optional[Job]:
    """Record a progress message; the newest one is also the job `message`."""
    with _LOCK:
        jobs = load_jobs()
        job = jobs.get(job_id)
        if job is None:
            return None
        job.messages.append(message)
        job.message = message
        job.updated_at = datetime.now(timezone.utc)
        save_jobs(jobs)
        return job


def _is_stale(job: Job, now: datetime) -> bool:
    last_seen = job.updated_at or job.started_at or job.created_at
    return (now - last_seen).total_seconds() > config.JOB_STALE_AFTER_SECONDS


def _abandon(job: Job, now: datetime) -> None:
    job.status = JobStatus.ERROR
    job.finished_at = now
    job.message = "Abandoned: the run stopped reporting progress"
    job.messages.append(job.message)


def create_exclusive_job(
    step: str, playlist_id: str, metadata: Optional[Dict[str, Any]] = None
) -> tuple[Job, bool]:
    """
    Create a job unless one of the same step is already active for the playlist.

    Returns (job, created). When created is False, job is the active one.
    Active jobs that have not been written to for JOB_STALE_AFTER_SECONDS
    (e.g. left behind by a killed process) are marked as errors instead of
    blocking the playlist.
    """
    now = datetime.now(timezone.utc)
    with _LOCK:
        jobs = load_jobs()
        for job in jobs.values():
            if job.step != step or job.status not in ACTIVE_STATUSES:
                continue
            if (job.metadata or {}).get("playlist_id") != playlist_id:
                continue
            if not _is_stale(job, now):
                return job, False
            log_warning(f"Job {job.id} for playlist {playlist_id} is stale, abandoning it")
            _abandon(job, now)

        job = Job(
            id=str(uuid4()),
            step=step,
            status=JobStatus.PENDING,
            created_at=now,
            metadata={**(metadata or {}), "playlist_id": playlist_id},
        )
        jobs[job.id] = job
        save_jobs(jobs)
        return job, True


__all__ = [
    "JobStatus",
    "Job",
    "ACTIVE_STATUSES",
    "load_jobs",
    "save_jobs",
    "get_job",
    "update_job",
    "append_job_message",
    "create_exclusive_job",
]
