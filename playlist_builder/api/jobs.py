from typing import List

from fastapi import APIRouter, HTTPException

from playlist_builder.data import Job, get_job, load_jobs

from .schemas import JobListResponse, JobResponse, JobStatus, RunSummary

router = APIRouter()


def job_to_response(job: Job) -> JobResponse:
    return JobResponse(
        id=job.id,
        step=job.step,
        status=JobStatus(job.status.value),
        created_at=job.created_at,
        started_at=job.started_at,
        finished_at=job.finished_at,
        updated_at=job.updated_at,
        progress=job.progress,
        message=job.message,
        messages=list(job.messages),
        payload=RunSummary(**job.payload) if job.payload else None,
        metadata=job.metadata,
    )


@router.get("/jobs", response_model=JobListResponse)
def list_jobs() -> JobListResponse:
    """
    List all known jobs, oldest first.
    """
    jobs_sorted: List[Job] = sorted(load_jobs().values(), key=lambda j: j.created_at)
    return JobListResponse(jobs=[job_to_response(j) for j in jobs_sorted])


@router.get("/jobs/{job_id}", response_model=JobResponse)
def get_job_detail(job_id: str) -> JobResponse:
    """
    Retrieve a single job, including every progress message so far.
    """
    job = get_job(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found.")
    return job_to_response(job)
