"""Public façade for the playlist_builder.data package.

Exposes the job store used to track background runs and their progress
messages. Other packages should import from here rather than from
playlist_builder.data.jobs.
"""

from .jobs import (
    ACTIVE_STATUSES,
    Job,
    JobStatus,
    append_job_message,
    create_exclusive_job,
    get_job,
    load_jobs,
    save_jobs,
    update_job,
)

__all__ = [
    "ACTIVE_STATUSES",
    "Job",
    "JobStatus",
    "append_job_message",
    "create_exclusive_job",
    "get_job",
    "load_jobs",
    "save_jobs",
    "update_job",
]
