from datetime import datetime, timedelta, timezone
from pathlib import Path

from playlist_builder.data import (
    Job,
    JobStatus,
    append_job_message,
    create_exclusive_job,
    get_job,
    load_jobs,
    save_jobs,
    update_job,
)
from playlist_builder.pipeline import ADD_RANDOM_TRACKS_STEP, run_add_random_tracks_job
from playlist_builder.spotify import make_credentials

from tests.fakes import OTHER_URI, TARGET_ID, USER_URI, FakeSpotify

CREDENTIALS = make_credentials("token", "client-token")


def test_create_and_update_job(jobs_file: Path) -> None:
    job, _ = create_exclusive_job(
        ADD_RANDOM_TRACKS_STEP, "p1", metadata={"user_uri": USER_URI}
    )

    assert jobs_file.exists()
    loaded = get_job(job.id)
    assert loaded is not None
    assert loaded.status == JobStatus.PENDING
    assert loaded.metadata == {"user_uri": USER_URI, "playlist_id": "p1"}

    loaded.status = JobStatus.DONE
    loaded.payload = {"added": 3}
    update_job(loaded)

    again = get_job(job.id)
    assert again.status == JobStatus.DONE
    assert again.payload == {"added": 3}
    assert again.created_at == job.created_at


def test_append_job_message(jobs_file: Path) -> None:
    job, _ = create_exclusive_job(ADD_RANDOM_TRACKS_STEP, "p1")

    append_job_message(job.id, "Eclectic work started")
    append_job_message(job.id, "Fetching details of the target playlist")

    loaded = get_job(job.id)
    assert loaded.messages == [
        "Eclectic work started",
        "Fetching details of the target playlist",
    ]
    assert loaded.message == "Fetching details of the target playlist"
    assert append_job_message("missing", "hello") is None


def test_only_one_active_job_per_playlist(jobs_file: Path) -> None:
    first, created = create_exclusive_job(ADD_RANDOM_TRACKS_STEP, "p1")
    assert created is True
    assert first.metadata["playlist_id"] == "p1"

    second, created = create_exclusive_job(ADD_RANDOM_TRACKS_STEP, "p1")
    assert created is False
    assert second.id == first.id

    other, created = create_exclusive_job(ADD_RANDOM_TRACKS_STEP, "p2")
    assert created is True
    assert other.id != first.id

    first.status = JobStatus.DONE
    update_job(first)
    _, created = create_exclusive_job(ADD_RANDOM_TRACKS_STEP, "p1")
    assert created is True


def test_corrupted_jobs_file_is_treated_as_empty(jobs_file: Path) -> None:
    jobs_file.write_text("{ not json", encoding="utf-8")

    assert load_jobs() == {}


def test_malformed_entries_are_skipped(jobs_file: Path) -> None:
    jobs_file.write_text(
        '{"bad": {"step": "x"}, "worse": 3, '
        '"ok": {"step": "add_random_tracks", "status": "done", '
        '"created_at": "2025-01-01T10:00:00"}}',
        encoding="utf-8",
    )

    jobs = load_jobs()

    assert list(jobs) == ["ok"]
    assert jobs["ok"].status == JobStatus.DONE
    assert jobs["ok"].created_at.tzinfo is not None


def test_job_runner_records_result(jobs_file: Path, library: FakeSpotify) -> None:
    job, _ = create_exclusive_job(ADD_RANDOM_TRACKS_STEP, TARGET_ID)

    run_add_random_tracks_job(
        job.id,
        CREDENTIALS,
        TARGET_ID,
        USER_URI,
        number_of_tracks=9,
        seed=1,
        transport=library.transport(),
    )

    done = get_job(job.id)
    assert done.status == JobStatus.DONE
    assert done.progress == 1.0
    assert done.finished_at is not None
    assert done.payload["added"] == 9
    assert done.messages[0] == "Eclectic work started"
    assert done.message == "Done: added 9 tracks"
    # credentials never reach the job file
    assert "token" not in jobs_file.read_text(encoding="utf-8")


def test_job_runner_records_failure(jobs_file: Path, library: FakeSpotify) -> None:
    library.playlists[TARGET_ID] = (OTHER_URI, [])
    job, _ = create_exclusive_job(ADD_RANDOM_TRACKS_STEP, TARGET_ID)

    run_add_random_tracks_job(
        job.id, CREDENTIALS, TARGET_ID, USER_URI, transport=library.transport()
    )

    failed = get_job(job.id)
    assert failed.status == JobStatus.ERROR
    assert failed.payload is None
    assert failed.message.startswith("Cannot add tracks to someone else's playlist")
    _, created = create_exclusive_job(ADD_RANDOM_TRACKS_STEP, TARGET_ID)
    assert created is True


def test_job_runner_records_unexpected_errors(jobs_file: Path) -> None:
    class ExplodingTransport:
        def execute(self, request):
            raise RuntimeError("kaboom")

    job, _ = create_exclusive_job(ADD_RANDOM_TRACKS_STEP, TARGET_ID)

    run_add_random_tracks_job(
        job.id, CREDENTIALS, TARGET_ID, USER_URI, transport=ExplodingTransport()
    )

    failed = get_job(job.id)
    assert failed.status == JobStatus.ERROR
    assert failed.message == "Unexpected error: kaboom"


def _running_job(job_id: str, playlist_id: str, started_at: datetime) -> Job:
    return Job(
        id=job_id,
        step=ADD_RANDOM_TRACKS_STEP,
        status=JobStatus.RUNNING,
        created_at=started_at,
        started_at=started_at,
        metadata={"playlist_id": playlist_id},
    )


def test_stale_active_job_is_abandoned(jobs_file: Path) -> None:
    week_ago = datetime.now(timezone.utc) - timedelta(days=7)
    save_jobs({"old": _running_job("old", "p1", week_ago)})

    job, created = create_exclusive_job(ADD_RANDOM_TRACKS_STEP, "p1")

    assert created is True
    assert job.id != "old"
    old = get_job("old")
    assert old.status == JobStatus.ERROR
    assert old.finished_at is not None
    assert old.message.startswith("Abandoned")
    assert old.messages[-1] == old.message


def test_recently_updated_job_still_blocks(jobs_file: Path) -> None:
    week_ago = datetime.now(timezone.utc) - timedelta(days=7)
    job = _running_job("busy", "p1", week_ago)
    job.updated_at = datetime.now(timezone.utc) - timedelta(seconds=30)
    save_jobs({"busy": job})

    active, created = create_exclusive_job(ADD_RANDOM_TRACKS_STEP, "p1")

    assert created is False
    assert active.id == "busy"
    assert get_job("busy").status == JobStatus.RUNNING


def test_active_job_writes_refresh_updated_at(jobs_file: Path) -> None:
    job, _ = create_exclusive_job(ADD_RANDOM_TRACKS_STEP, "p1")
    assert get_job(job.id).updated_at is None

    append_job_message(job.id, "Eclectic work started")
    first_seen = get_job(job.id).updated_at
    assert first_seen is not None

    running = get_job(job.id)
    running.status = JobStatus.RUNNING
    update_job(running)
    assert get_job(job.id).updated_at >= first_seen

    running.status = JobStatus.DONE
    running.updated_at = None
    update_job(running)
    assert get_job(job.id).updated_at is None


def test_only_newest_finished_jobs_are_kept(jobs_file: Path, monkeypatch) -> None:
    monkeypatch.setattr("playlist_builder.config.JOBS_KEEP_FINISHED", 2)
    base = datetime(2025, 1, 1, tzinfo=timezone.utc)

    jobs = {}
    for i in range(4):
        job = _running_job(f"done{i}", "p1", base + timedelta(hours=i))
        job.status = JobStatus.DONE
        job.finished_at = base + timedelta(hours=i, minutes=5)
        jobs[job.id] = job
    active = _running_job("active", "p2", base)
    jobs[active.id] = active

    save_jobs(jobs)

    assert sorted(load_jobs()) == ["active", "done2", "done3"]
