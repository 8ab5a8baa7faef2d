from datetime import datetime, timedelta, timezone
from pathlib import Path

from fastapi.testclient import TestClient
import pytest

from playlist_builder.api.fastapi_app import app
from playlist_builder.api.playlists import get_transport
from playlist_builder.data import Job, JobStatus, create_exclusive_job, get_job, save_jobs
from playlist_builder.pipeline import ADD_RANDOM_TRACKS_STEP

from tests.fakes import OTHER_URI, TARGET_ID, USER_URI, FakeSpotify

client = TestClient(app)

BODY = {
    "authorization": "Bearer abc",
    "client_token": "xyz",
    "user_uri": USER_URI,
    "number_of_tracks": 12,
    "seed": 3,
}


@pytest.fixture
def fake_spotify(jobs_file: Path, library: FakeSpotify):
    app.dependency_overrides[get_transport] = library.transport
    yield library
    app.dependency_overrides.clear()


def test_health() -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_random_tracks_runs_in_background(fake_spotify: FakeSpotify) -> None:
    response = client.post(f"/playlists/{TARGET_ID}/random-tracks", json=BODY)
    assert response.status_code == 202

    job = response.json()
    assert job["step"] == ADD_RANDOM_TRACKS_STEP
    assert job["metadata"]["playlist_id"] == TARGET_ID
    assert job["metadata"]["number_of_tracks"] == 12

    # TestClient runs background tasks before returning
    detail = client.get(f"/jobs/{job['id']}")
    assert detail.status_code == 200
    data = detail.json()
    assert data["status"] == "done"
    assert data["payload"]["added"] == 12
    assert data["messages"][0] == "Eclectic work started"
    assert data["message"] == "Done: added 12 tracks"
    assert len(fake_spotify.added[TARGET_ID]) == 12


def test_random_tracks_accepts_playlist_uri(fake_spotify: FakeSpotify) -> None:
    response = client.post(
        f"/playlists/spotify:playlist:{TARGET_ID}/random-tracks", json=BODY
    )

    assert response.status_code == 202
    assert response.json()["metadata"]["playlist_id"] == TARGET_ID


def test_ownership_failure_is_reported_on_the_job(fake_spotify: FakeSpotify) -> None:
    fake_spotify.playlists[TARGET_ID] = (OTHER_URI, [])

    response = client.post(f"/playlists/{TARGET_ID}/random-tracks", json=BODY)
    assert response.status_code == 202

    data = client.get(f"/jobs/{response.json()['id']}").json()
    assert data["status"] == "error"
    assert data["payload"] is None
    assert "someone else's playlist" in data["message"]


def test_second_run_for_same_playlist_is_rejected(fake_spotify: FakeSpotify) -> None:
    active, _ = create_exclusive_job(ADD_RANDOM_TRACKS_STEP, TARGET_ID)

    response = client.post(f"/playlists/{TARGET_ID}/random-tracks", json=BODY)

    assert response.status_code == 409
    assert response.json()["detail"]["job_id"] == active.id


def test_stale_run_does_not_block_the_playlist(fake_spotify: FakeSpotify) -> None:
    week_ago = datetime.now(timezone.utc) - timedelta(days=7)
    leftover = Job(
        id="leftover",
        step=ADD_RANDOM_TRACKS_STEP,
        status=JobStatus.RUNNING,
        created_at=week_ago,
        started_at=week_ago,
        metadata={"playlist_id": TARGET_ID},
    )
    save_jobs({leftover.id: leftover})

    response = client.post(f"/playlists/{TARGET_ID}/random-tracks", json=BODY)

    assert response.status_code == 202
    assert response.json()["id"] != leftover.id
    assert get_job(leftover.id).status == JobStatus.ERROR


def test_missing_credentials(fake_spotify: FakeSpotify) -> None:
    body = {**BODY, "client_token": ""}

    response = client.post(f"/playlists/{TARGET_ID}/random-tracks", json=body)

    assert response.status_code == 401
    assert response.json()["detail"]["status"] == "unauthenticated"


@pytest.mark.parametrize(
    "playlist_id, overrides",
    [
        ("not-a-playlist", {}),
        (TARGET_ID, {"number_of_tracks": 0}),
        (TARGET_ID, {"user_uri": "  "}),
    ],
)
def test_invalid_input(fake_spotify: FakeSpotify, playlist_id, overrides) -> None:
    body = {**BODY, **overrides}

    response = client.post(f"/playlists/{playlist_id}/random-tracks", json=body)

    assert response.status_code == 400


def test_list_jobs(fake_spotify: FakeSpotify) -> None:
    client.post(f"/playlists/{TARGET_ID}/random-tracks", json=BODY)
    client.post(f"/playlists/{TARGET_ID}/random-tracks", json=BODY)

    response = client.get("/jobs")

    assert response.status_code == 200
    jobs = response.json()["jobs"]
    assert len(jobs) == 2
    assert all(j["status"] == "done" for j in jobs)
    assert jobs[0]["created_at"] <= jobs[1]["created_at"]


def test_unknown_job(jobs_file: Path) -> None:
    response = client.get("/jobs/does-not-exist")

    assert response.status_code == 404
