from pathlib import Path

import pytest

from tests.fakes import OTHER_URI, TARGET_ID, USER_URI, FakeSpotify


@pytest.fixture
def jobs_file(tmp_path: Path, monkeypatch) -> Path:
    path = tmp_path / "jobs.json"
    monkeypatch.setattr("playlist_builder.config.JOBS_FILE", str(path))
    return path


@pytest.fixture
def library() -> FakeSpotify:
    """
    Ten albums of 8 tracks, two foreign playlists of 20 tracks and the
    user's own (target) playlist holding two of the album tracks.
    """
    albums = {f"album{a}": [f"a{a}t{t}" for t in range(8)] for a in range(10)}
    playlists = {
        TARGET_ID: (USER_URI, ["a0t0", "a1t1"]),
        "mix1": (OTHER_URI, [f"m1t{t}" for t in range(20)]),
        "mix2": (OTHER_URI, [f"m2t{t}" for t in range(20)]),
    }
    return FakeSpotify(albums=albums, playlists=playlists)
