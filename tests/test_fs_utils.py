from pathlib import Path

from playlist_builder.core import ensure_dir, read_json, write_json


def test_read_json_missing_file_returns_default(tmp_path: Path) -> None:
    path = tmp_path / "missing.json"
    default = {"value": 123}

    result = read_json(str(path), default=default)

    assert result == default


def test_read_json_invalid_json_calls_on_error_and_returns_default(
    tmp_path: Path,
) -> None:
    path = tmp_path / "invalid.json"
    path.write_text("{ invalid json", encoding="utf-8")

    errors = []

    def on_error(exc: Exception) -> None:
        errors.append(exc)

    default = {"ok": True}

    result = read_json(str(path), default=default, on_error=on_error)

    assert result == default
    assert len(errors) == 1


def test_write_json_creates_parent_dirs_and_roundtrips(tmp_path: Path) -> None:
    data = {"id": "job-1", "messages": ["Eclectic work started"], "progress": 0.5}
    path = tmp_path / "nested" / "cache" / "jobs.json"

    write_json(path, data)

    assert path.exists()
    assert read_json(str(path), default=None) == data


def test_write_json_replaces_without_leaving_temp_files(tmp_path: Path) -> None:
    path = tmp_path / "jobs.json"

    write_json(path, {"version": 1})
    write_json(path, {"version": 2})

    assert read_json(path) == {"version": 2}
    assert [p.name for p in tmp_path.iterdir()] == ["jobs.json"]


def test_ensure_dir(tmp_path: Path) -> None:
    dir_path = tmp_path / "some" / "dir"
    ensure_dir(str(dir_path))

    assert dir_path.exists()
    assert dir_path.is_dir()

    # second call is a no-op
    ensure_dir(str(dir_path))
    assert dir_path.is_dir()
