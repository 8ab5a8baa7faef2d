import json
import os
from pathlib import Path
import tempfile
from typing import Any, Callable, Optional


def ensure_dir(directory: str) -> None:
    """
    Create a directory (and its parents) if it is missing.
    """
    if directory and not os.path.exists(directory):
        os.makedirs(directory, exist_ok=True)


def write_json(path: str | Path, data: Any) -> None:
    """
    Write JSON to a file through a temporary sibling and os.replace.

    Readers see either the previous document or the new one, never a
    truncated file.
    """
    target_path = Path(path)
    ensure_dir(str(target_path.parent))

    fd, tmp_path_str = tempfile.mkstemp(
        dir=str(target_path.parent),
        prefix=target_path.name,
        suffix=".tmp",
    )
    tmp_path = Path(tmp_path_str)

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, target_path)
    except Exception:
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError:
            pass
        raise


def read_json(
    path: str | Path,
    default: Any = None,
    *,
    on_error: Optional[Callable[[Exception], None]] = None,
) -> Any:
    """
    Read a JSON file, returning `default` when it is missing or corrupted.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        return default
    except json.JSONDecodeError as e:
        if on_error:
            on_error(e)
        return default
