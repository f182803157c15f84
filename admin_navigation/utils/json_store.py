from __future__ import annotations

import contextlib
import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Iterator, Union

try:  # pragma: no cover - Windows fallback
    import fcntl
except ImportError:  # pragma: no cover
    fcntl = None

PathType = Union[str, os.PathLike]

__all__ = ["load_options_file", "dump_options_file"]


@contextlib.contextmanager
def _locked(options_path: Path, exclusive: bool) -> Iterator[None]:
    """Advisory lock on a sidecar ``.lock`` file; a no-op without ``fcntl``."""
    if fcntl is None:
        yield
        return

    lock_path = options_path.with_suffix(options_path.suffix + ".lock")
    lock_path.parent.mkdir(parents=True, exist_ok=True)
    with lock_path.open("a") as lock_file:
        fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH)
        try:
            yield
        finally:
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)


def load_options_file(path: PathType) -> Dict[str, str]:
    """
    Read the options mapping from *path*.

    A missing, unreadable or non-object file yields an empty mapping; values are
    coerced to strings because options are string-valued.
    """
    options_path = Path(path)
    if not options_path.exists():
        return {}

    with _locked(options_path, exclusive=False):
        try:
            with options_path.open("r", encoding="utf-8") as fh:
                payload = json.load(fh)
        except (json.JSONDecodeError, FileNotFoundError):
            return {}

    if not isinstance(payload, dict):
        return {}
    return {str(key): str(value) for key, value in payload.items() if value is not None}


def dump_options_file(path: PathType, options: Dict[str, str]) -> None:
    """Write *options* to *path* through a temp file and ``os.replace``."""
    options_path = Path(path)
    options_path.parent.mkdir(parents=True, exist_ok=True)

    with _locked(options_path, exclusive=True):
        fd, tmp_name = tempfile.mkstemp(
            dir=str(options_path.parent), prefix=f".{options_path.name}.", suffix=".tmp"
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(options, tmp, indent=2, sort_keys=True)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_path, options_path)
        finally:
            if tmp_path.exists():
                with contextlib.suppress(FileNotFoundError):
                    tmp_path.unlink()
