import json
import os
import time
from pathlib import Path
from typing import Any, Iterator, Optional

from kiro_steering.errors import LoadIOError


def read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def schema_error_message(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)


def deadline_after(seconds: Optional[float]) -> Optional[float]:
    if seconds is None:
        return None
    return time.monotonic() + seconds


def check_deadline(root: Path, deadline: Optional[float]) -> None:
    if deadline is not None and time.monotonic() > deadline:
        raise LoadIOError(root, "timed out while walking directory")


def walk_files(root: Path, suffix: str, deadline: Optional[float] = None) -> Iterator[Path]:
    """Yield files under ``root`` ending with ``suffix`` in lexical path order.

    Hidden directories below the root are skipped. A missing root yields
    nothing; a root that cannot be listed raises :class:`LoadIOError`, as
    does passing ``deadline`` (a ``time.monotonic()`` value).
    """
    if not root.exists():
        return
    if not root.is_dir():
        raise LoadIOError(root, "not a directory")

    def _raise(exc: OSError) -> None:
        raise LoadIOError(Path(exc.filename or root), exc.strerror or str(exc))

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        check_deadline(root, deadline)
        dirnames[:] = sorted(name for name in dirnames if not name.startswith("."))
        for filename in sorted(filenames):
            if filename.startswith(".") or not filename.endswith(suffix):
                continue
            yield Path(dirpath) / filename


def relative_id(path: Path, root: Path, suffix: str) -> str:
    relative = path.relative_to(root).as_posix()
    if relative.endswith(suffix):
        relative = relative[: -len(suffix)]
    return relative
