"""Path normalization and atomic write helpers."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from frontfix.core.runtime_state import get_project_root


def resolve_path(filepath: str | Path) -> Path:
    """Resolve *filepath* against the project root when it is relative."""
    path = Path(filepath)
    if path.is_absolute():
        return path
    return get_project_root() / path


def rel(path: str | Path) -> str:
    """Return *path* relative to the project root, with forward slashes."""
    resolved = Path(path)
    root = get_project_root()
    try:
        return str(resolved.resolve().relative_to(root.resolve())).replace("\\", "/")
    except ValueError:
        return str(path).replace("\\", "/")


def safe_write_text(filepath: str | Path, text: str) -> None:
    """Write *text* atomically: temp file in the same directory, then replace."""
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)
        os.replace(tmp, path)
    except OSError:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


__all__ = ["rel", "resolve_path", "safe_write_text"]
