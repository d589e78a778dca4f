"""Source tree walking and file reading."""

from __future__ import annotations

import fnmatch
import logging
import os
from pathlib import Path

from frontfix.core.fallbacks import log_best_effort_failure
from frontfix.core.runtime_state import current_runtime_context, get_project_root

logger = logging.getLogger(__name__)

COMPONENT_EXTENSIONS = (".tsx", ".jsx")
SOURCE_EXTENSIONS = (".tsx", ".jsx", ".ts", ".js")
STYLE_SUFFIXES = (".css", ".scss", ".sass", ".styled.tsx", ".styled.ts")
SKIP_DIRS = frozenset({"node_modules"})


def _is_excluded(rel_path: str, exclusions: tuple[str, ...]) -> bool:
    for pattern in exclusions:
        if fnmatch.fnmatch(rel_path, pattern) or f"/{pattern}/" in f"/{rel_path}/":
            return True
    return False


def find_files(
    directory: str | Path,
    suffixes: tuple[str, ...],
) -> list[str]:
    """Walk *directory* and return project-relative paths ending in *suffixes*.

    Hidden directories, ``node_modules`` and configured exclusions are
    skipped. Unreadable directories are logged and skipped. A missing
    directory yields an empty list.
    """
    root = get_project_root()
    base = Path(directory)
    if not base.is_absolute():
        base = root / base
    if not base.is_dir():
        return []

    exclusions = current_runtime_context().exclusions
    found: list[str] = []

    def _on_error(exc: OSError) -> None:
        log_best_effort_failure(logger, f"walk {exc.filename}", exc)

    for dirpath, dirnames, filenames in os.walk(base, onerror=_on_error):
        dirnames[:] = sorted(
            d for d in dirnames if not d.startswith(".") and d not in SKIP_DIRS
        )
        for name in filenames:
            if not name.endswith(suffixes):
                continue
            full = Path(dirpath) / name
            try:
                rel_path = str(full.relative_to(root)).replace("\\", "/")
            except ValueError:
                rel_path = str(full).replace("\\", "/")
            if _is_excluded(rel_path, exclusions):
                continue
            found.append(rel_path)
    return sorted(found)


def find_component_files(directory: str | Path) -> list[str]:
    return find_files(directory, COMPONENT_EXTENSIONS)


def find_source_files(directory: str | Path) -> list[str]:
    return find_files(directory, SOURCE_EXTENSIONS)


def find_style_files(directory: str | Path) -> list[str]:
    return find_files(directory, STYLE_SUFFIXES)


def is_test_file(filepath: str) -> bool:
    name = os.path.basename(filepath)
    return ".test." in name or ".spec." in name


def read_file_text(filepath: str | Path) -> str | None:
    """Read a project file through the runtime cache. Returns None if unreadable."""
    path = Path(filepath)
    if not path.is_absolute():
        path = get_project_root() / path
    return current_runtime_context().file_text_cache.read(str(path))


__all__ = [
    "COMPONENT_EXTENSIONS",
    "SOURCE_EXTENSIONS",
    "STYLE_SUFFIXES",
    "find_component_files",
    "find_files",
    "find_source_files",
    "find_style_files",
    "is_test_file",
    "read_file_text",
]
