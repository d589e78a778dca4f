"""Shared pytest fixtures for the frontfix test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from frontfix.core.runtime_state import RuntimeContext, runtime_scope


@pytest.fixture()
def set_project_root(tmp_path: Path):
    """Point the project root at tmp_path via RuntimeContext for one test."""
    ctx = RuntimeContext(project_root=tmp_path)
    with runtime_scope(ctx):
        yield tmp_path


@pytest.fixture()
def write_file(set_project_root: Path):
    """Write a project-relative file under the temporary root."""

    def _write(relpath: str, content: str = "") -> Path:
        path = set_project_root / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
