"""Shared write step for generated configuration files."""

from __future__ import annotations

import logging
from pathlib import Path

from frontfix.core.fallbacks import log_best_effort_failure
from frontfix.core.file_paths import rel, safe_write_text
from frontfix.core.output_contract import OutputResult

logger = logging.getLogger(__name__)


def write_generated(path: Path, content: str, *, force: bool = False) -> OutputResult:
    """Write *content* to *path* unless an existing, different file would be lost.

    Returns status ``written``, ``unchanged`` or ``skipped``; a failed write
    returns ``error`` with ``error_kind="write_error"``.
    """
    try:
        existing = path.read_text(encoding="utf-8") if path.exists() else None
    except (OSError, UnicodeDecodeError) as exc:
        log_best_effort_failure(logger, f"read existing {path}", exc)
        existing = None
        if not force:
            return OutputResult(
                ok=False,
                status="skipped",
                message=f"{rel(path)} exists but could not be read; use --force to replace it",
            )

    if existing == content:
        return OutputResult(ok=True, status="unchanged", message=rel(path))
    if existing is not None and not force:
        return OutputResult(
            ok=False,
            status="skipped",
            message=f"{rel(path)} already exists; use --force to overwrite",
        )
    try:
        safe_write_text(path, content)
    except OSError as exc:
        return OutputResult(
            ok=False,
            status="error",
            message=f"Could not write {rel(path)}: {exc}",
            error_kind="write_error",
        )
    return OutputResult(ok=True, status="written", message=rel(path))


__all__ = ["write_generated"]
