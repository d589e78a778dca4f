"""Reporting helpers for failures that should not stop a run."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Mapping

from frontfix.core.output import colorize


def log_best_effort_failure(
    logger: logging.Logger, action: str, exc: Exception
) -> None:
    logger.debug("Best-effort fallback failed while trying to %s: %s", action, exc)


def print_error(message: str) -> None:
    """Red ``Error:`` line on stderr; callers decide whether to exit."""
    print(colorize(f"  Error: {message}", "red"), file=sys.stderr)


def warn_best_effort(message: str) -> None:
    print(colorize(f"  WARNING: {message}", "yellow"), file=sys.stderr)


def restore_files_best_effort(
    snapshots: Mapping[str, str],
    write_fn: Callable[[str, str], None],
) -> list[str]:
    """Write every snapshot back; return the paths that could not be restored."""
    failed: list[str] = []
    for filepath, original in snapshots.items():
        try:
            write_fn(filepath, original)
        except OSError:
            failed.append(filepath)
    return failed


__all__ = [
    "log_best_effort_failure",
    "print_error",
    "restore_files_best_effort",
    "warn_best_effort",
]
