"""File-by-file write pipeline shared by the regex fixers."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable

from frontfix.core.fallbacks import log_best_effort_failure
from frontfix.core.file_paths import rel, resolve_path, safe_write_text
from frontfix.core.output import colorize
from frontfix.core.runtime_state import current_runtime_context

logger = logging.getLogger(__name__)

# (content, filepath) -> (new_content, list of change descriptions)
TransformFn = Callable[[str, str], tuple[str, list[str]]]


def apply_fixer(
    files: list[str], transform_fn: TransformFn, *, dry_run: bool = False
) -> list[dict]:
    """Run *transform_fn* over every file and write back the changed ones."""
    results = []
    skipped_files: list[tuple[str, str]] = []
    for filepath in sorted(set(files)):
        try:
            changed = _process_fixer_file(
                filepath,
                transform_fn=transform_fn,
                dry_run=dry_run,
            )
            if changed is not None:
                results.append(changed)
        except (OSError, UnicodeDecodeError) as ex:
            skipped_files.append((filepath, str(ex)))
            print(colorize(f"  Skip {rel(filepath)}: {ex}", "yellow"), file=sys.stderr)

    if skipped_files:
        log_best_effort_failure(
            logger,
            f"apply fixer across {len(skipped_files)} skipped file(s)",
            OSError(
                "; ".join(f"{path}: {reason}" for path, reason in skipped_files[:5])
            ),
        )

    return results


def _process_fixer_file(
    filepath: str,
    *,
    transform_fn: TransformFn,
    dry_run: bool,
) -> dict[str, object] | None:
    path = resolve_path(filepath)
    original = path.read_text(encoding="utf-8")

    new_content, changes = transform_fn(original, filepath)
    if new_content == original:
        return None

    if not dry_run:
        _write_fixer_content(path, new_content)
        current_runtime_context().file_text_cache.invalidate(str(path))

    lines_delta = len(new_content.splitlines()) - len(original.splitlines())
    return {
        "file": filepath,
        "changes": changes,
        "lines_delta": lines_delta,
    }


def _write_fixer_content(path, content: str) -> None:
    try:
        safe_write_text(path, content)
    except OSError as exc:
        log_best_effort_failure(logger, f"write fixer output {path}", exc)
        raise


__all__ = ["TransformFn", "apply_fixer"]
