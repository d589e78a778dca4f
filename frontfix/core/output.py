"""Terminal output: ANSI colors, status colors, tables and entry listings."""

from __future__ import annotations

import json
import os
import sys
from collections.abc import Callable, Sequence
from typing import Any

COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "cyan": "\033[36m",
}

NO_COLOR = os.environ.get("NO_COLOR") is not None

# Generator results, tracker checkpoints and tracker verdicts share one palette.
STATUS_COLORS = {
    "written": "green",
    "unchanged": "dim",
    "skipped": "yellow",
    "error": "red",
    "pending": "dim",
    "in_progress": "cyan",
    "success": "green",
    "warning": "yellow",
    "COMPLETE": "green",
    "COMPLETE WITH WARNINGS": "yellow",
    "IN PROGRESS": "yellow",
    "FAILED": "red",
}


def colorize(text: str, color: str) -> str:
    if NO_COLOR or not sys.stdout.isatty():
        return str(text)
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


def status_color(status: str) -> str:
    return STATUS_COLORS.get(status, "reset")


def status_mark(passed: bool) -> str:
    return colorize("✅", "green") if passed else colorize("❌", "red")


def print_table(
    headers: list[str], rows: list[list[str]], widths: list[int] | None = None
) -> None:
    """Left-aligned columns sized to the widest cell unless *widths* is given."""
    if not rows:
        return
    widths = widths or [
        max(len(str(h)), *(len(str(r[i])) for r in rows)) for i, h in enumerate(headers)
    ]
    print(colorize("  ".join(h.ljust(w) for h, w in zip(headers, widths)), "bold"))
    print(colorize("─" * (sum(widths) + 2 * (len(widths) - 1)), "dim"))
    for row in rows:
        print("  ".join(str(v).ljust(w) for v, w in zip(row, widths)))


def display_entries(
    args: object,
    entries: Sequence[Any],
    *,
    label: str,
    empty_msg: str,
    columns: Sequence[str],
    row_fn: Callable[[Any], list[str]],
    widths: list[int] | None = None,
    json_payload: dict | None = None,
) -> bool:
    """Print fixer or diagnostic entries as JSON, an empty message, or a table.

    Returns False only when there was nothing to show. ``args.top`` caps the
    table rows; JSON output is never truncated.
    """
    if getattr(args, "json", False):
        payload = json_payload or {"count": len(entries), "entries": list(entries)}
        print(json.dumps(payload, indent=2))
        return True
    if not entries:
        print(colorize(empty_msg, "green"))
        return False
    print(colorize(f"\n{label}: {len(entries)}\n", "bold"))
    top = getattr(args, "top", 20)
    print_table(list(columns), [row_fn(e) for e in entries[:top]], widths)
    hidden = len(entries) - top
    if hidden > 0:
        print(f"\n  ... and {hidden} more")
    return True


__all__ = [
    "COLORS",
    "NO_COLOR",
    "STATUS_COLORS",
    "colorize",
    "display_entries",
    "print_table",
    "status_color",
    "status_mark",
]
