"""fix command: run one codemod over the source tree."""

from __future__ import annotations

import sys

from frontfix.app.commands.runtime import command_runtime
from frontfix.core.output import colorize, display_entries
from frontfix.fixers import get_fixer, run_fixer


def _row(entry: dict) -> list[str]:
    changes = entry.get("changes", [])
    summary = "; ".join(changes[:2]) + (f" (+{len(changes) - 2})" if len(changes) > 2 else "")
    return [entry["file"], summary]


def cmd_fix(args) -> None:
    runtime = command_runtime(args)
    fixer = get_fixer(args.fixer)
    directory = args.path or runtime.src
    dry_run = getattr(args, "dry_run", False)

    results = run_fixer(fixer, directory, dry_run=dry_run, src_dir=runtime.src)

    verb = fixer.dry_verb if dry_run else fixer.verb
    shown = display_entries(
        args,
        results,
        label=f"{verb} {fixer.label}",
        empty_msg=f"No {fixer.label} found in {directory}.",
        columns=["File", "Changes"],
        row_fn=_row,
        json_payload={
            "fixer": args.fixer,
            "dry_run": dry_run,
            "count": len(results),
            "entries": results,
        },
    )
    if shown and not getattr(args, "json", False):
        print(colorize(f"\n  {verb} {len(results)} file(s).", "green"), file=sys.stderr)
        if dry_run:
            print(colorize("  Dry run: no files were written.", "dim"), file=sys.stderr)


__all__ = ["cmd_fix"]
