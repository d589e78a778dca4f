"""track command: checkpointed verification recorded in BuildTracker.log."""

from __future__ import annotations

import sys

from frontfix.app.commands.runtime import command_runtime
from frontfix.core.file_paths import rel
from frontfix.core.output import colorize, status_color
from frontfix.tracker import run_tracked_verification


def cmd_track(args) -> None:
    runtime = command_runtime(args)
    config = runtime.config
    tracker = run_tracked_verification(
        src=runtime.src,
        tsc_command=str(config["tsc_command"]),
        build_command=str(config["build_command"]),
        repair=getattr(args, "repair", False),
    )
    color = status_color(tracker.status)
    print(colorize(f"\n  Status: {tracker.status} ({tracker.progress}%)", color))
    print(colorize(f"  Log: {rel(tracker.log_path)}", "dim"))
    if not tracker.succeeded:
        sys.exit(1)


__all__ = ["cmd_track"]
