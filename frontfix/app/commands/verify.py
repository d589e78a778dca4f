"""verify command: run tsc (and optionally the build) and report diagnostics."""

from __future__ import annotations

import json
import sys

from frontfix.app.commands.runtime import command_runtime
from frontfix.core.output import colorize, display_entries
from frontfix.core.tool_runner import ToolRunResult
from frontfix.verify import summarize_tsc_errors, verify_build, verify_typescript


def _tsc_row(entry: dict) -> list[str]:
    return [f"{entry['file']}:{entry['line']}:{entry['column']}", entry["code"], entry["message"]]


def _result_payload(result: ToolRunResult) -> dict:
    return {
        "succeeded": result.succeeded and not result.entries,
        "status": result.status,
        "error_kind": result.error_kind,
        "message": result.message,
        "returncode": result.returncode,
        "count": len(result.entries),
        "entries": result.entries,
    }


def _report_failure(label: str, result: ToolRunResult) -> None:
    kind = f" [{result.error_kind}]" if result.error_kind else ""
    print(colorize(f"  {label} failed{kind}: {result.message or 'see output'}", "red"), file=sys.stderr)


def _render_tsc(args, tsc: ToolRunResult) -> None:
    if tsc.entries:
        display_entries(
            args,
            tsc.entries,
            label="TypeScript errors",
            empty_msg="",
            columns=["Location", "Code", "Message"],
            row_fn=_tsc_row,
        )
        by_code = summarize_tsc_errors(tsc.entries)
        print(colorize("\n  By code: " + ", ".join(f"{c}:{n}" for c, n in by_code.items()), "dim"))
    elif not tsc.succeeded:
        _report_failure("tsc", tsc)
    else:
        print(colorize("  TypeScript: no type errors.", "green"))


def _render_build(args, build: ToolRunResult) -> None:
    if build.succeeded:
        print(colorize("  Build: completed successfully.", "green"))
        return
    _report_failure("build", build)
    for entry in build.entries[: getattr(args, "top", 20)]:
        print(f"    {entry['message']}", file=sys.stderr)


def cmd_verify(args) -> None:
    runtime = command_runtime(args)
    config = runtime.config
    as_json = getattr(args, "json", False)

    tsc = verify_typescript(command=str(config["tsc_command"]))
    ok = tsc.succeeded and not tsc.entries
    payload = {"typescript": _result_payload(tsc)}
    if not as_json:
        _render_tsc(args, tsc)

    if getattr(args, "build", False):
        build = verify_build(command=str(config["build_command"]))
        ok = ok and build.succeeded
        payload["build"] = _result_payload(build)
        if not as_json:
            _render_build(args, build)

    if as_json:
        payload["ok"] = ok
        print(json.dumps(payload, indent=2))
    if not ok:
        sys.exit(1)


__all__ = ["cmd_verify"]
