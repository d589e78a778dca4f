"""TypeScript and build verification via ``tsc`` / ``npm``."""

from __future__ import annotations

import re
from pathlib import Path

from frontfix.core.runtime_state import get_project_root
from frontfix.core.tool_runner import SubprocessRun, ToolRunResult, run_tool_result

TSC_COMMAND = "npx tsc --noEmit"
BUILD_COMMAND = "npm run build"

TSC_ERROR_RE = re.compile(
    r"^(?P<file>.+?)\((?P<line>\d+),(?P<col>\d+)\):\s*error\s+(?P<code>TS\d+):\s*(?P<message>.+)$"
)
# tsc --pretty prints "file:line:col - error TSxxxx: message"
TSC_PRETTY_ERROR_RE = re.compile(
    r"^(?P<file>.+?):(?P<line>\d+):(?P<col>\d+)\s+-\s+error\s+(?P<code>TS\d+):\s*(?P<message>.+)$"
)
BUILD_ERROR_RE = re.compile(r"^\s*(?:error|\[error\]|✘ \[ERROR\])\s*:?\s*(?P<message>.+)$", re.IGNORECASE)


def parse_tsc(output: str, scan_path: Path) -> list[dict]:
    """Parse ``file(line,col): error TSxxxx: message`` diagnostics."""
    del scan_path
    entries: list[dict] = []
    for raw in output.splitlines():
        line = raw.strip()
        match = TSC_ERROR_RE.match(line) or TSC_PRETTY_ERROR_RE.match(line)
        if not match:
            continue
        entries.append(
            {
                "file": match.group("file").replace("\\", "/"),
                "line": int(match.group("line")),
                "column": int(match.group("col")),
                "code": match.group("code"),
                "message": match.group("message").strip(),
            }
        )
    return entries


def parse_build(output: str, scan_path: Path) -> list[dict]:
    """Collect error lines from bundler output."""
    del scan_path
    entries: list[dict] = []
    for raw in output.splitlines():
        match = BUILD_ERROR_RE.match(raw)
        if match:
            entries.append({"message": match.group("message").strip()})
    return entries


def verify_typescript(
    root: Path | None = None,
    *,
    command: str = TSC_COMMAND,
    run_subprocess: SubprocessRun | None = None,
) -> ToolRunResult:
    return run_tool_result(
        command,
        root or get_project_root(),
        parse_tsc,
        run_subprocess=run_subprocess,
    )


def verify_build(
    root: Path | None = None,
    *,
    command: str = BUILD_COMMAND,
    run_subprocess: SubprocessRun | None = None,
) -> ToolRunResult:
    return run_tool_result(
        command,
        root or get_project_root(),
        parse_build,
        run_subprocess=run_subprocess,
        timeout=600,
    )


def summarize_tsc_errors(entries: list[dict]) -> dict[str, int]:
    """Count diagnostics per TS error code, most frequent first."""
    counts: dict[str, int] = {}
    for entry in entries:
        code = str(entry.get("code", "unknown"))
        counts[code] = counts.get(code, 0) + 1
    return dict(sorted(counts.items(), key=lambda item: (-item[1], item[0])))


__all__ = [
    "BUILD_COMMAND",
    "TSC_COMMAND",
    "parse_build",
    "parse_tsc",
    "summarize_tsc_errors",
    "verify_build",
    "verify_typescript",
]
