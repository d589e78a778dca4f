"""External command execution helpers (tsc, npm)."""

from __future__ import annotations

import logging
import re
import shlex
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

SubprocessRun = Callable[..., subprocess.CompletedProcess[str]]

_SHELL_META_CHARS = re.compile(r"[|&;<>()$`\n]")
DEFAULT_TIMEOUT = 120
logger = logging.getLogger(__name__)


class ToolParserError(ValueError):
    """Raised when a parser cannot decode tool output for its declared format."""


@dataclass(frozen=True)
class ToolRunResult:
    """Structured execution result for a verification command."""

    entries: list[dict]
    status: Literal["ok", "empty", "error"]
    error_kind: str | None = None
    message: str | None = None
    returncode: int | None = None
    output: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status != "error" and self.returncode in (0, None)


def resolve_command_argv(cmd: str) -> list[str]:
    """Return argv for subprocess.run without relying on shell=True."""
    if _SHELL_META_CHARS.search(cmd):
        return ["/bin/sh", "-lc", cmd]
    try:
        argv = shlex.split(cmd, posix=True)
    except ValueError:
        return ["/bin/sh", "-lc", cmd]
    return argv if argv else ["/bin/sh", "-lc", cmd]


def output_preview(output: str, *, limit: int = 160) -> str:
    """Return a compact one-line preview of tool output for diagnostics."""
    text = " ".join(output.split())
    if len(text) <= limit:
        return text
    return f"{text[:limit].rstrip()}..."


def run_tool_result(
    cmd: str,
    path: Path,
    parser: Callable[[str, Path], list[dict]],
    *,
    run_subprocess: SubprocessRun | None = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> ToolRunResult:
    """Run an external tool and parse its output with explicit failure status."""
    runner = run_subprocess or subprocess.run
    logger.debug("Running %r in %s", cmd, path)
    try:
        result = runner(
            resolve_command_argv(cmd),
            shell=False,
            cwd=str(path),
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        return ToolRunResult(
            entries=[],
            status="error",
            error_kind="tool_not_found",
            message=str(exc),
        )
    except subprocess.TimeoutExpired as exc:
        return ToolRunResult(
            entries=[],
            status="error",
            error_kind="tool_timeout",
            message=str(exc),
        )
    output = (result.stdout or "") + (result.stderr or "")
    if not output.strip():
        if result.returncode not in (0, None):
            return ToolRunResult(
                entries=[],
                status="error",
                error_kind="tool_failed_no_output",
                message=f"tool exited with code {result.returncode} and produced no output",
                returncode=result.returncode,
            )
        return ToolRunResult(entries=[], status="empty", returncode=result.returncode)
    try:
        parsed = parser(output, path)
    except ToolParserError as exc:
        logger.debug("Parser decode error for tool output: %s", exc)
        return ToolRunResult(
            entries=[],
            status="error",
            error_kind="parser_error",
            message=str(exc),
            returncode=result.returncode,
            output=output,
        )
    if parsed:
        return ToolRunResult(
            entries=parsed,
            status="ok",
            returncode=result.returncode,
            output=output,
        )
    if result.returncode not in (0, None):
        preview = output_preview(output)
        return ToolRunResult(
            entries=[],
            status="error",
            error_kind="tool_failed_unparsed_output",
            message=(
                f"tool exited with code {result.returncode} and produced no parseable entries"
                + (f": {preview}" if preview else "")
            ),
            returncode=result.returncode,
            output=output,
        )
    return ToolRunResult(
        entries=[],
        status="empty",
        returncode=result.returncode,
        output=output,
    )


__all__ = [
    "DEFAULT_TIMEOUT",
    "SubprocessRun",
    "ToolParserError",
    "ToolRunResult",
    "output_preview",
    "resolve_command_argv",
    "run_tool_result",
]
