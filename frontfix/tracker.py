"""Build tracker: checkpointed verification with a re-rendered log file."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from frontfix.core.fallbacks import log_best_effort_failure, warn_best_effort
from frontfix.core.file_paths import safe_write_text
from frontfix.core.output import colorize, status_color
from frontfix.core.runtime_state import get_project_root
from frontfix.core.tool_runner import SubprocessRun, ToolRunResult
from frontfix.generators import generate_tsconfig, generate_vite_config
from frontfix.verify import (
    BUILD_COMMAND,
    TSC_COMMAND,
    summarize_tsc_errors,
    verify_build,
    verify_typescript,
)

logger = logging.getLogger(__name__)

LOG_FILENAME = "BuildTracker.log"
RULE = "=" * 64
SUBRULE = "-" * 37

STRUCTURE = "Project structure audit"
DEPENDENCIES = "Dependencies verification"
TYPESCRIPT = "TypeScript compilation"
BUILD = "Build compilation"
CHECKPOINTS = (STRUCTURE, DEPENDENCIES, TYPESCRIPT, BUILD)

STATUSES = ("pending", "in_progress", "success", "warning", "error")
ICONS = {"pending": "⏳", "in_progress": "🔄", "success": "✅", "warning": "⚠️", "error": "❌"}

REQUIRED_FILES = ("package.json", "tsconfig.json")
RECOMMENDED_FILES = ("vite.config.ts",)
MAX_REPORTED_TSC_ERRORS = 5
# Added to package.json by --repair when absent; existing entries are kept.
REQUIRED_SCRIPTS = {"build": "vite build", "dev": "vite"}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Checkpoint:
    name: str
    status: str = "pending"
    details: str = ""
    timestamp: str | None = None


@dataclass(frozen=True)
class AutoFix:
    description: str
    details: str
    timestamp: str


@dataclass(frozen=True)
class TrackerError:
    message: str
    context: str
    timestamp: str


class BuildTracker:
    """Ordered checkpoints, auto-fixes and errors mirrored to ``BuildTracker.log``.

    Every update re-renders the whole log so the file always reflects the
    latest state. A failed log write is reported once and does not stop the
    run.
    """

    def __init__(
        self,
        project_root: Path | None = None,
        *,
        checkpoints: tuple[str, ...] = CHECKPOINTS,
        clock: Callable[[], datetime] = _utc_now,
        echo: bool = True,
    ) -> None:
        self.project_root = Path(project_root or get_project_root())
        self.log_path = self.project_root / LOG_FILENAME
        self._clock = clock
        self.echo = echo
        self.started = clock()
        self.checkpoints: dict[str, Checkpoint] = {name: Checkpoint(name) for name in checkpoints}
        self.auto_fixes: list[AutoFix] = []
        self.errors: list[TrackerError] = []
        self._write_warned = False
        self.refresh_log()

    def _stamp(self) -> str:
        return self._clock().isoformat(timespec="seconds")

    def update_checkpoint(self, name: str, status: str, details: str = "") -> None:
        if status not in STATUSES:
            raise ValueError(f"Unknown checkpoint status '{status}'. Expected one of: {', '.join(STATUSES)}")
        checkpoint = self.checkpoints.setdefault(name, Checkpoint(name))
        checkpoint.status = status
        checkpoint.details = details
        checkpoint.timestamp = self._stamp()
        self.refresh_log()
        if self.echo:
            line = f"[{ICONS[status]}] {name}" + (f" - {details}" if details else "")
            print(colorize(line, status_color(status)))

    def add_auto_fix(self, description: str, details: str = "") -> None:
        self.auto_fixes.append(AutoFix(description, details, self._stamp()))
        self.refresh_log()
        if self.echo:
            print(colorize(f"  Auto-fix: {description}", "cyan"))

    def add_error(self, message: str, context: str = "") -> None:
        self.errors.append(TrackerError(message, context, self._stamp()))
        self.refresh_log()
        if self.echo:
            suffix = f" ({context})" if context else ""
            print(colorize(f"  Error: {message}{suffix}", "red"), file=sys.stderr)

    @property
    def completed(self) -> int:
        return sum(1 for c in self.checkpoints.values() if c.status == "success")

    @property
    def progress(self) -> int:
        total = len(self.checkpoints)
        if total == 0:
            return 0
        return int(self.completed / total * 100 + 0.5)

    @property
    def status(self) -> str:
        states = [c.status for c in self.checkpoints.values()]
        if "pending" in states or "in_progress" in states:
            return "IN PROGRESS"
        if "error" in states:
            return "FAILED"
        if "warning" in states:
            return "COMPLETE WITH WARNINGS"
        return "COMPLETE"

    @property
    def succeeded(self) -> bool:
        return self.status in ("COMPLETE", "COMPLETE WITH WARNINGS")

    def render(self) -> str:
        lines = [
            "FRONTFIX BUILD TRACKER",
            RULE,
            f"Project Root: {self.project_root}",
            f"Started: {self.started.isoformat(timespec='seconds')}",
            "",
            "VERIFICATION CHECKPOINTS:",
            SUBRULE,
        ]
        for checkpoint in self.checkpoints.values():
            lines.append(f"[{ICONS[checkpoint.status]}] {checkpoint.name}")
            if checkpoint.details:
                lines.append(f"     └─ {checkpoint.details}")

        lines += ["", "AUTO-FIXES APPLIED:", SUBRULE]
        if not self.auto_fixes:
            lines.append("(None yet)")
        for fix in self.auto_fixes:
            lines.append(f"[{fix.timestamp}] {fix.description}")
            if fix.details:
                lines.append(f"     └─ {fix.details}")

        lines += ["", "ERRORS ENCOUNTERED:", SUBRULE]
        if not self.errors:
            lines.append("(None yet)")
        for error in self.errors:
            lines.append(f"[{error.timestamp}] {error.message}")
            if error.context:
                lines.append(f"     └─ Context: {error.context}")

        runtime = int((self._clock() - self.started).total_seconds())
        lines += [
            "",
            RULE,
            f"PROGRESS: {self.progress}% ({self.completed}/{len(self.checkpoints)} checkpoints)",
            f"Runtime: {runtime}s",
            f"Status: {self.status}",
        ]
        return "\n".join(lines) + "\n"

    def refresh_log(self) -> None:
        try:
            safe_write_text(self.log_path, self.render())
        except OSError as exc:
            log_best_effort_failure(logger, f"write {self.log_path}", exc)
            if not self._write_warned:
                warn_best_effort(f"Could not write {self.log_path}: {exc}")
                self._write_warned = True


def _audit_structure(tracker: BuildTracker, root: Path, src: str, *, repair: bool) -> None:
    tracker.update_checkpoint(STRUCTURE, "in_progress")
    missing_required = [name for name in (src, *REQUIRED_FILES) if not (root / name).exists()]
    missing_recommended = [name for name in RECOMMENDED_FILES if not (root / name).exists()]

    if repair:
        repairs = {"tsconfig.json": generate_tsconfig, "vite.config.ts": generate_vite_config}
        for name, generate in repairs.items():
            if name not in missing_required and name not in missing_recommended:
                continue
            kwargs = {"src": src} if name == "vite.config.ts" else {}
            result = generate(root, **kwargs)
            if result.ok:
                tracker.add_auto_fix(f"Created missing file: {name}")
                for bucket in (missing_required, missing_recommended):
                    if name in bucket:
                        bucket.remove(name)
            else:
                tracker.add_error(result.message or f"Could not create {name}", "Structure Audit")

    if missing_required:
        tracker.add_error(f"Missing: {', '.join(missing_required)}", "Structure Audit")
        tracker.update_checkpoint(STRUCTURE, "error", f"{len(missing_required)} required path(s) missing")
    elif missing_recommended:
        tracker.update_checkpoint(STRUCTURE, "warning", f"Missing recommended: {', '.join(missing_recommended)}")
    else:
        tracker.update_checkpoint(STRUCTURE, "success", "All required directories and files present")


def declared_dependencies(package: dict) -> list[str]:
    names: set[str] = set()
    for key in ("dependencies", "devDependencies"):
        section = package.get(key)
        if isinstance(section, dict):
            names.update(str(name) for name in section)
    return sorted(names)


def _repair_package_scripts(tracker: BuildTracker, root: Path) -> None:
    """Add missing ``REQUIRED_SCRIPTS`` to package.json.

    An absent or unreadable package.json is left for the dependencies
    checkpoint to report.
    """
    package_path = root / "package.json"
    try:
        package = json.loads(package_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        log_best_effort_failure(logger, f"read {package_path} for script repair", exc)
        return
    if not isinstance(package, dict):
        return
    scripts = package.setdefault("scripts", {})
    if not isinstance(scripts, dict):
        tracker.add_error("package.json scripts is not an object", "Package Scripts")
        return
    added = [name for name in REQUIRED_SCRIPTS if name not in scripts]
    if not added:
        return
    for name in added:
        scripts[name] = REQUIRED_SCRIPTS[name]
    try:
        safe_write_text(package_path, json.dumps(package, indent=2, ensure_ascii=False) + "\n")
    except OSError as exc:
        tracker.add_error(f"Could not update package.json scripts: {exc}", "Package Scripts")
        return
    tracker.add_auto_fix("Updated package.json scripts", f"Added missing scripts: {', '.join(added)}")


def _verify_dependencies(tracker: BuildTracker, root: Path) -> None:
    tracker.update_checkpoint(DEPENDENCIES, "in_progress")
    package_path = root / "package.json"
    try:
        package = json.loads(package_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        tracker.update_checkpoint(DEPENDENCIES, "error", "package.json not found")
        tracker.add_error("package.json not found", "Dependency Verification")
        return
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        tracker.update_checkpoint(DEPENDENCIES, "error", f"package.json unreadable: {exc}")
        tracker.add_error(f"package.json unreadable: {exc}", "Dependency Verification")
        return
    if not isinstance(package, dict):
        tracker.update_checkpoint(DEPENDENCIES, "error", "package.json is not an object")
        tracker.add_error("package.json is not an object", "Dependency Verification")
        return

    declared = declared_dependencies(package)
    modules = root / "node_modules"
    if not modules.is_dir():
        tracker.update_checkpoint(DEPENDENCIES, "error", "node_modules not found (run npm install)")
        tracker.add_error("node_modules not found", "Dependency Verification")
        return
    missing = [name for name in declared if not (modules / name).exists()]
    if missing:
        shown = ", ".join(missing[:5]) + (f" and {len(missing) - 5} more" if len(missing) > 5 else "")
        tracker.update_checkpoint(DEPENDENCIES, "warning", f"{len(missing)} declared package(s) not installed: {shown}")
    else:
        tracker.update_checkpoint(DEPENDENCIES, "success", f"{len(declared)} declared package(s) installed")


def _tool_failure_detail(result: ToolRunResult) -> str:
    return f"{result.error_kind}: {result.message}" if result.error_kind else (result.message or "failed")


def _verify_typescript(
    tracker: BuildTracker, root: Path, command: str, run_subprocess: SubprocessRun | None
) -> None:
    tracker.update_checkpoint(TYPESCRIPT, "in_progress")
    result = verify_typescript(root, command=command, run_subprocess=run_subprocess)
    if result.entries:
        by_code = summarize_tsc_errors(result.entries)
        codes = ", ".join(f"{code} x{count}" for code, count in list(by_code.items())[:3])
        tracker.update_checkpoint(TYPESCRIPT, "error", f"{len(result.entries)} type error(s): {codes}")
        for entry in result.entries[:MAX_REPORTED_TSC_ERRORS]:
            tracker.add_error(
                f"{entry['file']}({entry['line']},{entry['column']}): {entry['code']} {entry['message']}",
                "TypeScript Compilation",
            )
        return
    if not result.succeeded:
        detail = _tool_failure_detail(result)
        tracker.update_checkpoint(TYPESCRIPT, "error", detail)
        tracker.add_error(detail, "TypeScript Compilation")
        return
    tracker.update_checkpoint(TYPESCRIPT, "success", "No type errors")


def _verify_build(
    tracker: BuildTracker, root: Path, command: str, run_subprocess: SubprocessRun | None
) -> None:
    tracker.update_checkpoint(BUILD, "in_progress")
    result = verify_build(root, command=command, run_subprocess=run_subprocess)
    if not result.succeeded:
        detail = _tool_failure_detail(result)
        if result.entries:
            detail = f"{len(result.entries)} build error(s): {result.entries[0]['message']}"
        tracker.update_checkpoint(BUILD, "error", detail)
        tracker.add_error(detail, "Build Compilation")
        return
    tracker.update_checkpoint(BUILD, "success", "Build completed successfully")


def run_tracked_verification(
    root: Path | None = None,
    *,
    src: str = "src",
    tsc_command: str = TSC_COMMAND,
    build_command: str = BUILD_COMMAND,
    repair: bool = False,
    run_subprocess: SubprocessRun | None = None,
    clock: Callable[[], datetime] = _utc_now,
    echo: bool = True,
) -> BuildTracker:
    """Run every checkpoint in order; a failed checkpoint does not stop the next."""
    root = Path(root or get_project_root())
    tracker = BuildTracker(root, clock=clock, echo=echo)
    _audit_structure(tracker, root, src, repair=repair)
    if repair:
        _repair_package_scripts(tracker, root)
    _verify_dependencies(tracker, root)
    _verify_typescript(tracker, root, tsc_command, run_subprocess)
    _verify_build(tracker, root, build_command, run_subprocess)
    return tracker


__all__ = [
    "BuildTracker",
    "CHECKPOINTS",
    "Checkpoint",
    "LOG_FILENAME",
    "declared_dependencies",
    "run_tracked_verification",
]
