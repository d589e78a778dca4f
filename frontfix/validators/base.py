"""Phase audit framework: signal checks, custom checks and score reports.

A phase is an ordered list of checks. Each passing check scores one point;
``max_score`` is the number of checks. Declarative checks count how many
files in a file set contain a signal's substrings and compare each count
with a minimum. Custom checks are plain callables over a ``PhaseContext``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path

from frontfix.core.discovery import (
    find_component_files,
    find_files,
    find_source_files,
    find_style_files,
    is_test_file,
    read_file_text,
)
from frontfix.core.runtime_state import get_project_root

logger = logging.getLogger(__name__)

DEFAULT_COMPLETE_THRESHOLD = 85
DEFAULT_ISSUE_ALLOWANCE = 5


@dataclass(frozen=True)
class Signal:
    """A file matches when it holds any of ``any_of`` and all of ``all_of``."""

    label: str
    any_of: tuple[str, ...] = ()
    all_of: tuple[str, ...] = ()

    def matches(self, content: str) -> bool:
        if self.any_of and not any(n in content for n in self.any_of):
            return False
        return all(n in content for n in self.all_of)


@dataclass(frozen=True)
class Threshold:
    signal: Signal
    minimum: int = 1
    maximum: int | None = None
    min_ratio: float | None = None

    def met(self, count: int, total: int) -> bool:
        if self.min_ratio is not None:
            return total > 0 and count / total >= self.min_ratio
        if count < self.minimum:
            return False
        return self.maximum is None or count <= self.maximum


@dataclass
class CheckResult:
    title: str
    passed: bool
    counts: dict[str, int] = field(default_factory=dict)
    issues: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "title": self.title,
            "passed": self.passed,
            "counts": dict(self.counts),
            "issues": list(self.issues),
            "notes": list(self.notes),
        }


class PhaseContext:
    """Lazily computed file sets for one validation run."""

    def __init__(self, src: str = "src", root: Path | None = None) -> None:
        self.root = root or get_project_root()
        self.src = src

    @cached_property
    def components(self) -> list[str]:
        return find_component_files(f"{self.src}/components")

    @cached_property
    def ui_components(self) -> list[str]:
        return find_component_files(f"{self.src}/components/ui")

    @cached_property
    def source(self) -> list[str]:
        return find_source_files(self.src)

    @cached_property
    def tests(self) -> list[str]:
        return [f for f in self.source if is_test_file(f)]

    @cached_property
    def styles(self) -> list[str]:
        return find_style_files(self.src)

    @cached_property
    def docs(self) -> list[str]:
        docs = find_files("docs", (".md",))
        docs.extend(
            p.name for p in sorted(self.root.glob("*.md")) if p.is_file()
        )
        return docs

    def files(self, name: str) -> list[str]:
        return list(getattr(self, name))

    def read(self, relpath: str) -> str:
        """Read a root-relative file, returning '' when missing."""
        return read_file_text(relpath) or ""

    def exists(self, relpath: str) -> bool:
        return (self.root / relpath).exists()


CustomCheck = Callable[[PhaseContext], CheckResult]


@dataclass(frozen=True)
class SignalCheck:
    """Declarative check: pass when every (or any) threshold is met."""

    title: str
    file_set: str
    thresholds: tuple[Threshold, ...]
    issue: str
    mode: str = "all"

    def __call__(self, ctx: PhaseContext) -> CheckResult:
        files = ctx.files(self.file_set)
        counts = {t.signal.label: 0 for t in self.thresholds}
        for filepath in files:
            content = read_file_text(filepath)
            if content is None:
                logger.debug("Skipping unreadable file %s", filepath)
                continue
            for threshold in self.thresholds:
                if threshold.signal.matches(content):
                    counts[threshold.signal.label] += 1
        results = [t.met(counts[t.signal.label], len(files)) for t in self.thresholds]
        passed = any(results) if self.mode == "any" else all(results)
        return CheckResult(
            title=self.title,
            passed=passed,
            counts=counts,
            issues=[] if passed else [self.issue],
        )


def custom_check(title: str) -> Callable[[CustomCheck], CustomCheck]:
    """Attach a display title to a custom check function."""

    def decorator(fn: CustomCheck) -> CustomCheck:
        fn.title = title  # type: ignore[attr-defined]
        return fn

    return decorator


def signal(label: str, *any_of: str, all_of: tuple[str, ...] = ()) -> Signal:
    return Signal(label=label, any_of=tuple(any_of), all_of=all_of)


def at_least(sig: Signal, minimum: int = 1) -> Threshold:
    return Threshold(signal=sig, minimum=minimum)


def at_most(sig: Signal, maximum: int) -> Threshold:
    return Threshold(signal=sig, minimum=0, maximum=maximum)


def share_of(sig: Signal, ratio: float) -> Threshold:
    """Met when at least *ratio* of the file set matches (never on an empty set)."""
    return Threshold(signal=sig, min_ratio=ratio)


@dataclass(frozen=True)
class Phase:
    number: int
    key: str
    title: str
    checks: tuple[SignalCheck | CustomCheck, ...]
    issue_allowance: int = DEFAULT_ISSUE_ALLOWANCE


@dataclass
class PhaseReport:
    number: int
    key: str
    title: str
    score: int
    max_score: int
    percentage: int
    success: bool
    issues: list[str] = field(default_factory=list)
    fixes: list[str] = field(default_factory=list)
    checks: list[CheckResult] = field(default_factory=list)

    @property
    def recommendations(self) -> list[str]:
        if not self.issues:
            return []
        return [f"Address manual {self.title.lower()} issues"]

    def to_dict(self) -> dict[str, object]:
        return {
            "phase": self.number,
            "key": self.key,
            "title": self.title,
            "score": self.score,
            "max_score": self.max_score,
            "percentage": self.percentage,
            "success": self.success,
            "issues": list(self.issues),
            "fixes": list(self.fixes),
            "recommendations": self.recommendations,
            "checks": [c.to_dict() for c in self.checks],
        }


def compute_percentage(score: int, max_score: int) -> int:
    """Percent rounded half-up; 0 when there is nothing to score."""
    if max_score <= 0:
        return 0
    return int(score * 100 / max_score + 0.5)


def is_phase_complete(
    percentage: int,
    issue_count: int,
    *,
    threshold: int = DEFAULT_COMPLETE_THRESHOLD,
    issue_allowance: int = DEFAULT_ISSUE_ALLOWANCE,
) -> bool:
    return percentage >= threshold and issue_count <= issue_allowance


def _check_title(check: SignalCheck | CustomCheck) -> str:
    return getattr(check, "title", None) or getattr(check, "__name__", "check")


def run_phase(
    phase: Phase,
    ctx: PhaseContext,
    *,
    threshold: int = DEFAULT_COMPLETE_THRESHOLD,
    issue_allowance: int | None = None,
) -> PhaseReport:
    """Run every check of *phase* and build its report."""
    results: list[CheckResult] = []
    for check in phase.checks:
        try:
            result = check(ctx)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Check %r failed: %s", _check_title(check), exc)
            result = CheckResult(
                title=_check_title(check),
                passed=False,
                issues=[f"{_check_title(check)} could not be evaluated: {exc}"],
            )
        results.append(result)

    score = sum(1 for r in results if r.passed)
    max_score = len(results)
    percentage = compute_percentage(score, max_score)
    issues = [issue for r in results for issue in r.issues]
    allowance = phase.issue_allowance if issue_allowance is None else issue_allowance
    return PhaseReport(
        number=phase.number,
        key=phase.key,
        title=phase.title,
        score=score,
        max_score=max_score,
        percentage=percentage,
        success=is_phase_complete(
            percentage, len(issues), threshold=threshold, issue_allowance=allowance
        ),
        issues=issues,
        checks=results,
    )


__all__ = [
    "CheckResult",
    "CustomCheck",
    "DEFAULT_COMPLETE_THRESHOLD",
    "DEFAULT_ISSUE_ALLOWANCE",
    "Phase",
    "PhaseContext",
    "PhaseReport",
    "Signal",
    "SignalCheck",
    "Threshold",
    "at_least",
    "at_most",
    "compute_percentage",
    "custom_check",
    "is_phase_complete",
    "run_phase",
    "share_of",
    "signal",
]
