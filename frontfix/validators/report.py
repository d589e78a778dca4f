"""Terminal rendering for phase reports."""

from __future__ import annotations

from frontfix.core.output import colorize, print_table, status_mark
from frontfix.validators.base import PhaseReport


def render_report(report: PhaseReport) -> None:
    print(colorize(f"Phase {report.number}: {report.title} Validation\n", "bold"))
    for check in report.checks:
        print(f"{status_mark(check.passed)} {check.title}")
        for label, count in check.counts.items():
            print(colorize(f"    {label}: {count}", "dim"))
        for note in check.notes:
            print(colorize(f"    ⚠️  {note}", "yellow"))

    print(colorize(f"\nPhase {report.number} Results:", "bold"))
    print(
        f"  {report.title} Score: {report.score}/{report.max_score} "
        f"({report.percentage}%)"
    )
    print(f"  Fixes Available: {len(report.fixes)}")
    print(f"  Issues Found: {len(report.issues)}")

    if report.fixes:
        print(colorize("\nAutomatic Fixes Available:", "green"))
        for fix in report.fixes:
            print(f"  - {fix}")
    if report.issues:
        print(colorize("\nManual Issues Requiring Attention:", "red"))
        for issue in report.issues:
            print(f"  - {issue}")

    verdict = (
        colorize("COMPLETE", "green")
        if report.success
        else colorize("NEEDS ATTENTION", "yellow")
    )
    print(f"\nPhase {report.number} Status: {verdict}")


def render_summary(reports: list[PhaseReport]) -> None:
    rows = [
        [
            str(r.number),
            r.title,
            f"{r.score}/{r.max_score}",
            f"{r.percentage}%",
            str(len(r.issues)),
            "complete" if r.success else "needs attention",
        ]
        for r in reports
    ]
    print()
    print_table(["#", "Phase", "Score", "Pct", "Issues", "Status"], rows)
    complete = sum(1 for r in reports if r.success)
    color = "green" if complete == len(reports) else "yellow"
    print(colorize(f"\n  {complete}/{len(reports)} phases complete", color))


__all__ = ["render_report", "render_summary"]
