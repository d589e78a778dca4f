"""validate command: score one phase or all of them."""

from __future__ import annotations

import json
import sys

from frontfix.app.commands.runtime import command_runtime
from frontfix.core.output import colorize
from frontfix.fixers import fixers_for_phase, run_fixer
from frontfix.validators import PHASES, PhaseContext, get_phase, run_phase
from frontfix.validators.base import PhaseReport
from frontfix.validators.report import render_report, render_summary


def available_fixes(phase_key: str, src: str) -> list[str]:
    """Dry-run the fixers tied to *phase_key* and describe what they would change."""
    fixes = []
    for name, fixer in fixers_for_phase(phase_key).items():
        results = run_fixer(fixer, src, dry_run=True, src_dir=src)
        if results:
            fixes.append(f"{fixer.label}: {len(results)} file(s) (frontfix fix {name})")
    return fixes


def _selected_phases(name: str):
    if name == "all":
        return list(PHASES.values())
    return [get_phase(name)]


def cmd_validate(args) -> None:
    runtime = command_runtime(args)
    config = runtime.config
    try:
        phases = _selected_phases(args.phase)
    except KeyError as exc:
        print(colorize(f"  {exc.args[0]}", "red"), file=sys.stderr)
        sys.exit(1)

    ctx = PhaseContext(src=runtime.src)
    reports: list[PhaseReport] = []
    for phase in phases:
        report = run_phase(
            phase,
            ctx,
            threshold=int(config["complete_threshold"]),
            issue_allowance=config.get("issue_allowance"),
        )
        if not getattr(args, "no_fix_scan", False):
            report.fixes.extend(available_fixes(phase.key, runtime.src))
        reports.append(report)

    if getattr(args, "json", False):
        payload = [r.to_dict() for r in reports]
        print(json.dumps(payload[0] if len(payload) == 1 else payload, indent=2))
    else:
        for i, report in enumerate(reports):
            if i:
                print()
            render_report(report)
        if len(reports) > 1:
            render_summary(reports)

    if not all(r.success for r in reports):
        sys.exit(1)


__all__ = ["available_fixes", "cmd_validate"]
