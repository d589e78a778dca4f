"""Phase audit registry."""

from __future__ import annotations

from frontfix.validators import (
    api_state,
    components,
    documentation,
    forms,
    performance,
    routing,
    security,
    testing_qa,
)
from frontfix.validators.base import Phase, PhaseContext, PhaseReport, run_phase

PHASES: dict[str, Phase] = {
    phase.key: phase
    for phase in sorted(
        (
            components.PHASE,
            routing.PHASE,
            api_state.PHASE,
            forms.PHASE,
            performance.PHASE,
            security.PHASE,
            testing_qa.PHASE,
            documentation.PHASE,
        ),
        key=lambda p: p.number,
    )
}


def get_phase(name: str) -> Phase:
    """Look up a phase by key or number."""
    if name in PHASES:
        return PHASES[name]
    for phase in PHASES.values():
        if name == str(phase.number):
            return phase
    raise KeyError(f"Unknown phase '{name}'. Available: {', '.join(PHASES)}")


__all__ = ["PHASES", "Phase", "PhaseContext", "PhaseReport", "get_phase", "run_phase"]
