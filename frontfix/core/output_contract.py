"""Result record for generated-file writes."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OutputResult:
    """Outcome of writing one generated file.

    ``status`` is ``written``, ``unchanged``, ``skipped`` or ``error``;
    ``ok`` is False for the last two. ``error_kind`` is set only on errors.
    """

    ok: bool
    status: str
    message: str | None = None
    error_kind: str | None = None


__all__ = ["OutputResult"]
