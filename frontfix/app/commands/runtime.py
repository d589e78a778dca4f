"""Shared per-invocation state attached to parsed args."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CommandRuntime:
    config: dict
    src: str


def command_runtime(args) -> CommandRuntime:
    runtime = getattr(args, "runtime", None)
    if runtime is None:
        raise RuntimeError("command runtime was not initialised; call through frontfix.cli.main")
    return runtime


__all__ = ["CommandRuntime", "command_runtime"]
