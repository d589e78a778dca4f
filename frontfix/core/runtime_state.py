"""Runtime state model for project root, exclusions and the file-text cache."""

from __future__ import annotations

import os
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from pathlib import Path


class FileTextCache:
    """Optional read-through file-text cache used by validation passes."""

    def __init__(self) -> None:
        self._enabled = False
        self._values: dict[str, str | None] = {}

    def enable(self) -> None:
        self._enabled = True
        self._values.clear()

    def invalidate(self, filepath: str) -> None:
        self._values.pop(filepath, None)

    def read(self, filepath: str) -> str | None:
        if self._enabled and filepath in self._values:
            return self._values[filepath]

        try:
            content = Path(filepath).read_text(encoding="utf-8", errors="replace")
        except OSError:
            content = None
        if self._enabled:
            self._values[filepath] = content
        return content


@dataclass
class RuntimeContext:
    """Mutable runtime container for root, exclusion and cache state."""

    project_root: Path | None = None
    exclusions: tuple[str, ...] = ()
    file_text_cache: FileTextCache = field(default_factory=FileTextCache)


_PROCESS_RUNTIME_CONTEXT = RuntimeContext()
_RUNTIME_CONTEXT: ContextVar[RuntimeContext | None] = ContextVar(
    "frontfix_runtime_context",
    default=None,
)


def current_runtime_context() -> RuntimeContext:
    """Return the active runtime context (or process fallback)."""
    runtime = _RUNTIME_CONTEXT.get()
    if runtime is not None:
        return runtime
    return _PROCESS_RUNTIME_CONTEXT


@contextmanager
def runtime_scope(runtime: RuntimeContext | None = None):
    """Run code with an isolated runtime context."""
    active = runtime or RuntimeContext()
    token = _RUNTIME_CONTEXT.set(active)
    try:
        yield active
    finally:
        _RUNTIME_CONTEXT.reset(token)


def get_project_root() -> Path:
    """Resolve the project root: runtime context, then FRONTFIX_ROOT, then CWD."""
    runtime = current_runtime_context()
    if runtime.project_root is not None:
        return runtime.project_root
    env_root = os.environ.get("FRONTFIX_ROOT")
    if env_root:
        return Path(env_root).resolve()
    return Path.cwd().resolve()


def set_project_root(path: str | Path) -> None:
    current_runtime_context().project_root = Path(path).resolve()


def set_exclusions(patterns: list[str]) -> None:
    current_runtime_context().exclusions = tuple(p for p in patterns if p)


__all__ = [
    "FileTextCache",
    "RuntimeContext",
    "current_runtime_context",
    "get_project_root",
    "runtime_scope",
    "set_exclusions",
    "set_project_root",
]
