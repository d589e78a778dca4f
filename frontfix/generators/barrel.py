"""Component barrel ``index.ts`` files."""

from __future__ import annotations

import os
import re
from pathlib import Path

from frontfix.core.discovery import is_test_file
from frontfix.core.output_contract import OutputResult
from frontfix.core.runtime_state import get_project_root
from frontfix.generators.writer import write_generated

BARREL_FILENAME = "index.ts"
MODULE_EXTENSIONS = (".tsx", ".jsx")
IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][\w$]*$")


def barrel_modules(directory: Path) -> list[str]:
    """Sibling module names a barrel in *directory* should re-export."""
    if not directory.is_dir():
        return []
    names = set()
    for entry in directory.iterdir():
        if not entry.is_file() or not entry.name.endswith(MODULE_EXTENSIONS):
            continue
        stem = entry.name.rsplit(".", 1)[0]
        if stem == "index" or "." in stem or is_test_file(entry.name):
            continue
        if IDENTIFIER_RE.match(stem):
            names.add(stem)
    return sorted(names)


def render_barrel(names: list[str]) -> str:
    return "".join(f"export {{ default as {name} }} from './{name}';\n" for name in names)


def generate_barrel(
    root: Path | None = None,
    *,
    force: bool = False,
    directory: str | None = None,
) -> OutputResult:
    """Write ``index.ts`` for a component directory (``src/components`` by default)."""
    base = root or get_project_root()
    target = base / (directory or os.path.join("src", "components"))
    names = barrel_modules(target)
    if not names:
        return OutputResult(
            ok=False,
            status="skipped",
            message=f"No component modules found in {target}",
        )
    return write_generated(target / BARREL_FILENAME, render_barrel(names), force=force)


__all__ = ["barrel_modules", "generate_barrel", "render_barrel"]
