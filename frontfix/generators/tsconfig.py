"""Strict React/Vite ``tsconfig.json``."""

from __future__ import annotations

import copy
import json
from pathlib import Path

from frontfix.core.output_contract import OutputResult
from frontfix.core.runtime_state import get_project_root
from frontfix.generators.writer import write_generated

TSCONFIG_FILENAME = "tsconfig.json"

BASE_TSCONFIG: dict[str, object] = {
    "compilerOptions": {
        "target": "ES2020",
        "useDefineForClassFields": True,
        "lib": ["ES2020", "DOM", "DOM.Iterable"],
        "module": "ESNext",
        "skipLibCheck": True,
        "moduleResolution": "bundler",
        "allowImportingTsExtensions": True,
        "resolveJsonModule": True,
        "isolatedModules": True,
        "noEmit": True,
        "jsx": "react-jsx",
        "strict": True,
        "noUnusedLocals": True,
        "noUnusedParameters": True,
        "noFallthroughCasesInSwitch": True,
        "baseUrl": ".",
        "paths": {"@/*": ["src/*"]},
    },
    "include": ["src"],
}


def build_tsconfig(existing: dict | None = None, *, force: bool = False) -> dict:
    """Merge the base mapping with *existing*; existing keys win unless *force*."""
    merged = copy.deepcopy(BASE_TSCONFIG)
    if not existing:
        return merged
    for key, value in existing.items():
        if key == "compilerOptions" and isinstance(value, dict):
            options = merged["compilerOptions"]
            for opt, opt_value in value.items():
                if force and opt in options:
                    continue
                options[opt] = opt_value
        elif not (force and key in merged):
            merged[key] = value
    return merged


def render_tsconfig(config: dict) -> str:
    return json.dumps(config, indent=2) + "\n"


def generate_tsconfig(
    root: Path | None = None, *, force: bool = False, directory: str | None = None
) -> OutputResult:
    """Write ``tsconfig.json``, filling in options the project does not set yet.

    An existing file is merged rather than replaced, so the write only adds
    keys. A file that is not plain JSON (tsconfig allows comments) is left
    alone unless *force*.
    """
    base = root or get_project_root()
    path = base / (directory or "") / TSCONFIG_FILENAME
    existing = None
    if path.exists():
        try:
            existing = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            if not force:
                return OutputResult(
                    ok=False,
                    status="skipped",
                    message=f"{path.name} could not be parsed ({exc}); use --force to replace it",
                )
        if existing is not None and not isinstance(existing, dict):
            existing = None
    content = render_tsconfig(build_tsconfig(existing, force=force))
    return write_generated(path, content, force=True)


__all__ = ["BASE_TSCONFIG", "build_tsconfig", "generate_tsconfig", "render_tsconfig"]
