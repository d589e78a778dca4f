"""Fixer registry: regex codemods over the frontend source tree."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from frontfix.core.discovery import find_component_files, find_source_files, is_test_file
from frontfix.fixers.a11y import fix_a11y
from frontfix.fixers.fixer_io import apply_fixer
from frontfix.fixers.inline_styles import fix_inline_styles
from frontfix.fixers.jsdoc import fix_jsdoc
from frontfix.fixers.memo import fix_memo
from frontfix.fixers.pascal_case import fix_pascal_case
from frontfix.fixers.react_import import fix_react_imports


@dataclass(frozen=True)
class FixerConfig:
    """Configuration for an auto-fixer."""

    label: str
    collect: Callable[[str], list[str]]
    fix: Callable
    phase: str  # phase whose report lists this fixer as an available fix
    verb: str = "Fixed"
    dry_verb: str = "Would fix"
    uses_src_dir: bool = False


def _component_modules(directory: str) -> list[str]:
    return [
        f
        for f in find_component_files(directory)
        if not is_test_file(f) and not f.endswith(("/index.tsx", "/index.jsx"))
    ]


FIXERS: dict[str, FixerConfig] = {
    "react-import": FixerConfig(
        label="missing React imports",
        collect=find_source_files,
        fix=fix_react_imports,
        phase="components",
        verb="Added imports in",
        dry_verb="Would add imports in",
    ),
    "inline-styles": FixerConfig(
        label="inline styles",
        collect=find_component_files,
        fix=fix_inline_styles,
        phase="components",
        verb="Converted styles in",
        dry_verb="Would convert styles in",
    ),
    "memo": FixerConfig(
        label="unmemoized components",
        collect=_component_modules,
        fix=fix_memo,
        phase="performance",
        verb="Memoized",
        dry_verb="Would memoize",
    ),
    "jsdoc": FixerConfig(
        label="undocumented components",
        collect=_component_modules,
        fix=fix_jsdoc,
        phase="documentation",
        verb="Documented",
        dry_verb="Would document",
    ),
    "a11y": FixerConfig(
        label="missing accessibility attributes",
        collect=find_component_files,
        fix=fix_a11y,
        phase="components",
    ),
    "pascal-case": FixerConfig(
        label="non-PascalCase component files",
        collect=find_component_files,
        fix=fix_pascal_case,
        phase="components",
        verb="Renamed",
        dry_verb="Would rename",
        uses_src_dir=True,
    ),
}


def get_fixer(name: str) -> FixerConfig:
    if name not in FIXERS:
        raise KeyError(f"Unknown fixer '{name}'. Available: {', '.join(FIXERS)}")
    return FIXERS[name]


def run_fixer(
    fixer: FixerConfig,
    directory: str,
    *,
    dry_run: bool = False,
    src_dir: str = "src",
) -> list[dict]:
    """Collect the fixer's files under *directory* and run it over them."""
    files = fixer.collect(directory)
    if fixer.uses_src_dir:
        return fixer.fix(files, dry_run=dry_run, src_dir=src_dir)
    return fixer.fix(files, dry_run=dry_run)


def fixers_for_phase(phase_key: str) -> dict[str, FixerConfig]:
    return {name: fixer for name, fixer in FIXERS.items() if fixer.phase == phase_key}


__all__ = [
    "FIXERS",
    "FixerConfig",
    "apply_fixer",
    "fixers_for_phase",
    "get_fixer",
    "run_fixer",
]
