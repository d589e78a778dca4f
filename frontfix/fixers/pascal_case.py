"""Rename component files to PascalCase and rewrite their importers."""

from __future__ import annotations

import logging
import os
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path

from frontfix.core.discovery import find_source_files, is_test_file, read_file_text
from frontfix.core.fallbacks import (
    log_best_effort_failure,
    print_error,
    restore_files_best_effort,
)
from frontfix.core.file_paths import rel, resolve_path, safe_write_text
from frontfix.core.output import colorize
from frontfix.core.runtime_state import current_runtime_context

logger = logging.getLogger(__name__)

PASCAL_CASE_RE = re.compile(r"^[A-Z][A-Za-z0-9]*$")
WORD_SPLIT_RE = re.compile(r"[-_\s]+")
IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][\w$]*$")
# Bare identifier references only, never JSX tag names or string contents.
NAME_BEFORE = r"""(?<![\w$.<'"`/-])"""
NAME_AFTER = r"""(?![\w$'"`-])"""
TS_EXTENSIONS = (".tsx", ".ts", ".jsx", ".js")

Replacement = tuple[str, str]


@dataclass
class RenamePlan:
    source: str
    dest: str
    old_names: list[str]
    new_name: str
    importer_changes: dict[str, list[Replacement]] = field(default_factory=dict)


def to_pascal_case(stem: str) -> str:
    """``user-profile`` -> ``UserProfile``; existing inner capitals are kept."""
    parts = [p for p in WORD_SPLIT_RE.split(stem) if p]
    return "".join(p[0].upper() + p[1:] for p in parts)


def needs_rename(filepath: str) -> bool:
    """True for component files whose stem is not already PascalCase."""
    name = os.path.basename(filepath)
    stem, ext = os.path.splitext(name)
    if ext not in (".tsx", ".jsx") or "." in stem or stem == "index":
        return False
    if is_test_file(filepath) or PASCAL_CASE_RE.match(stem):
        return False
    return IDENTIFIER_RE.match(to_pascal_case(stem)) is not None


def _strip_ts_ext(path: str) -> str:
    for ext in TS_EXTENSIONS:
        if path.endswith(ext):
            return path[: -len(ext)]
    return path


def _compute_specifiers(from_file: str, to_file: str, src_dir: str) -> tuple[str | None, str]:
    """Both the ``@/`` alias and the relative specifier for importing *to_file*."""
    to_path = Path(to_file)
    src_path = Path(src_dir)
    alias = None
    if src_path in to_path.parents:
        alias = "@/" + _strip_ts_ext(to_path.relative_to(src_path).as_posix())
    relative = os.path.relpath(to_file, os.path.dirname(from_file) or ".").replace("\\", "/")
    relative = _strip_ts_ext(relative)
    if not relative.startswith("."):
        relative = "./" + relative
    return alias, relative


def _old_identifiers(stem: str) -> list[str]:
    """Identifiers a lower/kebab-case file typically declares for itself."""
    pascal = to_pascal_case(stem)
    camel = pascal[:1].lower() + pascal[1:]
    names = []
    for candidate in (stem, camel):
        if IDENTIFIER_RE.match(candidate) and candidate != pascal and candidate not in names:
            names.append(candidate)
    return names


def rename_identifiers(content: str, old_names: list[str], new_name: str) -> tuple[str, list[str]]:
    """Rename the file's own component declaration and default export."""
    changes = []
    for old in old_names:
        escaped = re.escape(old)
        declared = re.search(
            rf"(?:\b(?:function|class|const|let)\s+{escaped}\b|\bexport\s+default\s+{escaped}\b)",
            content,
        )
        if not declared:
            continue
        content = re.sub(NAME_BEFORE + escaped + NAME_AFTER, new_name, content)
        changes.append(f"rename {old} -> {new_name}")
    return content, changes


def _is_same_file(a: Path, b: Path) -> bool:
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False


def plan_renames(files: list[str], src_dir: str) -> list[RenamePlan]:
    """Work out every rename and the importer edits each one needs."""
    plans: list[RenamePlan] = []
    importers = find_source_files(src_dir)
    for filepath in sorted(set(files)):
        if not needs_rename(filepath):
            continue
        stem, ext = os.path.splitext(os.path.basename(filepath))
        new_name = to_pascal_case(stem)
        dest = os.path.join(os.path.dirname(filepath), new_name + ext).replace("\\", "/")
        dest_path = resolve_path(dest)
        if dest_path.exists() and not _is_same_file(dest_path, resolve_path(filepath)):
            print(
                colorize(f"  Skip {filepath}: {dest} already exists", "yellow"),
                file=sys.stderr,
            )
            continue

        plan = RenamePlan(filepath, dest, _old_identifiers(stem), new_name)
        for importer in importers:
            if importer == filepath:
                continue
            content = read_file_text(importer)
            if content is None:
                continue
            old_alias, old_relative = _compute_specifiers(importer, filepath, src_dir)
            new_alias, new_relative = _compute_specifiers(importer, dest, src_dir)
            replacements: list[Replacement] = []
            for old_spec, new_spec in ((old_alias, new_alias), (old_relative, new_relative)):
                if old_spec is None or new_spec is None or old_spec == new_spec:
                    continue
                for quote in ("'", '"'):
                    target = f"{quote}{old_spec}{quote}"
                    if target in content:
                        replacements.append((target, f"{quote}{new_spec}{quote}"))
            if replacements:
                plan.importer_changes[importer] = replacements
        plans.append(plan)
    return plans


def _rename_file(source: Path, dest: Path) -> None:
    """Rename, going through a temporary name for case-only renames."""
    if source.name.lower() == dest.name.lower():
        tmp = source.with_name(f".{source.name}.rename")
        os.replace(source, tmp)
        os.replace(tmp, dest)
        return
    os.replace(source, dest)


def _write_project_file(filepath: str, content: str) -> None:
    safe_write_text(resolve_path(filepath), content)


def _apply_plan(plan: RenamePlan) -> list[str]:
    source_path = resolve_path(plan.source)
    dest_path = resolve_path(plan.dest)
    original = source_path.read_text(encoding="utf-8")
    new_content, changes = rename_identifiers(original, plan.old_names, plan.new_name)

    snapshots: dict[str, str] = {}
    updated: dict[str, str] = {}
    for importer, replacements in plan.importer_changes.items():
        content = resolve_path(importer).read_text(encoding="utf-8")
        snapshots[importer] = content
        for old, new in replacements:
            content = content.replace(old, new)
        updated[importer] = content

    renamed = False
    try:
        if new_content != original:
            snapshots[plan.source] = original
            _write_project_file(plan.source, new_content)
        _rename_file(source_path, dest_path)
        renamed = True
        for importer, content in updated.items():
            _write_project_file(importer, content)
    except OSError:
        if renamed:
            try:
                _rename_file(dest_path, source_path)
            except OSError as undo_exc:
                log_best_effort_failure(logger, f"undo rename of {plan.dest}", undo_exc)
        failed = restore_files_best_effort(snapshots, _write_project_file)
        if failed:
            print_error(f"Could not restore: {', '.join(failed)}")
        raise
    finally:
        cache = current_runtime_context().file_text_cache
        for path in (plan.source, plan.dest, *plan.importer_changes):
            cache.invalidate(str(resolve_path(path)))
    return changes


def fix_pascal_case(
    files: list[str], *, dry_run: bool = False, src_dir: str = "src"
) -> list[dict]:
    """Rename non-PascalCase component files and update every importer."""
    results = []
    # Plans are computed against the original tree; importers renamed by an
    # earlier plan are resolved through this map.
    moved: dict[str, str] = {}
    for plan in plan_renames(files, src_dir):
        plan.importer_changes = {
            moved.get(importer, importer): replacements
            for importer, replacements in plan.importer_changes.items()
        }
        try:
            changes = [] if dry_run else _apply_plan(plan)
        except (OSError, UnicodeDecodeError) as exc:
            print(colorize(f"  Skip {rel(plan.source)}: {exc}", "yellow"), file=sys.stderr)
            continue
        if not dry_run:
            moved[plan.source] = plan.dest
        importers = sorted(plan.importer_changes)
        changes = [f"rename -> {plan.dest}", *changes]
        if importers:
            changes.append(f"update imports in {len(importers)} file(s)")
        results.append(
            {
                "file": plan.source,
                "dest": plan.dest,
                "changes": changes,
                "importers": importers,
                "lines_delta": 0,
            }
        )
    return results


__all__ = [
    "RenamePlan",
    "fix_pascal_case",
    "needs_rename",
    "plan_renames",
    "rename_identifiers",
    "to_pascal_case",
]
