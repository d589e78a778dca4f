"""Inject or extend ``react`` imports for hooks, JSX and ``React.`` usage."""

from __future__ import annotations

import re

from frontfix.fixers.fixer_io import apply_fixer

HOOKS = (
    "useCallback",
    "useContext",
    "useDeferredValue",
    "useEffect",
    "useId",
    "useImperativeHandle",
    "useLayoutEffect",
    "useMemo",
    "useReducer",
    "useRef",
    "useState",
    "useSyncExternalStore",
    "useTransition",
)

HOOK_CALL_RE = re.compile(r"(?<![\w.$])(" + "|".join(HOOKS) + r")\s*(?:<[^>()]*>)?\s*\(")
NAMED_IMPORT_RE = re.compile(
    r"^import\s+(?:(?P<default>[A-Za-z_$][\w$]*)\s*,\s*)?\{(?P<names>[^}]*)\}\s*from\s*(?P<q>['\"])react(?P=q)\s*;?[ \t]*$",
    re.MULTILINE,
)
DEFAULT_IMPORT_RE = re.compile(
    r"^import\s+(?P<default>[A-Za-z_$][\w$]*)\s+from\s*(?P<q>['\"])react(?P=q)\s*;?[ \t]*$",
    re.MULTILINE,
)
NAMESPACE_IMPORT_RE = re.compile(
    r"^import\s+\*\s+as\s+(?P<default>[A-Za-z_$][\w$]*)\s+from\s*(?P<q>['\"])react(?P=q)",
    re.MULTILINE,
)
ANY_REACT_IMPORT_RE = re.compile(r"""from\s*['"]react['"]""")
REACT_NAMESPACE_USE_RE = re.compile(r"(?<![\w.$])React\.")
JSX_RE = re.compile(r"</[A-Za-z][\w.]*\s*>|<[A-Za-z][\w.]*(?:\s[^<>]*)?/>|<>")
DIRECTIVE_RE = re.compile(r"""^\s*(['"])use (?:client|server|strict)\1;?\s*$""")


def _imported_names(names_blob: str) -> list[str]:
    """Local binding names from an import specifier list (``a as b`` -> ``b``)."""
    names = []
    for part in names_blob.split(","):
        part = part.strip()
        if not part:
            continue
        part = re.sub(r"^type\s+", "", part)
        names.append(part.split(" as ")[-1].strip())
    return names


def _specifiers(names_blob: str) -> list[str]:
    return [p.strip() for p in names_blob.split(",") if p.strip()]


def used_hooks(content: str) -> set[str]:
    return set(HOOK_CALL_RE.findall(content))


def uses_jsx(content: str, filepath: str) -> bool:
    return filepath.endswith((".tsx", ".jsx")) and bool(JSX_RE.search(content))


def _insert_position(lines: list[str]) -> int:
    """Index after any leading directives such as ``'use client'``."""
    idx = 0
    while idx < len(lines) and DIRECTIVE_RE.match(lines[idx]):
        idx += 1
    return idx


def _render_import(default: str | None, specifiers: list[str], quote: str) -> str:
    parts = []
    if default:
        parts.append(default)
    if specifiers:
        parts.append("{ " + ", ".join(specifiers) + " }")
    return f"import {', '.join(parts)} from {quote}react{quote};"


def ensure_react_imports(
    content: str,
    *,
    hooks: set[str] | None = None,
    need_default: bool = False,
) -> tuple[str, list[str]]:
    """Return *content* with the requested react bindings imported."""
    hooks = set(hooks or ())
    changes: list[str] = []

    named = NAMED_IMPORT_RE.search(content)
    default_only = DEFAULT_IMPORT_RE.search(content)
    namespace = NAMESPACE_IMPORT_RE.search(content)

    imported: set[str] = set()
    default_name = None
    if named:
        imported.update(_imported_names(named.group("names")))
        default_name = named.group("default")
    if default_only:
        default_name = default_name or default_only.group("default")
    if namespace:
        default_name = default_name or namespace.group("default")

    missing_hooks = sorted(hooks - imported)
    add_default = need_default and default_name is None
    if not missing_hooks and not add_default:
        return content, changes

    if missing_hooks:
        changes.append(f"import {', '.join(missing_hooks)}")
    if add_default:
        changes.append("import React")

    if named:
        specifiers = _specifiers(named.group("names")) + missing_hooks
        default = named.group("default") or ("React" if add_default and not default_only and not namespace else None)
        replacement = _render_import(default, specifiers, named.group("q"))
        return content[: named.start()] + replacement + content[named.end():], changes

    if default_only and missing_hooks:
        replacement = _render_import(default_only.group("default"), missing_hooks, default_only.group("q"))
        return content[: default_only.start()] + replacement + content[default_only.end():], changes

    new_import = _render_import("React" if add_default else None, missing_hooks, "'")
    return _prepend_import(content, new_import), changes


def _prepend_import(content: str, import_line: str) -> str:
    lines = content.splitlines(keepends=True)
    idx = _insert_position(lines)
    lines.insert(idx, import_line + "\n")
    return "".join(lines)


def transform_react_imports(content: str, filepath: str) -> tuple[str, list[str]]:
    hooks = used_hooks(content)
    need_default = bool(REACT_NAMESPACE_USE_RE.search(content)) or (
        uses_jsx(content, filepath) and not ANY_REACT_IMPORT_RE.search(content)
    )
    return ensure_react_imports(content, hooks=hooks, need_default=need_default)


def fix_react_imports(files: list[str], *, dry_run: bool = False) -> list[dict]:
    """Add missing ``react`` imports to the given source files."""
    return apply_fixer(files, transform_react_imports, dry_run=dry_run)


__all__ = [
    "HOOKS",
    "ensure_react_imports",
    "fix_react_imports",
    "transform_react_imports",
    "used_hooks",
    "uses_jsx",
]
