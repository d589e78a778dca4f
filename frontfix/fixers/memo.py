"""Wrap default-exported components in ``React.memo``."""

from __future__ import annotations

import re

from frontfix.fixers.fixer_io import apply_fixer
from frontfix.fixers.react_import import ensure_react_imports

DEFAULT_EXPORT_NAME_RE = re.compile(
    r"^export\s+default\s+(?P<name>[A-Z][\w$]*)\s*;?[ \t]*$", re.MULTILINE
)


def _already_memoized(content: str, name: str) -> bool:
    escaped = re.escape(name)
    return bool(
        re.search(rf"\b(?:React\.)?memo\(\s*(?:function\s+)?{escaped}\b", content)
        or re.search(rf"\b{escaped}\s*(?::[^=]+)?=\s*(?:React\.)?memo\(", content)
    )


def transform_memo(content: str, filepath: str) -> tuple[str, list[str]]:
    match = DEFAULT_EXPORT_NAME_RE.search(content)
    if not match:
        return content, []
    name = match.group("name")
    if _already_memoized(content, name):
        return content, []

    content = (
        content[: match.start()]
        + f"export default React.memo({name});"
        + content[match.end() :]
    )
    content, import_changes = ensure_react_imports(content, need_default=True)
    return content, [f"wrap {name} in React.memo", *import_changes]


def fix_memo(files: list[str], *, dry_run: bool = False) -> list[dict]:
    """Memoize default-exported components that are not memoized yet."""
    return apply_fixer(files, transform_memo, dry_run=dry_run)


__all__ = ["fix_memo", "transform_memo"]
