"""Add a JSDoc header to component files that have none."""

from __future__ import annotations

import os
import re

from frontfix.fixers.fixer_io import apply_fixer

COMPONENT_DECL_RE = re.compile(
    r"^(?:export\s+(?:default\s+)?)?"
    r"(?:function\s+(?P<fn>[A-Z][\w$]*)|(?:const|let)\s+(?P<const>[A-Z][\w$]*)\s*[:=])",
    re.MULTILINE,
)
DIRECTIVE_RE = re.compile(r"""^\s*(['"])use (?:client|server|strict)\1;?\s*$""")


def render_header(name: str) -> str:
    return f"/**\n * {name} component.\n */\n"


def _top_insert_offset(content: str) -> int:
    offset = 0
    for line in content.splitlines(keepends=True):
        if not DIRECTIVE_RE.match(line):
            break
        offset += len(line)
    return offset


def transform_jsdoc(content: str, filepath: str) -> tuple[str, list[str]]:
    if "/**" in content:
        return content, []
    decl = COMPONENT_DECL_RE.search(content)
    if decl:
        name = decl.group("fn") or decl.group("const")
        offset = decl.start()
    else:
        name = os.path.splitext(os.path.basename(filepath))[0]
        offset = _top_insert_offset(content)
    content = content[:offset] + render_header(name) + content[offset:]
    return content, [f"add JSDoc header for {name}"]


def fix_jsdoc(files: list[str], *, dry_run: bool = False) -> list[dict]:
    return apply_fixer(files, transform_jsdoc, dry_run=dry_run)


__all__ = ["fix_jsdoc", "render_header", "transform_jsdoc"]
