"""Add missing accessibility attributes to common JSX elements."""

from __future__ import annotations

import re

from frontfix.fixers.fixer_io import apply_fixer
from frontfix.fixers.syntax_scan import iter_opening_tags

TARGET_BLANK_RE = re.compile(r"""\starget=(?:["']_blank["']|\{\s*["']_blank["']\s*\})""")


def _has_attr(tag: str, attr: str) -> bool:
    return bool(re.search(rf"\s{re.escape(attr)}(?=[\s=/>])", tag))


def _has_spread(tag: str) -> bool:
    return "{..." in tag.replace(" ", "")


def _insert_attr(tag: str, tag_name: str, attr: str) -> str:
    head = len(tag_name) + 1
    return tag[:head] + f" {attr}" + tag[head:]


# element -> (predicate deciding the tag needs fixing, attribute to add)
RULES = (
    ("button", lambda tag: not _has_attr(tag, "type"), 'type="button"'),
    ("img", lambda tag: not _has_attr(tag, "alt"), 'alt=""'),
    (
        "a",
        lambda tag: bool(TARGET_BLANK_RE.search(tag)) and not _has_attr(tag, "rel"),
        'rel="noopener noreferrer"',
    ),
)


def transform_a11y(content: str, filepath: str) -> tuple[str, list[str]]:
    changes: list[str] = []
    for tag_name, needs_fix, attr in RULES:
        edits: list[tuple[int, int, str]] = []
        for start, end in iter_opening_tags(content, tag_name):
            tag = content[start : end + 1]
            if _has_spread(tag) or not needs_fix(tag):
                continue
            edits.append((start, end + 1, _insert_attr(tag, tag_name, attr)))
            line = content.count("\n", 0, start) + 1
            changes.append(f"line {line}: <{tag_name}> add {attr}")
        for start, end, replacement in reversed(edits):
            content = content[:start] + replacement + content[end:]
    return content, changes


def fix_a11y(files: list[str], *, dry_run: bool = False) -> list[dict]:
    """Add ``type``, ``alt`` and ``rel`` attributes where they are missing."""
    return apply_fixer(files, transform_a11y, dry_run=dry_run)


__all__ = ["fix_a11y", "transform_a11y"]
