"""Small syntax helpers reused by the regex fixers."""

from __future__ import annotations

import re
from collections.abc import Iterator

_QUOTES = ("'", '"', "`")


def scan_code(text: str, start: int = 0) -> Iterator[tuple[int, str, bool]]:
    """Yield ``(index, char, in_string)`` from *start*, tracking string literals.

    Escapes inside strings are honored. Template literal interpolations are
    treated as part of the string.
    """
    quote: str | None = None
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if quote is not None:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                yield i, ch, False
                quote = None
                continue
            yield i, ch, True
            continue
        if ch in _QUOTES:
            quote = ch
            yield i, ch, True
            continue
        yield i, ch, False


def find_matching_brace(text: str, open_pos: int) -> int | None:
    """Return the index of the ``}`` closing the ``{`` at *open_pos*."""
    depth = 0
    for i, ch, in_s in scan_code(text, open_pos):
        if in_s:
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return None


def find_tag_end(text: str, tag_start: int) -> int | None:
    """Return the index of the ``>`` closing the JSX opening tag at *tag_start*.

    ``>`` characters inside ``{...}`` expressions or strings are skipped.
    """
    depth = 0
    for i, ch, in_s in scan_code(text, tag_start + 1):
        if in_s:
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
        elif ch == ">" and depth == 0:
            return i
    return None


def iter_opening_tags(text: str, tag: str) -> Iterator[tuple[int, int]]:
    """Yield ``(start, end)`` spans of ``<tag ...>`` opening tags, in order."""
    pattern = re.compile(rf"<{re.escape(tag)}(?=[\s/>])")
    pos = 0
    while True:
        match = pattern.search(text, pos)
        if not match:
            return
        end = find_tag_end(text, match.start())
        if end is None:
            return
        yield match.start(), end
        pos = end + 1


def split_top_level(text: str, sep: str = ",") -> list[str]:
    """Split *text* on *sep* outside strings, parens, brackets and braces."""
    parts: list[str] = []
    depth = 0
    current_start = 0
    for i, ch, in_s in scan_code(text):
        if in_s:
            continue
        if ch in "([{":
            depth += 1
        elif ch in ")]}":
            depth -= 1
        elif ch == sep and depth == 0:
            parts.append(text[current_start:i])
            current_start = i + 1
    parts.append(text[current_start:])
    return [p.strip() for p in parts if p.strip()]


__all__ = [
    "find_matching_brace",
    "find_tag_end",
    "iter_opening_tags",
    "scan_code",
    "split_top_level",
]
