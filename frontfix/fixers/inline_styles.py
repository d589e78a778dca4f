"""Replace simple inline ``style={{...}}`` objects with Tailwind classes."""

from __future__ import annotations

import re

from frontfix.fixers.fixer_io import apply_fixer
from frontfix.fixers.syntax_scan import find_matching_brace, find_tag_end, split_top_level

KEYWORD_CLASSES: dict[str, dict[str, str]] = {
    "display": {
        "flex": "flex",
        "inline-flex": "inline-flex",
        "block": "block",
        "inline-block": "inline-block",
        "inline": "inline",
        "grid": "grid",
        "none": "hidden",
    },
    "flexDirection": {
        "row": "flex-row",
        "column": "flex-col",
        "row-reverse": "flex-row-reverse",
        "column-reverse": "flex-col-reverse",
    },
    "flexWrap": {"wrap": "flex-wrap", "nowrap": "flex-nowrap"},
    "flex": {"1": "flex-1", "none": "flex-none", "auto": "flex-auto"},
    "alignItems": {
        "center": "items-center",
        "flex-start": "items-start",
        "flex-end": "items-end",
        "stretch": "items-stretch",
        "baseline": "items-baseline",
    },
    "justifyContent": {
        "center": "justify-center",
        "flex-start": "justify-start",
        "flex-end": "justify-end",
        "space-between": "justify-between",
        "space-around": "justify-around",
        "space-evenly": "justify-evenly",
    },
    "textAlign": {
        "left": "text-left",
        "center": "text-center",
        "right": "text-right",
        "justify": "text-justify",
    },
    "fontWeight": {
        "normal": "font-normal",
        "400": "font-normal",
        "500": "font-medium",
        "600": "font-semibold",
        "bold": "font-bold",
        "700": "font-bold",
    },
    "position": {
        "relative": "relative",
        "absolute": "absolute",
        "fixed": "fixed",
        "sticky": "sticky",
        "static": "static",
    },
    "cursor": {
        "pointer": "cursor-pointer",
        "default": "cursor-default",
        "not-allowed": "cursor-not-allowed",
    },
    "overflow": {"hidden": "overflow-hidden", "auto": "overflow-auto", "scroll": "overflow-scroll"},
    "width": {"100%": "w-full", "auto": "w-auto", "100vw": "w-screen"},
    "height": {"100%": "h-full", "auto": "h-auto", "100vh": "h-screen"},
}

SPACING_PREFIXES = {
    "margin": "m",
    "marginTop": "mt",
    "marginBottom": "mb",
    "marginLeft": "ml",
    "marginRight": "mr",
    "padding": "p",
    "paddingTop": "pt",
    "paddingBottom": "pb",
    "paddingLeft": "pl",
    "paddingRight": "pr",
    "gap": "gap",
}

# Tailwind default spacing scale: one unit is 4px.
SPACING_SCALE = (0, 0.5, 1, 1.5, 2, 2.5, 3, 3.5, 4, 5, 6, 7, 8, 9, 10, 11, 12, 14, 16, 20, 24)

OPENING_TAG_RE = re.compile(r"<[A-Za-z][\w.]*(?=[\s/>])")
STYLE_ATTR_RE = re.compile(r"\s+style=\{")
CLASSNAME_STATIC_RE = re.compile(r"""\sclassName=(?P<q>["'])(?P<value>[^"']*)(?P=q)""")
CLASSNAME_DYNAMIC_RE = re.compile(r"\sclassName=\{")
PROPERTY_RE = re.compile(
    r"""^(?:(?P<ident>[A-Za-z_$][\w$]*)|(?P<q>["'])(?P<quoted>[\w-]+)(?P=q))\s*:\s*(?P<value>.+)$""",
    re.DOTALL,
)
STRING_VALUE_RE = re.compile(r"""^(["'])(?P<value>[^"'\\]*)\1$""")
NUMBER_VALUE_RE = re.compile(r"^-?\d+(?:\.\d+)?$")
PX_RE = re.compile(r"^(?P<num>\d+(?:\.\d+)?)(?:px)?$")


def _kebab_to_camel(name: str) -> str:
    head, *rest = name.split("-")
    return head + "".join(part.capitalize() for part in rest)


def _literal_value(raw: str) -> str | None:
    """The literal text of a string or number value, or None if dynamic."""
    raw = raw.strip()
    match = STRING_VALUE_RE.match(raw)
    if match:
        return match.group("value").strip()
    if NUMBER_VALUE_RE.match(raw):
        return raw
    return None


def _format_scale(units: float) -> str:
    return str(int(units)) if units == int(units) else str(units)


def spacing_class(prop: str, value: str) -> str | None:
    prefix = SPACING_PREFIXES.get(prop)
    if prefix is None:
        return None
    match = PX_RE.match(value)
    if not match:
        return None
    units = float(match.group("num")) / 4
    if units not in SPACING_SCALE:
        return None
    return f"{prefix}-{_format_scale(units)}"


def tailwind_class(prop: str, value: str) -> str | None:
    """Map one CSS property/value pair to a Tailwind class, or None."""
    mapped = KEYWORD_CLASSES.get(prop, {}).get(value)
    if mapped is not None:
        return mapped
    return spacing_class(prop, value)


def translate_style_object(body: str) -> list[str] | None:
    """Classes for a style object body, or None if any entry cannot be mapped."""
    classes: list[str] = []
    entries = split_top_level(body)
    if not entries:
        return None
    for entry in entries:
        match = PROPERTY_RE.match(entry)
        if not match:
            return None
        prop = match.group("ident") or _kebab_to_camel(match.group("quoted"))
        value = _literal_value(match.group("value"))
        if value is None:
            return None
        cls = tailwind_class(prop, value)
        if cls is None:
            return None
        if cls not in classes:
            classes.append(cls)
    return classes


def _rewrite_tag(tag: str) -> tuple[str, list[str]] | None:
    """Return the rewritten opening tag and its new classes, or None."""
    style = STYLE_ATTR_RE.search(tag)
    if not style:
        return None
    outer_open = style.end() - 1
    outer_close = find_matching_brace(tag, outer_open)
    if outer_close is None:
        return None
    inner = tag[outer_open + 1 : outer_close].strip()
    if not (inner.startswith("{") and inner.endswith("}")):
        return None
    classes = translate_style_object(inner[1:-1])
    if not classes:
        return None
    if CLASSNAME_DYNAMIC_RE.search(tag):
        return None

    without_style = tag[: style.start()] + tag[outer_close + 1 :]
    existing = CLASSNAME_STATIC_RE.search(without_style)
    if existing:
        current = existing.group("value").split()
        merged = current + [c for c in classes if c not in current]
        quote = existing.group("q")
        replacement = f' className={quote}{" ".join(merged)}{quote}'
        rewritten = without_style[: existing.start()] + replacement + without_style[existing.end() :]
    else:
        attr = f' className="{" ".join(classes)}"'
        rewritten = without_style[: style.start()] + attr + without_style[style.start() :]
    return rewritten, classes


def transform_inline_styles(content: str, filepath: str) -> tuple[str, list[str]]:
    edits: list[tuple[int, int, str]] = []
    changes: list[str] = []
    pos = 0
    while True:
        match = OPENING_TAG_RE.search(content, pos)
        if not match:
            break
        end = find_tag_end(content, match.start())
        if end is None:
            break
        pos = end + 1
        tag = content[match.start() : end + 1]
        result = _rewrite_tag(tag)
        if result is None:
            continue
        rewritten, classes = result
        edits.append((match.start(), end + 1, rewritten))
        line = content.count("\n", 0, match.start()) + 1
        changes.append(f"line {line}: style -> {' '.join(classes)}")

    for start, end, replacement in reversed(edits):
        content = content[:start] + replacement + content[end:]
    return content, changes


def fix_inline_styles(files: list[str], *, dry_run: bool = False) -> list[dict]:
    """Convert Tailwind-expressible inline styles to ``className``."""
    return apply_fixer(files, transform_inline_styles, dry_run=dry_run)


__all__ = [
    "fix_inline_styles",
    "spacing_class",
    "tailwind_class",
    "transform_inline_styles",
    "translate_style_object",
]
