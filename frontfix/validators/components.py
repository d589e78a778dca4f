"""Phase 3: component and UI structure."""

from __future__ import annotations

import os
import re
from collections import Counter

from frontfix.core.discovery import is_test_file, read_file_text
from frontfix.core.grep import grep_files_containing
from frontfix.validators.base import (
    CheckResult,
    Phase,
    PhaseContext,
    SignalCheck,
    at_least,
    custom_check,
    share_of,
    signal,
)

PASCAL_CASE_RE = re.compile(r"^[A-Z][a-zA-Z0-9]*$")
PROPS_TYPE_RE = re.compile(r"\b(?:interface|type)\s+\w*Props\b")
REACT_IMPORT_RE = re.compile(r"""import\s+React\b|from\s+['"]react['"]""")
TAILWIND_CLASS_RE = re.compile(r"""className=["'{][^"'}]*\b(?:bg-|text-|flex|grid|p-|m-)""")


def component_name(filepath: str) -> str:
    return os.path.splitext(os.path.basename(filepath))[0]


def _is_index_or_test(filepath: str) -> bool:
    return component_name(filepath) == "index" or is_test_file(filepath)


def is_valid_component(content: str) -> bool:
    """React import, default export, and something JSX-shaped."""
    return (
        bool(REACT_IMPORT_RE.search(content))
        and "export default" in content
        and "<" in content
        and ">" in content
    )


@custom_check("React component structure")
def check_structure(ctx: PhaseContext) -> CheckResult:
    files = [f for f in ctx.components if not is_test_file(f)]
    valid = 0
    notes: list[str] = []
    issues: list[str] = []
    for filepath in files:
        content = read_file_text(filepath)
        if content is None:
            continue
        if is_valid_component(content):
            valid += 1
        else:
            name = component_name(filepath)
            notes.append(f"{name} may have structural issues")
            issues.append(f"Component {name} has structural issues")

    names = {
        component_name(f) for f in files if not _is_index_or_test(f)
    }
    usage = grep_files_containing(names, ctx.source)
    dead = 0
    for filepath in files:
        if _is_index_or_test(filepath):
            continue
        name = component_name(filepath)
        users = usage.get(name, set()) - {filepath}
        if not users:
            dead += 1
            notes.append(f"{name} appears to be unused")
            issues.append(f"Component {name} appears to be unused")

    total = len(files)
    passed = valid >= total * 0.8 and dead <= total * 0.1
    return CheckResult(
        title=check_structure.title,
        passed=passed,
        counts={"component files": total, "valid components": valid, "dead components": dead},
        issues=issues,
        notes=notes,
    )


@custom_check("UI component consistency")
def check_ui_consistency(ctx: PhaseContext) -> CheckResult:
    consistent = True
    notes: list[str] = []
    count = 0
    for filepath in ctx.ui_components:
        content = read_file_text(filepath)
        name = component_name(filepath)
        if content is None:
            notes.append(f"Cannot analyze UI component {name}")
            consistent = False
            continue
        count += 1
        lowered = name.lower()
        if "forwardRef" not in content and "provider" not in lowered and "context" not in lowered:
            notes.append(f"{name} missing forwardRef")
            consistent = False
        if not PROPS_TYPE_RE.search(content) and name != "index":
            notes.append(f"{name} missing prop types")
            consistent = False
    passed = consistent and count >= 10
    return CheckResult(
        title=check_ui_consistency.title,
        passed=passed,
        counts={"ui components": count},
        issues=[] if passed else ["UI components lack consistency in structure"],
        notes=notes,
    )


@custom_check("Styling consistency")
def check_styling(ctx: PhaseContext) -> CheckResult:
    styled = sum(1 for f in ctx.styles if f.endswith((".styled.tsx", ".styled.ts")))
    css_modules = sum(1 for f in ctx.styles if ".module.css" in f)
    scss = sum(1 for f in ctx.styles if f.endswith((".scss", ".sass")))
    tailwind = 0
    for filepath in ctx.components:
        content = read_file_text(filepath)
        if content and TAILWIND_CLASS_RE.search(content):
            tailwind += 1
    approaches = [n for n in (styled, css_modules, scss) if n > 0]
    passed = len(approaches) == 1 or tailwind > len(ctx.components) * 0.5
    return CheckResult(
        title=check_styling.title,
        passed=passed,
        counts={
            "styled components": styled,
            "css modules": css_modules,
            "scss files": scss,
            "tailwind components": tailwind,
        },
        issues=[] if passed else ["Multiple styling approaches without consistency"],
    )


def is_accessible(content: str) -> bool:
    has_alt = "<img" not in content or "alt=" in content
    has_button_types = "<button" not in content or "type=" in content
    has_labels = "<input" not in content or "<label" in content or "aria-label" in content
    return has_alt and has_button_types and has_labels


@custom_check("Accessibility compliance")
def check_accessibility(ctx: PhaseContext) -> CheckResult:
    accessible = aria = semantic = 0
    for filepath in ctx.components:
        content = read_file_text(filepath)
        if content is None:
            continue
        if "aria-" in content or "role=" in content:
            aria += 1
        if any(tag in content for tag in ("<main", "<nav", "<header", "<footer", "<section", "<article")):
            semantic += 1
        if is_accessible(content):
            accessible += 1
    total = len(ctx.components)
    passed = total > 0 and accessible / total >= 0.7
    return CheckResult(
        title=check_accessibility.title,
        passed=passed,
        counts={"aria usage": aria, "semantic html": semantic, "accessible components": accessible},
        issues=[] if passed else ["Low accessibility compliance in components"],
    )


@custom_check("Component naming conventions")
def check_naming(ctx: PhaseContext) -> CheckResult:
    files = [f for f in ctx.components if not _is_index_or_test(f)]
    bad = [component_name(f) for f in files if not PASCAL_CASE_RE.match(component_name(f))]
    passed = len(bad) <= len(files) * 0.1
    return CheckResult(
        title=check_naming.title,
        passed=passed,
        counts={"properly named": len(files) - len(bad), "naming issues": len(bad)},
        issues=[f"Component {name} doesn't follow PascalCase convention" for name in bad],
        notes=[f"{name} should use PascalCase" for name in bad],
    )


@custom_check("Duplicate components")
def check_duplicates(ctx: PhaseContext) -> CheckResult:
    names = Counter(
        component_name(f).lower() for f in ctx.components if not _is_index_or_test(f)
    )
    duplicates = sorted(name for name, count in names.items() if count > 1)
    return CheckResult(
        title=check_duplicates.title,
        passed=not duplicates,
        counts={"duplicates": len(duplicates)},
        issues=[f"Duplicate component: {name}" for name in duplicates],
        notes=[f"{name} appears multiple times" for name in duplicates],
    )


PHASE = Phase(
    number=3,
    key="components",
    title="Component & UI Structure",
    checks=(
        check_structure,
        check_ui_consistency,
        check_styling,
        check_accessibility,
        check_naming,
        check_duplicates,
        SignalCheck(
            title="Component documentation",
            file_set="components",
            thresholds=(share_of(signal("documented components", "/**", "@component"), 0.5),),
            issue="Low component documentation coverage",
        ),
        SignalCheck(
            title="Error boundaries",
            file_set="components",
            thresholds=(at_least(signal("error boundaries", "ErrorBoundary", "componentDidCatch")),),
            issue="No error boundaries found",
        ),
        SignalCheck(
            title="State management",
            file_set="components",
            thresholds=(
                at_least(signal("useState usage", "useState")),
                at_least(signal("context usage", "useContext", "createContext")),
            ),
            issue="Poor state management patterns",
            mode="any",
        ),
        SignalCheck(
            title="Component performance",
            file_set="components",
            thresholds=(
                share_of(signal("optimized components", "React.memo", "memo(", "useCallback", "useMemo"), 0.2),
            ),
            issue="Low component performance optimization",
        ),
    ),
)

__all__ = ["PHASE", "component_name", "is_accessible", "is_valid_component"]
