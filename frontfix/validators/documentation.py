"""Phase 10: documentation and handover."""

from __future__ import annotations

import re

from frontfix.validators.base import (
    CheckResult,
    Phase,
    PhaseContext,
    SignalCheck,
    at_least,
    custom_check,
    signal,
)

HEADING_RE = re.compile(r"^#{1,3}\s+(.+?)\s*$", re.MULTILINE)
VERSION_HEADING_RE = re.compile(r"^#{1,3}\s+\[?v?\d+\.\d+(?:\.\d+)?\]?", re.MULTILINE)
REQUIRED_README_SECTIONS = ("installation", "usage")


def readme_sections(text: str) -> list[str]:
    return [h.strip().lower() for h in HEADING_RE.findall(text)]


@custom_check("README documentation")
def check_readme(ctx: PhaseContext) -> CheckResult:
    text = ctx.read("README.md")
    sections = readme_sections(text)
    missing = [
        name for name in REQUIRED_README_SECTIONS
        if not any(name in section for section in sections)
    ]
    passed = bool(text) and len(sections) >= 5 and not missing
    return CheckResult(
        title=check_readme.title,
        passed=passed,
        counts={"readme sections": len(sections)},
        issues=[] if passed else ["README documentation not well implemented"],
        notes=[f"README lacks a {name} section" for name in missing] if text else ["README.md not found"],
    )


def _doc_check(title: str, filenames: tuple[str, ...], markers: tuple[str, ...], minimum: int, issue: str):
    """Pass when one of *filenames* exists and mentions at least *minimum* markers."""

    @custom_check(title)
    def check(ctx: PhaseContext) -> CheckResult:
        text = ""
        for name in filenames:
            text = ctx.read(name)
            if text:
                break
        found = [m for m in markers if m.lower() in text.lower()]
        passed = bool(text) and len(found) >= minimum
        return CheckResult(
            title=title,
            passed=passed,
            counts={"topics covered": len(found)},
            issues=[] if passed else [issue],
        )

    return check


@custom_check("Changelog and versioning")
def check_changelog(ctx: PhaseContext) -> CheckResult:
    text = ctx.read("CHANGELOG.md")
    versions = len(VERSION_HEADING_RE.findall(text))
    passed = versions >= 3
    return CheckResult(
        title=check_changelog.title,
        passed=passed,
        counts={"released versions": versions},
        issues=[] if passed else ["Changelog and versioning not well implemented"],
    )


PHASE = Phase(
    number=10,
    key="documentation",
    title="Documentation & Handover",
    issue_allowance=3,
    checks=(
        check_readme,
        SignalCheck(
            title="Component documentation",
            file_set="components",
            thresholds=(
                at_least(signal("documented components", "/**", "@component"), 10),
                at_least(signal("usage examples", "@example"), 5),
            ),
            issue="Component documentation not well implemented",
        ),
        _doc_check(
            "API documentation",
            ("docs/API.md", "API.md"),
            ("GET", "POST", "PUT", "DELETE", "Example", "Response"),
            4,
            "API documentation not well implemented",
        ),
        _doc_check(
            "Route guide",
            ("docs/ROUTES.md", "ROUTES.md"),
            ("/login", "/dashboard", "/settings", "protected", "navigation"),
            3,
            "Visual route guide not well implemented",
        ),
        _doc_check(
            "Development setup",
            ("docs/DEVELOPMENT.md", "DEVELOPMENT.md", "CONTRIBUTING.md"),
            ("node", "npm install", "npm run dev", "npm run build", "npm run lint"),
            3,
            "Development setup documentation not well implemented",
        ),
        _doc_check(
            "Deployment documentation",
            ("docs/DEPLOYMENT.md", "DEPLOYMENT.md"),
            ("production", "staging", "environment", "build", "rollback"),
            3,
            "Deployment documentation not well implemented",
        ),
        _doc_check(
            "Architecture documentation",
            ("docs/ARCHITECTURE.md", "ARCHITECTURE.md"),
            ("component", "state", "routing", "api", "pattern"),
            3,
            "Architecture documentation not well implemented",
        ),
        _doc_check(
            "Security documentation",
            ("SECURITY.md", "docs/SECURITY.md"),
            ("vulnerability", "report", "authentication", "policy", "dependencies"),
            3,
            "Security documentation not well implemented",
        ),
        check_changelog,
        _doc_check(
            "Handover documentation",
            ("docs/HANDOVER.md", "HANDOVER.md"),
            ("contact", "owner", "team", "responsibilities", "support"),
            2,
            "Handover documentation not well implemented",
        ),
    ),
)

__all__ = ["PHASE", "readme_sections"]
