"""Phase 8: security and compliance.

Hardcoded-secret and insecure-URL checks work line by line so that
environment lookups and comments do not count as findings.
"""

from __future__ import annotations

import re

from frontfix.core.discovery import is_test_file, read_file_text
from frontfix.validators.base import (
    CheckResult,
    Phase,
    PhaseContext,
    SignalCheck,
    at_least,
    at_most,
    custom_check,
    signal,
)

SECRET_ASSIGN_RE = re.compile(
    r"""\b(?P<name>[A-Za-z_]*(?:api[_-]?key|apikey|password|secret|token)[A-Za-z_]*)\s*[:=]\s*(?P<quote>['"`])(?P<value>[^'"`]{6,})(?P=quote)""",
    re.IGNORECASE,
)
ENV_LOOKUP_RE = re.compile(r"import\.meta\.env|process\.env")
HTTP_URL_RE = re.compile(r"""['"`]http://(?!localhost|127\.0\.0\.1|0\.0\.0\.0)[^'"`\s]+""")
HTTPS_URL_RE = re.compile(r"""['"`]https://""")
COMMENT_RE = re.compile(r"^\s*(?://|\*|/\*)")
_PLACEHOLDER_VALUES = ("example", "placeholder", "changeme", "your-", "xxx", "<", "test")


def _is_placeholder(value: str) -> bool:
    lowered = value.lower()
    return any(marker in lowered for marker in _PLACEHOLDER_VALUES)


def find_hardcoded_secrets(filepath: str, content: str) -> list[tuple[int, str]]:
    """Return (line, variable name) pairs for literal secret assignments."""
    findings: list[tuple[int, str]] = []
    for lineno, line in enumerate(content.splitlines(), 1):
        if COMMENT_RE.match(line) or ENV_LOOKUP_RE.search(line):
            continue
        for match in SECRET_ASSIGN_RE.finditer(line):
            if _is_placeholder(match.group("value")):
                continue
            findings.append((lineno, match.group("name")))
    return findings


@custom_check("Hardcoded secrets")
def check_secrets(ctx: PhaseContext) -> CheckResult:
    secrets: list[str] = []
    env_files = 0
    for filepath in ctx.source:
        if is_test_file(filepath):
            continue
        content = read_file_text(filepath)
        if content is None:
            continue
        if ENV_LOOKUP_RE.search(content):
            env_files += 1
        secrets.extend(
            f"{filepath}:{lineno} assigns {name}"
            for lineno, name in find_hardcoded_secrets(filepath, content)
        )
    passed = not secrets
    return CheckResult(
        title=check_secrets.title,
        passed=passed,
        counts={"hardcoded secrets": len(secrets), "env lookups": env_files},
        issues=[] if passed else ["Potential hardcoded secrets found"],
        notes=secrets,
    )


@custom_check("HTTPS usage")
def check_https(ctx: PhaseContext) -> CheckResult:
    insecure: list[str] = []
    secure = 0
    for filepath in ctx.source:
        content = read_file_text(filepath)
        if content is None:
            continue
        secure += len(HTTPS_URL_RE.findall(content))
        for lineno, line in enumerate(content.splitlines(), 1):
            if HTTP_URL_RE.search(line) and not COMMENT_RE.match(line):
                insecure.append(f"{filepath}:{lineno}")
    passed = not insecure
    return CheckResult(
        title=check_https.title,
        passed=passed,
        counts={"http urls": len(insecure), "https urls": secure},
        issues=[] if passed else ["Non-HTTPS URLs found"],
        notes=[f"plain http URL at {loc}" for loc in insecure],
    )


@custom_check("Security headers")
def check_headers(ctx: PhaseContext) -> CheckResult:
    config = ctx.read("vite.config.ts") + ctx.read("index.html")
    headers = [
        h
        for h in ("X-Frame-Options", "X-Content-Type-Options", "Referrer-Policy", "Content-Security-Policy")
        if h in config
    ]
    passed = len(headers) >= 2
    return CheckResult(
        title=check_headers.title,
        passed=passed,
        counts={"security headers": len(headers)},
        issues=[] if passed else ["Security headers not configured"],
    )


PHASE = Phase(
    number=8,
    key="security",
    title="Security & Compliance",
    checks=(
        SignalCheck(
            title="XSS protection",
            file_set="source",
            thresholds=(
                at_most(signal("dangerouslySetInnerHTML", "dangerouslySetInnerHTML"), 0),
                at_least(signal("sanitization", "DOMPurify", "sanitize")),
            ),
            issue="Potentially dangerous methods or insufficient XSS protection",
        ),
        SignalCheck(
            title="CSRF protection",
            file_set="source",
            thresholds=(
                at_least(signal("csrf tokens", "csrf", "CSRF", "X-XSRF")),
                at_least(signal("same-site cookies", "SameSite", "sameSite")),
            ),
            issue="CSRF protection not properly implemented",
            mode="any",
        ),
        check_secrets,
        check_https,
        SignalCheck(
            title="Sensitive data exposure",
            file_set="source",
            thresholds=(
                at_most(signal("console logging", "console.log"), 10),
                at_most(signal("unmasked pii", "ssn", "socialSecurity", "creditCard"), 0),
            ),
            issue="Sensitive data may be exposed through logging or unmasked fields",
        ),
        SignalCheck(
            title="Authentication and authorization",
            file_set="source",
            thresholds=(
                at_least(signal("auth modules", "auth", "Auth"), 5),
                at_least(signal("token handling", "jwt", "JWT", "accessToken"), 2),
            ),
            issue="Insufficient authentication and authorization",
        ),
        SignalCheck(
            title="Input validation",
            file_set="source",
            thresholds=(
                at_least(signal("validation schemas", "z.object", "yup.object", "schema"), 5),
                at_least(signal("type checks", "typeof", "instanceof"), 10),
            ),
            issue="Insufficient input validation",
        ),
        check_headers,
        SignalCheck(
            title="Dependency auditing",
            file_set="docs",
            thresholds=(at_least(signal("audit docs", "npm audit", "Dependabot", "Snyk")),),
            issue="Dependency auditing not documented",
        ),
        SignalCheck(
            title="Security documentation",
            file_set="docs",
            thresholds=(at_least(signal("security policy", "Security Policy", "Reporting a Vulnerability")),),
            issue="Security documentation missing",
        ),
    ),
)

__all__ = ["PHASE", "find_hardcoded_secrets"]
