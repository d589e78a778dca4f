"""Phase 9: testing and QA."""

from __future__ import annotations

from frontfix.validators.base import (
    CheckResult,
    Phase,
    PhaseContext,
    SignalCheck,
    at_least,
    custom_check,
    signal,
)
from frontfix.validators.performance import package_scripts

TEST_RUNNER_CONFIGS = ("vitest.config.ts", "vitest.config.js", "jest.config.js", "jest.config.ts", "vite.config.ts")
COVERAGE_MARKERS = ("coverage", "c8", "istanbul")
REPORTER_MARKERS = ("reporter", "junit", "html")


def _package_text(ctx: PhaseContext) -> str:
    return ctx.read("package.json")


@custom_check("Unit tests")
def check_unit_tests(ctx: PhaseContext) -> CheckResult:
    runner = any(ctx.exists(name) for name in TEST_RUNNER_CONFIGS)
    testing_library = "@testing-library" in _package_text(ctx)
    test_files = set(ctx.tests)
    total_sources = len([f for f in ctx.source if f not in test_files])
    tests = len(ctx.tests)
    ratio = tests / total_sources * 100 if total_sources else 0.0
    passed = runner and testing_library and tests >= 20 and ratio >= 15
    return CheckResult(
        title=check_unit_tests.title,
        passed=passed,
        counts={"test files": tests, "test ratio %": int(ratio), "runner configured": int(runner)},
        issues=[] if passed else ["Unit testing not well implemented"],
    )


@custom_check("Coverage configuration")
def check_coverage(ctx: PhaseContext) -> CheckResult:
    configs = " ".join(ctx.read(name) for name in TEST_RUNNER_CONFIGS) + _package_text(ctx)
    configured = any(marker in configs for marker in COVERAGE_MARKERS)
    passed = configured
    return CheckResult(
        title=check_coverage.title,
        passed=passed,
        counts={"coverage configured": int(configured)},
        issues=[] if passed else ["Test coverage not well configured"],
    )


@custom_check("CI/CD testing")
def check_ci(ctx: PhaseContext) -> CheckResult:
    workflows_dir = ctx.root / ".github" / "workflows"
    workflows = (
        [p for p in workflows_dir.iterdir() if p.suffix in (".yml", ".yaml")]
        if workflows_dir.is_dir()
        else []
    )
    scripts = package_scripts(ctx)
    ci_scripts = [name for name in scripts if "ci" in name.split(":")]
    passed = bool(workflows) or bool(ci_scripts)
    return CheckResult(
        title=check_ci.title,
        passed=passed,
        counts={"workflows": len(workflows), "ci scripts": len(ci_scripts)},
        issues=[] if passed else ["CI/CD testing not implemented"],
    )


@custom_check("Test execution and reporting")
def check_execution(ctx: PhaseContext) -> CheckResult:
    scripts = package_scripts(ctx)
    test_scripts = [name for name in scripts if name.startswith("test")]
    configs = " ".join(ctx.read(name) for name in TEST_RUNNER_CONFIGS)
    reporting = any(marker in configs for marker in REPORTER_MARKERS)
    passed = len(test_scripts) >= 2 and reporting
    return CheckResult(
        title=check_execution.title,
        passed=passed,
        counts={"test scripts": len(test_scripts), "reporting": int(reporting)},
        issues=[] if passed else ["Test execution and reporting not well implemented"],
    )


PHASE = Phase(
    number=9,
    key="testing",
    title="Testing & QA",
    checks=(
        check_unit_tests,
        SignalCheck(
            title="Integration testing",
            file_set="tests",
            thresholds=(
                at_least(signal("interaction tests", "userEvent", "waitFor", "fireEvent"), 5),
                at_least(signal("api tests", "fetch", "axios", "mock"), 3),
            ),
            issue="Integration testing not well implemented",
        ),
        SignalCheck(
            title="Test utilities",
            file_set="source",
            thresholds=(
                at_least(signal("test helpers", "renderWithProviders", "test-utils", "customRender"), 1),
                at_least(signal("mock data", "mockData", "fixture", "factory"), 2),
            ),
            issue="Test utilities not well implemented",
        ),
        check_coverage,
        check_ci,
        SignalCheck(
            title="Accessibility testing",
            file_set="tests",
            thresholds=(
                at_least(signal("a11y tests", "axe", "a11y", "accessibility"), 3),
                at_least(signal("role queries", "getByRole", "findByRole", "getByLabelText"), 5),
            ),
            issue="Accessibility testing not well implemented",
        ),
        SignalCheck(
            title="Performance testing",
            file_set="tests",
            thresholds=(
                at_least(signal("performance tests", "performance", "benchmark", "bench("), 2),
            ),
            issue="Performance testing not implemented",
        ),
        SignalCheck(
            title="Security testing",
            file_set="tests",
            thresholds=(
                at_least(signal("security tests", "xss", "csrf", "sanitiz", "security"), 3),
                at_least(signal("auth tests", "login", "permission", "unauthorized"), 2),
            ),
            issue="Security testing not well implemented",
        ),
        SignalCheck(
            title="Test documentation",
            file_set="docs",
            thresholds=(
                at_least(signal("testing docs", "## Testing", "# Testing", "npm run test")),
            ),
            issue="Test documentation not well implemented",
        ),
        check_execution,
    ),
)

__all__ = ["PHASE"]
