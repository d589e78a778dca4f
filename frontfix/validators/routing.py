"""Phase 4: routing and navigation."""

from __future__ import annotations

import re

from frontfix.core.discovery import read_file_text
from frontfix.validators.base import (
    CheckResult,
    Phase,
    PhaseContext,
    SignalCheck,
    at_least,
    custom_check,
    signal,
)

ESSENTIAL_ROUTES = ("/", "/login", "/dashboard", "/settings", "/profile")
ROUTE_PATH_RE = re.compile(r"""path=["']([^"']+)["']""")
ROUTE_ELEMENT_RE = re.compile(r"<Route\b")


def collect_route_paths(ctx: PhaseContext) -> set[str]:
    paths: set[str] = set()
    for filepath in ctx.source:
        content = read_file_text(filepath)
        if content:
            paths.update(ROUTE_PATH_RE.findall(content))
    return paths


@custom_check("Router configuration")
def check_router_config(ctx: PhaseContext) -> CheckResult:
    router_found = False
    route_definitions = 0
    notes: list[str] = []
    for filepath in ctx.source:
        content = read_file_text(filepath)
        if not content or "react-router-dom" not in content:
            continue
        route_definitions += len(ROUTE_ELEMENT_RE.findall(content))
        if "BrowserRouter" in content or "createBrowserRouter" in content:
            router_found = True
            if "<Routes" not in content and "createBrowserRouter" not in content:
                notes.append(f"{filepath}: Routes container not used")
    passed = router_found and route_definitions >= 5
    return CheckResult(
        title=check_router_config.title,
        passed=passed,
        counts={"route definitions": route_definitions},
        issues=[] if passed else ["React Router not properly configured or insufficient routes"],
        notes=notes,
    )


@custom_check("Essential routes")
def check_essential_routes(ctx: PhaseContext) -> CheckResult:
    found = collect_route_paths(ctx)
    present = [route for route in ESSENTIAL_ROUTES if route in found]
    missing = [route for route in ESSENTIAL_ROUTES if route not in found]
    passed = len(present) >= len(ESSENTIAL_ROUTES) * 0.7
    return CheckResult(
        title=check_essential_routes.title,
        passed=passed,
        counts={"essential routes": len(present)},
        issues=[] if passed else ["Missing essential routes"],
        notes=[f"missing route {route}" for route in missing],
    )


@custom_check("404 handling")
def check_not_found(ctx: PhaseContext) -> CheckResult:
    paths = collect_route_paths(ctx)
    catch_all = bool({"*", "/*", "/404"} & paths)
    not_found_component = any(
        "NotFound" in (read_file_text(f) or "") for f in ctx.source
    )
    passed = catch_all and not_found_component
    return CheckResult(
        title=check_not_found.title,
        passed=passed,
        counts={"catch-all route": int(catch_all), "not-found component": int(not_found_component)},
        issues=[] if passed else ["Missing 404 route or NotFound component"],
    )


@custom_check("Deep linking support")
def check_deep_linking(ctx: PhaseContext) -> CheckResult:
    router_files = 0
    unsupported: list[str] = []
    for filepath in ctx.source:
        content = read_file_text(filepath)
        if not content or "BrowserRouter" not in content:
            continue
        router_files += 1
        if "createBrowserRouter" in content:
            continue
        if "<Routes>" not in content or not ROUTE_ELEMENT_RE.search(content):
            unsupported.append(filepath)
    passed = router_files > 0 and not unsupported
    return CheckResult(
        title=check_deep_linking.title,
        passed=passed,
        counts={"router files": router_files},
        issues=[] if passed else ["Deep linking not properly supported"],
        notes=[f"{path}: BrowserRouter without <Routes>/<Route>" for path in unsupported],
    )


@custom_check("Dynamic route parameters")
def check_dynamic_routes(ctx: PhaseContext) -> CheckResult:
    dynamic = [p for p in collect_route_paths(ctx) if ":" in p]
    passed = len(dynamic) >= 2
    return CheckResult(
        title=check_dynamic_routes.title,
        passed=passed,
        counts={"dynamic routes": len(dynamic)},
        issues=[] if passed else ["Dynamic routing not implemented"],
    )


PHASE = Phase(
    number=4,
    key="routing",
    title="Routing & Navigation",
    checks=(
        check_router_config,
        check_essential_routes,
        SignalCheck(
            title="Authentication protection",
            file_set="source",
            thresholds=(
                at_least(signal("auth components", "ProtectedRoute", "PrivateRoute", "RequireAuth")),
                at_least(signal("protected routes", "<ProtectedRoute", "<PrivateRoute", "<RequireAuth"), 1),
            ),
            issue="Insufficient authentication protection",
        ),
        SignalCheck(
            title="Navigation components",
            file_set="source",
            thresholds=(
                at_least(signal("navigation components", "<nav", "Navbar", "Sidebar")),
                at_least(signal("navigation links", "<Link", "<NavLink"), 5),
            ),
            issue="Insufficient navigation components or links",
        ),
        check_not_found,
        check_deep_linking,
        SignalCheck(
            title="Navigation accessibility",
            file_set="source",
            thresholds=(
                at_least(signal("aria labels", "aria-label", "aria-labelledby")),
                at_least(signal("semantic navigation", "<nav", "role=\"navigation\"")),
            ),
            issue="Navigation lacks proper accessibility features",
        ),
        SignalCheck(
            title="Route-based code splitting",
            file_set="source",
            thresholds=(
                at_least(signal("lazy routes", "React.lazy", "lazy("), 2),
                at_least(signal("suspense boundaries", "Suspense")),
            ),
            issue="Route-based code splitting not implemented",
        ),
        check_dynamic_routes,
        SignalCheck(
            title="Navigation state management",
            file_set="source",
            thresholds=(
                at_least(signal("navigation hooks", "useNavigate", "useLocation", "useParams"), 2),
            ),
            issue="Navigation state management not properly implemented",
        ),
    ),
)

__all__ = ["ESSENTIAL_ROUTES", "PHASE", "collect_route_paths"]
