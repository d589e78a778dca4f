"""Phase 5: API integration and state management."""

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

HTTP_CALL_RE = re.compile(r"""\b(?:axios|api|client|http)\.(?:get|post|put|patch|delete)\s*\(|\bfetch\s*\(""")


@custom_check("API configuration")
def check_api_config(ctx: PhaseContext) -> CheckResult:
    client_files = 0
    base_url = False
    interceptors = False
    for filepath in ctx.source:
        content = read_file_text(filepath)
        if not content or ("axios" not in content and "fetch(" not in content):
            continue
        client_files += 1
        if "baseURL" in content or "API_URL" in content or "VITE_API" in content:
            base_url = True
        if "interceptors" in content:
            interceptors = True
    passed = client_files >= 1 and base_url
    notes = [] if interceptors else ["no request/response interceptors configured"]
    return CheckResult(
        title=check_api_config.title,
        passed=passed,
        counts={"api client files": client_files},
        issues=[] if passed else ["API configuration not properly set up"],
        notes=notes,
    )


@custom_check("API endpoints")
def check_endpoints(ctx: PhaseContext) -> CheckResult:
    calls = 0
    for filepath in ctx.source:
        content = read_file_text(filepath)
        if content:
            calls += len(HTTP_CALL_RE.findall(content))
    passed = calls >= 10
    return CheckResult(
        title=check_endpoints.title,
        passed=passed,
        counts={"endpoint calls": calls},
        issues=[] if passed else ["Insufficient API endpoints defined"],
    )


PHASE = Phase(
    number=5,
    key="api-state",
    title="API Integration & State Management",
    checks=(
        check_api_config,
        check_endpoints,
        SignalCheck(
            title="State management",
            file_set="source",
            thresholds=(
                at_least(signal("context providers", "createContext", "useContext")),
                at_least(signal("stores", "createStore", "configureStore", "zustand")),
                at_least(signal("state hooks", "useAuth", "useUser", "useStore")),
            ),
            issue="State management not properly configured",
            mode="any",
        ),
        SignalCheck(
            title="Data fetching patterns",
            file_set="source",
            thresholds=(
                at_least(signal("data fetching", "fetch(", "axios.", ".get("), 5),
                at_least(signal("async/await", "async ", "await "), 3),
            ),
            issue="Data fetching patterns not well implemented",
        ),
        SignalCheck(
            title="API error handling",
            file_set="source",
            thresholds=(
                at_least(signal("api error handling", "catch (error)", ".catch(", "status >= 400"), 5),
                at_least(signal("error boundaries", "ErrorBoundary", "componentDidCatch")),
            ),
            issue="API error handling not well implemented",
        ),
        SignalCheck(
            title="Data validation and type safety",
            file_set="source",
            thresholds=(
                at_least(signal("interfaces", "interface ", "type "), 10),
                at_least(signal("exported types", "export type", "export interface"), 5),
            ),
            issue="Data validation and type safety not well implemented",
        ),
        SignalCheck(
            title="Caching mechanisms",
            file_set="source",
            thresholds=(
                at_least(signal("caching", "cache", "Cache", "localStorage", "sessionStorage"), 2),
                at_least(signal("query clients", "useQuery", "QueryClient", "@tanstack")),
            ),
            issue="Caching mechanisms not implemented",
            mode="any",
        ),
        SignalCheck(
            title="API response handling",
            file_set="source",
            thresholds=(
                at_least(signal("response parsing", ".json()", "response.data"), 5),
            ),
            issue="API response handling not well implemented",
        ),
        SignalCheck(
            title="Loading states",
            file_set="source",
            thresholds=(
                at_least(signal("loading states", "isLoading", "isPending", "loading"), 5),
            ),
            issue="Loading states not well implemented",
        ),
        SignalCheck(
            title="API testing",
            file_set="tests",
            thresholds=(
                at_least(signal("api tests", "fetch", "axios", "api"), 3),
                at_least(signal("mocked services", "vi.mock", "jest.mock", "msw"), 2),
            ),
            issue="API testing not well implemented",
        ),
    ),
)

__all__ = ["HTTP_CALL_RE", "PHASE"]
