"""Phase 7: performance and optimization."""

from __future__ import annotations

import json
import logging

from frontfix.core.discovery import read_file_text
from frontfix.core.fallbacks import log_best_effort_failure
from frontfix.validators.base import (
    CheckResult,
    Phase,
    PhaseContext,
    SignalCheck,
    at_least,
    custom_check,
    signal,
)

logger = logging.getLogger(__name__)


def read_package_json(ctx: PhaseContext) -> dict:
    text = ctx.read("package.json")
    if not text:
        return {}
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        log_best_effort_failure(logger, "parse package.json", exc)
        return {}
    return data if isinstance(data, dict) else {}


def package_scripts(ctx: PhaseContext) -> dict[str, str]:
    scripts = read_package_json(ctx).get("scripts")
    return scripts if isinstance(scripts, dict) else {}


@custom_check("Bundle optimization")
def check_bundle(ctx: PhaseContext) -> CheckResult:
    vite = ctx.read("vite.config.ts")
    code_splitting = "rollupOptions" in vite or "manualChunks" in vite
    minification = "minify" in vite
    lazy = sum(
        1
        for f in ctx.source
        if any(n in (read_file_text(f) or "") for n in ("React.lazy", "lazy("))
    )
    passed = code_splitting and lazy >= 3
    return CheckResult(
        title=check_bundle.title,
        passed=passed,
        counts={
            "code splitting": int(code_splitting),
            "minification": int(minification),
            "lazy imports": lazy,
        },
        issues=[] if passed else ["Bundle optimization not well implemented"],
    )


@custom_check("Development and build performance")
def check_build_tooling(ctx: PhaseContext) -> CheckResult:
    vite = ctx.read("vite.config.ts")
    scripts = package_scripts(ctx)
    features = {
        "rollup options": "rollupOptions" in vite,
        "hmr config": "hmr" in vite,
        "optimizeDeps": "optimizeDeps" in vite,
        "build script": "build" in scripts,
    }
    enabled = sum(features.values())
    passed = enabled >= 3
    return CheckResult(
        title=check_build_tooling.title,
        passed=passed,
        counts={k: int(v) for k, v in features.items()},
        issues=[] if passed else ["Development & build performance not well optimized"],
    )


PHASE = Phase(
    number=7,
    key="performance",
    title="Performance & Optimization",
    checks=(
        check_bundle,
        SignalCheck(
            title="Component performance",
            file_set="source",
            thresholds=(
                at_least(signal("memoized components", "React.memo", "memo("), 5),
                at_least(signal("useCallback usage", "useCallback"), 3),
            ),
            issue="Component performance not well optimized",
        ),
        SignalCheck(
            title="Asset optimization",
            file_set="source",
            thresholds=(
                at_least(signal("modern image formats", "webp", "avif")),
                at_least(signal("font loading", "font-display", "preload")),
            ),
            issue="Asset optimization not well implemented",
            mode="any",
        ),
        SignalCheck(
            title="Caching strategies",
            file_set="source",
            thresholds=(
                at_least(signal("http caching", "Cache-Control", "ETag", "Last-Modified")),
                at_least(signal("service workers", "serviceWorker", "sw.js")),
                at_least(signal("query caching", "useQuery", "staleTime", "cacheTime", "gcTime")),
            ),
            issue="Caching strategies not well implemented",
            mode="any",
        ),
        SignalCheck(
            title="Network optimization",
            file_set="source",
            thresholds=(
                at_least(signal("debounce/throttle", "debounce", "throttle"), 2),
                at_least(signal("prefetching", "prefetch", "dns-prefetch", "preconnect")),
            ),
            issue="Network optimization not well implemented",
            mode="any",
        ),
        SignalCheck(
            title="Rendering performance",
            file_set="source",
            thresholds=(
                at_least(signal("virtualization", "react-window", "react-virtualized", "useVirtualizer")),
                at_least(signal("suspense", "Suspense")),
                at_least(signal("transitions", "startTransition", "useTransition")),
            ),
            issue="Rendering performance not well optimized",
            mode="any",
        ),
        SignalCheck(
            title="Memory management",
            file_set="source",
            thresholds=(
                at_least(signal("listener cleanup", "removeEventListener", "abort()"), 2),
                at_least(signal("timer cleanup", "clearInterval", "clearTimeout"), 2),
            ),
            issue="Memory management not well implemented",
        ),
        SignalCheck(
            title="Performance monitoring",
            file_set="source",
            thresholds=(
                at_least(signal("web vitals", "web-vitals", "onLCP", "getCLS", "onCLS")),
                at_least(signal("user timing", "performance.mark", "performance.measure")),
            ),
            issue="Performance monitoring not well implemented",
            mode="any",
        ),
        SignalCheck(
            title="SEO and accessibility performance",
            file_set="source",
            thresholds=(
                at_least(signal("document metadata", "<title", "<meta", "Helmet", "document.title")),
                at_least(signal("accessible markup", "aria-", "role=", "alt="), 3),
            ),
            issue="SEO & accessibility performance not well optimized",
        ),
        check_build_tooling,
    ),
)

__all__ = ["PHASE", "package_scripts", "read_package_json"]
