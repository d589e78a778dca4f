"""Top-level argparse parser for the frontfix CLI."""

from __future__ import annotations

import argparse

from frontfix.fixers import FIXERS
from frontfix.generators import GENERATORS
from frontfix.validators import PHASES

USAGE_EXAMPLES = """
examples:
  frontfix validate components         audit one phase
  frontfix validate all --json         audit every phase, machine-readable
  frontfix fix react-import --dry-run  preview a codemod
  frontfix generate tsconfig           write tsconfig.json (merges existing)
  frontfix verify --build              run tsc, then the production build
  frontfix track                       checkpointed verification into BuildTracker.log
"""


def _add_global_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root",
        default=None,
        help="Project root (default: $FRONTFIX_ROOT or the current directory)",
    )
    parser.add_argument(
        "--src",
        default=None,
        help="Source directory relative to the root (default: config 'src' or 'src')",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Path pattern to skip; repeatable, merged with config 'exclude'",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )


def _add_validate_parser(sub) -> None:
    p = sub.add_parser("validate", help="Audit a phase (or all phases) and print its score")
    p.add_argument(
        "phase",
        help=f"Phase key or number, or 'all' ({', '.join(PHASES)})",
    )
    p.add_argument("--json", action="store_true", help="Print reports as JSON")
    p.add_argument(
        "--no-fix-scan",
        action="store_true",
        help="Skip the dry-run fixer scan that lists available automatic fixes",
    )


def _add_fix_parser(sub) -> None:
    p = sub.add_parser("fix", help="Run a codemod over the source tree")
    p.add_argument("fixer", choices=sorted(FIXERS), help="Fixer to run")
    p.add_argument(
        "--dry-run", action="store_true", help="Report changes without writing files"
    )
    p.add_argument(
        "--path", default=None, help="Directory to fix (default: the source directory)"
    )
    p.add_argument("--json", action="store_true", help="Print results as JSON")
    p.add_argument("--top", type=int, default=20, help="Max rows to print (default: 20)")


def _add_generate_parser(sub) -> None:
    p = sub.add_parser("generate", help="Write a project configuration file")
    p.add_argument("target", choices=list(GENERATORS), help="File to generate")
    p.add_argument(
        "--force", action="store_true", help="Overwrite an existing file"
    )
    p.add_argument(
        "--dir",
        default=None,
        help="Output directory relative to the root (barrel default: <src>/components)",
    )


def _add_verify_parser(sub) -> None:
    p = sub.add_parser("verify", help="Run the TypeScript compiler (and optionally the build)")
    p.add_argument("--build", action="store_true", help="Also run the production build")
    p.add_argument("--json", action="store_true", help="Print diagnostics as JSON")
    p.add_argument("--top", type=int, default=20, help="Max rows to print (default: 20)")


def _add_track_parser(sub) -> None:
    p = sub.add_parser("track", help="Checkpointed verification recorded in BuildTracker.log")
    p.add_argument(
        "--repair",
        action="store_true",
        help="Generate a missing tsconfig.json / vite.config.ts and add missing package.json scripts",
    )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="frontfix",
        description="Audit, fix and verify a React/TypeScript frontend.",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _add_global_options(parser)
    sub = parser.add_subparsers(dest="command", required=True)
    _add_validate_parser(sub)
    _add_fix_parser(sub)
    _add_generate_parser(sub)
    _add_verify_parser(sub)
    _add_track_parser(sub)
    return parser


__all__ = ["create_parser"]
