"""CLI entry point: parse args, load shared context, dispatch command handlers."""

from __future__ import annotations

import logging
import sys

from frontfix.app.commands.registry import COMMAND_HANDLERS
from frontfix.app.commands.runtime import CommandRuntime
from frontfix.app.parser import create_parser
from frontfix.core.config import ConfigError, load_config
from frontfix.core.fallbacks import print_error
from frontfix.core.output import colorize
from frontfix.core.runtime_state import (
    current_runtime_context,
    set_exclusions,
    set_project_root,
)

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _apply_persisted_exclusions(args, config: dict) -> None:
    """Merge CLI --exclude with persisted config.exclude and apply globally."""
    cli_exclusions = getattr(args, "exclude", None) or []
    persisted = config.get("exclude", [])
    combined = list(cli_exclusions) + [e for e in persisted if e not in cli_exclusions]
    if not combined:
        return
    set_exclusions(combined)
    source = "" if cli_exclusions else " (from config)"
    print(colorize(f"  Excluding{source}: {', '.join(combined)}", "dim"), file=sys.stderr)


def _load_shared_runtime(args) -> None:
    """Load config and attach shared objects to parsed args."""
    if getattr(args, "root", None):
        set_project_root(args.root)
    try:
        config = load_config()
    except ConfigError as exc:
        print_error(str(exc))
        sys.exit(1)
    _apply_persisted_exclusions(args, config)
    current_runtime_context().file_text_cache.enable()
    src = getattr(args, "src", None) or str(config["src"])
    args.runtime = CommandRuntime(config=config, src=src)


def _resolve_handler(command: str):
    return COMMAND_HANDLERS[command]


def main(argv: list[str] | None = None) -> None:
    # Ensure Unicode output works on Windows terminals (cp1252 etc.)
    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure"):
            try:
                stream.reconfigure(encoding="utf-8", errors="replace")
            except (AttributeError, OSError):
                logger.debug(
                    "Skipping stream reconfigure for %s (not supported)",
                    getattr(stream, "name", "<stream>"),
                )

    parser = create_parser()
    args = parser.parse_args(argv)
    _configure_logging(getattr(args, "verbose", False))
    _load_shared_runtime(args)

    handler = _resolve_handler(args.command)
    try:
        handler(args)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(1)


if __name__ == "__main__":
    main()
