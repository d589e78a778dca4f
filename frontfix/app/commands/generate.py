"""generate command: write tsconfig.json, vite.config.ts or a barrel index."""

from __future__ import annotations

import os
import sys

from frontfix.app.commands.runtime import command_runtime
from frontfix.core.output import colorize, status_color
from frontfix.generators import GENERATORS


def cmd_generate(args) -> None:
    runtime = command_runtime(args)
    generate = GENERATORS[args.target]
    kwargs = {"force": args.force, "directory": args.dir}
    if args.target == "vite":
        kwargs["src"] = runtime.src
    elif args.target == "barrel" and args.dir is None:
        kwargs["directory"] = os.path.join(runtime.src, "components")

    result = generate(**kwargs)
    color = status_color(result.status)
    print(colorize(f"  {args.target}: {result.status}", color))
    if result.message:
        stream = sys.stdout if result.ok else sys.stderr
        print(colorize(f"  {result.message}", "dim" if result.ok else color), file=stream)
    if result.status == "error":
        sys.exit(1)


__all__ = ["cmd_generate"]
