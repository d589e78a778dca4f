"""Command name -> handler mapping."""

from __future__ import annotations

from frontfix.app.commands.fix import cmd_fix
from frontfix.app.commands.generate import cmd_generate
from frontfix.app.commands.track import cmd_track
from frontfix.app.commands.validate import cmd_validate
from frontfix.app.commands.verify import cmd_verify

COMMAND_HANDLERS = {
    "validate": cmd_validate,
    "fix": cmd_fix,
    "generate": cmd_generate,
    "verify": cmd_verify,
    "track": cmd_track,
}

__all__ = ["COMMAND_HANDLERS"]
