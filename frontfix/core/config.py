"""Project configuration stored in ``.frontfix/config.json``."""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path

from frontfix.core._internal.coercions import coerce_positive_int, coerce_string_list
from frontfix.core.runtime_state import get_project_root

logger = logging.getLogger(__name__)

CONFIG_DIRNAME = ".frontfix"
CONFIG_FILENAME = "config.json"

DEFAULT_CONFIG: dict[str, object] = {
    "src": "src",
    "exclude": [],
    "complete_threshold": 85,
    "issue_allowance": None,
    "tsc_command": "npx tsc --noEmit",
    "build_command": "npm run build",
}

_STR_KEYS = ("src", "tsc_command", "build_command")


class ConfigError(ValueError):
    """Raised when the config file exists but cannot be used."""


def config_path(root: Path | None = None) -> Path:
    return (root or get_project_root()) / CONFIG_DIRNAME / CONFIG_FILENAME


def _normalize(raw: dict) -> dict[str, object]:
    config = copy.deepcopy(DEFAULT_CONFIG)
    for key in _STR_KEYS:
        value = raw.get(key)
        if isinstance(value, str) and value.strip():
            config[key] = value.strip()
    if "complete_threshold" in raw:
        config["complete_threshold"] = coerce_positive_int(
            raw["complete_threshold"], default=85, minimum=0
        )
    # None keeps each phase's own issue allowance.
    if raw.get("issue_allowance") is not None:
        config["issue_allowance"] = coerce_positive_int(
            raw["issue_allowance"], default=5, minimum=0
        )
    if "exclude" in raw:
        config["exclude"] = coerce_string_list(raw["exclude"])
    unknown = sorted(set(raw) - set(DEFAULT_CONFIG))
    if unknown:
        logger.debug("Ignoring unknown config keys: %s", ", ".join(unknown))
    return config


def load_config(root: Path | None = None) -> dict[str, object]:
    """Load config merged over defaults. A missing file yields the defaults."""
    path = config_path(root)
    if not path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path} is not valid JSON: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Could not read {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a JSON object")
    return _normalize(raw)


__all__ = [
    "CONFIG_DIRNAME",
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_CONFIG",
    "config_path",
    "load_config",
]
