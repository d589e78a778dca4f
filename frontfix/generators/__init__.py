"""Configuration file generators."""

from __future__ import annotations

from frontfix.generators.barrel import generate_barrel
from frontfix.generators.tsconfig import generate_tsconfig
from frontfix.generators.vite_config import generate_vite_config

GENERATORS = {
    "tsconfig": generate_tsconfig,
    "vite": generate_vite_config,
    "barrel": generate_barrel,
}

__all__ = ["GENERATORS", "generate_barrel", "generate_tsconfig", "generate_vite_config"]
