"""``vite.config.ts`` with vendor chunks, security headers and path aliases."""

from __future__ import annotations

from pathlib import Path

from frontfix.core.output_contract import OutputResult
from frontfix.core.runtime_state import get_project_root
from frontfix.generators.writer import write_generated

VITE_CONFIG_FILENAME = "vite.config.ts"

MANUAL_CHUNKS: dict[str, tuple[str, ...]] = {
    "vendor": ("react", "react-dom"),
    "router": ("react-router-dom",),
    "ui": ("@headlessui/react", "@heroicons/react"),
    "utils": ("lodash", "date-fns", "clsx"),
}

SECURITY_HEADERS: dict[str, str] = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

ALIAS_FOLDERS = ("components", "pages", "utils", "hooks", "store", "security")

OPTIMIZE_DEPS = (
    "react",
    "react-dom",
    "react-router-dom",
    "zustand",
    "axios",
    "date-fns",
    "clsx",
    "dompurify",
)

VITE_TEMPLATE = """\
import {{ defineConfig }} from 'vite';
import react from '@vitejs/plugin-react';
import {{ resolve }} from 'path';

// https://vitejs.dev/config/
export default defineConfig({{
  plugins: [react()],

  build: {{
    rollupOptions: {{
      output: {{
        manualChunks: {{
{chunks}
        }}
      }}
    }},
    sourcemap: process.env.NODE_ENV !== 'production'
  }},

  server: {{
    headers: {{
{headers}
    }}
  }},

  preview: {{
    headers: {{
{headers}
    }}
  }},

  resolve: {{
    alias: {{
{aliases}
    }}
  }},

  optimizeDeps: {{
    include: [
{deps}
    ]
  }}
}});
"""


def _quoted_list(items) -> str:
    return "[" + ", ".join(f"'{item}'" for item in items) + "]"


def render_vite_config(src: str = "src") -> str:
    chunks = [f"          {name}: {_quoted_list(pkgs)}" for name, pkgs in MANUAL_CHUNKS.items()]
    headers = [f"      '{name}': '{value}'" for name, value in SECURITY_HEADERS.items()]
    aliases = [f"      '@': resolve(__dirname, '{src}')"]
    aliases.extend(
        f"      '@/{folder}': resolve(__dirname, '{src}/{folder}')" for folder in ALIAS_FOLDERS
    )
    deps = [f"      '{dep}'" for dep in OPTIMIZE_DEPS]
    return VITE_TEMPLATE.format(
        chunks=",\n".join(chunks),
        headers=",\n".join(headers),
        aliases=",\n".join(aliases),
        deps=",\n".join(deps),
    )


def generate_vite_config(
    root: Path | None = None,
    *,
    force: bool = False,
    directory: str | None = None,
    src: str = "src",
) -> OutputResult:
    base = root or get_project_root()
    path = base / (directory or "") / VITE_CONFIG_FILENAME
    return write_generated(path, render_vite_config(src), force=force)


__all__ = [
    "SECURITY_HEADERS",
    "generate_vite_config",
    "render_vite_config",
]
