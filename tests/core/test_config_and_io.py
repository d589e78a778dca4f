"""Tests for config loading, coercions, atomic writes and the runtime context."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from frontfix.core._internal.coercions import coerce_positive_int, coerce_string_list
from frontfix.core.config import (
    DEFAULT_CONFIG,
    ConfigError,
    load_config,
)
from frontfix.core.fallbacks import restore_files_best_effort
from frontfix.core.file_paths import rel, resolve_path, safe_write_text
from frontfix.core.runtime_state import (
    RuntimeContext,
    current_runtime_context,
    get_project_root,
    runtime_scope,
)


class TestLoadConfig:
    def test_missing_file_yields_defaults(self, set_project_root):
        assert load_config() == DEFAULT_CONFIG

    def test_defaults_are_copies(self, set_project_root):
        config = load_config()
        config["exclude"].append("x")
        assert DEFAULT_CONFIG["exclude"] == []

    def test_values_are_normalized(self, write_file):
        write_file(
            ".frontfix/config.json",
            json.dumps(
                {
                    "src": " app ",
                    "complete_threshold": "90",
                    "issue_allowance": 2,
                    "exclude": "legacy, generated",
                    "unknown": True,
                }
            ),
        )
        config = load_config()
        assert config["src"] == "app"
        assert config["complete_threshold"] == 90
        assert config["issue_allowance"] == 2
        assert config["exclude"] == ["legacy", "generated"]
        assert "unknown" not in config

    def test_issue_allowance_defaults_to_none(self, write_file):
        write_file(".frontfix/config.json", json.dumps({"src": "src"}))
        assert load_config()["issue_allowance"] is None

    def test_invalid_json_raises(self, write_file):
        write_file(".frontfix/config.json", "{not json")
        with pytest.raises(ConfigError):
            load_config()

    def test_non_object_raises(self, write_file):
        write_file(".frontfix/config.json", "[1, 2]")
        with pytest.raises(ConfigError):
            load_config()


class TestCoercions:
    def test_positive_int(self):
        assert coerce_positive_int("7", default=1) == 7
        assert coerce_positive_int(0, default=3) == 3
        assert coerce_positive_int(0, default=3, minimum=0) == 0
        assert coerce_positive_int(True, default=4) == 4
        assert coerce_positive_int("abc", default=5) == 5
        assert coerce_positive_int([1], default=6) == 6

    def test_string_list(self):
        assert coerce_string_list(None) == []
        assert coerce_string_list("a, b,,c") == ["a", "b", "c"]
        assert coerce_string_list(["a", " ", 3]) == ["a", "3"]
        assert coerce_string_list(42) == []


class TestFilePaths:
    def test_resolve_and_rel(self, set_project_root):
        path = resolve_path("src/App.tsx")
        assert path == set_project_root / "src" / "App.tsx"
        assert rel(path) == "src/App.tsx"

    def test_rel_outside_root_is_unchanged(self, set_project_root, tmp_path_factory):
        outside = tmp_path_factory.mktemp("elsewhere") / "x.ts"
        assert rel(outside) == str(outside).replace("\\", "/")

    def test_safe_write_text_creates_parents(self, set_project_root):
        target = set_project_root / "nested" / "dir" / "file.txt"
        safe_write_text(target, "hello")
        assert target.read_text() == "hello"
        assert [p.name for p in target.parent.iterdir()] == ["file.txt"]


def test_restore_files_best_effort_reports_failures():
    written: dict[str, str] = {}

    def write(path: str, content: str) -> None:
        if path == "bad":
            raise OSError("read-only")
        written[path] = content

    failed = restore_files_best_effort({"good": "a", "bad": "b"}, write)
    assert failed == ["bad"]
    assert written == {"good": "a"}


class TestRuntimeContext:
    def test_scope_overrides_root(self, tmp_path: Path):
        with runtime_scope(RuntimeContext(project_root=tmp_path)):
            assert get_project_root() == tmp_path

    def test_env_root_used_without_context_root(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("FRONTFIX_ROOT", str(tmp_path))
        with runtime_scope(RuntimeContext()):
            assert get_project_root() == tmp_path.resolve()

    def test_cache_invalidation(self, write_file):
        path = write_file("src/a.ts", "one")
        cache = current_runtime_context().file_text_cache
        cache.enable()
        assert cache.read(str(path)) == "one"
        path.write_text("two")
        assert cache.read(str(path)) == "one"
        cache.invalidate(str(path))
        assert cache.read(str(path)) == "two"
