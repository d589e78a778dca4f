"""Tests for source discovery and grep helpers."""

from __future__ import annotations

from frontfix.core.discovery import (
    find_component_files,
    find_files,
    find_source_files,
    find_style_files,
    is_test_file,
    read_file_text,
)
from frontfix.core.grep import (
    count_files_with_all,
    count_files_with_any,
    grep_count_files,
    grep_files,
    grep_files_containing,
)
from frontfix.core.runtime_state import set_exclusions


# ---------------------------------------------------------------------------
# find_files
# ---------------------------------------------------------------------------

class TestFindFiles:
    def test_skips_hidden_dirs_and_node_modules(self, write_file):
        write_file("src/App.tsx")
        write_file("src/util.ts")
        write_file("src/.cache/Hidden.tsx")
        write_file("src/node_modules/pkg/Vendor.tsx")
        assert find_source_files("src") == ["src/App.tsx", "src/util.ts"]

    def test_component_files_are_tsx_and_jsx_only(self, write_file):
        write_file("src/components/Button.tsx")
        write_file("src/components/Legacy.jsx")
        write_file("src/components/helpers.ts")
        assert find_component_files("src/components") == [
            "src/components/Button.tsx",
            "src/components/Legacy.jsx",
        ]

    def test_results_are_sorted(self, write_file):
        write_file("src/b/Z.tsx")
        write_file("src/a/Y.tsx")
        assert find_component_files("src") == ["src/a/Y.tsx", "src/b/Z.tsx"]

    def test_missing_directory_yields_empty_list(self, set_project_root):
        assert find_files("does-not-exist", (".ts",)) == []

    def test_exclusions_by_directory_name(self, write_file):
        write_file("src/legacy/Old.tsx")
        write_file("src/New.tsx")
        set_exclusions(["legacy"])
        assert find_component_files("src") == ["src/New.tsx"]

    def test_exclusions_by_glob(self, write_file):
        write_file("src/Button.stories.tsx")
        write_file("src/Button.tsx")
        set_exclusions(["*.stories.tsx"])
        assert find_component_files("src") == ["src/Button.tsx"]

    def test_style_files(self, write_file):
        write_file("src/app.css")
        write_file("src/theme.scss")
        write_file("src/Card.styled.tsx")
        write_file("src/Card.tsx")
        assert find_style_files("src") == [
            "src/Card.styled.tsx",
            "src/app.css",
            "src/theme.scss",
        ]


class TestReadFileText:
    def test_reads_relative_to_root(self, write_file):
        write_file("src/a.ts", "const a = 1;\n")
        assert read_file_text("src/a.ts") == "const a = 1;\n"

    def test_missing_file_returns_none(self, set_project_root):
        assert read_file_text("src/missing.ts") is None


def test_is_test_file():
    assert is_test_file("src/Button.test.tsx")
    assert is_test_file("src/api.spec.ts")
    assert not is_test_file("src/Button.tsx")


# ---------------------------------------------------------------------------
# grep helpers
# ---------------------------------------------------------------------------

class TestGrep:
    def test_grep_files_returns_line_numbers(self, write_file):
        write_file("src/a.ts", "one\nuseState()\nthree\n")
        assert grep_files(r"useState\(", ["src/a.ts"]) == [("src/a.ts", 2, "useState()")]

    def test_grep_files_containing_maps_names_to_files(self, write_file):
        write_file("src/App.tsx", "import Button from './Button';\n<Button />\n")
        write_file("src/Page.tsx", "<Card />\n<ButtonGroup />\n")
        found = grep_files_containing({"Button", "Card"}, ["src/App.tsx", "src/Page.tsx"])
        assert found == {"Button": {"src/App.tsx"}, "Card": {"src/Page.tsx"}}

    def test_grep_files_containing_empty_names(self, write_file):
        write_file("src/a.ts", "x")
        assert grep_files_containing(set(), ["src/a.ts"]) == {}

    def test_grep_count_files_word_boundary(self, write_file):
        write_file("src/a.ts", "memoize()")
        write_file("src/b.ts", "memo(x)")
        assert grep_count_files("memo", ["src/a.ts", "src/b.ts"]) == ["src/b.ts"]
        assert grep_count_files("memo", ["src/a.ts", "src/b.ts"], word_boundary=False) == [
            "src/a.ts",
            "src/b.ts",
        ]

    def test_count_any_and_all(self, write_file):
        write_file("src/a.ts", "useState useEffect")
        write_file("src/b.ts", "useState")
        write_file("src/c.ts", "nothing")
        files = ["src/a.ts", "src/b.ts", "src/c.ts", "src/missing.ts"]
        assert count_files_with_any(files, ["useEffect", "useState"]) == 2
        assert count_files_with_all(files, ["useEffect", "useState"]) == 1
