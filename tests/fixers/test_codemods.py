"""Tests for the single-file regex fixers and the fixer registry."""

from __future__ import annotations

import pytest

from frontfix.fixers import FIXERS, fixers_for_phase, get_fixer, run_fixer
from frontfix.fixers.a11y import fix_a11y, transform_a11y
from frontfix.fixers.inline_styles import (
    fix_inline_styles,
    spacing_class,
    tailwind_class,
    transform_inline_styles,
    translate_style_object,
)
from frontfix.fixers.jsdoc import fix_jsdoc, render_header, transform_jsdoc
from frontfix.fixers.memo import fix_memo, transform_memo
from frontfix.fixers.react_import import (
    ensure_react_imports,
    fix_react_imports,
    transform_react_imports,
    used_hooks,
    uses_jsx,
)
from frontfix.fixers.syntax_scan import find_tag_end, split_top_level

# ---------------------------------------------------------------------------
# syntax_scan
# ---------------------------------------------------------------------------


class TestSyntaxScan:
    def test_tag_end_skips_expressions_and_strings(self):
        text = "<div onClick={() => a > b} title='x>y'>"
        assert find_tag_end(text, 0) == len(text) - 1

    def test_split_top_level_ignores_nested_commas(self):
        assert split_top_level("a: f(1, 2), b: 'x,y', c: { d, e }") == [
            "a: f(1, 2)",
            "b: 'x,y'",
            "c: { d, e }",
        ]


# ---------------------------------------------------------------------------
# react-import
# ---------------------------------------------------------------------------


class TestReactImports:
    def test_detects_hook_calls_only(self):
        content = "const [a] = useState(0);\nstore.useEffect();\nuseRef<HTMLDivElement>(null);"
        assert used_hooks(content) == {"useState", "useRef"}

    def test_jsx_only_counts_in_component_files(self):
        assert uses_jsx("return <div />;", "src/A.tsx")
        assert not uses_jsx("return <div />;", "src/a.ts")

    def test_adds_named_import(self):
        content = "const [a] = useState(0);\nuseEffect(() => {}, []);\n"
        new, changes = transform_react_imports(content, "src/hooks.ts")
        assert new.startswith("import { useEffect, useState } from 'react';\n")
        assert changes == ["import useEffect, useState"]

    def test_extends_existing_named_import(self):
        content = "import { useState } from 'react';\nuseState(0);\nuseEffect(() => {});\n"
        new, _ = transform_react_imports(content, "src/a.ts")
        assert new.splitlines()[0] == "import { useState, useEffect } from 'react';"

    def test_extends_default_import(self):
        content = 'import React from "react";\nuseState(0);\n'
        new, _ = transform_react_imports(content, "src/a.ts")
        assert new.splitlines()[0] == 'import React, { useState } from "react";'

    def test_jsx_without_import_gets_default(self):
        content = "export default function A() {\n  return <div />;\n}\n"
        new, changes = transform_react_imports(content, "src/A.tsx")
        assert new.startswith("import React from 'react';\n")
        assert changes == ["import React"]

    def test_inserts_after_directive(self):
        content = "'use client';\nuseState(0);\n"
        new, _ = transform_react_imports(content, "src/a.ts")
        assert new.splitlines()[:2] == ["'use client';", "import { useState } from 'react';"]

    def test_namespace_import_is_enough(self):
        content = "import * as React from 'react';\nReact.useState(0);\n"
        assert transform_react_imports(content, "src/a.tsx") == (content, [])

    def test_aliased_hook_counts_as_imported(self):
        content = "import { useState as useS } from 'react';\nuseS(0);\n"
        new, changes = ensure_react_imports(content, hooks={"useS"})
        assert changes == []
        assert new == content

    def test_idempotent(self):
        content = "useState(0);\nconst x = <span>a</span>;\n"
        once, _ = transform_react_imports(content, "src/A.tsx")
        assert transform_react_imports(once, "src/A.tsx") == (once, [])

    def test_dry_run_leaves_file(self, write_file):
        path = write_file("src/a.ts", "useState(0);\n")
        results = fix_react_imports(["src/a.ts"], dry_run=True)
        assert results[0]["file"] == "src/a.ts"
        assert results[0]["lines_delta"] == 1
        assert path.read_text() == "useState(0);\n"

    def test_writes_file(self, write_file):
        path = write_file("src/a.ts", "useState(0);\n")
        fix_react_imports(["src/a.ts"])
        assert path.read_text().startswith("import { useState } from 'react';")


# ---------------------------------------------------------------------------
# inline-styles
# ---------------------------------------------------------------------------


class TestInlineStyles:
    @pytest.mark.parametrize(
        "prop,value,expected",
        [
            ("padding", "16", "p-4"),
            ("marginTop", "8px", "mt-2"),
            ("gap", "10px", "gap-2.5"),
            ("padding", "13px", None),
            ("display", "none", "hidden"),
            ("width", "100%", "w-full"),
            ("color", "red", None),
        ],
    )
    def test_tailwind_class(self, prop, value, expected):
        assert tailwind_class(prop, value) == expected

    def test_spacing_ignores_unknown_property(self):
        assert spacing_class("borderWidth", "4px") is None

    def test_translate_rejects_partial_mapping(self):
        assert translate_style_object("display: 'flex', color: 'red'") is None
        assert translate_style_object("padding: size") is None

    def test_translate_accepts_quoted_kebab_keys(self):
        assert translate_style_object("'margin-top': '8px', display: \"flex\"") == ["mt-2", "flex"]

    def test_replaces_style_with_class_name(self):
        content = "<div style={{ display: 'flex', padding: 16 }}>x</div>"
        new, changes = transform_inline_styles(content, "src/A.tsx")
        assert new == '<div className="flex p-4">x</div>'
        assert changes == ["line 1: style -> flex p-4"]

    def test_merges_into_static_class_name(self):
        content = "<p className='lead' style={{ textAlign: 'center' }}>x</p>"
        new, _ = transform_inline_styles(content, "src/A.tsx")
        assert new == "<p className='lead text-center'>x</p>"

    def test_dynamic_class_name_left_alone(self):
        content = "<p className={cls} style={{ textAlign: 'center' }}>x</p>"
        assert transform_inline_styles(content, "src/A.tsx") == (content, [])

    def test_unmappable_style_left_alone(self):
        content = "<p style={{ color: 'red' }}>x</p>"
        assert transform_inline_styles(content, "src/A.tsx") == (content, [])

    def test_fix_reports_line_numbers(self, write_file):
        write_file("src/A.tsx", "<div>\n  <span style={{ cursor: 'pointer' }} />\n</div>\n")
        results = fix_inline_styles(["src/A.tsx"])
        assert results[0]["changes"] == ["line 2: style -> cursor-pointer"]

    def test_second_run_is_a_no_op(self, write_file):
        path = write_file(
            "src/A.tsx",
            "<div style={{ display: 'flex', gap: '8px' }}>\n"
            "  <p className='lead' style={{ textAlign: 'center' }}>x</p>\n"
            "  <p style={{ color: 'red' }}>y</p>\n"
            "</div>\n",
        )
        assert len(fix_inline_styles(["src/A.tsx"])) == 1
        once = path.read_text()
        assert fix_inline_styles(["src/A.tsx"]) == []
        assert path.read_text() == once


# ---------------------------------------------------------------------------
# memo
# ---------------------------------------------------------------------------


class TestMemo:
    def test_wraps_default_export(self):
        content = "import React from 'react';\n\nfunction Card() {\n  return <div />;\n}\n\nexport default Card;\n"
        new, changes = transform_memo(content, "src/Card.tsx")
        assert "export default React.memo(Card);" in new
        assert changes == ["wrap Card in React.memo"]

    def test_adds_react_import_when_missing(self):
        content = "function Card() {\n  return null;\n}\nexport default Card;\n"
        new, changes = transform_memo(content, "src/Card.tsx")
        assert new.startswith("import React from 'react';\n")
        assert changes == ["wrap Card in React.memo", "import React"]

    def test_adds_default_beside_named_import(self):
        content = "import { useState } from 'react';\nfunction Card() { useState(); }\nexport default Card\n"
        new, _ = transform_memo(content, "src/Card.tsx")
        assert new.splitlines()[0] == "import React, { useState } from 'react';"

    def test_already_memoized(self):
        content = "const Card = React.memo(function Card() { return null; });\nexport default Card;\n"
        assert transform_memo(content, "src/Card.tsx") == (content, [])

    def test_inline_default_function_ignored(self):
        content = "export default function Card() { return null; }\n"
        assert transform_memo(content, "src/Card.tsx") == (content, [])

    def test_idempotent(self, write_file):
        write_file("src/Card.tsx", "function Card() { return null; }\nexport default Card;\n")
        assert len(fix_memo(["src/Card.tsx"])) == 1
        assert fix_memo(["src/Card.tsx"]) == []


# ---------------------------------------------------------------------------
# jsdoc
# ---------------------------------------------------------------------------


class TestJsdoc:
    def test_header_before_declaration(self):
        content = "import React from 'react';\n\nexport const Card = () => null;\n"
        new, changes = transform_jsdoc(content, "src/components/Card.tsx")
        assert new == "import React from 'react';\n\n" + render_header("Card") + "export const Card = () => null;\n"
        assert changes == ["add JSDoc header for Card"]

    def test_falls_back_to_file_name_after_directive(self):
        content = "'use client';\nexport default () => null;\n"
        new, _ = transform_jsdoc(content, "src/components/Widget.tsx")
        assert new == "'use client';\n" + render_header("Widget") + "export default () => null;\n"

    def test_existing_doc_comment_skips_file(self):
        content = "/** Card. */\nexport function Card() {}\n"
        assert transform_jsdoc(content, "src/Card.tsx") == (content, [])

    def test_second_run_is_a_no_op(self, write_file):
        path = write_file("src/components/Card.tsx", "export function Card() {\n  return null;\n}\n")
        assert len(fix_jsdoc(["src/components/Card.tsx"])) == 1
        once = path.read_text()
        assert once.startswith(render_header("Card"))
        assert fix_jsdoc(["src/components/Card.tsx"]) == []
        assert path.read_text() == once


# ---------------------------------------------------------------------------
# a11y
# ---------------------------------------------------------------------------


class TestA11y:
    def test_button_gets_type(self):
        new, changes = transform_a11y("<button onClick={go}>Go</button>", "src/A.tsx")
        assert new == '<button type="button" onClick={go}>Go</button>'
        assert changes == ['line 1: <button> add type="button"']

    def test_img_gets_empty_alt(self):
        new, _ = transform_a11y("<img src={logo} />", "src/A.tsx")
        assert new == '<img alt="" src={logo} />'

    def test_blank_target_gets_rel(self):
        new, _ = transform_a11y("<a href='x' target={'_blank'}>x</a>", "src/A.tsx")
        assert new == "<a rel=\"noopener noreferrer\" href='x' target={'_blank'}>x</a>"

    def test_compliant_and_spread_tags_untouched(self):
        content = (
            '<button type="submit">Go</button>\n'
            "<button {...props}>Go</button>\n"
            "<img alt='' src={a} />\n"
            "<a href='x'>x</a>\n"
            "<abbr title='x'>x</abbr>\n"
        )
        assert transform_a11y(content, "src/A.tsx") == (content, [])

    def test_fix_dry_run(self, write_file):
        path = write_file("src/A.tsx", "<button>Go</button>\n<img src={a} />\n")
        results = fix_a11y(["src/A.tsx"], dry_run=True)
        assert results[0]["changes"] == [
            'line 1: <button> add type="button"',
            'line 2: <img> add alt=""',
        ]
        assert path.read_text() == "<button>Go</button>\n<img src={a} />\n"

    def test_second_run_is_a_no_op(self, write_file):
        path = write_file(
            "src/A.tsx",
            "<button onClick={go}>Go</button>\n<img src={a} />\n<a href='x' target=\"_blank\">x</a>\n",
        )
        assert len(fix_a11y(["src/A.tsx"])[0]["changes"]) == 3
        once = path.read_text()
        assert fix_a11y(["src/A.tsx"]) == []
        assert path.read_text() == once


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:
    def test_every_fixer_has_a_phase(self):
        assert set(FIXERS) == {"react-import", "inline-styles", "memo", "jsdoc", "a11y", "pascal-case"}
        assert all(f.phase for f in FIXERS.values())

    def test_unknown_fixer(self):
        with pytest.raises(KeyError):
            get_fixer("prettier")

    def test_fixers_for_phase(self):
        assert list(fixers_for_phase("performance")) == ["memo"]
        assert list(fixers_for_phase("documentation")) == ["jsdoc"]

    def test_run_fixer_collects_files(self, write_file):
        write_file("src/components/A.tsx", "<button>Go</button>\n")
        write_file("src/components/B.tsx", '<button type="button">Go</button>\n')
        results = run_fixer(get_fixer("a11y"), "src", dry_run=True)
        assert [r["file"] for r in results] == ["src/components/A.tsx"]

    def test_memo_skips_index_and_tests(self, write_file):
        write_file("src/components/index.tsx", "function X() {}\nexport default X;\n")
        write_file("src/components/A.test.tsx", "function X() {}\nexport default X;\n")
        assert run_fixer(get_fixer("memo"), "src", dry_run=True) == []
