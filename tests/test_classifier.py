"""Tests for end-to-end TSX layer classification."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from tsxlayers.classifier import classify_document, classify_document_with_diagnostics
from tsxlayers.resolver import layer_at
from tsxlayers.types import ClassifiedRegion, regions_to_dict
from tsxlayers.vocabulary import vocabulary_from_dict


def _layers_of(regions: list[ClassifiedRegion], text: str, needle: str, occurrence: int = 0) -> set[object]:
    start = -1
    for _ in range(occurrence + 1):
        start = text.index(needle, start + 1)
    return {layer_at(regions, pos) for pos in range(start, start + len(needle))}


def assert_segment(text: str, needle: str, layer: str, *, occurrence: int = 0) -> None:
    regions = classify_document(text)
    assert _layers_of(regions, text, needle, occurrence) == {layer}, regions_to_dict(regions)


def _assert_partition(regions: list[ClassifiedRegion], text_length: int) -> None:
    for region in regions:
        assert 0 <= region.start < region.end <= text_length
    for left, right in zip(regions, regions[1:]):
        assert left.end <= right.start
        if left.end == right.start:
            assert left.layer != right.layer


COMPONENT = """\
"use client";
import React, { useState } from "react";
import type { FC } from "react";

// Props for the counter
interface CounterProps {
  label: string;
  start?: number;
}

enum Mode { Idle, Busy }

export const Counter: FC<CounterProps> = ({ label, start = 0 }) => {
  const [count, setCount] = useState<number>(start);
  const mode = count > 10 ? Mode.Busy : Mode.Idle;
  return (
    <div key="root" className="counter">
      <button onClick={() => setCount(count + 1)}>{label}</button>
      <span {...{ mode }} />
    </div>
  );
};
"""


class TestScenarios:
    def test_plain_statement_is_single_base_region(self) -> None:
        assert regions_to_dict(classify_document("const x = 1;")) == [
            {"start": 0, "end": 12, "layer": "javascript"},
        ]

    def test_variable_annotation_is_type_layer(self) -> None:
        text = 'const x: string = "hello";'
        regions = classify_document(text)
        assert regions_to_dict(regions) == [
            {"start": 0, "end": 7, "layer": "javascript"},
            {"start": 7, "end": 15, "layer": "typescript"},
            {"start": 15, "end": 26, "layer": "javascript"},
        ]

    def test_markup_key_attribute_is_library_layer(self) -> None:
        text = '<li key="1">item</li>'
        assert_segment(text, "key", "react")
        assert_segment(text, "<li", "jsx")
        assert_segment(text, '="1">', "jsx")
        assert_segment(text, "item", "jsx")
        assert_segment(text, "</li>", "jsx")

    def test_hook_call_name_is_library_layer(self) -> None:
        regions = classify_document("useState(0)")
        assert regions_to_dict(regions) == [
            {"start": 0, "end": 8, "layer": "react"},
            {"start": 8, "end": 11, "layer": "javascript"},
        ]

    def test_nested_type_arguments_resolved_by_bracket_depth(self) -> None:
        text = "new Map<string, Set<number>>()"
        regions = classify_document(text)
        assert regions_to_dict(regions) == [
            {"start": 0, "end": 7, "layer": "javascript"},
            {"start": 7, "end": 28, "layer": "typescript"},
            {"start": 28, "end": 30, "layer": "javascript"},
        ]

    def test_empty_input_yields_no_regions(self) -> None:
        assert classify_document("") == []


class TestInputHandling:
    def test_whitespace_only_yields_no_regions(self) -> None:
        assert classify_document("  \n\t\n") == []

    def test_non_string_input_raises_type_error(self) -> None:
        with pytest.raises(TypeError):
            classify_document(b"const x = 1;")  # type: ignore[arg-type]

    def test_malformed_input_degrades_without_raising(self) -> None:
        text = "const = <div className={ ;\ninterface {"
        regions = classify_document(text)
        _assert_partition(regions, len(text))

    def test_offsets_are_character_offsets_for_non_ascii_text(self) -> None:
        text = 'const s = "héllo \U0001f600"; const n: number = 1;'
        regions = classify_document(text)
        annotation = text.index(": number")
        typed = [region for region in regions if region.layer == "typescript"]
        assert len(typed) == 1
        assert typed[0].start == annotation
        assert typed[0].end == annotation + len(": number")
        _assert_partition(regions, len(text))


class TestTypeLayer:
    def test_interface_is_entirely_type_layer(self) -> None:
        text = "interface Props { name: string; }"
        assert regions_to_dict(classify_document(text)) == [
            {"start": 0, "end": len(text), "layer": "typescript"},
        ]

    def test_type_alias_is_type_layer(self) -> None:
        assert_segment("type Id = string | number;", "type Id = string | number", "typescript")

    def test_enum_declaration_and_member_access(self) -> None:
        text = "enum Color { Red, Green }\nconst c = Color.Red;"
        regions = classify_document(text)
        assert _layers_of(regions, text, "enum Color { Red, Green }") == {"typescript"}
        assert _layers_of(regions, text, "Color.Red") == {"typescript"}
        assert _layers_of(regions, text, "const c") == {"javascript"}

    def test_member_access_on_non_enum_stays_base(self) -> None:
        assert_segment("const c = palette.Red;", "palette.Red", "javascript")

    def test_as_expression_operand_base_and_tail_type(self) -> None:
        text = "const v = value as string;"
        regions = classify_document(text)
        assert _layers_of(regions, text, "value") == {"javascript"}
        assert _layers_of(regions, text, " as string") == {"typescript"}

    def test_non_null_assertion_marks_bang(self) -> None:
        text = "const el = ref.current!;"
        regions = classify_document(text)
        assert _layers_of(regions, text, "!") == {"typescript"}
        assert _layers_of(regions, text, "ref.current") == {"javascript"}

    def test_decorator_is_type_layer(self) -> None:
        text = "@sealed\nclass Greeter {}"
        regions = classify_document(text)
        assert _layers_of(regions, text, "@sealed") == {"typescript"}
        assert _layers_of(regions, text, "class Greeter {}") == {"javascript"}

    def test_function_type_parameters_and_return_type(self) -> None:
        text = "function id<T>(value: T): T { return value; }"
        regions = classify_document(text)
        assert _layers_of(regions, text, "<T>") == {"typescript"}
        assert _layers_of(regions, text, ": T", occurrence=0) == {"typescript"}
        assert _layers_of(regions, text, ": T", occurrence=1) == {"typescript"}
        assert _layers_of(regions, text, "function id") == {"javascript"}
        assert _layers_of(regions, text, "return value;") == {"javascript"}

    def test_optional_parameter_marker_joins_annotation(self) -> None:
        text = "function f(a?: number) {}"
        regions = classify_document(text)
        assert _layers_of(regions, text, "?: number") == {"typescript"}
        assert _layers_of(regions, text, "a") == {"javascript"}

    def test_class_member_modifiers_are_type_layer(self) -> None:
        text = "class Box { private readonly size: number = 1; }"
        regions = classify_document(text)
        assert _layers_of(regions, text, "private") == {"typescript"}
        assert _layers_of(regions, text, "readonly") == {"typescript"}
        assert _layers_of(regions, text, ": number") == {"typescript"}
        assert _layers_of(regions, text, "size") == {"javascript"}
        assert _layers_of(regions, text, "= 1;") == {"javascript"}

    def test_abstract_keyword_is_type_layer(self) -> None:
        text = "abstract class Shape {}"
        regions = classify_document(text)
        assert _layers_of(regions, text, "abstract") == {"typescript"}
        assert _layers_of(regions, text, "class Shape {}") == {"javascript"}

    def test_type_only_import_is_type_layer(self) -> None:
        text = 'import type { Config } from "./config";'
        assert regions_to_dict(classify_document(text)) == [
            {"start": 0, "end": len(text), "layer": "typescript"},
        ]

    def test_using_keyword_is_type_layer(self) -> None:
        text = "using res = open();"
        regions = classify_document(text)
        assert _layers_of(regions, text, "using") == {"typescript"}
        assert _layers_of(regions, text, "open()") == {"javascript"}

    def test_await_using_keywords_are_type_layer(self) -> None:
        text = "async function f() {\n  await using res = open();\n}"
        regions = classify_document(text)
        assert _layers_of(regions, text, "await using") == {"typescript"}
        assert _layers_of(regions, text, "res = open()") == {"javascript"}

    def test_plain_assignment_is_not_using(self) -> None:
        assert_segment("res = open();", "res = open();", "javascript")

    def test_enum_access_before_declaration_stays_base(self) -> None:
        text = "const early = Mode.A;\nenum Mode { A }"
        regions = classify_document(text)
        assert _layers_of(regions, text, "Mode.A") == {"javascript"}
        assert _layers_of(regions, text, "enum Mode { A }") == {"typescript"}

    def test_satisfies_operand_base_and_tail_type(self) -> None:
        text = "const cfg = { a: 1 } satisfies Config;"
        regions = classify_document(text)
        assert _layers_of(regions, text, "{ a: 1 }") == {"javascript"}
        assert _layers_of(regions, text, " satisfies Config") == {"typescript"}

    @pytest.mark.parametrize(
        "text",
        [
            "declare const VERSION: string;",
            "namespace Utils { export const x = 1; }",
            'declare module "lib" { export function f(): void; }',
        ],
    )
    def test_ambient_and_namespace_blocks_are_type_layer(self, text: str) -> None:
        assert_segment(text, text.rstrip(";"), "typescript")

    def test_instantiation_expression_type_arguments(self) -> None:
        text = "const StringSet = Set<string>;"
        regions = classify_document(text)
        assert _layers_of(regions, text, "<string>") == {"typescript"}
        assert _layers_of(regions, text, "Set", occurrence=1) == {"javascript"}

    def test_generic_arrow_type_parameters(self) -> None:
        # the trailing comma keeps `<T,>` from reading as a tag
        text = "const id = <T,>(x: T) => x;"
        regions = classify_document(text)
        assert _layers_of(regions, text, "<T,>") == {"typescript"}
        assert _layers_of(regions, text, "(x") == {"javascript"}
        assert _layers_of(regions, text, " => x") == {"javascript"}

    def test_override_and_abstract_method_modifiers(self) -> None:
        text = (
            "abstract class Shape {\n"
            "  abstract area(): number;\n"
            "}\n"
            "class Square extends Shape {\n"
            "  override area(): number { return 4; }\n"
            "}"
        )
        regions = classify_document(text)
        assert _layers_of(regions, text, "abstract", occurrence=1) == {"typescript"}
        assert _layers_of(regions, text, "override") == {"typescript"}
        assert _layers_of(regions, text, ": number", occurrence=1) == {"typescript"}
        assert _layers_of(regions, text, "return 4;") == {"javascript"}


class TestLibraryLayer:
    def test_directive_is_library_layer(self) -> None:
        text = '"use client";'
        assert regions_to_dict(classify_document(text)) == [
            {"start": 0, "end": len(text), "layer": "react"},
        ]

    def test_other_string_statement_is_base(self) -> None:
        text = '"use strict";'
        assert regions_to_dict(classify_document(text)) == [
            {"start": 0, "end": len(text), "layer": "javascript"},
        ]

    def test_namespaced_hook_call(self) -> None:
        text = "React.useEffect(() => {}, []);"
        regions = classify_document(text)
        assert _layers_of(regions, text, "React.useEffect") == {"react"}
        assert _layers_of(regions, text, "(() => {}, []);") == {"javascript"}

    def test_custom_hook_is_not_library(self) -> None:
        assert_segment("useMyData();", "useMyData", "javascript")

    def test_namespace_identifier_is_library(self) -> None:
        text = 'import React from "react";'
        regions = classify_document(text)
        assert _layers_of(regions, text, "React") == {"react"}
        assert _layers_of(regions, text, "import ") == {"javascript"}

    def test_library_type_reference_escalates(self) -> None:
        text = "let node: ReactNode;"
        regions = classify_document(text)
        assert _layers_of(regions, text, "ReactNode") == {"react"}
        assert _layers_of(regions, text, ": ") == {"typescript"}

    def test_namespaced_type_reference_escalates(self) -> None:
        text = "const App: React.FC = render;"
        regions = classify_document(text)
        assert _layers_of(regions, text, "React.FC") == {"react"}
        assert _layers_of(regions, text, "render") == {"javascript"}

    def test_library_types_in_type_only_import(self) -> None:
        text = 'import type { FC, Config } from "react";'
        regions = classify_document(text)
        assert _layers_of(regions, text, "FC") == {"react"}
        assert _layers_of(regions, text, "Config") == {"typescript"}

    def test_element_factory_call(self) -> None:
        text = 'React.createElement(Button, { key: "a" });'
        regions = classify_document(text)
        assert _layers_of(regions, text, "React.createElement") == {"react"}
        assert _layers_of(regions, text, "Button") == {"react"}
        assert _layers_of(regions, text, "key") == {"react"}
        assert _layers_of(regions, text, '"a"') == {"javascript"}

    def test_extends_with_type_arguments(self) -> None:
        text = "class App extends React.Component<Props> {}"
        regions = classify_document(text)
        assert _layers_of(regions, text, "<Props>") == {"typescript"}
        assert _layers_of(regions, text, "React") == {"react"}
        assert _layers_of(regions, text, "class App extends") == {"javascript"}

    def test_vocabulary_override_adds_hook(self) -> None:
        text = "useMyData();"
        vocabulary = vocabulary_from_dict({"hooks": {"extend": ["useMyData"]}})
        regions = classify_document(text, vocabulary=vocabulary)
        assert _layers_of(regions, text, "useMyData") == {"react"}

    def test_bare_element_factory_is_plain_utility(self) -> None:
        text = "createElement(Button, { key: 1 });"
        regions = classify_document(text)
        assert _layers_of(regions, text, "createElement") == {"react"}
        assert _layers_of(regions, text, "Button") == {"javascript"}
        assert _layers_of(regions, text, "key") == {"javascript"}

    def test_interface_extending_library_type(self) -> None:
        text = "interface BoxProps extends HTMLAttributes<HTMLDivElement> { tone: string; }"
        regions = classify_document(text)
        assert _layers_of(regions, text, "HTMLAttributes") == {"react"}
        assert _layers_of(regions, text, "HTMLDivElement") == {"typescript"}
        assert _layers_of(regions, text, "<") == {"typescript"}

    def test_mixed_import_with_inline_type_specifier(self) -> None:
        text = 'import { type FC, useState } from "react";'
        regions = classify_document(text)
        assert _layers_of(regions, text, "type ") == {"typescript"}
        assert _layers_of(regions, text, "FC") == {"react"}
        assert _layers_of(regions, text, "useState") == {"javascript"}
        assert _layers_of(regions, text, "import {") == {"javascript"}


class TestMarkupLayer:
    def test_reserved_ref_attribute_and_plain_attribute(self) -> None:
        text = '<div ref={node} className="a" />'
        regions = classify_document(text)
        assert _layers_of(regions, text, "ref") == {"react"}
        assert _layers_of(regions, text, "className") == {"jsx"}
        assert _layers_of(regions, text, '={') == {"jsx"}
        assert _layers_of(regions, text, "node") == {"javascript"}
        assert _layers_of(regions, text, "/>") == {"jsx"}

    def test_expression_container_braces_are_markup(self) -> None:
        text = "<p>{count}</p>"
        regions = classify_document(text)
        assert _layers_of(regions, text, "{") == {"jsx"}
        assert _layers_of(regions, text, "}") == {"jsx"}
        assert _layers_of(regions, text, "count") == {"javascript"}

    def test_spread_attribute(self) -> None:
        text = "<div {...props} />"
        regions = classify_document(text)
        assert _layers_of(regions, text, "{...") == {"jsx"}
        assert _layers_of(regions, text, "props") == {"javascript"}
        assert _layers_of(regions, text, "}") == {"jsx"}

    def test_fragment_is_markup(self) -> None:
        text = "<>hi</>"
        assert regions_to_dict(classify_document(text)) == [
            {"start": 0, "end": len(text), "layer": "jsx"},
        ]

    def test_namespaced_tag_name_is_library(self) -> None:
        text = "<React.Fragment>x</React.Fragment>"
        regions = classify_document(text)
        assert _layers_of(regions, text, "React.Fragment", occurrence=0) == {"react"}
        assert _layers_of(regions, text, "React.Fragment", occurrence=1) == {"react"}
        assert layer_at(regions, 0) == "jsx"
        assert _layers_of(regions, text, "</") == {"jsx"}
        assert layer_at(regions, len(text) - 1) == "jsx"

    def test_tag_type_arguments_are_type_layer(self) -> None:
        text = "<Select<Option> value={v} />"
        regions = classify_document(text)
        assert _layers_of(regions, text, "<Option>") == {"typescript"}
        assert _layers_of(regions, text, "<Select") == {"jsx"}
        assert _layers_of(regions, text, "value") == {"jsx"}
        assert _layers_of(regions, text, "/>") == {"jsx"}

    def test_unterminated_spread_leaves_operand_unmarked(self) -> None:
        text = "<a {...props"
        regions = classify_document(text)
        assert layer_at(regions, len(text) - 1) != "jsx"


class TestComments:
    def test_leading_line_comment_is_base(self) -> None:
        text = "// hi\nconst x = 1;"
        regions = classify_document(text)
        assert _layers_of(regions, text, "// hi") == {"javascript"}

    def test_trailing_block_comment_is_base(self) -> None:
        text = "const x = 1; /* note */"
        regions = classify_document(text)
        assert _layers_of(regions, text, "/* note */") == {"javascript"}

    def test_comment_inside_expression_container(self) -> None:
        text = "<p>{/* todo */}</p>"
        regions = classify_document(text)
        assert _layers_of(regions, text, "/* todo */") == {"javascript"}

    def test_comment_after_last_token_is_base(self) -> None:
        text = "const x = 1;\n// end of file"
        regions = classify_document(text)
        assert _layers_of(regions, text, "// end of file") == {"javascript"}

    def test_block_comments_at_both_ends(self) -> None:
        text = "/* header */\nconst x = 1;\n/* a */\n"
        regions = classify_document(text)
        assert _layers_of(regions, text, "/* header */") == {"javascript"}
        assert _layers_of(regions, text, "/* a */") == {"javascript"}

    def test_comment_only_document(self) -> None:
        text = "// just a note"
        assert regions_to_dict(classify_document(text)) == [
            {"start": 0, "end": len(text), "layer": "javascript"},
        ]


class TestWholeDocument:
    def test_component_partition_and_layers(self) -> None:
        regions = classify_document(COMPONENT)
        _assert_partition(regions, len(COMPONENT))
        assert _layers_of(regions, COMPONENT, '"use client";') == {"react"}
        assert _layers_of(regions, COMPONENT, "// Props for the counter") == {"javascript"}
        assert _layers_of(regions, COMPONENT, "interface CounterProps") == {"typescript"}
        assert _layers_of(regions, COMPONENT, "useState", occurrence=1) == {"react"}
        assert _layers_of(regions, COMPONENT, "<number>") == {"typescript"}
        assert _layers_of(regions, COMPONENT, "Mode.Busy") == {"typescript"}
        assert _layers_of(regions, COMPONENT, "key", occurrence=0) == {"react"}
        assert _layers_of(regions, COMPONENT, "className") == {"jsx"}
        assert _layers_of(regions, COMPONENT, "setCount(count + 1)") == {"javascript"}

    def test_plain_document_covers_every_non_whitespace_character(self) -> None:
        text = "const x = 1;\nlet y = x + 2;\nif (y > 2) { console.log(y); }\n"
        regions = classify_document(text)
        _assert_partition(regions, len(text))
        for pos, ch in enumerate(text):
            if not ch.isspace():
                assert layer_at(regions, pos) == "javascript", (pos, ch)

    def test_classification_is_deterministic(self) -> None:
        first = regions_to_dict(classify_document(COMPONENT))
        second = regions_to_dict(classify_document(COMPONENT))
        assert first == second

    def test_diagnostics_report_enums_and_coverage(self) -> None:
        result = classify_document_with_diagnostics(COMPONENT)
        assert result.text_length == len(COMPONENT)
        assert result.diagnostics["enum_names"] == ["Mode"]
        assert result.diagnostics["parse_error_count"] == 0
        assert result.diagnostics["comment_count"] == 1
        assert int(result.diagnostics["candidate_count"]) > 0
        covered = sum(region.end - region.start for region in result.regions)
        assert sum(result.layer_coverage.values()) == covered
        assert set(result.layer_coverage) == {"javascript", "typescript", "jsx", "react"}
        assert all(count > 0 for count in result.layer_coverage.values())
