"""Script occurrence extraction from tree-sitter trees."""

from __future__ import annotations

import pytest

from mcp_unilint.services.failure_reason import AnalysisFailure, FailureReason
from mcp_unilint.services.script_extractor import (
    TYPESCRIPT_LANGUAGE,
    ScriptFeatureExtractor,
    language_for,
)


def _names(source: str) -> list[str]:
    occurrences = ScriptFeatureExtractor().extract_source(source.encode("utf-8"))
    return [occurrence.display_name for occurrence in occurrences]


def test_lexical_declarations() -> None:
    assert _names("let x = 1;") == ["let declaration", "x"]
    assert "const declaration" in _names("const y = 2;")
    assert "let declaration" not in _names("var z = 3;")


def test_member_access_reports_compound_and_object() -> None:
    occurrences = ScriptFeatureExtractor().extract_source(b"Promise.any([a, b]);")
    by_name = {occurrence.display_name: occurrence for occurrence in occurrences}

    assert by_name["Promise.any()"].key == "promise-any"
    assert by_name["Promise.any"].key == "promise-any"
    assert "Promise" in by_name
    assert (by_name["Promise"].line, by_name["Promise"].column) == (1, 1)
    # The object identifier is reported once, by the member rule.
    assert [occurrence.display_name for occurrence in occurrences].count("Promise") == 1


def test_object_calls_carry_generic_key() -> None:
    occurrences = ScriptFeatureExtractor().extract_source(b"Object.hasOwn(o, 'k');")
    call = next(occurrence for occurrence in occurrences if occurrence.kind == "call")

    assert call.display_name == "Object.hasOwn()"
    assert call.key == "object-object"


def test_constructors_and_special_calls() -> None:
    names = _names("const m = new WeakMap(); escape(s); Symbol('t'); new Thing();")

    assert "new WeakMap()" in names
    assert "escape" in names
    assert "Symbol()" in names
    assert "new Thing()" not in names


def test_functions_and_generators() -> None:
    names = _names(
        "async function load() { await fetchAll(); }\n"
        "const f = async () => 1;\n"
        "function* gen() { yield 1; }\n"
        "async function* stream() {}\n"
    )

    assert names.count("async function") == 1
    assert "function declaration" in names
    assert "await expression" in names
    assert "async arrow function" in names
    assert "arrow function" in names
    assert "generator function" in names
    assert "yield expression" in names
    assert "async generator function" in names
    assert names.count("generator function") == 1


def test_class_and_object_methods() -> None:
    names = _names(
        "class A { async m() { await x; } *g() { yield 1; } async *s() {} plain() {} }\n"
        "const o = { async load() {}, run() {} };\n"
    )

    assert names.count("async function expression") == 2
    assert names.count("function expression") == 4
    assert names.count("generator expression") == 1
    assert names.count("async generator expression") == 1


def test_modern_syntax_constructs() -> None:
    names = _names(
        "const {alpha} = obj;\n"
        "const [first] = list;\n"
        "call(...args);\n"
        "const s = `hi`;\n"
        "for (const entry of list) {}\n"
        "const big = 10n;\n"
        "const v = left ?? right;\n"
        "const w = obj?.prop;\n"
        "class Widget {}\n"
    )

    for expected in (
        "object destructuring",
        "array destructuring",
        "spread syntax",
        "template literal",
        "for...of loop",
        "BigInt literal",
        "nullish coalescing operator",
        "optional chaining",
        "class declaration",
    ):
        assert expected in names


def test_for_await_loop_and_plain_for_in() -> None:
    assert "for await...of loop" in _names(
        "async function f() { for await (const chunk of stream) {} }"
    )
    names = _names("for (const name in obj) {}")
    assert "for...of loop" not in names
    assert "for await...of loop" not in names


def test_loop_header_declarations() -> None:
    assert _names("for (const v of arr) {}")[:2] == ["const declaration", "for...of loop"]
    assert _names("for (let key in obj) {}")[0] == "let declaration"
    assert "let declaration" not in _names("for (var v of arr) {}")


def test_optional_chain_reported_once_per_expression() -> None:
    occurrences = ScriptFeatureExtractor().extract_source(b"a?.b?.c;\nx.y?.[0]?.();")
    chains = [
        (occurrence.line, occurrence.column)
        for occurrence in occurrences
        if occurrence.display_name == "optional chaining"
    ]

    assert chains == [(1, 1), (2, 1)]
    assert "optional chaining" not in _names("a.b.c;")


def test_catch_binding() -> None:
    assert _names("try {} catch {}").count("optional catch binding") == 1
    assert "optional catch binding" not in _names("try {} catch (err) {}")


def test_positions_are_one_based() -> None:
    occurrences = ScriptFeatureExtractor().extract_source(b"\n  let x = 1;")
    declaration = occurrences[0]

    assert declaration.display_name == "let declaration"
    assert (declaration.line, declaration.column) == (2, 3)


def test_occurrences_keep_document_order() -> None:
    names = _names("let a1 = 1;\nconst b1 = 2;")

    assert names.index("let declaration") < names.index("const declaration")


def test_syntax_error_raises_unparseable() -> None:
    with pytest.raises(AnalysisFailure) as excinfo:
        ScriptFeatureExtractor().extract_source(b"let = ;")

    assert excinfo.value.reason is FailureReason.UNPARSEABLE
    assert excinfo.value.detail.startswith("Parsing error at line 1")


def test_typescript_files_use_typescript_grammar() -> None:
    assert language_for("component.ts") is TYPESCRIPT_LANGUAGE
    names = [
        occurrence.display_name
        for occurrence in ScriptFeatureExtractor().extract_source(
            b"const total: number = 1;", TYPESCRIPT_LANGUAGE
        )
    ]
    assert "const declaration" in names
