"""Line-oriented stylesheet pattern matching."""

from __future__ import annotations

from mcp_unilint.services.stylesheet_extractor import (
    extract_declaration_value,
    extract_stylesheet_occurrences,
)


def test_display_grid_matches_general_and_specific_rules() -> None:
    occurrences = extract_stylesheet_occurrences("display: grid;")

    assert [(occ.key, occ.property, occ.column) for occ in occurrences] == [
        ("grid", "grid", 10),
        ("grid", "display", 1),
    ]
    assert occurrences[1].value == "grid"


def test_vendor_prefixed_transform_matches_once() -> None:
    occurrences = extract_stylesheet_occurrences("-webkit-transform: rotate(45deg);")

    assert len(occurrences) == 1
    occurrence = occurrences[0]
    assert occurrence.key == "transforms2d"
    assert occurrence.property == "transform"
    assert occurrence.value == "rotate(45deg)"
    assert (occurrence.line, occurrence.column) == (1, 9)


def test_lines_are_numbered_from_one() -> None:
    text = ".card {\n  container-type: inline-size;\n}\n.list:has(> img) {}\n"
    occurrences = extract_stylesheet_occurrences(text)
    by_key = {occ.key: occ for occ in occurrences}

    assert by_key["container-queries"].line == 2
    assert by_key["container-queries"].value == "inline-size"
    assert by_key["has"].line == 4
    assert by_key["has"].column == 6


def test_repeated_matches_on_one_line_are_all_reported() -> None:
    occurrences = extract_stylesheet_occurrences("a { width: calc(1px + calc(2px)); }")

    assert [occ.column for occ in occurrences if occ.key == "calc"] == [12, 23]


def test_matching_ignores_case() -> None:
    assert extract_stylesheet_occurrences("DISPLAY: FLEX;")[0].key == "flexbox"


def test_declaration_value_scan() -> None:
    assert extract_declaration_value("  gap: 1rem;", 2) == "1rem"
    assert extract_declaration_value("  gap: 1rem", 2) == "1rem"
    assert extract_declaration_value("no colon here", 0) == ""
