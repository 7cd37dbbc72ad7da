"""Table, compact and JSON rendering of a lint summary."""

from __future__ import annotations

import json

import pytest

from mcp_unilint.domain.models import AggregateSummary, FileResult
from mcp_unilint.services.aggregator import aggregate
from mcp_unilint.services.analyzer import FileAnalyzer
from mcp_unilint.services.formatters import (
    format_compact,
    format_json,
    format_results,
    format_summary,
    format_table,
    truncate_description,
)
from mcp_unilint.services.knowledge_base import KnowledgeBase


@pytest.fixture
def summary(knowledge_base: KnowledgeBase) -> AggregateSummary:
    analyzer = FileAnalyzer(knowledge_base)
    return aggregate(
        [
            analyzer.analyze_script_source("escape(s);\nlet x = 1;", file="app.js"),
            analyzer.analyze_stylesheet_source(".c { container-type: size; }", file="site.css"),
            FileResult(file="clean.js", type="javascript"),
        ]
    )


def test_truncate_description_strips_tags() -> None:
    assert truncate_description("<p>Short <b>text</b></p>") == "Short text"
    assert truncate_description("x" * 150) == "x" * 100 + "..."
    assert truncate_description("") == ""


def test_table_lists_issues_per_file(summary: AggregateSummary) -> None:
    text = format_table(summary)

    assert "JavaScript Files:" in text
    assert "CSS Files:" in text
    assert "  ✗ 1:1 'escape' is baseline limited availability" in text
    assert "  ℹ 2:1 'let declaration' is baseline widely available" in text
    assert "    The let and const declarations." in text
    assert "  ✓ No compatibility issues found" in text


def test_table_quiet_hides_info(summary: AggregateSummary) -> None:
    text = format_table(summary, quiet=True)

    assert "let declaration" not in text
    assert "escape" in text


def test_compact_lines(summary: AggregateSummary) -> None:
    lines = format_compact(summary).splitlines()

    assert "app.js:1:1 error: 'escape' is baseline limited availability" in lines
    assert (
        "site.css:1:6 warning: CSS feature 'container-type: size' is baseline newly available"
        in lines
    )
    assert not any(line.startswith("clean.js") for line in lines)


def test_json_document(summary: AggregateSummary) -> None:
    document = json.loads(format_json(summary))

    assert document["summary"]["totalFiles"] == 3
    assert [entry["file"] for entry in document["javascript"]] == ["app.js", "clean.js"]
    assert document["css"][0]["warnings"][0]["name"] == "container-queries"


def test_summary_block(summary: AggregateSummary) -> None:
    text = format_summary(summary)

    assert "Files analyzed: 3" in text
    assert "Errors: 1" in text
    assert "Warnings: 1" in text
    assert "No compatibility issues found!" not in text


def test_format_results_appends_summary_unless_quiet(summary: AggregateSummary) -> None:
    assert "Summary:" in format_results(summary, "compact")
    assert "Summary:" not in format_results(summary, "compact", quiet=True)
    assert "Summary:" not in format_results(summary, "json")
    assert format_results(summary, "unknown").startswith(format_table(summary))
