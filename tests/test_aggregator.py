"""Batch aggregation, ordering and thread-pool fan-out."""

from __future__ import annotations

from pathlib import Path

import pytest

from mcp_unilint.domain.models import FileResult, Finding, RawOccurrence
from mcp_unilint.services.aggregator import aggregate, analyze_paths
from mcp_unilint.services.analyzer import FileAnalyzer
from mcp_unilint.services.dedup import OccurrenceDeduplicator
from mcp_unilint.services.knowledge_base import KnowledgeBase


def _result(file: str, file_type: str, *severities: str, failed: bool = False) -> FileResult:
    result = FileResult(file=file, type=file_type, failed=failed)
    for severity in severities:
        result.add_finding(Finding(message=severity, severity=severity))
    return result


def test_aggregate_counts_every_bucket() -> None:
    summary = aggregate(
        [
            _result("b.js", "javascript", "error", "warning", "info", "info"),
            _result("a.css", "css", "warning"),
            _result("c.js", "javascript", "error", failed=True),
        ]
    )

    assert summary.counts() == {
        "totalFiles": 3,
        "jsFiles": 2,
        "cssFiles": 1,
        "errors": 2,
        "warnings": 2,
        "info": 2,
        "failedFiles": 1,
    }
    assert summary.has_errors
    assert [result.file for result in summary.javascript] == ["b.js", "c.js"]
    assert [result.file for result in summary.results] == ["b.js", "c.js", "a.css"]


def test_empty_batch_has_no_errors() -> None:
    summary = aggregate([])

    assert summary.total_files == 0
    assert not summary.has_errors


@pytest.mark.parametrize("workers", [1, 4])
def test_analyze_paths_orders_by_path(
    knowledge_base: KnowledgeBase, tmp_path: Path, workers: int
) -> None:
    paths = []
    for index in range(6):
        path = tmp_path / f"file{index}.js"
        path.write_text("let x = 1;\nescape(s);\n", encoding="utf-8")
        paths.append(str(path))
    paths.reverse()

    summary = analyze_paths(paths, FileAnalyzer(knowledge_base), max_workers=workers)

    assert [result.file for result in summary.results] == sorted(paths)
    assert summary.errors == 6
    assert summary.info == 6
    assert summary.js_files == 6


def test_failed_file_does_not_stop_batch(knowledge_base: KnowledgeBase, tmp_path: Path) -> None:
    good = tmp_path / "good.js"
    good.write_text("let x = 1;", encoding="utf-8")
    bad = tmp_path / "bad.js"
    bad.write_text("let = ;", encoding="utf-8")

    summary = analyze_paths([str(good), str(bad)], FileAnalyzer(knowledge_base), max_workers=2)

    assert summary.total_files == 2
    assert summary.failed_files == 1
    assert summary.errors == 1
    assert summary.info == 1


def test_deduplicator_admits_each_key_once() -> None:
    seen = OccurrenceDeduplicator()
    call = RawOccurrence(kind="call", display_name="Promise.any()", line=1, column=1)
    member = RawOccurrence(kind="member", display_name="Promise.any", line=1, column=1)
    elsewhere = RawOccurrence(kind="member", display_name="Promise.any", line=2, column=1)

    assert seen.admit(call, "promise-any")
    assert not seen.admit(member, "promise-any")
    assert seen.admit(elsewhere, "promise-any")
    assert seen.admit(member, "Promise")
    assert len(seen) == 3
