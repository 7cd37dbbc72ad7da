"""Fold per-file results into a batch summary."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Sequence

from ..domain.models import CSS, AggregateSummary, FileResult
from .analyzer import FileAnalyzer

_LOG = logging.getLogger(__name__)


class SummaryAccumulator:
    """
    Single merge point for FileResults.

    ``add`` is guarded by a lock so worker threads may merge directly; the
    accumulator performs no filtering of its own.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._results: list[FileResult] = []

    def add(self, result: FileResult) -> None:
        with self._lock:
            self._results.append(result)

    def extend(self, results: Iterable[FileResult]) -> None:
        for result in results:
            self.add(result)

    def summary(self) -> AggregateSummary:
        """Return counts plus per-file detail, ordered by file path."""

        with self._lock:
            ordered = sorted(self._results, key=lambda item: item.file)
        css = tuple(result for result in ordered if result.type == CSS)
        javascript = tuple(result for result in ordered if result.type != CSS)
        return AggregateSummary(
            total_files=len(ordered),
            js_files=len(javascript),
            css_files=len(css),
            errors=sum(len(result.errors) for result in ordered),
            warnings=sum(len(result.warnings) for result in ordered),
            info=sum(len(result.info) for result in ordered),
            failed_files=sum(1 for result in ordered if result.failed),
            javascript=javascript,
            css=css,
        )


def aggregate(results: Iterable[FileResult]) -> AggregateSummary:
    accumulator = SummaryAccumulator()
    accumulator.extend(results)
    return accumulator.summary()


def analyze_paths(
    paths: Sequence[str | Path],
    analyzer: FileAnalyzer,
    *,
    max_workers: int = 1,
) -> AggregateSummary:
    """
    Analyze every path and return the aggregate summary.

    With ``max_workers > 1`` files are analyzed on a thread pool; each file's
    analysis is independent and only the accumulator is shared.
    """

    accumulator = SummaryAccumulator()
    if max_workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            for result in executor.map(analyzer.analyze_path, paths):
                accumulator.add(result)
    else:
        for path in paths:
            accumulator.add(analyzer.analyze_path(path))

    summary = accumulator.summary()
    _LOG.debug(
        "Analyzed %d files: %d errors, %d warnings",
        summary.total_files,
        summary.errors,
        summary.warnings,
    )
    return summary
