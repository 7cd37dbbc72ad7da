"""
Per-file analysis: extraction, resolution, dedup and classification.

Every entry point returns a :class:`FileResult`; per-file failures are
captured inside that result and never raised to the caller.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..domain.models import CSS, JAVASCRIPT, FileResult, Finding
from .analysis_audit import record_failure_event
from .classifier import Classifier, Severity
from .dedup import OccurrenceDeduplicator
from .failure_reason import AnalysisFailure, FailureReason
from .knowledge_base import KnowledgeBase
from .lint_config import DEFAULT_MAX_FILE_BYTES
from .resolver import IdentifierResolver
from .script_extractor import (
    SCRIPT_SUFFIXES,
    ScriptFeatureExtractor,
    language_for,
    parse_script,
)
from .stylesheet_extractor import iter_stylesheet_occurrences

_LOG = logging.getLogger(__name__)

STYLESHEET_SUFFIXES = frozenset({".css", ".scss", ".sass", ".less"})

_FAILURE_PREFIX = {
    JAVASCRIPT: "Failed to analyze file",
    CSS: "Failed to analyze CSS file",
}


def file_type_for(path: str | Path) -> str | None:
    """Return ``"javascript"``, ``"css"`` or None for unsupported files."""

    suffix = Path(path).suffix.lower()
    if suffix in SCRIPT_SUFFIXES:
        return JAVASCRIPT
    if suffix in STYLESHEET_SUFFIXES:
        return CSS
    return None


class FileAnalyzer:
    """
    Analyzes single files against one knowledge base and baseline filter.

    The analyzer itself holds only read-only collaborators; everything that
    changes during a scan (dedup state, the result) is created per call, so
    one instance may serve several worker threads.
    """

    def __init__(
        self,
        knowledge_base: KnowledgeBase,
        baseline_filter: str = "all",
        max_file_bytes: int = DEFAULT_MAX_FILE_BYTES,
    ) -> None:
        self._resolver = IdentifierResolver(knowledge_base)
        self._classifier = Classifier(knowledge_base, baseline_filter)
        self._extractor = ScriptFeatureExtractor()
        self._max_file_bytes = max_file_bytes

    def analyze_path(self, path: str | Path) -> FileResult:
        """Read and analyze ``path``, dispatching on its extension."""

        file_type = file_type_for(path) or JAVASCRIPT
        result = FileResult(file=str(path), type=file_type)
        try:
            source = self._read(Path(path))
        except AnalysisFailure as failure:
            self._fail(result, failure)
            return result
        if file_type == CSS:
            return self._analyze_stylesheet(source, result)
        return self._analyze_script(source, result)

    def analyze_script_source(
        self, source: str, file: str = "<input>.js"
    ) -> FileResult:
        result = FileResult(file=file, type=JAVASCRIPT)
        return self._analyze_script(source.encode("utf-8"), result)

    def analyze_stylesheet_source(
        self, source: str, file: str = "<input>.css"
    ) -> FileResult:
        result = FileResult(file=file, type=CSS)
        return self._analyze_stylesheet(source.encode("utf-8"), result)

    def _read(self, path: Path) -> bytes:
        try:
            size = path.stat().st_size
            if size > self._max_file_bytes:
                raise AnalysisFailure(
                    FailureReason.MAX_FILE_BYTES,
                    "File exceeds the maximum allowed size.",
                )
            return path.read_bytes()
        except OSError as exc:
            raise AnalysisFailure(FailureReason.UNREADABLE, str(exc)) from exc

    def _analyze_script(self, source: bytes, result: FileResult) -> FileResult:
        try:
            tree = parse_script(source, language_for(result.file))
            occurrences = self._extractor.extract(tree)
        except AnalysisFailure as failure:
            self._fail(result, failure, len(source))
            return result

        seen = OccurrenceDeduplicator()
        for occurrence in occurrences:
            feature_id = self._resolver.resolve(occurrence.display_name)
            if feature_id is None:
                continue
            if not seen.admit(occurrence, feature_id):
                continue
            self._classifier.classify(occurrence, feature_id, result)
        _LOG.debug(
            "Analyzed %s: %d occurrences, %d features",
            result.file,
            len(occurrences),
            len(result.features),
        )
        return result

    def _analyze_stylesheet(self, source: bytes, result: FileResult) -> FileResult:
        try:
            text = source.decode("utf-8")
        except UnicodeDecodeError as exc:
            failure = AnalysisFailure(
                FailureReason.UNREADABLE, f"File is not valid UTF-8 ({exc.reason})."
            )
            self._fail(result, failure, len(source))
            return result

        seen = OccurrenceDeduplicator()
        for occurrence in iter_stylesheet_occurrences(text):
            if not seen.admit(occurrence):
                continue
            self._classifier.classify(occurrence, occurrence.key or "", result)
        _LOG.debug("Analyzed %s: %d features", result.file, len(result.features))
        return result

    @staticmethod
    def _fail(
        result: FileResult, failure: AnalysisFailure, byte_count: int | None = None
    ) -> None:
        _LOG.warning("Unable to analyze %s: %s", result.file, failure.detail)
        result.failed = True
        result.add_finding(
            Finding(
                message=f"{_FAILURE_PREFIX[result.type]}: {failure.detail}",
                severity=Severity.ERROR.value,
            )
        )
        record_failure_event(failure.reason, result.type, byte_count)
