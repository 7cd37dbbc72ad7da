"""Core entities without I/O for Unilint MCP."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Union

Baseline = Union[str, bool, None]
"""Raw ``status.baseline`` value: ``"high"``, ``"low"``, ``False`` or unknown."""

JAVASCRIPT = "javascript"
CSS = "css"


@dataclass(frozen=True)
class FeatureRecord:
    """Read-only knowledge base entry for one platform capability."""

    feature_id: str
    name: str
    baseline: Baseline
    description: str

    @classmethod
    def from_mapping(cls, feature_id: str, data: Mapping[str, Any]) -> "FeatureRecord":
        status = data.get("status") or {}
        description = data.get("description_html") or data.get("description") or ""
        return cls(
            feature_id=feature_id,
            name=str(data.get("name") or ""),
            baseline=status.get("baseline"),
            description=str(description),
        )


@dataclass(frozen=True)
class RawOccurrence:
    """One usage site emitted by an extractor before resolution."""

    kind: str
    display_name: str
    line: int
    column: int
    key: str | None = None
    property: str | None = None
    value: str | None = None


@dataclass(frozen=True)
class ResolvedFeature:
    """Occurrence bound to a knowledge base record."""

    feature_id: str
    display_name: str
    baseline: Baseline
    line: int
    column: int
    description: str
    property: str | None = None
    value: str | None = None

    def to_mapping(self) -> dict[str, Any]:
        mapping: dict[str, Any] = {
            "name": self.feature_id,
            "displayName": self.display_name,
            "baseline": self.baseline,
            "line": self.line,
            "column": self.column,
            "description": self.description,
        }
        if self.property is not None:
            mapping["property"] = self.property
            mapping["value"] = self.value or ""
        return mapping


@dataclass(frozen=True)
class Finding:
    """A classified occurrence, or a file-level failure when ``feature`` is None."""

    message: str
    severity: str
    feature: ResolvedFeature | None = None

    @property
    def line(self) -> int:
        return self.feature.line if self.feature else 0

    def to_mapping(self) -> dict[str, Any]:
        mapping = self.feature.to_mapping() if self.feature else {}
        mapping["message"] = self.message
        mapping["severity"] = self.severity
        return mapping


@dataclass
class FileResult:
    """Per-file analysis outcome handed to reporting collaborators."""

    file: str
    type: str
    features: list[ResolvedFeature] = field(default_factory=list)
    errors: list[Finding] = field(default_factory=list)
    warnings: list[Finding] = field(default_factory=list)
    info: list[Finding] = field(default_factory=list)
    failed: bool = False

    def bucket(self, severity: str) -> list[Finding]:
        """Return the finding list that owns the given severity."""

        if severity == "error":
            return self.errors
        if severity == "warning":
            return self.warnings
        return self.info

    def add_finding(self, finding: Finding) -> None:
        self.bucket(finding.severity).append(finding)

    def to_mapping(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "type": self.type,
            "features": [feature.to_mapping() for feature in self.features],
            "errors": [finding.to_mapping() for finding in self.errors],
            "warnings": [finding.to_mapping() for finding in self.warnings],
            "info": [finding.to_mapping() for finding in self.info],
        }


@dataclass(frozen=True)
class AggregateSummary:
    """Counts across a batch of FileResults plus the per-file detail."""

    total_files: int
    js_files: int
    css_files: int
    errors: int
    warnings: int
    info: int
    failed_files: int
    javascript: tuple[FileResult, ...] = ()
    css: tuple[FileResult, ...] = ()

    @property
    def has_errors(self) -> bool:
        return self.errors > 0

    @property
    def results(self) -> tuple[FileResult, ...]:
        return self.javascript + self.css

    def counts(self) -> dict[str, int]:
        return {
            "totalFiles": self.total_files,
            "jsFiles": self.js_files,
            "cssFiles": self.css_files,
            "errors": self.errors,
            "warnings": self.warnings,
            "info": self.info,
            "failedFiles": self.failed_files,
        }
