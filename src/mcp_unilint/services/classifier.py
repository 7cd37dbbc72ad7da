"""Baseline classification: tier to severity, filter test, finding routing."""

from __future__ import annotations

from enum import Enum

from ..domain.models import Baseline, FileResult, Finding, RawOccurrence, ResolvedFeature
from .knowledge_base import KnowledgeBase


class Severity(Enum):
    """Severity buckets a Finding can belong to."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class BaselineTier(Enum):
    """Compatibility tiers and their raw ``status.baseline`` values."""

    WIDE = "high"
    NEWLY = "low"
    LIMITED = False


_TIER_SEVERITY = {
    BaselineTier.LIMITED: Severity.ERROR,
    BaselineTier.NEWLY: Severity.WARNING,
    BaselineTier.WIDE: Severity.INFO,
}

_TIER_DESCRIPTION = {
    BaselineTier.WIDE: "widely available",
    BaselineTier.NEWLY: "newly available",
    BaselineTier.LIMITED: "limited availability",
}


def baseline_tier(baseline: Baseline) -> BaselineTier | None:
    """Map a raw baseline value to its tier; None for anything unknown."""

    if baseline is False:
        return BaselineTier.LIMITED
    if baseline == "high":
        return BaselineTier.WIDE
    if baseline == "low":
        return BaselineTier.NEWLY
    return None


def severity_for(baseline: Baseline) -> Severity:
    """Total mapping: limited→error, newly→warning, wide and unknown→info."""

    tier = baseline_tier(baseline)
    if tier is None:
        return Severity.INFO
    return _TIER_SEVERITY[tier]


def describe_baseline(baseline: Baseline) -> str:
    tier = baseline_tier(baseline)
    if tier is None:
        return "unknown status"
    return _TIER_DESCRIPTION[tier]


def matches_filter(baseline: Baseline, baseline_filter: str) -> bool:
    """
    Return True when a feature with ``baseline`` passes ``baseline_filter``.

    ``"all"`` admits everything; other values admit exact matches only, with
    ``"false"`` also matching the boolean ``False`` used for limited features.
    Unrecognized filters admit nothing.
    """

    if baseline_filter == "all":
        return True
    return baseline == baseline_filter or (baseline_filter == "false" and baseline is False)


def script_message(display_name: str, baseline: Baseline) -> str:
    return f"'{display_name}' is baseline {describe_baseline(baseline)}"


def stylesheet_message(property_name: str, value: str | None, baseline: Baseline) -> str:
    declaration = f"{property_name}: {value}" if value else property_name
    return f"CSS feature '{declaration}' is baseline {describe_baseline(baseline)}"


class Classifier:
    """Binds occurrences to knowledge base records and files them by severity."""

    def __init__(self, knowledge_base: KnowledgeBase, baseline_filter: str = "all") -> None:
        self._knowledge_base = knowledge_base
        self._baseline_filter = baseline_filter

    def classify(
        self,
        occurrence: RawOccurrence,
        feature_id: str,
        result: FileResult,
    ) -> Finding | None:
        """
        Record ``occurrence`` as ``feature_id`` on ``result``.

        Unknown identifiers are dropped silently. Every known feature is
        listed in ``result.features``; only those passing the baseline filter
        become a Finding in the bucket matching their severity.
        """

        record = self._knowledge_base.lookup(feature_id)
        if record is None:
            return None

        feature = ResolvedFeature(
            feature_id=feature_id,
            display_name=record.name or occurrence.display_name,
            baseline=record.baseline,
            line=occurrence.line,
            column=occurrence.column,
            description=record.description,
            property=occurrence.property,
            value=occurrence.value,
        )
        result.features.append(feature)

        if not matches_filter(record.baseline, self._baseline_filter):
            return None

        if occurrence.property is not None:
            message = stylesheet_message(occurrence.property, occurrence.value, record.baseline)
        else:
            message = script_message(occurrence.display_name, record.baseline)
        finding = Finding(
            message=message,
            severity=severity_for(record.baseline).value,
            feature=feature,
        )
        result.add_finding(finding)
        return finding
