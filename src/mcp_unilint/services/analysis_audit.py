"""Audit trail for files that could not be analyzed."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import MutableSequence, Protocol

from . import audit_log
from .failure_reason import FailureReason

_LOG = logging.getLogger(__name__)
EVENT_NAME = "LINT_FILE_FAILED"


class AnalysisAuditSink(Protocol):
    """Anything that accepts audit entries."""

    def emit(self, entry: dict[str, object]) -> None:  # pragma: no cover - trivial
        ...


@dataclass
class InMemoryAnalysisAuditSink:
    """Keeps entries in a list; used by tests and by :func:`get_failure_events`."""

    events: MutableSequence[dict[str, object]] = field(default_factory=list)

    def emit(self, entry: dict[str, object]) -> None:
        self.events.append(dict(entry))


class JsonlAnalysisAuditSink:
    """Forwards entries to the persistent JSONL audit log."""

    __slots__ = ()

    def emit(self, entry: dict[str, object]) -> None:
        try:
            audit_log.append_audit_event(entry)
        except Exception as exc:  # pragma: no cover - sink must not break analysis
            _LOG.warning("Unable to record analysis audit event: %s", exc)


_MEMORY_SINK = InMemoryAnalysisAuditSink()
_production_sink: AnalysisAuditSink | None = JsonlAnalysisAuditSink()


def set_production_audit_sink(sink: AnalysisAuditSink | None) -> None:
    """Swap the persistent sink; None disables persistence."""

    global _production_sink
    _production_sink = sink


def record_failure_event(
    reason: FailureReason,
    file_type: str,
    byte_count: int | None = None,
) -> None:
    """Record that one file failed; never includes paths or source text."""

    entry: dict[str, object] = {
        "event": EVENT_NAME,
        "reason": reason.value,
        "file_type": file_type,
        "byte_count": byte_count,
    }
    _MEMORY_SINK.emit(entry)
    if _production_sink is not None:
        _production_sink.emit(entry)


def get_failure_events() -> list[dict[str, object]]:
    return list(_MEMORY_SINK.events)


def clear_failure_events() -> None:
    _MEMORY_SINK.events.clear()
