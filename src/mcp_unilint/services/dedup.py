"""Per-file suppression of repeat occurrences at the same point."""

from __future__ import annotations

from ..domain.models import RawOccurrence

DedupKey = tuple[str, int, int]


class OccurrenceDeduplicator:
    """
    Remembers which (identifier, line, column) keys one file scan has seen.

    A fresh instance is created for every file and passed explicitly through
    that file's analysis, so parallel scans never share state.
    """

    __slots__ = ("_seen",)

    def __init__(self) -> None:
        self._seen: set[DedupKey] = set()

    @staticmethod
    def key_for(occurrence: RawOccurrence, feature_id: str | None = None) -> DedupKey:
        identity = feature_id or occurrence.key or occurrence.kind
        return (identity, occurrence.line, occurrence.column)

    def admit(self, occurrence: RawOccurrence, feature_id: str | None = None) -> bool:
        """Return True the first time a key is offered, False for repeats."""

        key = self.key_for(occurrence, feature_id)
        if key in self._seen:
            return False
        self._seen.add(key)
        return True

    def __len__(self) -> int:
        return len(self._seen)
