"""Read-only access to the web-features compatibility knowledge base."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from ..domain.models import FeatureRecord
from ..mcp import schema_registry
from ..mcp.schema_registry import SchemaValidationError

_LOG = logging.getLogger(__name__)

KNOWLEDGE_BASE_SCHEMA = "knowledge_base_v0.1"


class KnowledgeBaseUnavailableError(RuntimeError):
    """Raised when the knowledge base cannot be loaded; fatal for a run."""


class KnowledgeBase(Mapping[str, FeatureRecord]):
    """
    Immutable map from canonical feature identifier to :class:`FeatureRecord`.

    Lookups are by exact key only. Instances are safe to share between
    threads because nothing mutates them after construction.
    """

    __slots__ = ("_records",)

    def __init__(self, records: Mapping[str, FeatureRecord]) -> None:
        self._records = MappingProxyType(dict(records))

    @classmethod
    def from_mapping(cls, document: Mapping[str, Any]) -> "KnowledgeBase":
        """
        Build a knowledge base from a web-features document.

        Accepts the ``data.json`` layout (``{"features": {...}}``) or a flat
        ``{id: record}`` mapping.
        """

        try:
            schema_registry.validate(KNOWLEDGE_BASE_SCHEMA, document)
        except SchemaValidationError as exc:
            raise KnowledgeBaseUnavailableError(
                f"Knowledge base failed validation: {exc.message}"
            ) from exc

        entries = document.get("features", document)
        records = {
            feature_id: FeatureRecord.from_mapping(feature_id, data)
            for feature_id, data in entries.items()
            if isinstance(data, Mapping) and data.get("kind", "feature") == "feature"
        }
        return cls(records)

    @classmethod
    def from_path(cls, path: Path) -> "KnowledgeBase":
        """Load and validate a knowledge base JSON file."""

        try:
            with path.open("r", encoding="utf-8") as handle:
                document = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            raise KnowledgeBaseUnavailableError(
                f"Unable to load knowledge base from {path}: {exc}"
            ) from exc
        if not isinstance(document, Mapping):
            raise KnowledgeBaseUnavailableError("Knowledge base must be a JSON object.")

        knowledge_base = cls.from_mapping(document)
        _LOG.debug("Loaded %d feature records from %s", len(knowledge_base), path)
        return knowledge_base

    def __getitem__(self, feature_id: str) -> FeatureRecord:
        return self._records[feature_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def lookup(self, feature_id: str) -> FeatureRecord | None:
        """Return the record for ``feature_id`` or None when absent."""

        return self._records.get(feature_id)
