"""Shared fixtures: a small in-memory knowledge base and isolated audit state."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

import pytest

from mcp_unilint.mcp import server
from mcp_unilint.services.analysis_audit import clear_failure_events
from mcp_unilint.services.audit_log import AuditConfig, reset_audit_config, set_audit_config
from mcp_unilint.services.knowledge_base import KnowledgeBase


def _record(name: str, baseline: Any, description: str = "") -> dict[str, Any]:
    return {
        "name": name,
        "description": description or f"{name} description.",
        "status": {"baseline": baseline},
    }


FEATURES: dict[str, dict[str, Any]] = {
    "let-const": _record(
        "let and const",
        "high",
        "The <code>let</code> and <code>const</code> declarations.",
    ),
    "Promise": _record("Promise", "high"),
    "promise-any": _record("Promise.any()", "low"),
    "optional-catch-binding": _record("Optional catch binding", "high"),
    "nullish-coalescing": _record("Nullish coalescing", "high"),
    "object-hasown": _record("Object.hasOwn()", "low"),
    "escape-unescape": _record("escape() and unescape()", False),
    "weakmap": _record("WeakMap", "high"),
    "bigint": _record("BigInt", "high"),
    "grid": _record("Grid", "high"),
    "transforms2d": _record("2D transforms", "high"),
    "container-queries": _record("Container queries", "low"),
    "has": _record(":has()", "low"),
    "subgrid": _record("Subgrid", False),
}


@pytest.fixture
def feature_document() -> dict[str, Any]:
    return {"features": json.loads(json.dumps(FEATURES))}


@pytest.fixture
def knowledge_base(feature_document: dict[str, Any]) -> KnowledgeBase:
    return KnowledgeBase.from_mapping(feature_document)


@pytest.fixture
def features_file(tmp_path: Path, feature_document: dict[str, Any]) -> Path:
    path = tmp_path / "data.json"
    path.write_text(json.dumps(feature_document), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolated_audit(tmp_path: Path) -> Iterator[Path]:
    """Route the JSONL audit log into the test's tmp dir and reset shared state."""

    audit_file = tmp_path / "audit" / "audit.jsonl"
    set_audit_config(AuditConfig(audit_file=audit_file, max_bytes=None))
    clear_failure_events()
    yield audit_file
    clear_failure_events()
    reset_audit_config()
    server.set_knowledge_base(None)
