"""Minimal FastMCP server entrypoint for Unilint."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Mapping

from ..domain.models import CSS, JAVASCRIPT
from ..services.aggregator import analyze_paths
from ..services.analyzer import FileAnalyzer
from ..services.file_resolver import partition_files, resolve_files
from ..services.knowledge_base import KnowledgeBase, KnowledgeBaseUnavailableError
from ..services.lint_config import LintConfig
from . import reason_codes, schema_registry
from .schema_registry import SchemaValidationError

_LOG = logging.getLogger(__name__)

LINT_SOURCE_INPUT_SCHEMA = "lint_source_input_v0.1"
LINT_FILES_INPUT_SCHEMA = "lint_files_input_v0.1"
LINT_SOURCE_RESPONSE_SCHEMA = "lint_source_response_v0.1"
LINT_FILES_RESPONSE_SCHEMA = "lint_files_response_v0.1"

_knowledge_base_override: KnowledgeBase | None = None
_loaded: dict[Path, KnowledgeBase] = {}


def set_knowledge_base(knowledge_base: KnowledgeBase | None) -> None:
    """Pin the knowledge base (tests) or pass None to load from the environment."""

    global _knowledge_base_override
    _knowledge_base_override = knowledge_base


def current_knowledge_base() -> KnowledgeBase:
    """Return the pinned knowledge base or load the one named by the environment."""

    if _knowledge_base_override is not None:
        return _knowledge_base_override
    path = LintConfig.from_env().features_path
    if path is None:
        raise KnowledgeBaseUnavailableError("No knowledge base path is configured.")
    if path not in _loaded:
        _loaded[path] = KnowledgeBase.from_path(path)
    return _loaded[path]


def _error(reason: str, detail: str) -> dict[str, str]:
    return {"status": "error", "reason": reason, "detail": detail}


def _validated(schema_name: str, response: dict[str, Any]) -> Mapping[str, Any]:
    try:
        schema_registry.validate(schema_name, response)
    except SchemaValidationError as exc:
        _LOG.warning("Response violated %s: %s", schema_name, exc.message)
        return _error(
            reason_codes.RESPONSE_VALIDATION_FAILED,
            "Linter output did not meet the public contract.",
        )
    return response


class HealthResource:
    """Simple readiness resource returning a status digest."""

    __slots__ = ()

    def get_status(self) -> Mapping[str, str]:
        return {"status": "ok", "detail": "Unilint MCP FastMCP server ready"}

    def __call__(self) -> Mapping[str, str]:
        return self.get_status()


class LintSourceResource:
    """Lints one in-memory JavaScript or CSS source text."""

    __slots__ = ()

    def __call__(self, request: Mapping[str, Any]) -> Mapping[str, Any]:
        return self.lint(request)

    def get_status(self) -> Mapping[str, str]:
        return {"status": "ok", "detail": "PUBLIC source lint resource ready"}

    def lint(self, request: Mapping[str, Any]) -> Mapping[str, Any]:
        try:
            schema_registry.validate(LINT_SOURCE_INPUT_SCHEMA, request)
        except SchemaValidationError:
            return _error(reason_codes.INVALID_INPUT, "Request failed validation.")

        try:
            knowledge_base = current_knowledge_base()
        except KnowledgeBaseUnavailableError as exc:
            return _error(reason_codes.KNOWLEDGE_BASE_UNAVAILABLE, str(exc))

        analyzer = FileAnalyzer(knowledge_base, request.get("baseline", "all"))
        if request["type"] == CSS:
            result = analyzer.analyze_stylesheet_source(
                request["source"], request.get("file", "<input>.css")
            )
        else:
            result = analyzer.analyze_script_source(
                request["source"], request.get("file", "<input>.js")
            )

        response = {"operation": "lint_source", "result": result.to_mapping()}
        return _validated(LINT_SOURCE_RESPONSE_SCHEMA, response)


class LintFilesResource:
    """Lints files and directories on the server's filesystem."""

    __slots__ = ()

    def __call__(self, request: Mapping[str, Any]) -> Mapping[str, Any]:
        return self.lint(request)

    def get_status(self) -> Mapping[str, str]:
        return {"status": "ok", "detail": "PUBLIC file lint resource ready"}

    def lint(self, request: Mapping[str, Any]) -> Mapping[str, Any]:
        try:
            schema_registry.validate(LINT_FILES_INPUT_SCHEMA, request)
        except SchemaValidationError:
            return _error(reason_codes.INVALID_INPUT, "Request failed validation.")

        js_only = bool(request.get("js_only"))
        css_only = bool(request.get("css_only"))
        if js_only and css_only:
            return _error(
                reason_codes.INVALID_INPUT,
                "js_only and css_only cannot both be set.",
            )

        try:
            knowledge_base = current_knowledge_base()
        except KnowledgeBaseUnavailableError as exc:
            return _error(reason_codes.KNOWLEDGE_BASE_UNAVAILABLE, str(exc))

        config = LintConfig.from_env()
        analyzer = FileAnalyzer(
            knowledge_base,
            request.get("baseline", config.baseline),
            max_file_bytes=config.max_file_bytes,
        )
        partitions = partition_files(
            resolve_files(request["paths"]), js_only=js_only, css_only=css_only
        )
        summary = analyze_paths(
            partitions[JAVASCRIPT] + partitions[CSS],
            analyzer,
            max_workers=config.max_workers,
        )

        response = {
            "operation": "lint_files",
            "summary": summary.counts(),
            "results": [result.to_mapping() for result in summary.results],
        }
        return _validated(LINT_FILES_RESPONSE_SCHEMA, response)


RESOURCE_REGISTRY = {
    "health": HealthResource(),
    "public://lint/source": LintSourceResource(),
    "public://lint/files": LintFilesResource(),
}
"""Resource registry for FastMCP tooling."""


def create_server() -> Mapping[str, Mapping[str, Any]]:
    """Return the configured resources for this FastMCP server."""

    return {"resources": RESOURCE_REGISTRY}


def main() -> None:
    """Log available resources without launching networking."""

    sys.stdout.write("FastMCP Unilint server initialized with resources:\n\n")
    for name, resource in RESOURCE_REGISTRY.items():
        sys.stdout.write(f"- {name}: {resource.get_status()}\n")


if __name__ == "__main__":
    main()
