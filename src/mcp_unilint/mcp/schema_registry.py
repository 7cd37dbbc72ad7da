"""Bundled JSON schemas (and their examples) for every public contract."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

from jsonschema import Draft7Validator, ValidationError

SCHEMA_DIR = Path(__file__).resolve().parents[1] / "schemas"
EXAMPLE_DIR = SCHEMA_DIR / "examples"

SchemaValidationError = ValidationError
"""Alias for jsonschema.ValidationError so callers stay implementation-agnostic."""

SCHEMA_FILES = {
    "knowledge_base_v0.1": "knowledge_base_schema_v0.1.json",
    "lint_config_v0.1": "lint_config_schema_v0.1.json",
    "lint_source_input_v0.1": "lint_source_input_schema_v0.1.json",
    "lint_files_input_v0.1": "lint_files_input_schema_v0.1.json",
    "lint_source_response_v0.1": "lint_source_response_schema_v0.1.json",
    "lint_files_response_v0.1": "lint_files_response_schema_v0.1.json",
}

EXAMPLE_FILES = {
    "knowledge_base_example_min": "knowledge_base_example_min.json",
    "lint_config_example_min": "lint_config_example_min.json",
    "lint_source_input_example_min": "lint_source_input_example_min.json",
    "lint_files_input_example_min": "lint_files_input_example_min.json",
    "lint_source_response_example_min": "lint_source_response_example_min.json",
    "lint_files_response_example_min": "lint_files_response_example_min.json",
}


def _read_json(path: Path) -> Mapping[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


@lru_cache(maxsize=None)
def get_schema(name: str) -> Mapping[str, Any]:
    """Return the JSON schema registered under ``name``."""

    return _read_json(SCHEMA_DIR / SCHEMA_FILES[name])


@lru_cache(maxsize=None)
def get_example(name: str) -> Mapping[str, Any]:
    """Return a representative example payload by name."""

    return _read_json(EXAMPLE_DIR / EXAMPLE_FILES[name])


@lru_cache(maxsize=None)
def _validator(name: str) -> Draft7Validator:
    return Draft7Validator(get_schema(name))


def validate(name: str, instance: Any) -> None:
    """Validate ``instance`` against a named schema, raising on the first error."""

    _validator(name).validate(instance)
