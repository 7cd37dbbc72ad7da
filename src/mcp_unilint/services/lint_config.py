"""Configurable settings for Unilint analysis runs."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from ..mcp import schema_registry
from ..mcp.schema_registry import SchemaValidationError

BASELINE_FILTERS = ("all", "high", "low", "false")
OUTPUT_FORMATS = ("table", "json", "compact")

DEFAULT_BASELINE = "all"
DEFAULT_FORMAT = "table"

DEFAULT_MAX_WORKERS = 4
"""Default number of files analyzed in parallel."""

MAX_WORKERS_CEILING = 32

DEFAULT_MAX_FILE_BYTES = 1_048_576
"""Files larger than this are reported as failures instead of analyzed."""

FEATURES_PATH_ENV = "UNILINT_FEATURES_PATH"
BASELINE_ENV = "UNILINT_BASELINE"
FORMAT_ENV = "UNILINT_FORMAT"
MAX_WORKERS_ENV = "UNILINT_MAX_WORKERS"
MAX_FILE_BYTES_ENV = "UNILINT_MAX_FILE_BYTES"

CONFIG_SCHEMA = "lint_config_v0.1"


class ConfigurationError(ValueError):
    """Raised when a configuration file or value cannot be used."""


def _env_int(
    name: str,
    default: int,
    *,
    min_value: int = 0,
    max_value: int | None = None,
) -> int:
    """Return a bounded integer setting sourced from the environment."""

    raw = os.getenv(name)
    if not raw or not raw.strip():
        return default
    try:
        parsed = int(raw)
    except ValueError:
        return default
    if parsed < min_value:
        return default
    if max_value is not None and parsed > max_value:
        return max_value
    return parsed


def _env_choice(name: str, default: str, choices: tuple[str, ...]) -> str:
    raw = (os.getenv(name) or "").strip().lower()
    if raw in choices:
        return raw
    return default


@dataclass(frozen=True)
class LintConfig:
    """Container describing every setting a lint run consumes."""

    baseline: str = DEFAULT_BASELINE
    output_format: str = DEFAULT_FORMAT
    quiet: bool = False
    verbose: bool = False
    max_workers: int = DEFAULT_MAX_WORKERS
    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES
    features_path: Path | None = None
    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()

    @classmethod
    def from_env(cls) -> "LintConfig":
        """Return settings using the configured environment variables."""

        features_path = os.getenv(FEATURES_PATH_ENV)
        return cls(
            baseline=_env_choice(BASELINE_ENV, DEFAULT_BASELINE, BASELINE_FILTERS),
            output_format=_env_choice(FORMAT_ENV, DEFAULT_FORMAT, OUTPUT_FORMATS),
            max_workers=_env_int(
                MAX_WORKERS_ENV,
                DEFAULT_MAX_WORKERS,
                min_value=1,
                max_value=MAX_WORKERS_CEILING,
            ),
            max_file_bytes=_env_int(
                MAX_FILE_BYTES_ENV,
                DEFAULT_MAX_FILE_BYTES,
                min_value=1,
            ),
            features_path=Path(features_path) if features_path else None,
        )

    @classmethod
    def from_file(cls, path: Path, base: "LintConfig | None" = None) -> "LintConfig":
        """
        Overlay a ``unilint.config.json`` document on top of ``base``.

        The document is validated against the bundled config schema; any
        violation or unreadable file raises :class:`ConfigurationError`.
        """

        base = base or cls.from_env()
        try:
            document = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigurationError(f"Unable to read config file {path}: {exc}") from exc

        try:
            schema_registry.validate(CONFIG_SCHEMA, document)
        except SchemaValidationError as exc:
            raise ConfigurationError(f"Invalid config file {path}: {exc.message}") from exc

        return base.merge(**_settings_from_document(document, path.parent))

    def merge(self, **overrides: Any) -> "LintConfig":
        """Return a copy with every non-None override applied."""

        changes = {key: value for key, value in overrides.items() if value is not None}
        if "baseline" in changes and changes["baseline"] not in BASELINE_FILTERS:
            raise ConfigurationError(f"Unsupported baseline filter: {changes['baseline']}")
        if "output_format" in changes and changes["output_format"] not in OUTPUT_FORMATS:
            raise ConfigurationError(f"Unsupported output format: {changes['output_format']}")
        if "features_path" in changes:
            changes["features_path"] = Path(changes["features_path"])
        for key in ("include", "exclude"):
            if key in changes:
                changes[key] = tuple(changes[key])
        return replace(self, **changes)


def _settings_from_document(document: dict[str, Any], base_dir: Path) -> dict[str, Any]:
    baseline = document.get("baseline") or {}
    output = document.get("output") or {}
    return {
        "include": document.get("include"),
        "exclude": document.get("exclude"),
        "baseline": baseline.get("level"),
        "output_format": output.get("format"),
        "quiet": output.get("quiet"),
        "verbose": output.get("verbose"),
        "features_path": _relative_to(base_dir, document.get("features")),
    }


def _relative_to(base_dir: Path, value: str | None) -> Path | None:
    # Relative paths in a config file are relative to that file.
    if not value:
        return None
    return base_dir / value
