"""JSONL audit sink for analysis events."""

from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path

_LOG = logging.getLogger(__name__)

DEFAULT_STATE_DIR = Path.home() / ".unilint"
DEFAULT_MAX_AUDIT_BYTES = 1_000_000
AUDIT_DIR_ENV = "UNILINT_AUDIT_DIR"
AUDIT_MAX_BYTES_ENV = "UNILINT_AUDIT_MAX_BYTES"
AUDIT_FILE_NAME = "audit.jsonl"

_WARNING_INTERVAL_SECONDS = 60.0
_LAST_WARN: dict[str, float] = {}


def _parse_max_bytes(raw: str | None) -> int | None:
    """Positive values cap the log size; zero or negative disables rotation."""

    if not raw or not raw.strip():
        return DEFAULT_MAX_AUDIT_BYTES
    try:
        parsed = int(raw)
    except ValueError:
        return DEFAULT_MAX_AUDIT_BYTES
    return parsed if parsed > 0 else None


@dataclass(frozen=True)
class AuditConfig:
    """Where audit events go and when the file rotates."""

    audit_file: Path
    max_bytes: int | None

    @classmethod
    def from_env(cls) -> "AuditConfig":
        base_dir = Path(os.getenv(AUDIT_DIR_ENV, str(DEFAULT_STATE_DIR)))
        return cls(
            audit_file=base_dir / AUDIT_FILE_NAME,
            max_bytes=_parse_max_bytes(os.getenv(AUDIT_MAX_BYTES_ENV)),
        )


_override: AuditConfig | None = None
_cached: AuditConfig | None = None


def set_audit_config(config: AuditConfig | None) -> None:
    """Pin the audit config (tests) or pass None to go back to the environment."""

    global _override, _cached
    _override = config
    _cached = None


def reset_audit_config() -> None:
    set_audit_config(None)


def current_audit_config() -> AuditConfig:
    global _cached
    if _override is not None:
        return _override
    if _cached is None:
        _cached = AuditConfig.from_env()
    return _cached


def set_audit_warning_interval(seconds: float | None) -> None:
    """Adjust how often sink warnings repeat; None logs every failure."""

    global _WARNING_INTERVAL_SECONDS
    _WARNING_INTERVAL_SECONDS = 0.0 if seconds is None else max(seconds, 0.0)


def reset_audit_warning_state() -> None:
    _LAST_WARN.clear()


def _warn_once_per_interval(key: str, message: str, *args: object) -> None:
    if _WARNING_INTERVAL_SECONDS > 0:
        now = time.monotonic()
        last = _LAST_WARN.get(key)
        if last is not None and now - last < _WARNING_INTERVAL_SECONDS:
            return
        _LAST_WARN[key] = now
    _LOG.warning(message, *args)


def append_audit_event(event: dict[str, object]) -> None:
    """Append one JSON line; filesystem problems are logged, never raised."""

    config = current_audit_config()
    path = config.audit_file
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        _warn_once_per_interval(
            "mkdir", "Unable to create audit directory %s: %s", path.parent, exc
        )
        return

    _rotate_if_needed(path, config.max_bytes)

    try:
        with path.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(event, ensure_ascii=False) + "\n")
    except OSError as exc:
        _warn_once_per_interval("write", "Unable to write audit event to %s: %s", path, exc)


def _rotate_if_needed(path: Path, max_bytes: int | None) -> None:
    if max_bytes is None or not path.exists():
        return
    try:
        if path.stat().st_size < max_bytes:
            return
        backup = path.with_name(path.name + ".1")
        if backup.exists():
            backup.unlink()
        path.rename(backup)
    except OSError as exc:
        _warn_once_per_interval("rotate", "Unable to rotate audit log %s: %s", path, exc)
