"""Shared failure taxonomy for per-file analysis."""

from __future__ import annotations

from enum import Enum


class FailureReason(Enum):
    """Enumerate the ways a single file can fail to be analyzed."""

    UNREADABLE = "UNREADABLE"
    UNPARSEABLE = "UNPARSEABLE"
    MAX_FILE_BYTES = "MAX_FILE_BYTES"


class AnalysisFailure(Exception):
    """Raised when one file cannot be analyzed; never aborts a batch."""

    def __init__(self, reason: FailureReason, detail: str) -> None:
        super().__init__(detail)
        self.reason = reason
        self.detail = detail
