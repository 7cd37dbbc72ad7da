"""Reason codes carried by error payloads of the public lint resources."""

from __future__ import annotations

INVALID_INPUT = "invalid_input"
"""Request failed schema validation or named an unsupported option."""

RESPONSE_VALIDATION_FAILED = "response_validation_failed"
"""The linter produced output that violated the public response schema."""

KNOWLEDGE_BASE_UNAVAILABLE = "knowledge_base_unavailable"
"""The compatibility knowledge base is not configured or could not be loaded."""
