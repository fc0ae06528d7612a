"""Redaction of credentials and confirmation codes before bodies are logged."""

from collections.abc import Mapping
from typing import Any

REDACT_KEYS: frozenset[str] = frozenset({
    "authorization",
    "code",
    "new_password",
    "old_password",
    "password",
    "token",
})

REDACTED_VALUE = "[REDACTED]"


def redact_payload(payload: Any) -> Any:
    """Return a copy of a JSON-like payload with sensitive values replaced.

    The original payload is never mutated. Non-container values are
    returned as-is.
    """
    if isinstance(payload, Mapping):
        return {
            key: REDACTED_VALUE if _is_sensitive(key) else redact_payload(value)
            for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple)):
        return [redact_payload(item) for item in payload]
    return payload


def describe_body(body: Any) -> str:
    """Short, log-safe rendering of a request body."""
    if body is None:
        return "-"
    if isinstance(body, (bytes, bytearray, memoryview)):
        return f"<{len(body)} bytes>"
    if isinstance(body, (Mapping, list, tuple)):
        return repr(redact_payload(body))[:200]
    return f"<{type(body).__name__}>"


def _is_sensitive(key: Any) -> bool:
    return isinstance(key, str) and key.lower() in REDACT_KEYS
