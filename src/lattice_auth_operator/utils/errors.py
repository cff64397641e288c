"""Operator exception types and error sanitization utilities."""

from __future__ import annotations

import re
from typing import Any


class LatticeAuthOperatorError(Exception):
    """Base class for errors raised by the operator."""


class DependencyNotFoundError(LatticeAuthOperatorError):
    """A referenced Lattice resource does not exist (yet)."""

    def __init__(self, resource_type: str, name: str) -> None:
        self.resource_type = resource_type
        self.name = name
        super().__init__(f"{resource_type} {name} not found")


class UnsupportedTargetError(LatticeAuthOperatorError):
    """targetRef.kind is not one of the supported kinds."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"unsupported targetRef kind {kind!r}")


class ConflictOnPersistError(LatticeAuthOperatorError):
    """The resource changed between read and write-back."""

    def __init__(self, namespace: str, name: str, resource_version: str | None = None) -> None:
        self.namespace = namespace
        self.name = name
        self.resource_version = resource_version
        super().__init__(
            f"conflict updating {namespace}/{name} at resourceVersion {resource_version}"
        )


# Patterns that might expose sensitive information
SENSITIVE_PATTERNS = [
    r"access[_\s]?key[_\s]?id[:\s]+([A-Z0-9]{20})",
    r"secret[_\s]?access[_\s]?key[:\s]+([A-Za-z0-9/+=]{40})",
    r"session[_\s]?token[:\s]+([A-Za-z0-9/+=]+)",
]

# AWS account ids embedded in ARNs
ARN_ACCOUNT_PATTERN = r"(arn:aws[a-z\-]*:[a-z0-9\-]+:[a-z0-9\-]*:)(\d{12})(:)"

# Fields to redact completely
SENSITIVE_FIELDS = {
    "access_key_id",
    "secret_access_key",
    "session_token",
    "password",
    "secret",
    "credentials",
    "token",
}


def sanitize_error_message(message: str) -> str:
    """Sanitize error message to remove sensitive information.

    Args:
        message: Original error message

    Returns:
        Sanitized error message with sensitive data redacted
    """
    sanitized = message

    for pattern in SENSITIVE_PATTERNS:
        sanitized = re.sub(pattern, "[REDACTED]", sanitized, flags=re.IGNORECASE)

    sanitized = re.sub(ARN_ACCOUNT_PATTERN, r"\1[REDACTED]\3", sanitized)

    for field in SENSITIVE_FIELDS:
        sanitized = re.sub(
            rf"\b{field}[:=\s]+([^\s,;\)]+)",
            f"{field}: [REDACTED]",
            sanitized,
            flags=re.IGNORECASE,
        )

    return sanitized


def sanitize_exception(error: Exception) -> str:
    """Sanitize exception message."""
    return sanitize_error_message(str(error))


def sanitize_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """Sanitize dictionary by redacting sensitive fields.

    Args:
        data: Dictionary to sanitize
        sensitive_keys: Additional keys to redact (merged with SENSITIVE_FIELDS)

    Returns:
        Sanitized dictionary with sensitive values redacted
    """
    if sensitive_keys is None:
        sensitive_keys = set()

    all_sensitive = SENSITIVE_FIELDS | sensitive_keys
    sanitized = {}

    for key, value in data.items():
        key_lower = key.lower()
        if any(sensitive in key_lower for sensitive in all_sensitive):
            sanitized[key] = "[REDACTED]"
        elif isinstance(value, dict):
            sanitized[key] = sanitize_dict(value, sensitive_keys)
        elif isinstance(value, str):
            sanitized[key] = sanitize_error_message(value)
        else:
            sanitized[key] = value

    return sanitized
