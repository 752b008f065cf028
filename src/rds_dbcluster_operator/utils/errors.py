"""Operator error types and error sanitization utilities."""

from __future__ import annotations

import re
from typing import Any


class OperatorError(Exception):
    """Base class for errors raised by the operator.

    The message is a stable, human-readable context string naming the step
    that failed. When a cause is given it is appended as ``"<context>: <cause>"``.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        self.context = message
        self.cause = cause
        super().__init__(f"{message}: {cause}" if cause is not None else message)


class ConfigurationError(OperatorError):
    """A required reference is missing from the resource spec."""


class CredentialError(OperatorError):
    """Password generation or secret read failed."""


class PersistenceError(OperatorError):
    """Secret write failed."""


class NotFoundError(OperatorError):
    """A secret does not exist. Absorbed wherever existence is checked."""


class ProviderError(OperatorError):
    """An RDS API call failed.

    Args:
        operation: RDS operation name (e.g. "CreateDBCluster")
        code: Provider error code (e.g. "DBClusterAlreadyExistsFault")
        cause: Underlying botocore exception
    """

    def __init__(self, operation: str, code: str, cause: BaseException | None = None) -> None:
        self.operation = operation
        self.code = code
        super().__init__(f"{operation} failed with {code}", cause)


# Patterns that might expose sensitive information
SENSITIVE_PATTERNS = [
    r"endpoint[:\s]+([a-zA-Z0-9\-\.]+)",
    r"arn:aws:rds:[a-z0-9\-]+:\d+:cluster:([a-zA-Z0-9\-]+)",
    r"access[_\s]?key[_\s]?id[:\s]+([A-Z0-9]{20})",
    r"secret[_\s]?access[_\s]?key[:\s]+([A-Za-z0-9/+=]{40})",
    r"session[_\s]?token[:\s]+([A-Za-z0-9/+=]+)",
]

# Fields to redact completely
SENSITIVE_FIELDS = {
    "master_user_password",
    "masteruserpassword",
    "password",
    "secret_access_key",
    "session_token",
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
        sanitized = re.sub(
            pattern,
            lambda m: m.group(0).replace(m.group(1), "[REDACTED]"),
            sanitized,
            flags=re.IGNORECASE,
        )

    for field in SENSITIVE_FIELDS:
        sanitized = re.sub(
            rf"{field}\s*[:=]\s*([^\s,;\)]+)",
            rf"{field}: [REDACTED]",
            sanitized,
            flags=re.IGNORECASE,
        )

    return sanitized


def sanitize_exception(error: BaseException) -> str:
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
    all_sensitive = SENSITIVE_FIELDS | (sensitive_keys or set())
    sanitized: dict[str, Any] = {}

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
