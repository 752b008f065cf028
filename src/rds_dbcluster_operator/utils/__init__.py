"""Utility functions for the RDS DBCluster Operator."""

from .conditions import (
    set_available_condition,
    set_creating_condition,
    set_deleting_condition,
    set_unavailable_condition,
    update_condition,
)
from .errors import (
    ConfigurationError,
    CredentialError,
    NotFoundError,
    OperatorError,
    PersistenceError,
    ProviderError,
)
from .events import emit_event
from .password import generate_password
from .secrets import SecretStore, decode_secret_value

__all__ = [
    "update_condition",
    "set_available_condition",
    "set_creating_condition",
    "set_deleting_condition",
    "set_unavailable_condition",
    "OperatorError",
    "ConfigurationError",
    "CredentialError",
    "NotFoundError",
    "PersistenceError",
    "ProviderError",
    "emit_event",
    "generate_password",
    "SecretStore",
    "decode_secret_value",
]
