"""Resource adapter customizing the converge cycle for RDS DB clusters."""

from .base import ExternalCreation, ExternalHooks, ExternalObservation, ExternalUpdate
from .credentials import CredentialProvisioner
from .dbcluster import DBClusterHooks
from .status import ConditionState, condition_for_status

__all__ = [
    "ConditionState",
    "CredentialProvisioner",
    "DBClusterHooks",
    "ExternalCreation",
    "ExternalHooks",
    "ExternalObservation",
    "ExternalUpdate",
    "condition_for_status",
]
