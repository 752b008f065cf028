"""Mapping of RDS cluster lifecycle statuses onto resource conditions."""

from __future__ import annotations

from enum import Enum

from ..constants import (
    STATUS_AVAILABLE,
    STATUS_CREATING,
    STATUS_DELETING,
    STATUS_MODIFYING,
    STATUS_STOPPED,
    STATUS_STOPPING,
)
from ..models import DBCluster
from ..utils.conditions import (
    set_available_condition,
    set_creating_condition,
    set_unavailable_condition,
)


class ConditionState(str, Enum):
    """Condition a provider status maps to.

    UNMAPPED covers every status without a defined availability class
    (backing-up, maintenance, failed states, ...); it leaves conditions as-is.
    """

    CREATING = "Creating"
    AVAILABLE = "Available"
    UNAVAILABLE = "Unavailable"
    UNMAPPED = "Unmapped"


_STATUS_CONDITIONS = {
    STATUS_AVAILABLE: ConditionState.AVAILABLE,
    STATUS_MODIFYING: ConditionState.AVAILABLE,
    STATUS_DELETING: ConditionState.UNAVAILABLE,
    STATUS_STOPPED: ConditionState.UNAVAILABLE,
    STATUS_STOPPING: ConditionState.UNAVAILABLE,
    STATUS_CREATING: ConditionState.CREATING,
}


def condition_for_status(status: str | None) -> ConditionState:
    """Return the condition state for a provider lifecycle status."""
    if status is None:
        return ConditionState.UNMAPPED
    return _STATUS_CONDITIONS.get(status, ConditionState.UNMAPPED)


def apply_status_condition(cr: DBCluster, status: str | None) -> ConditionState:
    """Set the condition matching ``status`` on the resource.

    Returns:
        The mapped state; UNMAPPED means conditions were not touched
    """
    state = condition_for_status(status)
    message = f"DB cluster status is {status}"
    if state is ConditionState.AVAILABLE:
        set_available_condition(cr.conditions, message, cr.generation)
    elif state is ConditionState.UNAVAILABLE:
        set_unavailable_condition(cr.conditions, message, cr.generation)
    elif state is ConditionState.CREATING:
        set_creating_condition(cr.conditions, message, cr.generation)
    return state
