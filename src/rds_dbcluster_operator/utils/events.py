"""Utilities for emitting Kubernetes events."""

from __future__ import annotations

from typing import Any

import kopf

from ..constants import (
    EVENT_REASON_CLUSTER_CREATED,
    EVENT_REASON_CLUSTER_DELETED,
    EVENT_REASON_CLUSTER_UPDATED,
    EVENT_REASON_RECONCILE_FAILED,
    EVENT_REASON_RECONCILE_STARTED,
)


def emit_event(
    body: Any,
    reason: str,
    message: str,
    type_: str = "Normal",
) -> None:
    """Emit a Kubernetes event.

    Args:
        body: Resource body or metadata
        reason: Event reason
        message: Event message
        type_: Event type (Normal or Warning)
    """
    kopf.event(
        body,
        reason=reason,
        message=message,
        type=type_,
    )


def emit_reconcile_started(body: Any) -> None:
    """Emit reconcile started event."""
    emit_event(body, EVENT_REASON_RECONCILE_STARTED, "Reconciliation started")


def emit_reconcile_failed(body: Any, message: str) -> None:
    """Emit reconcile failed event."""
    emit_event(body, EVENT_REASON_RECONCILE_FAILED, message, type_="Warning")


def emit_cluster_created(body: Any, identifier: str) -> None:
    """Emit cluster created event."""
    emit_event(body, EVENT_REASON_CLUSTER_CREATED, f"DB cluster {identifier} creation requested")


def emit_cluster_updated(body: Any, identifier: str) -> None:
    """Emit cluster updated event."""
    emit_event(body, EVENT_REASON_CLUSTER_UPDATED, f"DB cluster {identifier} modification requested")


def emit_cluster_deleted(body: Any, identifier: str) -> None:
    """Emit cluster deleted event."""
    emit_event(body, EVENT_REASON_CLUSTER_DELETED, f"DB cluster {identifier} deletion requested")
