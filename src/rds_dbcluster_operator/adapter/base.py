"""Lifecycle hook interface between the converge cycle and a resource adapter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..models import ConnectionDetails, DBCluster


@dataclass
class ExternalObservation:
    """Result of observing the external resource."""

    resource_exists: bool = False
    resource_up_to_date: bool = False
    connection_details: ConnectionDetails = field(default_factory=dict)


@dataclass
class ExternalCreation:
    """Result of creating the external resource."""

    connection_details: ConnectionDetails = field(default_factory=dict)


@dataclass
class ExternalUpdate:
    """Result of updating the external resource."""

    connection_details: ConnectionDetails = field(default_factory=dict)


class ExternalHooks:
    """One method per lifecycle phase, called around each RDS API call.

    The defaults leave requests untouched and pass results through, so an
    adapter overrides only the phases it customizes. Post hooks receive the
    provider failure, if any, and must re-raise it unchanged.
    """

    def pre_observe(self, cr: DBCluster, request: dict[str, Any]) -> None:
        """Shape the describe request."""

    def post_observe(
        self,
        cr: DBCluster,
        response: dict[str, Any] | None,
        observation: ExternalObservation,
        error: Exception | None = None,
    ) -> ExternalObservation:
        """Interpret the describe response."""
        if error is not None:
            raise error
        return observation

    def filter_list(self, cr: DBCluster, response: dict[str, Any]) -> dict[str, Any]:
        """Narrow a describe response to the entries that belong to ``cr``."""
        return response

    def is_up_to_date(self, cr: DBCluster, response: dict[str, Any]) -> bool:
        """Decide whether the observed resource matches the desired spec."""
        return True

    def pre_create(self, cr: DBCluster, request: dict[str, Any]) -> None:
        """Shape the create request."""

    def post_create(
        self,
        cr: DBCluster,
        response: dict[str, Any] | None,
        creation: ExternalCreation,
        error: Exception | None = None,
    ) -> ExternalCreation:
        """Interpret the create response."""
        if error is not None:
            raise error
        return creation

    def pre_update(self, cr: DBCluster, request: dict[str, Any]) -> None:
        """Shape the modify request."""

    def post_update(
        self,
        cr: DBCluster,
        response: dict[str, Any] | None,
        update: ExternalUpdate,
        error: Exception | None = None,
    ) -> ExternalUpdate:
        """Interpret the modify response."""
        if error is not None:
            raise error
        return update

    def pre_delete(self, cr: DBCluster, request: dict[str, Any]) -> bool:
        """Shape the delete request.

        Returns:
            True to skip the delete call entirely
        """
        return False
