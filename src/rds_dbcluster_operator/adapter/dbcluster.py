"""Lifecycle hooks for RDS DB clusters."""

from __future__ import annotations

from typing import Any

from ..models import DBCluster
from .base import ExternalCreation, ExternalHooks, ExternalObservation
from .credentials import CredentialProvisioner
from .drift import is_up_to_date
from .filters import filter_list
from .status import apply_status_condition


class DBClusterHooks(ExternalHooks):
    """Customizes the generic converge cycle for RDS DB clusters.

    The hooks only shape requests and interpret responses; the RDS API is
    called by the converge cycle, and the only side effects here are secret
    store reads and writes made through the credential provisioner.
    """

    def __init__(self, credentials: CredentialProvisioner) -> None:
        self.credentials = credentials

    def pre_observe(self, cr: DBCluster, request: dict[str, Any]) -> None:
        request["DBClusterIdentifier"] = cr.external_name

    def post_observe(
        self,
        cr: DBCluster,
        response: dict[str, Any] | None,
        observation: ExternalObservation,
        error: Exception | None = None,
    ) -> ExternalObservation:
        if error is not None:
            raise error
        clusters = (response or {}).get("DBClusters") or []
        if clusters:
            apply_status_condition(cr, clusters[0].get("Status"))
        return observation

    def filter_list(self, cr: DBCluster, response: dict[str, Any]) -> dict[str, Any]:
        return filter_list(cr, response)

    def is_up_to_date(self, cr: DBCluster, response: dict[str, Any]) -> bool:
        return is_up_to_date(cr, response)

    def pre_create(self, cr: DBCluster, request: dict[str, Any]) -> None:
        request["MasterUserPassword"] = self.credentials.ensure_password(cr)
        request["DBClusterIdentifier"] = cr.external_name
        request["VpcSecurityGroupIds"] = list(cr.spec.vpc_security_group_ids)

    def post_create(
        self,
        cr: DBCluster,
        response: dict[str, Any] | None,
        creation: ExternalCreation,
        error: Exception | None = None,
    ) -> ExternalCreation:
        if error is not None:
            raise error
        conn = self.credentials.finalize_connection(cr, response or {})
        return ExternalCreation(connection_details=conn)

    def pre_update(self, cr: DBCluster, request: dict[str, Any]) -> None:
        request["DBClusterIdentifier"] = cr.external_name
        if cr.spec.apply_immediately is not None:
            request["ApplyImmediately"] = cr.spec.apply_immediately

    def pre_delete(self, cr: DBCluster, request: dict[str, Any]) -> bool:
        request["DBClusterIdentifier"] = cr.external_name
        request["FinalDBSnapshotIdentifier"] = cr.spec.final_db_snapshot_identifier
        request["SkipFinalSnapshot"] = cr.spec.skip_final_snapshot
        # Completion is detected by the next observation, never by this call
        return False
