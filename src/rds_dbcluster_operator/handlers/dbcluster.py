"""Handler for DBCluster CRD."""

from __future__ import annotations

import os
from typing import Any, Callable

import kopf

from .. import metrics
from ..adapter.credentials import CredentialProvisioner
from ..adapter.dbcluster import DBClusterHooks
from ..builders.cluster import create_cluster_from_resource
from ..builders.provider import create_rds_client
from ..constants import (
    API_GROUP_VERSION,
    COND_READY,
    DELETION_POLICY_ORPHAN,
    KIND_DB_CLUSTER,
    STATUS_DELETING,
)
from ..models import ConnectionDetails, DBCluster
from ..services.aws.base import DBClusterAPI
from ..tracing import add_span_attribute, trace_span
from ..utils.conditions import get_condition, set_creating_condition, set_deleting_condition
from ..utils.errors import ConfigurationError
from ..utils.events import emit_cluster_created, emit_cluster_deleted, emit_cluster_updated
from ..utils.secrets import SecretStore
from .base import BaseHandler
from .external import ExternalClient
from .shared import get_core_v1_client

DRIFT_CHECK_INTERVAL_SECONDS = int(os.getenv("DRIFT_CHECK_INTERVAL_SECONDS", "300"))
DELETE_POLL_DELAY_SECONDS = 30


class DBClusterHandler(BaseHandler):
    """Handler for DBCluster resources."""

    def __init__(
        self,
        secret_store_factory: Callable[[], SecretStore] | None = None,
        rds_factory: Callable[[DBCluster], DBClusterAPI] = create_rds_client,
    ):
        """Initialize DBCluster handler.

        Args:
            secret_store_factory: Builds the secret store (defaults to the in-cluster API)
            rds_factory: Builds the RDS client for a resource
        """
        super().__init__(KIND_DB_CLUSTER)
        self.secret_store_factory = secret_store_factory or (lambda: SecretStore(get_core_v1_client()))
        self.rds_factory = rds_factory

    def external_client(self, cr: DBCluster, secrets: SecretStore) -> ExternalClient:
        """Wire the DB cluster hooks into a converge client for ``cr``."""
        hooks = DBClusterHooks(CredentialProvisioner(secrets))
        return ExternalClient(self.rds_factory(cr), hooks)

    def publish_connection_details(
        self,
        cr: DBCluster,
        secrets: SecretStore,
        conn: ConnectionDetails,
    ) -> None:
        """Write connection details to ``spec.writeConnectionSecretToRef``, if set."""
        ref = cr.write_connection_secret_to_ref
        if not conn or ref is None:
            return
        secrets.apply(ref.namespace, ref.name, {k: v.decode("utf-8") for k, v in conn.items()})

    def reconcile(
        self,
        body: Any,
        spec: dict[str, Any],
        meta: dict[str, Any],
        status: dict[str, Any],
        patch: kopf.Patch,
    ) -> None:
        """Reconcile DBCluster resource."""
        cr = create_cluster_from_resource(spec, meta, status)

        with trace_span("reconcile_dbcluster", kind=self.kind, attributes={"dbcluster.identifier": cr.external_name}):
            if not cr.spec.engine:
                self.handle_validation_error(meta, "spec.forProvider.engine is required")

            secrets = self.secret_store_factory()
            external = self.external_client(cr, secrets)
            observation = external.observe(cr)
            add_span_attribute("dbcluster.exists", observation.resource_exists)
            add_span_attribute("dbcluster.up_to_date", observation.resource_up_to_date)

            if not observation.resource_exists:
                creation = external.create(cr)
                set_creating_condition(cr.conditions, observed_generation=cr.generation)
                self.publish_connection_details(cr, secrets, creation.connection_details)
                emit_cluster_created(body, cr.external_name)
                metrics.cluster_operations_total.labels(operation="create", result="success").inc()
                self.log_info(meta, f"Requested creation of DB cluster {cr.external_name}",
                              reason="ClusterCreated", identifier=cr.external_name)
            elif not observation.resource_up_to_date:
                metrics.drift_detected_total.labels(kind=self.kind).inc()
                self.log_info(meta, f"DB cluster {cr.external_name} drifted from spec, modifying",
                              reason="DriftDetected", identifier=cr.external_name)
                update = external.update(cr)
                self.publish_connection_details(cr, secrets, update.connection_details)
                emit_cluster_updated(body, cr.external_name)
                metrics.cluster_operations_total.labels(operation="update", result="success").inc()
            else:
                self.publish_connection_details(cr, secrets, observation.connection_details)

            ready_cond = get_condition(cr.conditions, COND_READY)
            ready = ready_cond is not None and ready_cond.get("status") == "True"
            self.update_resource_status(patch, meta, ready, {
                "atProvider": cr.at_provider.to_status(),
                "conditions": cr.conditions,
            })

    def delete(
        self,
        body: Any,
        spec: dict[str, Any],
        meta: dict[str, Any],
        status: dict[str, Any],
        patch: kopf.Patch,
    ) -> None:
        """Handle DBCluster resource deletion.

        Raises:
            kopf.TemporaryError: While the cluster still exists
        """
        cr = create_cluster_from_resource(spec, meta, status)

        if cr.deletion_policy == DELETION_POLICY_ORPHAN:
            self.log_info(meta, f"Orphaning DB cluster {cr.external_name}", event="deletion", reason="Orphan")
            self.remove_finalizer(meta, patch)
            return

        with trace_span("delete_dbcluster", kind=self.kind, attributes={"dbcluster.identifier": cr.external_name}):
            external = self.external_client(cr, self.secret_store_factory())
            observation = external.observe(cr)

            if not observation.resource_exists:
                self.log_info(meta, f"DB cluster {cr.external_name} is gone", event="deletion", reason="Deleted")
                self.remove_finalizer(meta, patch)
                return

            set_deleting_condition(cr.conditions, observed_generation=cr.generation)
            if cr.at_provider.status != STATUS_DELETING and external.delete(cr):
                emit_cluster_deleted(body, cr.external_name)
                metrics.cluster_operations_total.labels(operation="delete", result="success").inc()

            self.update_resource_status(patch, meta, False, {
                "atProvider": cr.at_provider.to_status(),
                "conditions": cr.conditions,
            })
            raise kopf.TemporaryError(
                f"DB cluster {cr.external_name} is still being deleted",
                delay=DELETE_POLL_DELAY_SECONDS,
            )


# Global handler instance
_handler = DBClusterHandler()


@kopf.on.create(API_GROUP_VERSION, KIND_DB_CLUSTER)
@kopf.on.update(API_GROUP_VERSION, KIND_DB_CLUSTER)
@kopf.on.resume(API_GROUP_VERSION, KIND_DB_CLUSTER)
@kopf.timer(API_GROUP_VERSION, KIND_DB_CLUSTER, interval=DRIFT_CHECK_INTERVAL_SECONDS)
def handle_dbcluster(
    body: kopf.Body,
    spec: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    **kwargs: Any,
) -> None:
    """Handle DBCluster resource reconciliation."""
    _handler.ensure_finalizer(meta, patch)
    try:
        _handler.reconcile_with_metrics(body, meta, lambda: _handler.reconcile(body, spec, meta, status, patch))
    except ConfigurationError as e:
        raise kopf.PermanentError(str(e)) from e


@kopf.on.delete(API_GROUP_VERSION, KIND_DB_CLUSTER)
def handle_dbcluster_delete(
    body: kopf.Body,
    spec: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    **kwargs: Any,
) -> None:
    """Handle DBCluster resource deletion."""
    _handler.reconcile_with_metrics(body, meta, lambda: _handler.delete(body, spec, meta, status, patch))
