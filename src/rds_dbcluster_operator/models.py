"""Models for the DBCluster resource and its RDS counterpart."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .constants import DELETION_POLICY_DELETE

# Connection slot name -> raw value
ConnectionDetails = dict[str, bytes]


@dataclass
class SecretKeySelector:
    """Reference to one key of a namespaced secret."""

    name: str
    namespace: str
    key: str


@dataclass
class SecretReference:
    """Reference to a namespaced secret."""

    name: str
    namespace: str


@dataclass
class DesiredClusterSpec:
    """User-declared configuration of a DB cluster (``spec.forProvider``)."""

    engine: str = ""
    region: str | None = None
    engine_version: str | None = None
    master_username: str | None = None
    master_user_password_secret_ref: SecretKeySelector | None = None
    autogenerate_password: bool = False
    vpc_security_group_ids: list[str] = field(default_factory=list)
    enable_iam_database_authentication: bool | None = None
    apply_immediately: bool | None = None
    final_db_snapshot_identifier: str = ""
    skip_final_snapshot: bool = False
    database_name: str | None = None
    port: int | None = None
    db_subnet_group_name: str | None = None
    db_cluster_parameter_group_name: str | None = None
    backup_retention_period: int | None = None
    preferred_backup_window: str | None = None
    preferred_maintenance_window: str | None = None
    storage_encrypted: bool | None = None
    kms_key_id: str | None = None
    deletion_protection: bool | None = None
    tags: dict[str, str] = field(default_factory=dict)


@dataclass
class ObservedClusterState:
    """Last-known provider-side representation (``status.atProvider``)."""

    status: str | None = None
    endpoint: str | None = None
    reader_endpoint: str | None = None
    port: int | None = None
    db_cluster_arn: str | None = None
    db_cluster_resource_id: str | None = None
    engine_version: str | None = None
    iam_database_authentication_enabled: bool | None = None
    # Only ever populated by a create response; never written to status
    pending_master_user_password: str | None = None

    def to_status(self) -> dict[str, Any]:
        """Render as the ``status.atProvider`` mapping."""
        at_provider = {
            "status": self.status,
            "endpoint": self.endpoint,
            "readerEndpoint": self.reader_endpoint,
            "port": self.port,
            "dbClusterArn": self.db_cluster_arn,
            "dbClusterResourceId": self.db_cluster_resource_id,
            "engineVersion": self.engine_version,
            "iamDatabaseAuthenticationEnabled": self.iam_database_authentication_enabled,
        }
        return {k: v for k, v in at_provider.items() if v is not None}


@dataclass
class DBCluster:
    """A DBCluster custom resource as seen by one reconcile pass.

    ``conditions`` and ``at_provider`` are the only fields hooks write to;
    the handler copies them back into the resource status.
    """

    name: str
    namespace: str
    external_name: str
    spec: DesiredClusterSpec
    uid: str = ""
    generation: int = 0
    deletion_policy: str = DELETION_POLICY_DELETE
    write_connection_secret_to_ref: SecretReference | None = None
    conditions: list[dict[str, Any]] = field(default_factory=list)
    at_provider: ObservedClusterState = field(default_factory=ObservedClusterState)
