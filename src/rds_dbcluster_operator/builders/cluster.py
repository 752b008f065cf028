"""Builders for DBCluster models and RDS API requests."""

from __future__ import annotations

from typing import Any

from ..constants import ANNOTATION_EXTERNAL_NAME, DELETION_POLICY_DELETE
from ..models import (
    DBCluster,
    DesiredClusterSpec,
    ObservedClusterState,
    SecretKeySelector,
    SecretReference,
)


def get_external_name(meta: dict[str, Any]) -> str:
    """Return the external-facing identifier of a resource.

    The external-name annotation wins; otherwise the resource name is used.
    """
    annotations = meta.get("annotations") or {}
    return annotations.get(ANNOTATION_EXTERNAL_NAME) or meta.get("name", "")


def create_desired_spec(for_provider: dict[str, Any], namespace: str) -> DesiredClusterSpec:
    """Create a desired cluster spec from ``spec.forProvider``.

    Args:
        for_provider: DBCluster CRD ``spec.forProvider``
        namespace: Namespace of the resource, used for secret refs without one

    Returns:
        Desired cluster spec
    """
    password_ref = None
    ref = for_provider.get("masterUserPasswordSecretRef")
    if ref:
        password_ref = SecretKeySelector(
            name=ref.get("name", ""),
            namespace=ref.get("namespace", namespace),
            key=ref.get("key", "password"),
        )

    tags = {tag["key"]: tag.get("value", "") for tag in for_provider.get("tags") or [] if "key" in tag}

    return DesiredClusterSpec(
        engine=for_provider.get("engine", ""),
        region=for_provider.get("region"),
        engine_version=for_provider.get("engineVersion"),
        master_username=for_provider.get("masterUsername"),
        master_user_password_secret_ref=password_ref,
        autogenerate_password=bool(for_provider.get("autogeneratePassword", False)),
        vpc_security_group_ids=list(for_provider.get("vpcSecurityGroupIDs") or []),
        enable_iam_database_authentication=for_provider.get("enableIAMDatabaseAuthentication"),
        apply_immediately=for_provider.get("applyImmediately"),
        final_db_snapshot_identifier=for_provider.get("finalDBSnapshotIdentifier", ""),
        skip_final_snapshot=bool(for_provider.get("skipFinalSnapshot", False)),
        database_name=for_provider.get("databaseName"),
        port=for_provider.get("port"),
        db_subnet_group_name=for_provider.get("dbSubnetGroupName"),
        db_cluster_parameter_group_name=for_provider.get("dbClusterParameterGroupName"),
        backup_retention_period=for_provider.get("backupRetentionPeriod"),
        preferred_backup_window=for_provider.get("preferredBackupWindow"),
        preferred_maintenance_window=for_provider.get("preferredMaintenanceWindow"),
        storage_encrypted=for_provider.get("storageEncrypted"),
        kms_key_id=for_provider.get("kmsKeyID"),
        deletion_protection=for_provider.get("deletionProtection"),
        tags=tags,
    )


def create_cluster_from_resource(
    spec: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any] | None = None,
) -> DBCluster:
    """Create a DBCluster model from the custom resource fields.

    Args:
        spec: DBCluster CRD spec
        meta: Resource metadata
        status: Resource status

    Returns:
        DBCluster model for one reconcile pass
    """
    status = status or {}
    namespace = meta.get("namespace", "default")

    connection_ref = None
    ref = spec.get("writeConnectionSecretToRef")
    if ref and ref.get("name"):
        connection_ref = SecretReference(name=ref["name"], namespace=ref.get("namespace", namespace))

    return DBCluster(
        name=meta.get("name", ""),
        namespace=namespace,
        uid=meta.get("uid", ""),
        generation=meta.get("generation", 0),
        external_name=get_external_name(meta),
        spec=create_desired_spec(spec.get("forProvider") or {}, namespace),
        deletion_policy=spec.get("deletionPolicy", DELETION_POLICY_DELETE),
        write_connection_secret_to_ref=connection_ref,
        conditions=[dict(cond) for cond in status.get("conditions") or []],
        at_provider=observed_state_from_status(status.get("atProvider") or {}),
    )


def observed_state_from_status(at_provider: dict[str, Any]) -> ObservedClusterState:
    """Rebuild the observed state last written to ``status.atProvider``."""
    return ObservedClusterState(
        status=at_provider.get("status"),
        endpoint=at_provider.get("endpoint"),
        reader_endpoint=at_provider.get("readerEndpoint"),
        port=at_provider.get("port"),
        db_cluster_arn=at_provider.get("dbClusterArn"),
        db_cluster_resource_id=at_provider.get("dbClusterResourceId"),
        engine_version=at_provider.get("engineVersion"),
        iam_database_authentication_enabled=at_provider.get("iamDatabaseAuthenticationEnabled"),
    )


def observed_state_from_cluster(cluster: dict[str, Any]) -> ObservedClusterState:
    """Convert one ``DBClusters`` entry of an RDS response into observed state."""
    pending = cluster.get("PendingModifiedValues") or {}
    return ObservedClusterState(
        status=cluster.get("Status"),
        endpoint=cluster.get("Endpoint"),
        reader_endpoint=cluster.get("ReaderEndpoint"),
        port=cluster.get("Port"),
        db_cluster_arn=cluster.get("DBClusterArn"),
        db_cluster_resource_id=cluster.get("DbClusterResourceId"),
        engine_version=cluster.get("EngineVersion"),
        iam_database_authentication_enabled=cluster.get("IAMDatabaseAuthenticationEnabled"),
        pending_master_user_password=pending.get("MasterUserPassword"),
    )


def _compact(params: dict[str, Any]) -> dict[str, Any]:
    # boto3 rejects None for every parameter type
    return {k: v for k, v in params.items() if v is not None}


def generate_describe_request(cr: DBCluster) -> dict[str, Any]:
    """Generate a DescribeDBClusters request; identity is set by hooks."""
    return {}


def generate_create_request(cr: DBCluster) -> dict[str, Any]:
    """Generate a CreateDBCluster request from the desired spec."""
    spec = cr.spec
    tags = [{"Key": k, "Value": v} for k, v in spec.tags.items()] or None
    return _compact({
        "Engine": spec.engine,
        "EngineVersion": spec.engine_version,
        "MasterUsername": spec.master_username,
        "DatabaseName": spec.database_name,
        "Port": spec.port,
        "DBSubnetGroupName": spec.db_subnet_group_name,
        "DBClusterParameterGroupName": spec.db_cluster_parameter_group_name,
        "BackupRetentionPeriod": spec.backup_retention_period,
        "PreferredBackupWindow": spec.preferred_backup_window,
        "PreferredMaintenanceWindow": spec.preferred_maintenance_window,
        "StorageEncrypted": spec.storage_encrypted,
        "KmsKeyId": spec.kms_key_id,
        "DeletionProtection": spec.deletion_protection,
        "EnableIAMDatabaseAuthentication": spec.enable_iam_database_authentication,
        "Tags": tags,
    })


def generate_modify_request(cr: DBCluster) -> dict[str, Any]:
    """Generate a ModifyDBCluster request from the desired spec."""
    spec = cr.spec
    return _compact({
        "EngineVersion": spec.engine_version,
        "Port": spec.port,
        "DBClusterParameterGroupName": spec.db_cluster_parameter_group_name,
        "BackupRetentionPeriod": spec.backup_retention_period,
        "PreferredBackupWindow": spec.preferred_backup_window,
        "PreferredMaintenanceWindow": spec.preferred_maintenance_window,
        "DeletionProtection": spec.deletion_protection,
        "EnableIAMDatabaseAuthentication": spec.enable_iam_database_authentication,
    })


def generate_delete_request(cr: DBCluster) -> dict[str, Any]:
    """Generate a DeleteDBCluster request; identity and snapshot policy are set by hooks."""
    return {}
