"""Tests for the DBCluster kopf handler."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import kopf
import pytest

from rds_dbcluster_operator.constants import FINALIZER
from rds_dbcluster_operator.handlers import dbcluster
from rds_dbcluster_operator.handlers.dbcluster import DBClusterHandler
from rds_dbcluster_operator.utils.errors import ConfigurationError, ProviderError


def make_resource(name="orders-db", deletion_policy=None, **for_provider):
    spec = {
        "forProvider": {
            "engine": "aurora-postgresql",
            "masterUsername": "admin",
            "masterUserPasswordSecretRef": {"name": "orders-db-pw", "key": "password"},
            **for_provider,
        },
        "writeConnectionSecretToRef": {"name": "orders-db-conn"},
    }
    if deletion_policy:
        spec["deletionPolicy"] = deletion_policy
    meta = {
        "name": name,
        "namespace": "default",
        "uid": "uid-1",
        "generation": 2,
        "finalizers": [FINALIZER],
    }
    body = {"metadata": meta, "spec": spec}
    return body, spec, meta


def cluster(status, **fields):
    return {"DBClusterIdentifier": "orders-db", "Status": status, **fields}


@pytest.fixture
def rds():
    return MagicMock()


@pytest.fixture
def store(make_store):
    return make_store()


@pytest.fixture
def handler(rds, store):
    return DBClusterHandler(secret_store_factory=lambda: store, rds_factory=lambda cr: rds)


@pytest.fixture(autouse=True)
def mock_event():
    with patch("rds_dbcluster_operator.utils.events.kopf.event") as mocked:
        yield mocked


class TestReconcile:
    """Test cases for DBClusterHandler.reconcile."""

    def test_creates_missing_cluster(self, handler, rds, store, mock_event):
        """A missing cluster is created with a generated password that is published."""
        body, spec, meta = make_resource(autogeneratePassword=True)
        rds.describe_db_clusters.return_value = {"DBClusters": []}
        rds.create_db_cluster.return_value = {
            "DBCluster": cluster("creating", Endpoint="orders-db.cluster.example")
        }
        patch_obj = kopf.Patch()

        handler.reconcile(body, spec, meta, {}, patch_obj)

        password = store.data[("default", "orders-db-pw")]["password"]
        assert len(password) == 27
        request = rds.create_db_cluster.call_args.args[0]
        assert request["MasterUserPassword"] == password
        assert request["DBClusterIdentifier"] == "orders-db"
        assert store.data[("default", "orders-db-conn")] == {
            "endpoint": "orders-db.cluster.example",
            "username": "admin",
            "password": password,
        }
        assert patch_obj.status["atProvider"]["status"] == "creating"
        assert patch_obj.status["conditions"][0]["reason"] == "Creating"
        assert patch_obj.status["observedGeneration"] == 2
        reasons = [c.kwargs["reason"] for c in mock_event.call_args_list]
        assert "ClusterCreated" in reasons

    def test_modifies_drifted_cluster(self, handler, rds, store, mock_event):
        body, spec, meta = make_resource(enableIAMDatabaseAuthentication=True, applyImmediately=True)
        rds.describe_db_clusters.return_value = {
            "DBClusters": [cluster("available", IAMDatabaseAuthenticationEnabled=False)]
        }
        patch_obj = kopf.Patch()

        handler.reconcile(body, spec, meta, {}, patch_obj)

        rds.create_db_cluster.assert_not_called()
        request = rds.modify_db_cluster.call_args.args[0]
        assert request["DBClusterIdentifier"] == "orders-db"
        assert request["EnableIAMDatabaseAuthentication"] is True
        assert request["ApplyImmediately"] is True
        assert patch_obj.status["conditions"][0]["status"] == "True"
        reasons = [c.kwargs["reason"] for c in mock_event.call_args_list]
        assert "ClusterUpdated" in reasons

    def test_in_flight_modification_is_left_alone(self, handler, rds):
        body, spec, meta = make_resource(enableIAMDatabaseAuthentication=True)
        rds.describe_db_clusters.return_value = {
            "DBClusters": [cluster("configuring-iam-database-auth", IAMDatabaseAuthenticationEnabled=False)]
        }

        handler.reconcile(body, spec, meta, {}, kopf.Patch())

        rds.modify_db_cluster.assert_not_called()

    def test_up_to_date_cluster_is_observed_only(self, handler, rds, store):
        body, spec, meta = make_resource()
        rds.describe_db_clusters.return_value = {
            "DBClusters": [cluster("available", Endpoint="orders-db.cluster.example")]
        }
        patch_obj = kopf.Patch()

        handler.reconcile(body, spec, meta, {}, patch_obj)

        rds.create_db_cluster.assert_not_called()
        rds.modify_db_cluster.assert_not_called()
        assert store.writes == []
        assert patch_obj.status["atProvider"] == {
            "status": "available",
            "endpoint": "orders-db.cluster.example",
        }

    def test_missing_engine_is_a_configuration_error(self, handler, rds):
        body, spec, meta = make_resource(engine="")

        with pytest.raises(ConfigurationError, match="engine"):
            handler.reconcile(body, spec, meta, {}, kopf.Patch())

        rds.describe_db_clusters.assert_not_called()

    def test_provider_error_propagates(self, handler, rds):
        body, spec, meta = make_resource()
        rds.describe_db_clusters.side_effect = ProviderError("DescribeDBClusters", "AccessDenied")

        with pytest.raises(ProviderError):
            handler.reconcile(body, spec, meta, {}, kopf.Patch())


class TestDelete:
    """Test cases for DBClusterHandler.delete."""

    def test_orphan_policy_skips_provider(self, handler, rds):
        body, spec, meta = make_resource(deletion_policy="Orphan")
        patch_obj = kopf.Patch()

        handler.delete(body, spec, meta, {}, patch_obj)

        rds.describe_db_clusters.assert_not_called()
        rds.delete_db_cluster.assert_not_called()
        assert patch_obj.metadata["finalizers"] is None

    def test_gone_cluster_releases_finalizer(self, handler, rds):
        body, spec, meta = make_resource()
        rds.describe_db_clusters.return_value = {"DBClusters": []}
        patch_obj = kopf.Patch()

        handler.delete(body, spec, meta, {}, patch_obj)

        rds.delete_db_cluster.assert_not_called()
        assert patch_obj.metadata["finalizers"] is None

    def test_existing_cluster_is_deleted_and_polled(self, handler, rds, mock_event):
        body, spec, meta = make_resource(finalDBSnapshotIdentifier="orders-final")
        rds.describe_db_clusters.return_value = {"DBClusters": [cluster("available")]}
        patch_obj = kopf.Patch()

        with pytest.raises(kopf.TemporaryError):
            handler.delete(body, spec, meta, {}, patch_obj)

        rds.delete_db_cluster.assert_called_once_with({
            "DBClusterIdentifier": "orders-db",
            "FinalDBSnapshotIdentifier": "orders-final",
            "SkipFinalSnapshot": False,
        })
        assert patch_obj.status["conditions"][0]["reason"] == "Deleting"
        reasons = [c.kwargs["reason"] for c in mock_event.call_args_list]
        assert "ClusterDeleted" in reasons

    def test_deleting_cluster_is_not_deleted_again(self, handler, rds):
        body, spec, meta = make_resource()
        rds.describe_db_clusters.return_value = {"DBClusters": [cluster("deleting")]}

        with pytest.raises(kopf.TemporaryError):
            handler.delete(body, spec, meta, {}, kopf.Patch())

        rds.delete_db_cluster.assert_not_called()


class TestKopfEntryPoints:
    """Test the module-level kopf handlers."""

    def test_configuration_error_becomes_permanent(self, handler):
        body, spec, meta = make_resource(engine="")
        patch_obj = kopf.Patch()

        with patch.object(dbcluster, "_handler", handler):
            with pytest.raises(kopf.PermanentError):
                dbcluster.handle_dbcluster(body=body, spec=spec, meta=meta, status={}, patch=patch_obj)

    def test_finalizer_is_added(self, handler, rds):
        body, spec, meta = make_resource()
        meta["finalizers"] = []
        rds.describe_db_clusters.return_value = {"DBClusters": [cluster("available")]}
        patch_obj = kopf.Patch()

        with patch.object(dbcluster, "_handler", handler):
            dbcluster.handle_dbcluster(body=body, spec=spec, meta=meta, status={}, patch=patch_obj)

        assert FINALIZER in patch_obj.metadata["finalizers"]

    def test_delete_requeues_while_cluster_exists(self, handler, rds):
        body, spec, meta = make_resource()
        rds.describe_db_clusters.return_value = {"DBClusters": [cluster("deleting")]}

        with patch.object(dbcluster, "_handler", handler):
            with pytest.raises(kopf.TemporaryError):
                dbcluster.handle_dbcluster_delete(
                    body=body, spec=spec, meta=meta, status={}, patch=kopf.Patch()
                )
