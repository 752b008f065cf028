"""Tests for base handler functionality."""

from __future__ import annotations

import json
import logging
from unittest.mock import Mock, patch

import kopf
import pytest

from rds_dbcluster_operator.constants import FINALIZER
from rds_dbcluster_operator.handlers.base import BaseHandler
from rds_dbcluster_operator.utils.errors import ConfigurationError


class TestFinalizers:
    """Test cases for finalizer management."""

    def test_ensure_finalizer_adds_when_missing(self):
        """Test that finalizer is added when not present."""
        handler = BaseHandler(kind="DBCluster")
        meta = {"finalizers": ["other-finalizer"]}
        patch_obj = kopf.Patch()

        handler.ensure_finalizer(meta, patch_obj)

        assert patch_obj.metadata["finalizers"] == ["other-finalizer", FINALIZER]

    def test_ensure_finalizer_noop_when_present(self):
        """Test that no patch is made when finalizer is already present."""
        handler = BaseHandler(kind="DBCluster")
        patch_obj = kopf.Patch()

        handler.ensure_finalizer({"finalizers": [FINALIZER]}, patch_obj)

        assert "finalizers" not in patch_obj.metadata

    def test_remove_finalizer_keeps_others(self):
        handler = BaseHandler(kind="DBCluster")
        patch_obj = kopf.Patch()

        handler.remove_finalizer({"finalizers": [FINALIZER, "other-finalizer"]}, patch_obj)

        assert patch_obj.metadata["finalizers"] == ["other-finalizer"]

    def test_remove_last_finalizer_sets_none(self):
        handler = BaseHandler(kind="DBCluster")
        patch_obj = kopf.Patch()

        handler.remove_finalizer({"finalizers": [FINALIZER]}, patch_obj)

        assert patch_obj.metadata["finalizers"] is None


class TestReconcileWithMetrics:
    """Test cases for reconcile_with_metrics."""

    @patch("rds_dbcluster_operator.handlers.base.emit_reconcile_started")
    @patch("rds_dbcluster_operator.handlers.base.metrics")
    def test_success(self, mock_metrics, mock_emit_started):
        """Test successful reconciliation with metrics."""
        handler = BaseHandler(kind="DBCluster")
        body = {"metadata": {"name": "orders-db"}}
        meta = body["metadata"]
        reconcile_fn = Mock()

        handler.reconcile_with_metrics(body, meta, reconcile_fn)

        reconcile_fn.assert_called_once()
        mock_emit_started.assert_called_once_with(body)
        mock_metrics.reconcile_total.labels.assert_any_call(kind="DBCluster", result="started")
        mock_metrics.reconcile_total.labels.assert_any_call(kind="DBCluster", result="success")
        assert mock_metrics.reconcile_duration_seconds.labels.called

    @patch("rds_dbcluster_operator.handlers.base.emit_reconcile_failed")
    @patch("rds_dbcluster_operator.handlers.base.emit_reconcile_started")
    @patch("rds_dbcluster_operator.handlers.base.metrics")
    def test_failure_is_sanitized_and_reraised(self, mock_metrics, mock_emit_started, mock_emit_failed):
        """Test that failures are reported without leaking passwords."""
        handler = BaseHandler(kind="DBCluster")
        body = {"metadata": {"name": "orders-db"}}
        error = RuntimeError("bad request password=hunter2")

        def failing_fn():
            raise error

        with pytest.raises(RuntimeError) as exc_info:
            handler.reconcile_with_metrics(body, body["metadata"], failing_fn)

        assert exc_info.value is error
        message = mock_emit_failed.call_args.args[1]
        assert "hunter2" not in message
        assert message.startswith("Reconciliation failed:")
        mock_metrics.error_total.labels.assert_called_with(kind="DBCluster", error_type="RuntimeError")
        mock_metrics.reconcile_total.labels.assert_any_call(kind="DBCluster", result="error")

    @patch("rds_dbcluster_operator.handlers.base.emit_reconcile_failed")
    @patch("rds_dbcluster_operator.handlers.base.emit_reconcile_started")
    @patch("rds_dbcluster_operator.handlers.base.metrics")
    def test_temporary_error_is_requeued(self, mock_metrics, mock_emit_started, mock_emit_failed):
        """Test that kopf retries are counted but not reported as failures."""
        handler = BaseHandler(kind="DBCluster")

        def waiting_fn():
            raise kopf.TemporaryError("still deleting", delay=30)

        with pytest.raises(kopf.TemporaryError):
            handler.reconcile_with_metrics({}, {}, waiting_fn)

        mock_emit_failed.assert_not_called()
        mock_metrics.reconcile_total.labels.assert_any_call(kind="DBCluster", result="requeued")
        mock_metrics.error_total.labels.assert_not_called()


class TestLogging:
    """Test cases for structured logging helpers."""

    def test_log_error_redacts_password(self, caplog):
        handler = BaseHandler(kind="DBCluster")
        meta = {"name": "orders-db", "namespace": "default", "uid": "uid-1"}

        with caplog.at_level(logging.ERROR):
            handler.log_error(meta, "create failed", error=RuntimeError("MasterUserPassword=hunter2"))

        record = json.loads(caplog.records[-1].getMessage())
        assert record["resource"] == "DBCluster"
        assert record["name"] == "orders-db"
        assert record["error_type"] == "RuntimeError"
        assert "hunter2" not in record["error"]

    def test_handle_validation_error_raises(self):
        handler = BaseHandler(kind="DBCluster")

        with pytest.raises(ConfigurationError, match="engine is required"):
            handler.handle_validation_error({"name": "orders-db"}, "engine is required")


class TestUpdateResourceStatus:
    """Test cases for update_resource_status."""

    @patch("rds_dbcluster_operator.handlers.base.metrics")
    def test_ready(self, mock_metrics):
        """Test updating resource status to ready."""
        handler = BaseHandler(kind="DBCluster")
        patch_obj = kopf.Patch()

        handler.update_resource_status(
            patch_obj, {"generation": 5}, ready=True, status_data={"atProvider": {"status": "available"}}
        )

        assert patch_obj.status["observedGeneration"] == 5
        assert patch_obj.status["atProvider"] == {"status": "available"}
        mock_metrics.resource_status_total.labels.assert_called_with(kind="DBCluster", status="ready")

    @patch("rds_dbcluster_operator.handlers.base.metrics")
    def test_not_ready_minimal(self, mock_metrics):
        handler = BaseHandler(kind="DBCluster")
        patch_obj = kopf.Patch()

        handler.update_resource_status(patch_obj, {}, ready=False)

        assert patch_obj.status["observedGeneration"] == 0
        mock_metrics.resource_status_total.labels.assert_called_with(kind="DBCluster", status="not_ready")
