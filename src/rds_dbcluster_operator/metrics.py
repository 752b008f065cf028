"""Prometheus metrics for the RDS DBCluster Operator."""

from prometheus_client import Counter, Histogram

# Reconciliation metrics
reconcile_total = Counter(
    "rds_dbcluster_operator_reconcile_total",
    "Total number of reconciliations",
    ["kind", "result"],
)

reconcile_duration_seconds = Histogram(
    "rds_dbcluster_operator_reconcile_duration_seconds",
    "Duration of reconciliations in seconds",
    ["kind"],
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# RDS lifecycle operation metrics
cluster_operations_total = Counter(
    "rds_dbcluster_operator_cluster_operations_total",
    "Total number of RDS DB cluster lifecycle operations",
    ["operation", "result"],
)

# Configuration drift detection metrics
drift_detected_total = Counter(
    "rds_dbcluster_operator_drift_detected_total",
    "Total number of configuration drift detections",
    ["kind"],
)

# Credential metrics
password_generated_total = Counter(
    "rds_dbcluster_operator_password_generated_total",
    "Total number of generated master passwords",
)

# API call metrics
api_call_total = Counter(
    "rds_dbcluster_operator_api_call_total",
    "Total number of API calls",
    ["api_type", "operation", "result"],
)

api_call_duration_seconds = Histogram(
    "rds_dbcluster_operator_api_call_duration_seconds",
    "Duration of API calls in seconds",
    ["api_type", "operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0],
)

# Error metrics
error_total = Counter(
    "rds_dbcluster_operator_error_total",
    "Total number of reconciliation errors",
    ["kind", "error_type"],
)

# Resource status metrics
resource_status_total = Counter(
    "rds_dbcluster_operator_resource_status_total",
    "Observed resource readiness",
    ["kind", "status"],
)
