"""Kubernetes operator reconciling Amazon RDS DB clusters."""

__version__ = "0.1.0"
