"""Builders for creating models and requests from CRD specs."""

from .cluster import create_cluster_from_resource, get_external_name
from .provider import create_rds_client

__all__ = ["create_cluster_from_resource", "create_rds_client", "get_external_name"]
