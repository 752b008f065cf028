"""AWS RDS client implementation."""

from __future__ import annotations

import logging
import time
from typing import Any

import boto3
from botocore.exceptions import ClientError

from ... import metrics
from ...constants import ERROR_CODE_CLUSTER_NOT_FOUND
from ...utils.errors import ProviderError

logger = logging.getLogger(__name__)


class RDSClient:
    """Thin wrapper around the boto3 RDS client for DB cluster lifecycle calls.

    Requests and responses are the boto3 dictionaries; every ClientError is
    translated into a ProviderError carrying the RDS error code.
    """

    def __init__(self, region: str | None = None, client: Any | None = None) -> None:
        """Initialize RDS client.

        Args:
            region: AWS region; boto3's default resolution applies when None
            client: Preconfigured boto3 RDS client
        """
        self.region = region
        self.client = client or boto3.client("rds", region_name=region)

    def describe_db_clusters(self, request: dict[str, Any]) -> dict[str, Any]:
        """Describe DB clusters.

        A missing cluster is reported as an empty ``DBClusters`` list.
        """
        try:
            return self._call("DescribeDBClusters", self.client.describe_db_clusters, request)
        except ProviderError as e:
            if e.code == ERROR_CODE_CLUSTER_NOT_FOUND:
                return {"DBClusters": []}
            raise

    def create_db_cluster(self, request: dict[str, Any]) -> dict[str, Any]:
        """Create a DB cluster."""
        return self._call("CreateDBCluster", self.client.create_db_cluster, request)

    def modify_db_cluster(self, request: dict[str, Any]) -> dict[str, Any]:
        """Modify a DB cluster."""
        return self._call("ModifyDBCluster", self.client.modify_db_cluster, request)

    def delete_db_cluster(self, request: dict[str, Any]) -> dict[str, Any]:
        """Delete a DB cluster."""
        return self._call("DeleteDBCluster", self.client.delete_db_cluster, request)

    def _call(self, operation: str, func: Any, request: dict[str, Any]) -> dict[str, Any]:
        start_time = time.time()
        try:
            response = func(**request)
            metrics.api_call_total.labels(api_type="rds", operation=operation, result="success").inc()
            return response
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "Unknown")
            metrics.api_call_total.labels(api_type="rds", operation=operation, result="error").inc()
            if code != ERROR_CODE_CLUSTER_NOT_FOUND:
                logger.error(f"{operation} failed: {code}")
            raise ProviderError(operation, code, e) from e
        finally:
            duration = time.time() - start_time
            metrics.api_call_duration_seconds.labels(api_type="rds", operation=operation).observe(duration)
