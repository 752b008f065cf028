"""Drift detection between the desired spec and the observed cluster."""

from __future__ import annotations

from typing import Any

from ..constants import STATUS_CONFIGURING_IAM_AUTH, STATUS_MODIFYING, STATUS_UPGRADING
from ..models import DBCluster

# A change is already in flight; issuing another modify would overlap it
IN_FLIGHT_STATUSES = frozenset({STATUS_MODIFYING, STATUS_UPGRADING, STATUS_CONFIGURING_IAM_AUTH})


def is_up_to_date(cr: DBCluster, response: dict[str, Any]) -> bool:
    """Report whether the first cluster of a describe response matches ``cr``.

    Args:
        cr: DBCluster model
        response: Filtered DescribeDBClusters response with at least one entry

    Returns:
        False when an update should be issued
    """
    cluster = response["DBClusters"][0]
    if cluster.get("Status") in IN_FLIGHT_STATUSES:
        return True

    desired = bool(cr.spec.enable_iam_database_authentication)
    observed = bool(cluster.get("IAMDatabaseAuthenticationEnabled"))
    return desired == observed
