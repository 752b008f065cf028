"""Narrowing of RDS list responses to a single cluster."""

from __future__ import annotations

from typing import Any

from ..models import DBCluster


def filter_list(cr: DBCluster, response: dict[str, Any]) -> dict[str, Any]:
    """Return a describe response holding only the cluster named by ``cr``.

    Identifiers are unique, so matching stops at the first hit.
    """
    matched = []
    for cluster in response.get("DBClusters", []):
        if cluster.get("DBClusterIdentifier") == cr.external_name:
            matched.append(cluster)
            break
    return {"DBClusters": matched}
