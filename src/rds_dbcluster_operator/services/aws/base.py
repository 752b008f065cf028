"""Base RDS provider interface."""

from __future__ import annotations

from typing import Any, Protocol


class DBClusterAPI(Protocol):
    """Protocol defining the RDS DB cluster operations the operator issues."""

    def describe_db_clusters(self, request: dict[str, Any]) -> dict[str, Any]:
        """Describe DB clusters; a missing cluster yields an empty list."""
        ...

    def create_db_cluster(self, request: dict[str, Any]) -> dict[str, Any]:
        """Create a DB cluster."""
        ...

    def modify_db_cluster(self, request: dict[str, Any]) -> dict[str, Any]:
        """Modify a DB cluster."""
        ...

    def delete_db_cluster(self, request: dict[str, Any]) -> dict[str, Any]:
        """Delete a DB cluster."""
        ...
