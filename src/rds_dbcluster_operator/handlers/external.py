"""Generic observe/create/update/delete cycle against the RDS API.

Requests are generated from the desired spec, then handed to the injected
hooks before each call; responses are handed back to the hooks afterwards.
"""

from __future__ import annotations

from ..adapter.base import ExternalCreation, ExternalHooks, ExternalObservation, ExternalUpdate
from ..builders.cluster import (
    generate_create_request,
    generate_delete_request,
    generate_describe_request,
    generate_modify_request,
    observed_state_from_cluster,
)
from ..models import DBCluster
from ..services.aws.base import DBClusterAPI
from ..tracing import trace_span
from ..utils.errors import ProviderError


class ExternalClient:
    """Runs one lifecycle operation of a DB cluster at a time."""

    def __init__(self, rds: DBClusterAPI, hooks: ExternalHooks) -> None:
        self.rds = rds
        self.hooks = hooks

    def observe(self, cr: DBCluster) -> ExternalObservation:
        """Describe the cluster and record what the provider reports."""
        request = generate_describe_request(cr)
        self.hooks.pre_observe(cr, request)
        with trace_span("describe_db_clusters"):
            try:
                response = self.rds.describe_db_clusters(request)
            except ProviderError as e:
                return self.hooks.post_observe(cr, None, ExternalObservation(), e)

        response = self.hooks.filter_list(cr, response)
        clusters = response.get("DBClusters", [])
        if not clusters:
            return ExternalObservation(resource_exists=False)

        cr.at_provider = observed_state_from_cluster(clusters[0])
        observation = ExternalObservation(
            resource_exists=True,
            resource_up_to_date=self.hooks.is_up_to_date(cr, response),
        )
        return self.hooks.post_observe(cr, response, observation)

    def create(self, cr: DBCluster) -> ExternalCreation:
        """Create the cluster."""
        request = generate_create_request(cr)
        self.hooks.pre_create(cr, request)
        with trace_span("create_db_cluster"):
            try:
                response = self.rds.create_db_cluster(request)
            except ProviderError as e:
                return self.hooks.post_create(cr, None, ExternalCreation(), e)

        created = response.get("DBCluster")
        if created:
            cr.at_provider = observed_state_from_cluster(created)
        return self.hooks.post_create(cr, response, ExternalCreation())

    def update(self, cr: DBCluster) -> ExternalUpdate:
        """Modify the cluster towards the desired spec."""
        request = generate_modify_request(cr)
        self.hooks.pre_update(cr, request)
        with trace_span("modify_db_cluster"):
            try:
                response = self.rds.modify_db_cluster(request)
            except ProviderError as e:
                return self.hooks.post_update(cr, None, ExternalUpdate(), e)
        return self.hooks.post_update(cr, response, ExternalUpdate())

    def delete(self, cr: DBCluster) -> bool:
        """Request deletion of the cluster.

        Returns:
            False when the pre-delete hook asked to skip the call
        """
        request = generate_delete_request(cr)
        if self.hooks.pre_delete(cr, request):
            return False
        with trace_span("delete_db_cluster"):
            self.rds.delete_db_cluster(request)
        return True
