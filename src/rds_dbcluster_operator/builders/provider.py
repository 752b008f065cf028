"""Builder for RDS client instances."""

from __future__ import annotations

import os

from ..models import DBCluster
from ..services.aws.client import RDSClient


def create_rds_client(cr: DBCluster) -> RDSClient:
    """Create an RDS client for the region a DBCluster lives in.

    ``spec.forProvider.region`` wins over the ``AWS_REGION`` environment
    variable; credentials come from boto3's default chain.

    Args:
        cr: DBCluster model

    Returns:
        Configured RDS client
    """
    region = cr.spec.region or os.getenv("AWS_REGION")
    return RDSClient(region=region)
