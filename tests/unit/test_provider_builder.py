"""Tests for the RDS client builder."""

from __future__ import annotations

from unittest.mock import patch

from rds_dbcluster_operator.builders.provider import create_rds_client


class TestCreateRdsClient:
    """Test cases for create_rds_client function."""

    @patch("rds_dbcluster_operator.builders.provider.RDSClient")
    def test_region_from_spec(self, mock_rds_client, make_cluster, monkeypatch):
        """Test that the resource region wins over the environment."""
        monkeypatch.setenv("AWS_REGION", "us-east-1")

        result = create_rds_client(make_cluster(region="eu-central-1"))

        mock_rds_client.assert_called_once_with(region="eu-central-1")
        assert result is mock_rds_client.return_value

    @patch("rds_dbcluster_operator.builders.provider.RDSClient")
    def test_region_from_environment(self, mock_rds_client, make_cluster, monkeypatch):
        monkeypatch.setenv("AWS_REGION", "us-east-1")

        create_rds_client(make_cluster())

        mock_rds_client.assert_called_once_with(region="us-east-1")

    @patch("rds_dbcluster_operator.builders.provider.RDSClient")
    def test_no_region(self, mock_rds_client, make_cluster, monkeypatch):
        """Test that boto3's default region resolution applies."""
        monkeypatch.delenv("AWS_REGION", raising=False)

        create_rds_client(make_cluster())

        mock_rds_client.assert_called_once_with(region=None)
