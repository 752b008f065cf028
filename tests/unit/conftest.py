"""Shared fixtures for unit tests."""

from __future__ import annotations

import base64
from typing import Any, Callable

import pytest
from kubernetes import client

from rds_dbcluster_operator.builders.cluster import create_cluster_from_resource
from rds_dbcluster_operator.models import DBCluster
from rds_dbcluster_operator.utils.errors import NotFoundError


@pytest.fixture
def make_cluster() -> Callable[..., DBCluster]:
    """Build a DBCluster model from forProvider overrides."""

    def _make(name: str = "orders-db", namespace: str = "default", **for_provider: Any) -> DBCluster:
        spec = {
            "forProvider": {
                "engine": "aurora-postgresql",
                "masterUsername": "admin",
                "masterUserPasswordSecretRef": {"name": "orders-db-pw", "key": "password"},
                **for_provider,
            },
            "writeConnectionSecretToRef": {"name": "orders-db-conn"},
        }
        meta = {"name": name, "namespace": namespace, "uid": "uid-1", "generation": 1}
        return create_cluster_from_resource(spec, meta)

    return _make


@pytest.fixture
def make_secret() -> Callable[[dict[str, str]], client.V1Secret]:
    """Build a V1Secret with base64-encoded data."""

    def _make(data: dict[str, str]) -> client.V1Secret:
        return client.V1Secret(
            data={k: base64.b64encode(v.encode("utf-8")).decode("utf-8") for k, v in data.items()},
        )

    return _make


class InMemorySecretStore:
    """Secret store keeping string data per (namespace, name)."""

    def __init__(self, initial=None):
        self.data = {k: dict(v) for k, v in (initial or {}).items()}
        self.writes = []

    def get(self, namespace, name):
        if (namespace, name) not in self.data:
            raise NotFoundError(f"secret {namespace}/{name} not found")
        encoded = {
            k: base64.b64encode(v.encode("utf-8")).decode("utf-8")
            for k, v in self.data[(namespace, name)].items()
        }
        return client.V1Secret(data=encoded)

    def create(self, namespace, name, string_data, labels=None):
        self.writes.append(("create", namespace, name, dict(string_data)))
        self.data[(namespace, name)] = dict(string_data)

    def update(self, namespace, name, string_data):
        self.writes.append(("update", namespace, name, dict(string_data)))
        self.data[(namespace, name)].update(string_data)

    def apply(self, namespace, name, string_data):
        if (namespace, name) in self.data:
            self.update(namespace, name, string_data)
            return False
        self.create(namespace, name, string_data)
        return True


@pytest.fixture
def make_store() -> Callable[..., InMemorySecretStore]:
    """Build an in-memory secret store seeded with ``{(namespace, name): data}``."""
    return InMemorySecretStore
