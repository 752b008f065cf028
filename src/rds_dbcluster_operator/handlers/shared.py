"""Kubernetes API access shared by handlers."""

from __future__ import annotations

from kubernetes import client, config

_core_v1: client.CoreV1Api | None = None


def get_core_v1_client() -> client.CoreV1Api:
    """Get a CoreV1Api client, loading cluster configuration on first use.

    In-cluster service account configuration is preferred; a local kubeconfig
    is used when the operator runs outside a cluster.

    Returns:
        CoreV1Api instance
    """
    global _core_v1
    if _core_v1 is None:
        try:
            config.load_incluster_config()
        except config.ConfigException:
            config.load_kube_config()
        _core_v1 = client.CoreV1Api()
    return _core_v1
