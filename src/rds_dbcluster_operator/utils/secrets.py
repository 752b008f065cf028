"""Utilities for managing Kubernetes secrets."""

from __future__ import annotations

import base64
import os
import time
from typing import Any

from kubernetes import client

from .. import metrics
from ..constants import FIELD_MANAGER
from .errors import NotFoundError

_K8S_REQUEST_TIMEOUT_SECONDS = float(os.getenv("K8S_REQUEST_TIMEOUT_SECONDS", "30.0"))


def decode_secret_value(secret: client.V1Secret, key: str) -> str:
    """Return the decoded value stored under ``key``, or "" if the key is absent.

    Args:
        secret: Kubernetes secret object
        key: Key in the secret data

    Returns:
        Decoded secret value
    """
    value = (secret.data or {}).get(key)
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return base64.b64decode(value).decode("utf-8")


class SecretStore:
    """Namespaced key-value persistence backed by Kubernetes secrets.

    Every call forwards the configured request timeout so a hung API server
    aborts the in-flight call instead of blocking the handler.
    """

    def __init__(self, api: client.CoreV1Api, request_timeout: float | None = None) -> None:
        self.api = api
        self.request_timeout = request_timeout or _K8S_REQUEST_TIMEOUT_SECONDS

    def get(self, namespace: str, name: str) -> client.V1Secret:
        """Read a secret.

        Raises:
            NotFoundError: If the secret does not exist
            client.exceptions.ApiException: For any other API error
        """
        try:
            return self._call(
                "get_secret",
                self.api.read_namespaced_secret,
                name=name,
                namespace=namespace,
            )
        except client.exceptions.ApiException as e:
            if e.status == 404:
                raise NotFoundError(f"secret {namespace}/{name} not found", e) from e
            raise

    def create(
        self,
        namespace: str,
        name: str,
        string_data: dict[str, str],
        labels: dict[str, str] | None = None,
    ) -> None:
        """Create an Opaque secret holding ``string_data``."""
        secret = client.V1Secret(
            metadata=client.V1ObjectMeta(
                name=name,
                namespace=namespace,
                labels=labels or {},
            ),
            type="Opaque",
            string_data=string_data,
        )
        self._call(
            "create_secret",
            self.api.create_namespaced_secret,
            namespace=namespace,
            body=secret,
            field_manager=FIELD_MANAGER,
        )

    def update(self, namespace: str, name: str, string_data: dict[str, str]) -> None:
        """Update an existing secret in place; keys not in ``string_data`` are kept."""
        self._call(
            "update_secret",
            self.api.patch_namespaced_secret,
            name=name,
            namespace=namespace,
            body={"stringData": string_data},
            field_manager=FIELD_MANAGER,
        )

    def apply(self, namespace: str, name: str, string_data: dict[str, str]) -> bool:
        """Create the secret if absent, otherwise update it.

        Returns:
            True if the secret was created, False if it was updated
        """
        try:
            self.get(namespace, name)
        except NotFoundError:
            self.create(namespace, name, string_data)
            return True
        self.update(namespace, name, string_data)
        return False

    def _call(self, operation: str, func: Any, **kwargs: Any) -> Any:
        start_time = time.time()
        try:
            result = func(_request_timeout=self.request_timeout, **kwargs)
            metrics.api_call_total.labels(api_type="k8s", operation=operation, result="success").inc()
            return result
        except Exception:
            metrics.api_call_total.labels(api_type="k8s", operation=operation, result="error").inc()
            raise
        finally:
            duration = time.time() - start_time
            metrics.api_call_duration_seconds.labels(api_type="k8s", operation=operation).observe(duration)
