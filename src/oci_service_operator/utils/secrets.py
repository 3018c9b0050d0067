"""Kubernetes-backed store for the credential secrets generated per resource."""

from __future__ import annotations

import base64
import logging
from typing import Any

from kubernetes import client

from ..constants import FIELD_MANAGER
from ..exceptions import SecretAlreadyExistsError

logger = logging.getLogger(__name__)


def _encode(data: dict[str, bytes]) -> dict[str, str]:
    return {k: base64.b64encode(v).decode("utf-8") for k, v in data.items()}


def _decode(data: dict[str, Any] | None) -> dict[str, bytes]:
    result = {}
    for key, value in (data or {}).items():
        if isinstance(value, str):
            result[key] = base64.b64decode(value)
        else:
            result[key] = value
    return result


class KubernetesSecretStore:
    """Persists credential maps as Opaque secrets through ``CoreV1Api``."""

    def __init__(self, api: client.CoreV1Api | None = None):
        self._api = api

    @property
    def api(self) -> client.CoreV1Api:
        if self._api is None:
            self._api = client.CoreV1Api()
        return self._api

    def create_secret(
        self,
        name: str,
        namespace: str,
        labels: dict[str, str],
        data: dict[str, bytes],
    ) -> bool:
        """Create a secret.

        Args:
            name: Name of the secret
            namespace: Namespace for the secret
            labels: Labels to attach
            data: Raw secret data (base64 encoded on the way out)

        Returns:
            True when the secret was created

        Raises:
            SecretAlreadyExistsError: If a secret with this name already exists
        """
        secret = client.V1Secret(
            metadata=client.V1ObjectMeta(name=name, namespace=namespace, labels=labels),
            type="Opaque",
            data=_encode(data),
        )
        try:
            self.api.create_namespaced_secret(
                namespace=namespace,
                body=secret,
                field_manager=FIELD_MANAGER,
            )
        except client.exceptions.ApiException as e:
            if e.status == 409:
                raise SecretAlreadyExistsError(
                    f"Secret '{name}' already exists in namespace '{namespace}'"
                ) from e
            raise
        return True

    def get_secret(self, name: str, namespace: str) -> dict[str, bytes] | None:
        """Read a secret's data.

        Returns:
            Decoded secret data, or None if the secret does not exist
        """
        try:
            secret = self.api.read_namespaced_secret(name=name, namespace=namespace)
        except client.exceptions.ApiException as e:
            if e.status == 404:
                return None
            raise
        return _decode(secret.data)

    def update_secret(
        self,
        name: str,
        namespace: str,
        labels: dict[str, str],
        data: dict[str, bytes],
    ) -> bool:
        """Patch an existing secret with new data and labels."""
        secret = client.V1Secret(
            metadata=client.V1ObjectMeta(name=name, namespace=namespace, labels=labels),
            type="Opaque",
            data=_encode(data),
        )
        self.api.patch_namespaced_secret(
            name=name,
            namespace=namespace,
            body=secret,
            field_manager=FIELD_MANAGER,
        )
        return True

    def delete_secret(self, name: str, namespace: str) -> bool:
        """Delete a secret.

        Returns:
            True if the secret was deleted, False if it did not exist
        """
        try:
            self.api.delete_namespaced_secret(name=name, namespace=namespace)
        except client.exceptions.ApiException as e:
            if e.status == 404:
                logger.debug(f"Secret {namespace}/{name} already absent")
                return False
            raise
        return True
