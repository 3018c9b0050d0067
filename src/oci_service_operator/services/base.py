"""Interfaces the reconciliation engine talks to."""

from __future__ import annotations

from typing import Any, Protocol

from ..models import CreateResult, RemoteObject


class ServiceClient(Protocol):
    """Protocol defining the remote operations for one resource kind.

    Errors are raised as :class:`~oci_service_operator.exceptions.RemoteServiceError`
    subclasses so the engine can tell not-found and bad-request apart from
    transport or server failures.
    """

    service_name: str

    def create(self, details: dict[str, Any]) -> CreateResult:
        """Create the remote object; returns the object, a work request id, or both."""
        ...

    def get(self, remote_id: str) -> RemoteObject:
        """Fetch the remote object by identifier."""
        ...

    def list(
        self,
        scope: str,
        display_name: str,
        limit: int,
        **filters: str,
    ) -> list[RemoteObject]:
        """List objects in a scope with the given display name.

        Args:
            scope: Compartment (or namespace) to search
            display_name: Exact display name to match
            limit: Maximum number of results
            **filters: Kind-specific filters such as ``gateway_id`` or ``vcn_id``
        """
        ...

    def update(self, remote_id: str, details: dict[str, Any]) -> RemoteObject | None:
        """Apply an update; returns the updated object when the API hands one back."""
        ...

    def delete(self, remote_id: str) -> None:
        """Delete the remote object."""
        ...


class SecretStore(Protocol):
    """Protocol for persisting generated credential maps."""

    def create_secret(
        self,
        name: str,
        namespace: str,
        labels: dict[str, str],
        data: dict[str, bytes],
    ) -> bool:
        """Create a secret; raises SecretAlreadyExistsError if it exists."""
        ...

    def get_secret(self, name: str, namespace: str) -> dict[str, bytes] | None:
        """Read a secret's data, or None if it does not exist."""
        ...

    def update_secret(
        self,
        name: str,
        namespace: str,
        labels: dict[str, str],
        data: dict[str, bytes],
    ) -> bool:
        """Overwrite a secret's data."""
        ...

    def delete_secret(self, name: str, namespace: str) -> bool:
        """Delete a secret; returns False if it did not exist."""
        ...
