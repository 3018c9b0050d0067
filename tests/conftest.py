"""Shared fixtures: in-memory service client and secret store."""

from __future__ import annotations

import itertools
from typing import Any

import pytest

from oci_service_operator.exceptions import RemoteNotFoundError, SecretAlreadyExistsError
from oci_service_operator.models import CreateResult, RemoteObject


class FakeServiceClient:
    """In-memory ServiceClient that records every call."""

    service_name = "fake"

    def __init__(
        self,
        create_state: str = "CREATING",
        work_request: bool = False,
        id_prefix: str = "ocid1.fake.oc1..",
    ):
        self.objects: dict[str, RemoteObject] = {}
        self.calls: list[tuple[str, Any]] = []
        self.create_state = create_state
        self.work_request = work_request
        self.id_prefix = id_prefix
        self.create_error: Exception | None = None
        self.get_error: Exception | None = None
        self.delete_error: Exception | None = None
        self._ids = itertools.count(1)

    def add(self, remote_id: str, display_name: str, state: str, **fields: Any) -> RemoteObject:
        obj = RemoteObject(
            id=remote_id,
            display_name=display_name,
            lifecycle_state=state,
            fields={"display_name": display_name, **fields},
        )
        self.objects[remote_id] = obj
        return obj

    def set_state(self, remote_id: str, state: str) -> None:
        self.objects[remote_id].lifecycle_state = state

    def count(self, operation: str) -> int:
        return sum(1 for name, _ in self.calls if name == operation)

    def create(self, details: dict[str, Any]) -> CreateResult:
        self.calls.append(("create", details))
        if self.create_error is not None:
            raise self.create_error
        remote_id = f"{self.id_prefix}{next(self._ids)}"
        fields = {k: v for k, v in details.items() if k != "display_name"}
        obj = self.add(remote_id, details.get("display_name"), self.create_state, **fields)
        if self.work_request:
            return CreateResult(work_request_id=f"ocid1.workrequest.oc1..{remote_id[-1]}")
        return CreateResult(obj=obj)

    def get(self, remote_id: str) -> RemoteObject:
        self.calls.append(("get", remote_id))
        if self.get_error is not None:
            raise self.get_error
        if remote_id not in self.objects:
            raise RemoteNotFoundError(self.service_name, "get", f"{remote_id} not found")
        return self.objects[remote_id]

    def list(self, scope: str, display_name: str, limit: int, **filters: str) -> list[RemoteObject]:
        self.calls.append(("list", {"scope": scope, "display_name": display_name, "limit": limit, **filters}))
        matches = [o for o in self.objects.values() if o.display_name == display_name]
        return matches[:limit]

    def update(self, remote_id: str, details: dict[str, Any]) -> RemoteObject | None:
        self.calls.append(("update", (remote_id, details)))
        self.objects[remote_id].fields.update(details)
        if "display_name" in details:
            self.objects[remote_id].display_name = details["display_name"]
        return None

    def delete(self, remote_id: str) -> None:
        self.calls.append(("delete", remote_id))
        if self.delete_error is not None:
            raise self.delete_error
        if remote_id not in self.objects:
            raise RemoteNotFoundError(self.service_name, "delete", f"{remote_id} not found")
        del self.objects[remote_id]


class FakeSecretStore:
    """In-memory SecretStore."""

    def __init__(self):
        self.secrets: dict[tuple[str, str], dict[str, Any]] = {}
        self.delete_error: Exception | None = None

    def create_secret(self, name, namespace, labels, data):
        if (namespace, name) in self.secrets:
            raise SecretAlreadyExistsError(f"{namespace}/{name}")
        self.secrets[(namespace, name)] = {"labels": labels, "data": data}
        return True

    def get_secret(self, name, namespace):
        entry = self.secrets.get((namespace, name))
        return entry["data"] if entry else None

    def update_secret(self, name, namespace, labels, data):
        self.secrets[(namespace, name)] = {"labels": labels, "data": data}
        return True

    def delete_secret(self, name, namespace):
        if self.delete_error is not None:
            raise self.delete_error
        return self.secrets.pop((namespace, name), None) is not None


@pytest.fixture
def fake_client() -> FakeServiceClient:
    return FakeServiceClient()


@pytest.fixture
def fake_secrets() -> FakeSecretStore:
    return FakeSecretStore()


@pytest.fixture
def make_client():
    """Factory for clients with non-default behaviour."""
    return FakeServiceClient
