"""Queue adapter."""

from __future__ import annotations

from typing import Any

import oci

from ...models import CreateResult, RemoteObject
from .base import OCIServiceClient, to_remote, work_request_id


class QueueServiceClient(OCIServiceClient):
    service_name = "queue"

    def create(self, details: dict[str, Any]) -> CreateResult:
        response = self._call(
            "create_queue",
            self.client.create_queue,
            oci.queue.models.CreateQueueDetails(**details),
        )
        return CreateResult(work_request_id=work_request_id(response))

    def get(self, remote_id: str) -> RemoteObject:
        return to_remote(self._call("get_queue", self.client.get_queue, remote_id).data)

    def list(self, scope: str, display_name: str, limit: int, **filters: str) -> list[RemoteObject]:
        response = self._call(
            "list_queues",
            self.client.list_queues,
            compartment_id=scope,
            display_name=display_name,
            limit=limit,
        )
        return [to_remote(item) for item in response.data.items]

    def update(self, remote_id: str, details: dict[str, Any]) -> RemoteObject | None:
        self._call(
            "update_queue",
            self.client.update_queue,
            remote_id,
            oci.queue.models.UpdateQueueDetails(**details),
        )
        return None

    def delete(self, remote_id: str) -> None:
        self._call("delete_queue", self.client.delete_queue, remote_id)
