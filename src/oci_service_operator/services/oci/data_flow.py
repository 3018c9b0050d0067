"""Data Flow application adapter."""

from __future__ import annotations

from typing import Any

import oci

from ...models import CreateResult, RemoteObject
from .base import OCIServiceClient, to_remote, work_request_id


class DataFlowServiceClient(OCIServiceClient):
    service_name = "dataflow"

    def create(self, details: dict[str, Any]) -> CreateResult:
        response = self._call(
            "create_application",
            self.client.create_application,
            oci.data_flow.models.CreateApplicationDetails(**details),
        )
        return CreateResult(obj=to_remote(response.data), work_request_id=work_request_id(response))

    def get(self, remote_id: str) -> RemoteObject:
        return to_remote(self._call("get_application", self.client.get_application, remote_id).data)

    def list(self, scope: str, display_name: str, limit: int, **filters: str) -> list[RemoteObject]:
        response = self._call(
            "list_applications",
            self.client.list_applications,
            scope,
            display_name=display_name,
            limit=limit,
        )
        # list_applications returns a plain list of summaries
        return [to_remote(item) for item in response.data]

    def update(self, remote_id: str, details: dict[str, Any]) -> RemoteObject | None:
        response = self._call(
            "update_application",
            self.client.update_application,
            remote_id,
            oci.data_flow.models.UpdateApplicationDetails(**details),
        )
        return to_remote(response.data) if response.data is not None else None

    def delete(self, remote_id: str) -> None:
        self._call("delete_application", self.client.delete_application, remote_id)
