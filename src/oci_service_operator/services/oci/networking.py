"""NAT gateway adapter over the virtual network service."""

from __future__ import annotations

from typing import Any

import oci

from ...models import CreateResult, RemoteObject
from .base import OCIServiceClient, drop_empty, to_remote, work_request_id


class NatGatewayServiceClient(OCIServiceClient):
    service_name = "virtualnetwork"

    def create(self, details: dict[str, Any]) -> CreateResult:
        response = self._call(
            "create_nat_gateway",
            self.client.create_nat_gateway,
            oci.core.models.CreateNatGatewayDetails(**details),
        )
        return CreateResult(obj=to_remote(response.data), work_request_id=work_request_id(response))

    def get(self, remote_id: str) -> RemoteObject:
        return to_remote(self._call("get_nat_gateway", self.client.get_nat_gateway, remote_id).data)

    def list(self, scope: str, display_name: str, limit: int, **filters: str) -> list[RemoteObject]:
        response = self._call(
            "list_nat_gateways",
            self.client.list_nat_gateways,
            scope,
            display_name=display_name,
            limit=limit,
            **drop_empty(filters),
        )
        return [to_remote(item) for item in response.data]

    def update(self, remote_id: str, details: dict[str, Any]) -> RemoteObject | None:
        response = self._call(
            "update_nat_gateway",
            self.client.update_nat_gateway,
            remote_id,
            oci.core.models.UpdateNatGatewayDetails(**details),
        )
        return to_remote(response.data) if response.data is not None else None

    def delete(self, remote_id: str) -> None:
        self._call("delete_nat_gateway", self.client.delete_nat_gateway, remote_id)
