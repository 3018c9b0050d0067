"""API Gateway adapters."""

from __future__ import annotations

from typing import Any

import oci

from ...kinds.apigateway import BACKEND_FUNCTIONS, BACKEND_STOCK_RESPONSE
from ...models import CreateResult, RemoteObject
from .base import OCIServiceClient, drop_empty, to_remote, work_request_id


class GatewayServiceClient(OCIServiceClient):
    service_name = "apigateway"

    def create(self, details: dict[str, Any]) -> CreateResult:
        response = self._call(
            "create_gateway",
            self.client.create_gateway,
            oci.apigateway.models.CreateGatewayDetails(**details),
        )
        return CreateResult(obj=to_remote(response.data), work_request_id=work_request_id(response))

    def get(self, remote_id: str) -> RemoteObject:
        return to_remote(self._call("get_gateway", self.client.get_gateway, remote_id).data)

    def list(self, scope: str, display_name: str, limit: int, **filters: str) -> list[RemoteObject]:
        response = self._call(
            "list_gateways",
            self.client.list_gateways,
            scope,
            display_name=display_name,
            limit=limit,
            **drop_empty(filters),
        )
        return [to_remote(item) for item in response.data.items]

    def update(self, remote_id: str, details: dict[str, Any]) -> RemoteObject | None:
        # Update is asynchronous and returns only a work request
        self._call(
            "update_gateway",
            self.client.update_gateway,
            remote_id,
            oci.apigateway.models.UpdateGatewayDetails(**details),
        )
        return None

    def delete(self, remote_id: str) -> None:
        self._call("delete_gateway", self.client.delete_gateway, remote_id)


def build_backend(backend: dict[str, Any]) -> Any:
    """Build the SDK backend model for a normalized backend."""
    models = oci.apigateway.models
    if backend["type"] == BACKEND_FUNCTIONS:
        return models.OracleFunctionBackend(function_id=backend.get("function_id"))
    if backend["type"] == BACKEND_STOCK_RESPONSE:
        return models.StockResponseBackend(status=backend.get("status"), body=backend.get("body"))
    return models.HTTPBackend(url=backend.get("url"))


def build_specification(routes: list[dict[str, Any]]) -> Any:
    """Build an ``ApiSpecification`` from a normalized route table."""
    models = oci.apigateway.models
    return models.ApiSpecification(
        routes=[
            models.ApiSpecificationRoute(
                path=route["path"],
                methods=route["methods"] or None,
                backend=build_backend(route["backend"]),
            )
            for route in routes
        ]
    )


def _with_specification(details: dict[str, Any]) -> dict[str, Any]:
    details = dict(details)
    if "routes" in details:
        details["specification"] = build_specification(details.pop("routes"))
    return details


class DeploymentServiceClient(OCIServiceClient):
    service_name = "apigateway"

    def create(self, details: dict[str, Any]) -> CreateResult:
        response = self._call(
            "create_deployment",
            self.client.create_deployment,
            oci.apigateway.models.CreateDeploymentDetails(**_with_specification(details)),
        )
        return CreateResult(obj=to_remote(response.data), work_request_id=work_request_id(response))

    def get(self, remote_id: str) -> RemoteObject:
        return to_remote(self._call("get_deployment", self.client.get_deployment, remote_id).data)

    def list(self, scope: str, display_name: str, limit: int, **filters: str) -> list[RemoteObject]:
        response = self._call(
            "list_deployments",
            self.client.list_deployments,
            scope,
            display_name=display_name,
            limit=limit,
            **drop_empty(filters),
        )
        return [to_remote(item) for item in response.data.items]

    def update(self, remote_id: str, details: dict[str, Any]) -> RemoteObject | None:
        self._call(
            "update_deployment",
            self.client.update_deployment,
            remote_id,
            oci.apigateway.models.UpdateDeploymentDetails(**_with_specification(details)),
        )
        return None

    def delete(self, remote_id: str) -> None:
        self._call("delete_deployment", self.client.delete_deployment, remote_id)
