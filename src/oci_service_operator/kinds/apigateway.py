"""API Gateway and API Gateway deployment kinds."""

from __future__ import annotations

from typing import Any

from ..constants import KIND_API_GATEWAY, KIND_API_GATEWAY_DEPLOYMENT, SPEC_COMPARTMENT_ID, SPEC_DISPLAY_NAME
from ..models import RemoteObject
from ..reconcile.drift import FieldMapping, sorted_list
from ..reconcile.lifecycle import LifecycleClassifier
from ..reconcile.retry import fixed_policy
from .base import TAG_FIELDS, ResourceKind, common_create_fields, encode_credentials, optional_fields

GATEWAY_STATES = ("CREATING", "ACTIVE", "UPDATING", "DELETING", "DELETED", "FAILED")
LIVE_STATES = frozenset({"ACTIVE", "CREATING", "UPDATING"})

BACKEND_HTTP = "HTTP_BACKEND"
BACKEND_FUNCTIONS = "ORACLE_FUNCTIONS_BACKEND"
BACKEND_STOCK_RESPONSE = "STOCK_RESPONSE_BACKEND"


class ApiGatewayKind(ResourceKind):
    name = KIND_API_GATEWAY
    plural = "apigateways"
    secret_suffix = "gateway"
    live_states = LIVE_STATES
    lifecycle = LifecycleClassifier(
        active=frozenset({"ACTIVE"}),
        failed=frozenset({"FAILED"}),
        states=GATEWAY_STATES,
    )
    update_fields = (
        FieldMapping(SPEC_DISPLAY_NAME, "display_name"),
        FieldMapping("certificateId", "certificate_id"),
        FieldMapping("networkSecurityGroupIds", "network_security_group_ids", sorted_list),
        *TAG_FIELDS,
    )
    create_poll_policy = fixed_policy(max_attempts=30, interval=60.0)
    required_fields = (SPEC_COMPARTMENT_ID, SPEC_DISPLAY_NAME, "endpointType", "subnetId")

    def build_create_details(self, spec: dict[str, Any]) -> dict[str, Any]:
        details = common_create_fields(spec)
        details["endpoint_type"] = spec.get("endpointType")
        details["subnet_id"] = spec.get("subnetId")
        details.update(optional_fields(spec, {
            "certificateId": "certificate_id",
            "networkSecurityGroupIds": "network_security_group_ids",
        }))
        return details

    def credential_map(self, spec: dict[str, Any], remote: RemoteObject) -> dict[str, bytes]:
        return encode_credentials({"hostname": remote.get("hostname")})


def normalize_backend(backend: dict[str, Any] | None) -> dict[str, Any]:
    """Reduce a backend to the attributes that matter for its type.

    Accepts the spec's camelCase keys and the SDK's snake_case keys alike.
    Unknown types are treated as HTTP backends.
    """
    backend = backend or {}
    backend_type = backend.get("type") or BACKEND_HTTP
    if backend_type == BACKEND_FUNCTIONS:
        return {"type": BACKEND_FUNCTIONS, "function_id": backend.get("functionId", backend.get("function_id"))}
    if backend_type == BACKEND_STOCK_RESPONSE:
        return {"type": BACKEND_STOCK_RESPONSE, "status": backend.get("status"), "body": backend.get("body")}
    return {"type": BACKEND_HTTP, "url": backend.get("url")}


def normalize_routes(routes: Any) -> list[dict[str, Any]]:
    """Canonical route table used both for requests and for drift comparison."""
    normalized = []
    for route in routes or []:
        normalized.append({
            "path": route.get("path"),
            "methods": sorted(route.get("methods") or []),
            "backend": normalize_backend(route.get("backend")),
        })
    return normalized


def _remote_routes(remote: RemoteObject) -> list[dict[str, Any]]:
    specification = remote.get("specification") or {}
    return normalize_routes(specification.get("routes"))


class ApiGatewayDeploymentKind(ResourceKind):
    name = KIND_API_GATEWAY_DEPLOYMENT
    plural = "apigatewaydeployments"
    live_states = LIVE_STATES
    lifecycle = LifecycleClassifier(
        active=frozenset({"ACTIVE"}),
        failed=frozenset({"FAILED"}),
        states=GATEWAY_STATES,
    )
    update_fields = (
        FieldMapping(SPEC_DISPLAY_NAME, "display_name"),
        *TAG_FIELDS,
    )
    create_poll_policy = fixed_policy(max_attempts=30, interval=60.0)
    required_fields = (SPEC_COMPARTMENT_ID, SPEC_DISPLAY_NAME, "gatewayId", "pathPrefix")

    def list_filters(self, spec: dict[str, Any]) -> dict[str, str]:
        return {"gateway_id": spec.get("gatewayId") or ""}

    def build_create_details(self, spec: dict[str, Any]) -> dict[str, Any]:
        details = common_create_fields(spec)
        details["gateway_id"] = spec.get("gatewayId")
        details["path_prefix"] = spec.get("pathPrefix")
        details["routes"] = normalize_routes(spec.get("routes"))
        return details

    def _routes_drifted(self, spec: dict[str, Any], remote: RemoteObject) -> bool:
        if not spec.get("routes"):
            return False
        return normalize_routes(spec["routes"]) != _remote_routes(remote)

    def needs_update(self, spec: dict[str, Any], remote: RemoteObject) -> bool:
        return super().needs_update(spec, remote) or self._routes_drifted(spec, remote)

    def build_update_details(self, spec: dict[str, Any], remote: RemoteObject) -> dict[str, Any]:
        details = super().build_update_details(spec, remote)
        if self._routes_drifted(spec, remote):
            details["routes"] = normalize_routes(spec["routes"])
        return details
