"""NAT gateway kind."""

from __future__ import annotations

from typing import Any

from ..constants import KIND_NAT_GATEWAY, SPEC_COMPARTMENT_ID, SPEC_DISPLAY_NAME
from ..reconcile.drift import FieldMapping
from ..reconcile.lifecycle import LifecycleClassifier
from ..reconcile.retry import fixed_policy
from .base import TAG_FIELDS, ResourceKind, common_create_fields, optional_fields

NAT_GATEWAY_STATES = ("PROVISIONING", "AVAILABLE", "TERMINATING", "TERMINATED")


class NatGatewayKind(ResourceKind):
    name = KIND_NAT_GATEWAY
    plural = "ocinatgateways"
    live_states = frozenset({"AVAILABLE", "PROVISIONING"})
    busy_states = frozenset({"PROVISIONING", "TERMINATING"})
    lifecycle = LifecycleClassifier(
        active=frozenset({"AVAILABLE"}),
        failed=frozenset({"TERMINATED"}),
        states=NAT_GATEWAY_STATES,
    )
    update_fields = (
        FieldMapping(SPEC_DISPLAY_NAME, "display_name"),
        FieldMapping("routeTableId", "route_table_id"),
        *TAG_FIELDS,
    )
    create_poll_policy = fixed_policy(max_attempts=30, interval=10.0, creating_state="PROVISIONING")
    required_fields = (SPEC_COMPARTMENT_ID, SPEC_DISPLAY_NAME, "vcnId")

    def list_filters(self, spec: dict[str, Any]) -> dict[str, str]:
        return {"vcn_id": spec.get("vcnId") or ""}

    def build_create_details(self, spec: dict[str, Any]) -> dict[str, Any]:
        details = common_create_fields(spec)
        details["vcn_id"] = spec.get("vcnId")
        details.update(optional_fields(spec, {
            "blockTraffic": "block_traffic",
            "publicIpId": "public_ip_id",
            "routeTableId": "route_table_id",
        }))
        return details
