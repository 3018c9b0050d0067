"""OpenSearch cluster kind."""

from __future__ import annotations

from typing import Any

from ..constants import KIND_OPENSEARCH_CLUSTER, SPEC_COMPARTMENT_ID, SPEC_DISPLAY_NAME
from ..models import RemoteObject
from ..reconcile.drift import FieldMapping
from ..reconcile.lifecycle import LifecycleClassifier
from ..reconcile.retry import exponential_policy
from .base import TAG_FIELDS, ResourceKind, common_create_fields, encode_credentials, optional_fields

CLUSTER_STATES = ("ACTIVE", "CREATING", "UPDATING", "DELETING", "DELETED", "FAILED")

CREATE_FIELDS = {
    "softwareVersion": "software_version",
    "masterNodeCount": "master_node_count",
    "masterNodeHostType": "master_node_host_type",
    "masterNodeHostBareMetalShape": "master_node_host_bare_metal_shape",
    "masterNodeHostOcpuCount": "master_node_host_ocpu_count",
    "masterNodeHostMemoryGB": "master_node_host_memory_gb",
    "dataNodeCount": "data_node_count",
    "dataNodeHostType": "data_node_host_type",
    "dataNodeHostBareMetalShape": "data_node_host_bare_metal_shape",
    "dataNodeHostOcpuCount": "data_node_host_ocpu_count",
    "dataNodeHostMemoryGB": "data_node_host_memory_gb",
    "dataNodeStorageGB": "data_node_storage_gb",
    "opendashboardNodeCount": "opendashboard_node_count",
    "opendashboardNodeHostOcpuCount": "opendashboard_node_host_ocpu_count",
    "opendashboardNodeHostMemoryGB": "opendashboard_node_host_memory_gb",
    "vcnId": "vcn_id",
    "subnetId": "subnet_id",
    "vcnCompartmentId": "vcn_compartment_id",
    "subnetCompartmentId": "subnet_compartment_id",
    "securityMode": "security_mode",
    "securityMasterUserName": "security_master_user_name",
    "securityMasterUserPasswordHash": "security_master_user_password_hash",
}


class OpenSearchClusterKind(ResourceKind):
    name = KIND_OPENSEARCH_CLUSTER
    plural = "opensearchclusters"
    secret_suffix = "opensearch"
    creates_via_work_request = True
    # Cluster teardown is reported done even if the delete call fails, so a
    # stuck cluster never blocks removal of the custom resource.
    swallow_delete_errors = True
    live_states = frozenset({"ACTIVE", "CREATING", "UPDATING"})
    lifecycle = LifecycleClassifier(
        active=frozenset({"ACTIVE"}),
        failed=frozenset({"FAILED"}),
        states=CLUSTER_STATES,
    )
    update_fields = (
        FieldMapping(SPEC_DISPLAY_NAME, "display_name"),
        *TAG_FIELDS,
    )
    create_poll_policy = exponential_policy(max_attempts=10, max_delay=300.0)
    required_fields = (
        SPEC_COMPARTMENT_ID,
        SPEC_DISPLAY_NAME,
        "softwareVersion",
        "vcnId",
        "subnetId",
        "vcnCompartmentId",
        "subnetCompartmentId",
    )

    def build_create_details(self, spec: dict[str, Any]) -> dict[str, Any]:
        details = common_create_fields(spec)
        details.update(optional_fields(spec, CREATE_FIELDS))
        return details

    def credential_map(self, spec: dict[str, Any], remote: RemoteObject) -> dict[str, bytes]:
        return encode_credentials({
            "opensearchFqdn": remote.get("opensearch_fqdn"),
            "opendashboardFqdn": remote.get("opendashboard_fqdn"),
            "opensearchPrivateIp": remote.get("opensearch_private_ip"),
        })
