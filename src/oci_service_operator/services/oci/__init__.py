"""Live service clients backed by the OCI Python SDK."""

from __future__ import annotations

from typing import Any

import oci

from ...config import OperatorConfig
from ...constants import (
    KIND_API_GATEWAY,
    KIND_API_GATEWAY_DEPLOYMENT,
    KIND_DATAFLOW_APPLICATION,
    KIND_NAT_GATEWAY,
    KIND_OBJECT_STORAGE_BUCKET,
    KIND_OPENSEARCH_CLUSTER,
    KIND_QUEUE,
)
from ...utils.rate_limit import RateLimiter
from .apigateway import DeploymentServiceClient, GatewayServiceClient
from .base import OCIServiceClient, client_kwargs, load_oci_config
from .data_flow import DataFlowServiceClient
from .networking import NatGatewayServiceClient
from .object_storage import ObjectStorageServiceClient
from .opensearch import OpenSearchServiceClient
from .queue import QueueServiceClient

# Adapter class and SDK client class per resource kind
ADAPTERS: dict[str, tuple[type[OCIServiceClient], Any]] = {
    KIND_API_GATEWAY: (GatewayServiceClient, oci.apigateway.GatewayClient),
    KIND_API_GATEWAY_DEPLOYMENT: (DeploymentServiceClient, oci.apigateway.DeploymentClient),
    KIND_OBJECT_STORAGE_BUCKET: (ObjectStorageServiceClient, oci.object_storage.ObjectStorageClient),
    KIND_OPENSEARCH_CLUSTER: (OpenSearchServiceClient, oci.opensearch.OpensearchClusterClient),
    KIND_QUEUE: (QueueServiceClient, oci.queue.QueueAdminClient),
    KIND_DATAFLOW_APPLICATION: (DataFlowServiceClient, oci.data_flow.DataFlowClient),
    KIND_NAT_GATEWAY: (NatGatewayServiceClient, oci.core.VirtualNetworkClient),
}


def create_client(kind_name: str, oci_config: dict[str, Any], config: OperatorConfig) -> OCIServiceClient:
    """Create the service client for a resource kind.

    Args:
        kind_name: Custom resource kind
        oci_config: Loaded SDK configuration
        config: Operator settings (timeouts, rate limit)

    Raises:
        ValueError: If the kind has no adapter
    """
    if kind_name not in ADAPTERS:
        raise ValueError(f"No service client for kind {kind_name}")
    adapter_cls, sdk_cls = ADAPTERS[kind_name]
    sdk_client = sdk_cls(oci_config, **client_kwargs(config.request_timeout_seconds))
    return adapter_cls(sdk_client, rate_limiter=RateLimiter(config.api_rate_limit))


__all__ = [
    "ADAPTERS",
    "DataFlowServiceClient",
    "DeploymentServiceClient",
    "GatewayServiceClient",
    "NatGatewayServiceClient",
    "OCIServiceClient",
    "ObjectStorageServiceClient",
    "OpenSearchServiceClient",
    "QueueServiceClient",
    "create_client",
    "load_oci_config",
]
