"""Capability tables for every managed resource kind."""

from __future__ import annotations

from .apigateway import ApiGatewayDeploymentKind, ApiGatewayKind
from .base import ResourceKind
from .dataflow import DataFlowApplicationKind
from .networking import NatGatewayKind
from .objectstorage import ObjectStorageBucketKind
from .opensearch import OpenSearchClusterKind
from .queue import QueueKind


def build_kinds(region: str | None = None) -> dict[str, ResourceKind]:
    """Return every supported kind keyed by its custom resource kind name.

    Args:
        region: Region used to render endpoints in generated credentials
    """
    kinds: list[ResourceKind] = [
        ApiGatewayKind(),
        ApiGatewayDeploymentKind(),
        ObjectStorageBucketKind(region=region),
        OpenSearchClusterKind(),
        QueueKind(),
        DataFlowApplicationKind(),
        NatGatewayKind(),
    ]
    return {kind.name: kind for kind in kinds}


__all__ = [
    "ApiGatewayDeploymentKind",
    "ApiGatewayKind",
    "DataFlowApplicationKind",
    "NatGatewayKind",
    "ObjectStorageBucketKind",
    "OpenSearchClusterKind",
    "QueueKind",
    "ResourceKind",
    "build_kinds",
]
