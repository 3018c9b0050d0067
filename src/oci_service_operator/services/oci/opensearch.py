"""OpenSearch cluster adapter."""

from __future__ import annotations

from typing import Any

import oci

from ...models import CreateResult, RemoteObject
from .base import OCIServiceClient, to_remote, work_request_id


class OpenSearchServiceClient(OCIServiceClient):
    service_name = "opensearch"

    def create(self, details: dict[str, Any]) -> CreateResult:
        """Cluster creation is asynchronous; only a work request id comes back."""
        response = self._call(
            "create_opensearch_cluster",
            self.client.create_opensearch_cluster,
            oci.opensearch.models.CreateOpensearchClusterDetails(**details),
        )
        return CreateResult(work_request_id=work_request_id(response))

    def get(self, remote_id: str) -> RemoteObject:
        return to_remote(
            self._call("get_opensearch_cluster", self.client.get_opensearch_cluster, remote_id).data
        )

    def list(self, scope: str, display_name: str, limit: int, **filters: str) -> list[RemoteObject]:
        response = self._call(
            "list_opensearch_clusters",
            self.client.list_opensearch_clusters,
            scope,
            display_name=display_name,
            limit=limit,
        )
        return [to_remote(item) for item in response.data.items]

    def update(self, remote_id: str, details: dict[str, Any]) -> RemoteObject | None:
        self._call(
            "update_opensearch_cluster",
            self.client.update_opensearch_cluster,
            remote_id,
            oci.opensearch.models.UpdateOpensearchClusterDetails(**details),
        )
        return None

    def delete(self, remote_id: str) -> None:
        self._call("delete_opensearch_cluster", self.client.delete_opensearch_cluster, remote_id)
