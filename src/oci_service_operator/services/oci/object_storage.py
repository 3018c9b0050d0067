"""Object Storage bucket adapter.

Buckets are addressed by ``<namespace>/<bucketName>`` and have no lifecycle
state; any bucket the API returns is reported as ACTIVE.
"""

from __future__ import annotations

from typing import Any

import oci

from ...exceptions import RemoteNotFoundError
from ...models import CreateResult, RemoteObject
from ...reconcile.identity import join_composite_id, split_composite_id
from .base import OCIServiceClient, work_request_id

BUCKET_ACTIVE = "ACTIVE"


def bucket_to_remote(bucket: Any) -> RemoteObject:
    data = oci.util.to_dict(bucket) or {}
    return RemoteObject(
        id=join_composite_id(data["namespace"], data["name"]),
        display_name=data.get("name"),
        lifecycle_state=BUCKET_ACTIVE,
        fields=data,
    )


class ObjectStorageServiceClient(OCIServiceClient):
    service_name = "objectstorage"

    def get_namespace(self, compartment_id: str | None) -> str:
        """Return the tenancy's Object Storage namespace."""
        kwargs = {"compartment_id": compartment_id} if compartment_id else {}
        return self._call("get_namespace", self.client.get_namespace, **kwargs).data

    def create(self, details: dict[str, Any]) -> CreateResult:
        details = dict(details)
        namespace = details.pop("namespace_name")
        response = self._call(
            "create_bucket",
            self.client.create_bucket,
            namespace,
            oci.object_storage.models.CreateBucketDetails(**details),
        )
        return CreateResult(obj=bucket_to_remote(response.data), work_request_id=work_request_id(response))

    def get(self, remote_id: str) -> RemoteObject:
        namespace, name = split_composite_id(remote_id)
        return bucket_to_remote(self._call("get_bucket", self.client.get_bucket, namespace, name).data)

    def list(self, scope: str, display_name: str, limit: int, **filters: str) -> list[RemoteObject]:
        """Bucket names are unique per namespace, so a lookup is a single get."""
        try:
            return [self.get(join_composite_id(scope, display_name))]
        except RemoteNotFoundError:
            return []

    def update(self, remote_id: str, details: dict[str, Any]) -> RemoteObject | None:
        namespace, name = split_composite_id(remote_id)
        response = self._call(
            "update_bucket",
            self.client.update_bucket,
            namespace,
            name,
            oci.object_storage.models.UpdateBucketDetails(**details),
        )
        return bucket_to_remote(response.data)

    def delete(self, remote_id: str) -> None:
        namespace, name = split_composite_id(remote_id)
        self._call("delete_bucket", self.client.delete_bucket, namespace, name)
