"""Object Storage bucket kind.

Buckets have no OCID-style identity of their own for our purposes: they
are addressed by ``<namespace>/<bucketName>``.
"""

from __future__ import annotations

from typing import Any

from ..constants import KIND_OBJECT_STORAGE_BUCKET, SPEC_COMPARTMENT_ID
from ..models import RemoteObject
from ..reconcile.drift import FieldMapping
from ..reconcile.lifecycle import LifecycleClassifier
from .base import TAG_FIELDS, ResourceKind, encode_credentials, optional_fields, tag_fields

# The Object Storage API has no lifecycle enum; the adapter reports every
# readable bucket as ACTIVE.
BUCKET_STATES = ("ACTIVE",)

OBJECT_STORAGE_ENDPOINT = "https://objectstorage.{region}.oraclecloud.com"


def _versioning(value: Any) -> str | None:
    """Suspended is how the API reports versioning that was turned off."""
    if value in ("Disabled", "Suspended"):
        return "Disabled"
    return value or None


class ObjectStorageBucketKind(ResourceKind):
    name = KIND_OBJECT_STORAGE_BUCKET
    plural = "objectstoragebuckets"
    secret_suffix = "bucket"
    composite_id = True
    live_states = frozenset(BUCKET_STATES)
    lifecycle = LifecycleClassifier(
        active=frozenset({"ACTIVE"}),
        failed=frozenset(),
        states=BUCKET_STATES,
    )
    update_fields = (
        FieldMapping("accessType", "public_access_type"),
        FieldMapping("versioning", "versioning", _versioning),
        *TAG_FIELDS,
    )
    cached_spec_fields = ("namespace",)
    required_fields = (SPEC_COMPARTMENT_ID, "name")

    def __init__(self, region: str | None = None):
        self.region = region

    def display_name(self, spec: dict[str, Any]) -> str:
        return spec.get("name") or ""

    def scope(self, spec: dict[str, Any]) -> str:
        return spec.get("namespace") or ""

    def prepare(self, spec: dict[str, Any], client: Any) -> bool:
        """Look up the tenancy namespace once and cache it into the spec."""
        if spec.get("namespace") or self.explicit_id(spec):
            return False
        spec["namespace"] = client.get_namespace(spec.get(SPEC_COMPARTMENT_ID))
        return True

    def build_create_details(self, spec: dict[str, Any]) -> dict[str, Any]:
        details: dict[str, Any] = {
            "namespace_name": spec.get("namespace"),
            "name": spec.get("name"),
            "compartment_id": spec.get(SPEC_COMPARTMENT_ID),
        }
        details.update(optional_fields(spec, {
            "accessType": "public_access_type",
            "storageType": "storage_tier",
            "versioning": "versioning",
        }))
        details.update(tag_fields(spec))
        return details

    def build_update_details(self, spec: dict[str, Any], remote: RemoteObject) -> dict[str, Any]:
        details = super().build_update_details(spec, remote)
        if details.get("versioning") == "Disabled":
            # Versioning can only be suspended once it has been enabled
            details["versioning"] = "Suspended"
        return details

    def credential_map(self, spec: dict[str, Any], remote: RemoteObject) -> dict[str, bytes]:
        namespace = remote.get("namespace") or spec.get("namespace")
        bucket = remote.get("name") or spec.get("name")
        values = {"namespace": namespace, "bucketName": bucket}
        if self.region:
            values["apiEndpoint"] = (
                f"{OBJECT_STORAGE_ENDPOINT.format(region=self.region)}/n/{namespace}/b/{bucket}"
            )
        return encode_credentials(values)
