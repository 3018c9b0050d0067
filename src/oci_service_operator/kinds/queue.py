"""OCI Queue kind."""

from __future__ import annotations

from typing import Any

from ..constants import KIND_QUEUE, SPEC_DISPLAY_NAME
from ..models import RemoteObject
from ..reconcile.drift import FieldMapping
from ..reconcile.lifecycle import LifecycleClassifier
from ..reconcile.retry import exponential_policy
from .base import TAG_FIELDS, ResourceKind, common_create_fields, encode_credentials, optional_fields

QUEUE_STATES = ("CREATING", "UPDATING", "ACTIVE", "DELETING", "DELETED", "FAILED", "INACTIVE")


class QueueKind(ResourceKind):
    name = KIND_QUEUE
    plural = "ociqueues"
    secret_suffix = "queue"
    creates_via_work_request = True
    live_states = frozenset({"ACTIVE", "CREATING", "UPDATING"})
    lifecycle = LifecycleClassifier(
        active=frozenset({"ACTIVE"}),
        failed=frozenset({"FAILED"}),
        states=QUEUE_STATES,
    )
    update_fields = (
        FieldMapping(SPEC_DISPLAY_NAME, "display_name"),
        FieldMapping("visibilityInSeconds", "visibility_in_seconds"),
        FieldMapping("timeoutInSeconds", "timeout_in_seconds"),
        FieldMapping("deadLetterQueueDeliveryCount", "dead_letter_queue_delivery_count"),
        FieldMapping("customEncryptionKeyId", "custom_encryption_key_id"),
        *TAG_FIELDS,
    )
    create_poll_policy = exponential_policy(max_attempts=10, max_delay=300.0)

    def build_create_details(self, spec: dict[str, Any]) -> dict[str, Any]:
        details = common_create_fields(spec)
        details.update(optional_fields(spec, {
            "retentionInSeconds": "retention_in_seconds",
            "visibilityInSeconds": "visibility_in_seconds",
            "timeoutInSeconds": "timeout_in_seconds",
            "deadLetterQueueDeliveryCount": "dead_letter_queue_delivery_count",
            "customEncryptionKeyId": "custom_encryption_key_id",
        }))
        return details

    def credential_map(self, spec: dict[str, Any], remote: RemoteObject) -> dict[str, bytes]:
        return encode_credentials({
            "id": remote.id,
            "messagesEndpoint": remote.get("messages_endpoint"),
            "displayName": remote.display_name,
        })
