"""Capability table describing one managed resource kind."""

from __future__ import annotations

from typing import Any

from ..constants import (
    COND_FAILED,
    LABEL_MANAGED_BY,
    LABEL_RESOURCE_KIND,
    LABEL_RESOURCE_NAME,
    SPEC_COMPARTMENT_ID,
    SPEC_DEFINED_TAGS,
    SPEC_DISPLAY_NAME,
    SPEC_FREEFORM_TAGS,
    SPEC_ID,
)
from ..exceptions import ValidationError
from ..models import RemoteObject
from ..reconcile.drift import FieldMapping, changed_fields, nested_string_map, string_map
from ..reconcile.lifecycle import LifecycleClassifier, LifecycleDecision
from ..reconcile.retry import PollingPolicy

TAG_FIELDS = (
    FieldMapping(SPEC_FREEFORM_TAGS, "freeform_tags", string_map),
    FieldMapping(SPEC_DEFINED_TAGS, "defined_tags", nested_string_map),
)


class ResourceKind:
    """Everything the engine needs to know about one kind.

    Subclasses set the class attributes and override the builders; the
    engine itself never branches on the kind's name.
    """

    name: str = ""
    plural: str = ""
    # Short suffix for the generated credential secret, None for kinds without one
    secret_suffix: str | None = None
    # Identifier is "<scope>/<name>" rather than an opaque OCID
    composite_id: bool = False
    # Create hands back a work request id instead of the object
    creates_via_work_request: bool = False
    # Report done on delete errors other than not-found instead of propagating them
    swallow_delete_errors: bool = False
    # States in which a listed object is the same logical resource
    live_states: frozenset[str] = frozenset()
    # States in which the remote refuses writes
    busy_states: frozenset[str] = frozenset({"CREATING", "UPDATING", "DELETING"})
    lifecycle: LifecycleClassifier = LifecycleClassifier(active=frozenset(), failed=frozenset())
    update_fields: tuple[FieldMapping, ...] = ()
    create_poll_policy: PollingPolicy | None = None
    # Spec keys the kind may fill in once resolved
    cached_spec_fields: tuple[str, ...] = ()
    required_fields: tuple[str, ...] = (SPEC_COMPARTMENT_ID, SPEC_DISPLAY_NAME)

    def display_name(self, spec: dict[str, Any]) -> str:
        return spec.get(SPEC_DISPLAY_NAME) or ""

    def scope(self, spec: dict[str, Any]) -> str:
        return spec.get(SPEC_COMPARTMENT_ID) or ""

    def explicit_id(self, spec: dict[str, Any]) -> str:
        return (spec.get(SPEC_ID) or "").strip()

    def list_filters(self, spec: dict[str, Any]) -> dict[str, str]:
        return {}

    def validate(self, spec: dict[str, Any]) -> None:
        """Reject specs that cannot produce a request.

        Binding by explicit id needs nothing else from the spec.

        Raises:
            ValidationError: If a required field is missing
        """
        if self.explicit_id(spec):
            return
        for field in self.required_fields:
            if not spec.get(field):
                raise ValidationError("field is required", field=field)

    def prepare(self, spec: dict[str, Any], client: Any) -> bool:
        """Resolve values the spec leaves implicit, caching them into ``spec``.

        Returns:
            True if the spec was modified
        """
        return False

    def build_create_details(self, spec: dict[str, Any]) -> dict[str, Any]:
        raise NotImplementedError

    def build_update_details(self, spec: dict[str, Any], remote: RemoteObject) -> dict[str, Any]:
        """Send only the fields that drifted."""
        return changed_fields(spec, remote.fields, self.update_fields)

    def needs_update(self, spec: dict[str, Any], remote: RemoteObject) -> bool:
        return bool(changed_fields(spec, remote.fields, self.update_fields))

    def classify(self, remote: RemoteObject) -> LifecycleDecision:
        return self.lifecycle.classify(remote.lifecycle_state)

    def accepts_update(self, remote: RemoteObject) -> bool:
        """Whether drift may be written to ``remote`` in its current state."""
        if remote.lifecycle_state in self.busy_states:
            return False
        return self.classify(remote).condition != COND_FAILED

    def credential_map(self, spec: dict[str, Any], remote: RemoteObject) -> dict[str, bytes] | None:
        """Data for the generated secret, or None if this kind has none."""
        return None

    def secret_name(self, resource_name: str) -> str:
        return f"{resource_name}-{self.secret_suffix}" if self.secret_suffix else resource_name

    def secret_labels(self, resource_name: str) -> dict[str, str]:
        return {
            LABEL_MANAGED_BY: "oci-service-operator",
            LABEL_RESOURCE_KIND: self.name,
            LABEL_RESOURCE_NAME: resource_name,
        }


def common_create_fields(spec: dict[str, Any]) -> dict[str, Any]:
    """Compartment, display name and tags shared by most create requests."""
    details: dict[str, Any] = {
        "compartment_id": spec.get(SPEC_COMPARTMENT_ID),
        "display_name": spec.get(SPEC_DISPLAY_NAME),
    }
    return {**details, **tag_fields(spec)}


def tag_fields(spec: dict[str, Any]) -> dict[str, Any]:
    details: dict[str, Any] = {}
    if spec.get(SPEC_FREEFORM_TAGS):
        details["freeform_tags"] = string_map(spec[SPEC_FREEFORM_TAGS])
    if spec.get(SPEC_DEFINED_TAGS):
        details["defined_tags"] = nested_string_map(spec[SPEC_DEFINED_TAGS])
    return details


def optional_fields(spec: dict[str, Any], mapping: dict[str, str]) -> dict[str, Any]:
    """Copy set spec values onto their request attribute names."""
    return {attr: spec[key] for key, attr in mapping.items() if spec.get(key) not in (None, "", [], {})}


def encode_credentials(values: dict[str, Any]) -> dict[str, bytes]:
    """Drop empty values and encode the rest as UTF-8 bytes."""
    return {k: str(v).encode("utf-8") for k, v in values.items() if v not in (None, "")}
