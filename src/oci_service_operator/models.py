"""Data models shared by the reconciliation engine, resource kinds and handlers."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from .constants import (
    STATUS_CONDITIONS,
    STATUS_CREATED_AT,
    STATUS_REMOTE_ID,
    STATUS_WORK_REQUEST_ID,
)


@dataclass
class DesiredResource:
    """A desired-state object as handed over by the host control loop."""

    kind: str
    name: str
    namespace: str
    spec: dict[str, Any]
    uid: str = ""
    generation: int = 0

    @classmethod
    def from_kopf(
        cls,
        kind: str,
        spec: dict[str, Any],
        meta: dict[str, Any],
    ) -> DesiredResource:
        """Build from kopf handler kwargs.

        The spec is deep-copied so kinds may cache resolved values into it
        without touching kopf's read-only view.
        """
        return cls(
            kind=kind,
            name=meta.get("name", "unknown"),
            namespace=meta.get("namespace", "default"),
            spec=copy.deepcopy(dict(spec or {})),
            uid=meta.get("uid", ""),
            generation=meta.get("generation", 0) or 0,
        )


@dataclass
class ResourceStatus:
    """Observed state of one resource, owned by the engine.

    ``conditions`` is append-only: entries are never rewritten, removed or
    reordered, and the last element is the current state.
    """

    remote_id: str = ""
    conditions: list[dict[str, Any]] = field(default_factory=list)
    created_at: str | None = None
    work_request_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ResourceStatus:
        data = data or {}
        return cls(
            remote_id=data.get(STATUS_REMOTE_ID) or "",
            conditions=[dict(c) for c in data.get(STATUS_CONDITIONS) or []],
            created_at=data.get(STATUS_CREATED_AT),
            work_request_id=data.get(STATUS_WORK_REQUEST_ID),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            STATUS_REMOTE_ID: self.remote_id,
            STATUS_CONDITIONS: [dict(c) for c in self.conditions],
            STATUS_CREATED_AT: self.created_at,
        }
        if self.work_request_id:
            result[STATUS_WORK_REQUEST_ID] = self.work_request_id
        return result


@dataclass
class RemoteObject:
    """Provider-side view of a managed resource.

    ``fields`` holds the kind-specific observable attributes using the
    SDK's snake_case attribute names (for example ``hostname`` or
    ``freeform_tags``).
    """

    id: str
    display_name: str | None = None
    lifecycle_state: str | None = None
    fields: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        value = self.fields.get(key)
        return default if value is None else value


@dataclass
class CreateResult:
    """What a create call handed back: the object, a work request id, or both."""

    obj: RemoteObject | None = None
    work_request_id: str | None = None


@dataclass(frozen=True)
class ReconcileOutcome:
    """Result of one reconcile pass as seen by the host."""

    is_successful: bool
    should_requeue: bool
