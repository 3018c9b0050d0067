"""Generic handler bridging kopf handler kwargs to a :class:`ResourceEngine`."""

from __future__ import annotations

from typing import Any

import kopf

from .. import metrics
from ..constants import COND_ACTIVE, COND_FAILED, COND_PROVISIONING, COND_UPDATING
from ..exceptions import OperatorError
from ..models import DesiredResource, ReconcileOutcome, ResourceStatus
from ..reconcile.engine import ResourceEngine
from ..tracing import trace_span
from ..utils.errors import sanitize_exception
from ..utils.events import (
    emit_delete_failed,
    emit_resource_active,
    emit_resource_created,
    emit_resource_deleted,
    emit_resource_updated,
)
from .base import BaseHandler


def outcome_label(outcome: ReconcileOutcome) -> str:
    """Result label for reconcile_total."""
    if outcome.is_successful:
        return "success"
    if outcome.should_requeue:
        return "requeue"
    return "failed"


class ResourceHandler(BaseHandler):
    """Handler for one managed resource kind.

    The engine is attached at operator startup, once the OCI configuration
    has been loaded.
    """

    def __init__(self, kind: str):
        super().__init__(kind)
        self.engine: ResourceEngine | None = None
        self.requeue_delay: float = 30.0

    def bind(self, engine: ResourceEngine, requeue_delay: float = 30.0) -> None:
        """Attach the engine that serves this kind."""
        self.engine = engine
        self.requeue_delay = requeue_delay

    def _require_engine(self) -> ResourceEngine:
        if self.engine is None:
            raise kopf.TemporaryError(f"no engine configured for {self.kind}", delay=self.requeue_delay)
        return self.engine

    def reconcile(
        self,
        spec: dict[str, Any],
        meta: dict[str, Any],
        status: dict[str, Any],
        patch: kopf.Patch,
    ) -> ReconcileOutcome:
        """Run one reconcile pass and write the resulting status into ``patch``.

        Raises:
            kopf.TemporaryError: For retryable operator errors
            kopf.PermanentError: For errors that will not succeed unmodified
        """
        engine = self._require_engine()
        resource = DesiredResource.from_kopf(self.kind, spec, meta)
        observed = ResourceStatus.from_dict(status)
        seen = len(observed.conditions)
        display_name = engine.kind.display_name(resource.spec) or resource.name

        with trace_span(
            "reconcile_resource",
            kind=self.kind,
            attributes={"resource.name": resource.name, "resource.display_name": display_name},
        ):
            try:
                outcome = engine.create_or_update(resource, observed)
            except OperatorError as e:
                raise e.as_kopf_error() from e
            finally:
                self._write_back(meta, spec, resource, observed, patch)
                self._emit_transitions(meta, display_name, observed.conditions[seen:])

        self.log_info(
            meta,
            f"{self.kind} {display_name} reconciled",
            reason="Reconciled",
            remote_id=observed.remote_id,
            successful=outcome.is_successful,
            requeue=outcome.should_requeue,
        )
        return outcome

    def _write_back(
        self,
        meta: dict[str, Any],
        spec: dict[str, Any],
        resource: DesiredResource,
        observed: ResourceStatus,
        patch: kopf.Patch,
    ) -> None:
        latest = observed.conditions[-1] if observed.conditions else {}
        self.update_resource_status(
            patch,
            meta,
            ready=latest.get("type") == COND_ACTIVE,
            status_data=observed.to_dict(),
        )
        for field in self._require_engine().kind.cached_spec_fields:
            value = resource.spec.get(field)
            if value and value != spec.get(field):
                patch.spec[field] = value

    def _emit_transitions(
        self,
        meta: dict[str, Any],
        display_name: str,
        appended: list[dict[str, Any]],
    ) -> None:
        for condition in appended:
            if condition.get("type") == COND_PROVISIONING and condition.get("reason") == "CreateRequested":
                emit_resource_created(meta, self.kind, display_name)
            elif condition.get("type") == COND_UPDATING:
                emit_resource_updated(meta, self.kind, display_name)
            elif condition.get("type") == COND_ACTIVE:
                emit_resource_active(meta, self.kind, display_name)
            elif condition.get("type") == COND_FAILED:
                self.log_warning(meta, condition.get("message", ""), reason=condition.get("reason", "Failed"))

    def delete(
        self,
        spec: dict[str, Any],
        meta: dict[str, Any],
        status: dict[str, Any],
        patch: kopf.Patch,
    ) -> None:
        """Tear down the remote object and release the finalizer once done.

        Raises:
            kopf.TemporaryError: If the delete did not complete; the finalizer stays
        """
        engine = self._require_engine()
        resource = DesiredResource.from_kopf(self.kind, spec, meta)
        observed = ResourceStatus.from_dict(status)
        display_name = engine.kind.display_name(resource.spec) or resource.name

        with trace_span(
            "delete_resource",
            kind=self.kind,
            attributes={"resource.name": resource.name, "remote.id": observed.remote_id},
        ):
            try:
                done = engine.delete(resource, observed)
            except Exception as e:
                sanitized_error = sanitize_exception(e)
                metrics.delete_total.labels(kind=self.kind, result="error").inc()
                metrics.error_total.labels(kind=self.kind, error_type=type(e).__name__).inc()
                self.log_error(meta, f"Failed to delete {self.kind} {display_name}", error=e, reason="DeleteFailed")
                emit_delete_failed(meta, f"Delete failed: {sanitized_error}")
                raise kopf.TemporaryError(f"Delete failed: {sanitized_error}", delay=self.requeue_delay) from e

            if not done:
                metrics.delete_total.labels(kind=self.kind, result="pending").inc()
                raise kopf.TemporaryError(f"{self.kind} {display_name} deletion pending", delay=self.requeue_delay)

        metrics.delete_total.labels(kind=self.kind, result="success").inc()
        emit_resource_deleted(meta, self.kind, display_name)
        self.log_info(meta, f"{self.kind} {display_name} deleted", reason="Deleted")
        self.remove_finalizer(meta, patch)
