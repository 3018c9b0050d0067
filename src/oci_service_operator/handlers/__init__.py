"""Handler registration for every managed resource kind."""

from __future__ import annotations

from typing import Any

import kopf

from ..constants import ALL_KINDS, API_GROUP_VERSION
from ..utils.context import with_correlation_id
from .base import BaseHandler
from .resource import ResourceHandler, outcome_label

HANDLERS: dict[str, ResourceHandler] = {kind: ResourceHandler(kind) for kind in ALL_KINDS}


def register_handlers(handler: ResourceHandler) -> None:
    """Register create/update/resume and delete handlers for one kind."""

    @kopf.on.create(API_GROUP_VERSION, handler.kind)
    @kopf.on.update(API_GROUP_VERSION, handler.kind)
    @kopf.on.resume(API_GROUP_VERSION, handler.kind)
    def handle_resource(
        spec: dict[str, Any],
        meta: dict[str, Any],
        status: dict[str, Any],
        patch: kopf.Patch,
        **kwargs: Any,
    ) -> None:
        """Handle resource reconciliation."""
        with with_correlation_id():
            handler.ensure_finalizer(meta, patch)
            outcome = handler.reconcile_with_metrics(
                meta,
                lambda: handler.reconcile(spec, meta, status, patch),
                result_label=outcome_label,
            )
        if outcome.should_requeue:
            raise kopf.TemporaryError(
                f"{handler.kind} {meta.get('name')} is not ready yet",
                delay=handler.requeue_delay,
            )

    @kopf.on.delete(API_GROUP_VERSION, handler.kind)
    def handle_resource_delete(
        spec: dict[str, Any],
        meta: dict[str, Any],
        status: dict[str, Any],
        patch: kopf.Patch,
        **kwargs: Any,
    ) -> None:
        """Handle resource deletion."""
        with with_correlation_id():
            handler.delete(spec, meta, status, patch)


for _handler in HANDLERS.values():
    register_handlers(_handler)


__all__ = ["BaseHandler", "HANDLERS", "ResourceHandler", "register_handlers"]
