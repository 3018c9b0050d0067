"""Utilities for emitting Kubernetes events."""

from __future__ import annotations

from typing import Any

import kopf

from ..constants import (
    EVENT_REASON_DELETE_FAILED,
    EVENT_REASON_RECONCILE_FAILED,
    EVENT_REASON_RECONCILE_STARTED,
    EVENT_REASON_RESOURCE_ACTIVE,
    EVENT_REASON_RESOURCE_CREATED,
    EVENT_REASON_RESOURCE_DELETED,
    EVENT_REASON_RESOURCE_UPDATED,
)


def emit_event(
    meta: dict[str, Any],
    reason: str,
    message: str,
    type_: str = "Normal",
) -> None:
    """Emit a Kubernetes event.

    Args:
        meta: Resource metadata
        reason: Event reason
        message: Event message
        type_: Event type (Normal or Warning)
    """
    kopf.event(
        meta,
        reason=reason,
        message=message,
        type=type_,
    )


def emit_reconcile_started(meta: dict[str, Any]) -> None:
    """Emit reconcile started event."""
    emit_event(meta, EVENT_REASON_RECONCILE_STARTED, "Reconciliation started")


def emit_reconcile_failed(meta: dict[str, Any], message: str) -> None:
    """Emit reconcile failed event."""
    emit_event(meta, EVENT_REASON_RECONCILE_FAILED, message, type_="Warning")


def emit_resource_created(meta: dict[str, Any], kind: str, display_name: str) -> None:
    """Emit resource created event."""
    emit_event(meta, EVENT_REASON_RESOURCE_CREATED, f"{kind} {display_name} create requested")


def emit_resource_updated(meta: dict[str, Any], kind: str, display_name: str) -> None:
    """Emit resource updated event."""
    emit_event(meta, EVENT_REASON_RESOURCE_UPDATED, f"{kind} {display_name} updated")


def emit_resource_active(meta: dict[str, Any], kind: str, display_name: str) -> None:
    """Emit resource active event."""
    emit_event(meta, EVENT_REASON_RESOURCE_ACTIVE, f"{kind} {display_name} is active")


def emit_resource_deleted(meta: dict[str, Any], kind: str, display_name: str) -> None:
    """Emit resource deleted event."""
    emit_event(meta, EVENT_REASON_RESOURCE_DELETED, f"{kind} {display_name} deleted")


def emit_delete_failed(meta: dict[str, Any], message: str) -> None:
    """Emit delete failed event."""
    emit_event(meta, EVENT_REASON_DELETE_FAILED, message, type_="Warning")
