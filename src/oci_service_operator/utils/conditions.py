"""Utilities for managing the append-only status condition list."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from ..constants import COND_ACTIVE, COND_FAILED, COND_PROVISIONING, COND_UPDATING


def append_condition(
    conditions: list[dict[str, Any]],
    condition_type: str,
    status: bool,
    reason: str,
    message: str,
) -> list[dict[str, Any]]:
    """Append a condition to the conditions list.

    Existing entries are never modified. If the last entry already has the
    same type, status and message, nothing is appended so that repeated
    passes with an unchanged outcome do not grow the list.

    Args:
        conditions: List of existing conditions, mutated in place
        condition_type: Type of condition (Provisioning, Active, Updating, Failed)
        status: Boolean state of the condition
        reason: Machine-readable reason
        message: Human-readable message

    Returns:
        The same list, for chaining
    """
    status_str = "True" if status else "False"

    if conditions:
        last = conditions[-1]
        if (
            last.get("type") == condition_type
            and last.get("status") == status_str
            and last.get("message") == message
        ):
            return conditions

    conditions.append({
        "type": condition_type,
        "status": status_str,
        "reason": reason,
        "message": message,
        "lastTransitionTime": datetime.now(timezone.utc).isoformat(),
    })
    return conditions


def latest_condition(conditions: list[dict[str, Any]]) -> dict[str, Any] | None:
    """Return the current condition (the last one appended)."""
    return conditions[-1] if conditions else None


def get_condition(
    conditions: list[dict[str, Any]],
    condition_type: str,
) -> dict[str, Any] | None:
    """Return the most recent condition of the given type."""
    for cond in reversed(conditions):
        if cond.get("type") == condition_type:
            return cond
    return None


def set_provisioning_condition(
    conditions: list[dict[str, Any]],
    message: str,
    reason: str = "Provisioning",
) -> list[dict[str, Any]]:
    """Append a Provisioning condition."""
    return append_condition(conditions, COND_PROVISIONING, True, reason, message)


def set_active_condition(
    conditions: list[dict[str, Any]],
    message: str,
    reason: str = "Active",
) -> list[dict[str, Any]]:
    """Append an Active condition."""
    return append_condition(conditions, COND_ACTIVE, True, reason, message)


def set_updating_condition(
    conditions: list[dict[str, Any]],
    message: str,
    reason: str = "UpdateRequested",
) -> list[dict[str, Any]]:
    """Append an Updating condition."""
    return append_condition(conditions, COND_UPDATING, True, reason, message)


def set_failed_condition(
    conditions: list[dict[str, Any]],
    message: str,
    reason: str = "Failed",
) -> list[dict[str, Any]]:
    """Append a Failed condition."""
    return append_condition(conditions, COND_FAILED, False, reason, message)
