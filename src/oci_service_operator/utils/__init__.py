"""Utility functions for the OCI Service Operator."""

from .conditions import (
    append_condition,
    get_condition,
    latest_condition,
    set_active_condition,
    set_failed_condition,
    set_provisioning_condition,
    set_updating_condition,
)
from .context import get_context_dict, get_correlation_id, with_correlation_id
from .errors import sanitize_dict, sanitize_error_message, sanitize_exception
from .events import emit_event
from .rate_limit import RateLimiter
from .secrets import KubernetesSecretStore

__all__ = [
    "append_condition",
    "get_condition",
    "latest_condition",
    "set_active_condition",
    "set_failed_condition",
    "set_provisioning_condition",
    "set_updating_condition",
    "get_context_dict",
    "get_correlation_id",
    "with_correlation_id",
    "sanitize_dict",
    "sanitize_error_message",
    "sanitize_exception",
    "emit_event",
    "RateLimiter",
    "KubernetesSecretStore",
]
