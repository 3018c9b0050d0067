"""Structured logging configuration for the OCI Service Operator."""

import json
import logging
import sys
from typing import Any

SECRET_FIELDS = {
    "password",
    "passphrase",
    "private_key",
    "key_content",
    "security_master_user_password_hash",
    "securityMasterUserPasswordHash",
}


def setup_structured_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging.

    Args:
        level: Name of the root logging level
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    # The OCI SDK logs full request bodies at DEBUG
    logging.getLogger("oci").setLevel(logging.WARNING)


def log_resource_event(
    logger: logging.Logger,
    controller: str,
    resource_kind: str,
    resource_name: str,
    namespace: str,
    uid: str,
    event: str,
    reason: str,
    message: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """Log a structured resource event."""
    log_data = {
        "controller": controller,
        "resource": resource_kind,
        "name": resource_name,
        "namespace": namespace,
        "uid": uid,
        "event": event,
        "reason": reason,
        "message": message,
    }
    log_data.update(sanitize_secrets(kwargs))
    logger.log(level, json.dumps(log_data, default=str))


def sanitize_secrets(log_data: dict[str, Any]) -> dict[str, Any]:
    """Remove secret fields from log data."""
    sanitized = log_data.copy()
    for field in SECRET_FIELDS:
        if field in sanitized:
            sanitized[field] = "***REDACTED***"
    return sanitized
