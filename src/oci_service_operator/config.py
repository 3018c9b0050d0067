"""Operator configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class OperatorConfig:
    """Runtime settings for the operator process."""

    oci_config_file: str = "~/.oci/config"
    oci_profile: str = "DEFAULT"
    oci_region: str | None = None
    requeue_delay_seconds: float = 30.0
    lookup_list_limit: int = 10
    poll_after_create: bool = False
    api_rate_limit: float = 10.0
    metrics_port: int = 8080
    log_level: str = "INFO"
    request_timeout_seconds: float = 60.0

    @classmethod
    def from_env(cls) -> OperatorConfig:
        """Build configuration from the process environment.

        Environment Variables:
            OCI_CONFIG_FILE: Path to the OCI SDK config file (default: ~/.oci/config)
            OCI_CONFIG_PROFILE: Profile inside the config file (default: DEFAULT)
            OCI_REGION: Region override for all service clients
            REQUEUE_DELAY_SECONDS: Delay before re-running a pass that is still provisioning (default: 30)
            LOOKUP_LIST_LIMIT: Page size used when looking up resources by name (default: 10)
            POLL_AFTER_CREATE: Wait for a created resource to leave its creating state (default: false)
            OCI_API_RATE_LIMIT: Maximum OCI calls per second per client (default: 10)
            METRICS_PORT: Port for metrics and health endpoints (default: 8080)
            LOG_LEVEL: Logging level (default: INFO)
            OCI_REQUEST_TIMEOUT: Read timeout in seconds for OCI requests (default: 60)
        """
        lookup_limit = int(os.getenv("LOOKUP_LIST_LIMIT", "10"))
        if lookup_limit < 1:
            raise ValueError("LOOKUP_LIST_LIMIT must be at least 1")

        return cls(
            oci_config_file=os.getenv("OCI_CONFIG_FILE", "~/.oci/config"),
            oci_profile=os.getenv("OCI_CONFIG_PROFILE", "DEFAULT"),
            oci_region=os.getenv("OCI_REGION") or None,
            requeue_delay_seconds=float(os.getenv("REQUEUE_DELAY_SECONDS", "30")),
            lookup_list_limit=lookup_limit,
            poll_after_create=_env_bool("POLL_AFTER_CREATE"),
            api_rate_limit=float(os.getenv("OCI_API_RATE_LIMIT", "10")),
            metrics_port=int(os.getenv("METRICS_PORT", "8080")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            request_timeout_seconds=float(os.getenv("OCI_REQUEST_TIMEOUT", "60")),
        )
