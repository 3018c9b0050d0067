"""Main entry point for the OCI Service Operator.

Run with ``kopf run -m oci_service_operator.main``.
"""

from __future__ import annotations

import logging
from typing import Any

import kopf

from . import health
from . import logging as structured_logging
from .config import OperatorConfig
from .handlers import HANDLERS
from .kinds import build_kinds
from .reconcile.engine import ResourceEngine
from .services.oci import create_client, load_oci_config
from .tracing import initialize_tracing
from .utils.secrets import KubernetesSecretStore

logger = logging.getLogger(__name__)


def build_engines(config: OperatorConfig, oci_config: dict[str, Any]) -> dict[str, ResourceEngine]:
    """Build one engine per kind, sharing a single secret store.

    Args:
        config: Operator settings
        oci_config: Loaded OCI SDK configuration

    Returns:
        Engines keyed by resource kind
    """
    secrets = KubernetesSecretStore()
    engines = {}
    for name, kind in build_kinds(region=oci_config.get("region")).items():
        engines[name] = ResourceEngine(
            kind,
            create_client(name, oci_config, config),
            secrets=secrets,
            list_limit=config.lookup_list_limit,
            poll_after_create=config.poll_after_create,
        )
    return engines


@kopf.on.startup()
def configure(settings: kopf.OperatorSettings, **_: Any) -> None:
    """Configure the operator."""
    config = OperatorConfig.from_env()
    structured_logging.setup_structured_logging(config.log_level)

    # Use AnnotationsProgressStorage to avoid conflicts with status updates
    settings.persistence.progress_storage = kopf.AnnotationsProgressStorage()
    settings.persistence.diffbase_storage = kopf.AnnotationsDiffBaseStorage()

    settings.posting.level = logging.WARNING
    settings.networking.request_timeout = 30.0
    settings.execution.max_workers = 4

    initialize_tracing()

    oci_config = load_oci_config(config.oci_config_file, config.oci_profile, config.oci_region)
    for name, engine in build_engines(config, oci_config).items():
        HANDLERS[name].bind(engine, requeue_delay=config.requeue_delay_seconds)
    logger.info(f"Configured handlers for {', '.join(sorted(HANDLERS))} in region {oci_config.get('region')}")

    health.start_health_server(config.metrics_port)
