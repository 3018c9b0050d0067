"""Shared plumbing for adapters over the OCI Python SDK."""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Callable

import oci

from ... import metrics
from ...exceptions import RemoteBadRequestError, RemoteNotFoundError, RemoteServiceError
from ...models import RemoteObject
from ...utils.errors import sanitize_error_message
from ...utils.rate_limit import RateLimiter

logger = logging.getLogger(__name__)

WORK_REQUEST_HEADER = "opc-work-request-id"
CONNECT_TIMEOUT_SECONDS = 10.0

# Throttling and server-side failures are worth retrying from the next pass
RETRYABLE_STATUSES = {409, 429, 500, 502, 503, 504}


def load_oci_config(
    config_file: str = "~/.oci/config",
    profile: str = "DEFAULT",
    region: str | None = None,
) -> dict[str, Any]:
    """Load and validate an OCI SDK configuration profile.

    Args:
        config_file: Path to the SDK config file
        profile: Profile name inside the file
        region: Optional region overriding the profile's region

    Returns:
        Config dictionary accepted by every SDK client
    """
    config = oci.config.from_file(
        file_location=os.path.expanduser(config_file),
        profile_name=profile,
    )
    if region:
        config["region"] = region
    oci.config.validate_config(config)
    return config


def client_kwargs(request_timeout: float) -> dict[str, Any]:
    """Keyword arguments shared by every SDK client.

    The SDK's own retry strategy is disabled: retry cadence belongs to the
    host control loop.
    """
    return {
        "timeout": (CONNECT_TIMEOUT_SECONDS, request_timeout),
        "retry_strategy": oci.retry.NoneRetryStrategy(),
    }


def translate_service_error(service: str, operation: str, error: oci.exceptions.ServiceError) -> RemoteServiceError:
    """Map an SDK service error onto the operator's error hierarchy by HTTP status."""
    message = sanitize_error_message(f"{error.code}: {error.message}")
    if error.status == 404:
        return RemoteNotFoundError(service, operation, message, cause=error)
    if error.status == 400:
        return RemoteBadRequestError(service, operation, message, code=error.code, cause=error)
    return RemoteServiceError(
        service,
        operation,
        message,
        status=error.status,
        code=error.code,
        retryable=error.status in RETRYABLE_STATUSES or error.status >= 500,
        cause=error,
    )


def to_remote(model: Any) -> RemoteObject:
    """Convert an SDK model into a :class:`RemoteObject` with snake_case fields."""
    data = oci.util.to_dict(model) or {}
    return RemoteObject(
        id=data.get("id") or "",
        display_name=data.get("display_name"),
        lifecycle_state=data.get("lifecycle_state"),
        fields=data,
    )


def work_request_id(response: Any) -> str | None:
    headers = getattr(response, "headers", None) or {}
    return headers.get(WORK_REQUEST_HEADER)


def drop_empty(filters: dict[str, str]) -> dict[str, str]:
    return {key: value for key, value in filters.items() if value}


class OCIServiceClient:
    """Base adapter: rate limiting, metrics and error translation around SDK calls."""

    service_name = "oci"

    def __init__(self, client: Any, rate_limiter: RateLimiter | None = None):
        """Initialize the adapter.

        Args:
            client: SDK client for the service
            rate_limiter: Limiter applied before every call
        """
        self.client = client
        self.rate_limiter = rate_limiter

    def _call(self, operation: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Invoke one SDK operation.

        Raises:
            RemoteServiceError: Translated from the SDK's service and transport errors
        """
        if self.rate_limiter is not None and self.rate_limiter.acquire() > 0:
            metrics.rate_limit_hits_total.labels(service=self.service_name).inc()

        start = time.time()
        try:
            response = fn(*args, **kwargs)
        except oci.exceptions.ServiceError as e:
            metrics.api_call_total.labels(
                service=self.service_name, operation=operation, result="error"
            ).inc()
            raise translate_service_error(self.service_name, operation, e) from e
        except oci.exceptions.RequestException as e:
            metrics.api_call_total.labels(
                service=self.service_name, operation=operation, result="error"
            ).inc()
            raise RemoteServiceError(
                self.service_name,
                operation,
                sanitize_error_message(str(e)),
                cause=e,
            ) from e
        finally:
            metrics.api_call_duration_seconds.labels(
                service=self.service_name, operation=operation
            ).observe(time.time() - start)

        metrics.api_call_total.labels(
            service=self.service_name, operation=operation, result="success"
        ).inc()
        logger.debug(f"{self.service_name} {operation} succeeded")
        return response
