"""Create-or-bind-or-update decision procedure and idempotent teardown."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Callable

from .. import metrics
from ..constants import COND_ACTIVE, COND_FAILED
from ..exceptions import (
    CreateRejectedError,
    MalformedIdentityError,
    MissingIdentifierError,
    RemoteBadRequestError,
    RemoteNotFoundError,
    RemoteServiceError,
    ResourceKindMismatchError,
    SecretAlreadyExistsError,
    ValidationError,
)
from ..kinds.base import ResourceKind
from ..models import DesiredResource, ReconcileOutcome, RemoteObject, ResourceStatus
from ..services.base import SecretStore, ServiceClient
from ..tracing import add_span_attribute
from ..utils.conditions import (
    set_active_condition,
    set_failed_condition,
    set_provisioning_condition,
    set_updating_condition,
)
from ..utils.errors import sanitize_dict, sanitize_exception
from .identity import IdentityStrategy, find_live_match, resolve_identity, split_composite_id
from .retry import wait_while_creating

logger = logging.getLogger(__name__)

# Terminal states meaning the object is gone rather than broken
REMOVED_STATES = frozenset({"DELETED", "TERMINATED"})

_FAILURE_REASONS: tuple[tuple[type[Exception], str], ...] = (
    (ValidationError, "ValidationFailed"),
    (MalformedIdentityError, "MalformedIdentity"),
    (CreateRejectedError, "CreateRejected"),
    (MissingIdentifierError, "MissingIdentifier"),
    (RemoteServiceError, "RemoteError"),
)


def _failure_reason(error: Exception) -> str:
    for error_type, reason in _FAILURE_REASONS:
        if isinstance(error, error_type):
            return reason
    return "ReconcileError"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ResourceEngine:
    """Reconciles resources of a single kind against its service client.

    The engine keeps no state between calls: everything it learns is
    written into the :class:`ResourceStatus` passed in, so one instance
    can serve every resource of its kind.
    """

    def __init__(
        self,
        kind: ResourceKind,
        client: ServiceClient,
        secrets: SecretStore | None = None,
        list_limit: int = 10,
        poll_after_create: bool = False,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the engine.

        Args:
            kind: Capability table for the managed kind
            client: Remote API for the kind
            secrets: Store for generated credential secrets
            list_limit: Page size for name lookups
            poll_after_create: Wait for a created resource to leave its
                creating state instead of returning a requeue signal
            sleep: Injected for tests of the bounded poll
        """
        self.kind = kind
        self.client = client
        self.secrets = secrets
        self.list_limit = list_limit
        self.poll_after_create = poll_after_create
        self._sleep = sleep

    def _label(self, resource: DesiredResource) -> str:
        return f"{self.kind.name} {self.kind.display_name(resource.spec) or resource.name}"

    def _check_kind(self, resource: DesiredResource) -> None:
        if resource.kind != self.kind.name:
            raise ResourceKindMismatchError(self.kind.name, resource.kind)

    def create_or_update(self, resource: DesiredResource, status: ResourceStatus) -> ReconcileOutcome:
        """Run one reconcile pass.

        ``status`` is updated in place. Errors are raised after a Failed
        condition naming the kind, display name and error has been appended.

        Args:
            resource: Desired state; kinds may cache resolved values into its spec
            status: Status recorded by the previous pass

        Returns:
            Whether the resource is usable and whether to run again later

        Raises:
            ResourceKindMismatchError: If ``resource`` is not of this engine's kind
            OperatorError: For validation, identity, create and remote failures
        """
        self._check_kind(resource)
        try:
            return self._reconcile(resource, status)
        except Exception as e:
            set_failed_condition(
                status.conditions,
                f"{self._label(resource)}: {sanitize_exception(e)}",
                reason=_failure_reason(e),
            )
            raise

    def _reconcile(self, resource: DesiredResource, status: ResourceStatus) -> ReconcileOutcome:
        spec = resource.spec
        self.kind.validate(spec)
        if self.kind.prepare(spec, self.client):
            logger.debug(f"{self._label(resource)}: resolved {', '.join(self.kind.cached_spec_fields)}")

        path = resolve_identity(self.kind, spec, status)
        if path.strategy is IdentityStrategy.LOOKUP:
            path = find_live_match(self.kind, self.client, spec, self.list_limit)
        add_span_attribute("identity.strategy", path.strategy.value)

        if path.strategy is IdentityStrategy.CREATE:
            return self._create(resource, status)
        return self._bind(resource, status, path.remote_id)

    def _observe(self, status: ResourceStatus, remote_id: str) -> None:
        status.remote_id = remote_id
        if not status.created_at:
            status.created_at = _now()

    def _bind(self, resource: DesiredResource, status: ResourceStatus, remote_id: str) -> ReconcileOutcome:
        spec = resource.spec
        remote = self.client.get(remote_id)
        if status.remote_id and status.remote_id != remote_id:
            logger.info(f"{self._label(resource)}: rebinding from {status.remote_id} to {remote_id}")
        self._observe(status, remote_id)

        # Busy objects refuse writes; their drift is picked up on a later pass.
        if self.kind.accepts_update(remote) and self.kind.needs_update(spec, remote):
            details = self.kind.build_update_details(spec, remote)
            metrics.drift_detected_total.labels(kind=self.kind.name).inc()
            logger.info(f"{self._label(resource)}: updating {', '.join(sorted(details))}")
            updated = self.client.update(remote.id, details)
            set_updating_condition(
                status.conditions,
                f"{self._label(resource)} update requested",
            )
            remote = updated if updated is not None else self.client.get(remote.id)

        return self._lifecycle_pass(resource, status, remote)

    def _create(self, resource: DesiredResource, status: ResourceStatus) -> ReconcileOutcome:
        label = self._label(resource)
        details = self.kind.build_create_details(resource.spec)
        logger.debug(f"{label}: create request {sanitize_dict(details)}")
        try:
            result = self.client.create(details)
        except RemoteBadRequestError as e:
            raise CreateRejectedError(f"create rejected: {e}", cause=e) from e

        if self.kind.creates_via_work_request:
            if not result.work_request_id:
                raise MissingIdentifierError("create returned no work request id")
            status.work_request_id = result.work_request_id
            logger.info(f"{label}: create submitted as work request {result.work_request_id}")
        elif result.obj is None or not result.obj.id:
            raise MissingIdentifierError("create returned no identifier")

        remote = result.obj if result.obj is not None and result.obj.id else None
        if remote is not None:
            self._observe(status, remote.id)
            logger.info(f"{label}: created {remote.id}")

        set_provisioning_condition(status.conditions, f"{label} is provisioning", reason="CreateRequested")

        if remote is None or not self.poll_after_create or self.kind.create_poll_policy is None:
            return ReconcileOutcome(is_successful=False, should_requeue=True)

        remote = wait_while_creating(
            lambda: self.client.get(remote.id),
            self.kind.create_poll_policy,
            self.kind.name,
            self.kind.display_name(resource.spec),
            sleep=self._sleep,
        )
        return self._lifecycle_pass(resource, status, remote)

    def _lifecycle_pass(
        self,
        resource: DesiredResource,
        status: ResourceStatus,
        remote: RemoteObject,
    ) -> ReconcileOutcome:
        decision = self.kind.classify(remote)
        message = f"{self._label(resource)} is {remote.lifecycle_state}"

        if decision.condition == COND_FAILED:
            if remote.lifecycle_state in REMOVED_STATES:
                set_failed_condition(
                    status.conditions,
                    f"{self._label(resource)} was deleted outside the operator ({remote.lifecycle_state})",
                    reason="RemoteDeleted",
                )
            else:
                set_failed_condition(status.conditions, message, reason="RemoteFailed")
        elif decision.condition == COND_ACTIVE:
            self._materialize_secret(resource, remote)
            set_active_condition(status.conditions, message)
        else:
            set_provisioning_condition(status.conditions, message)

        return ReconcileOutcome(
            is_successful=decision.is_successful,
            should_requeue=decision.should_requeue,
        )

    def _materialize_secret(self, resource: DesiredResource, remote: RemoteObject) -> None:
        if self.secrets is None:
            return
        data = self.kind.credential_map(resource.spec, remote)
        if data is None:
            return
        name = self.kind.secret_name(resource.name)
        try:
            self.secrets.create_secret(
                name,
                resource.namespace,
                self.kind.secret_labels(resource.name),
                data,
            )
            logger.info(f"{self._label(resource)}: wrote secret {resource.namespace}/{name}")
        except SecretAlreadyExistsError:
            logger.debug(f"{self._label(resource)}: secret {resource.namespace}/{name} already exists")

    def delete(self, resource: DesiredResource, status: ResourceStatus) -> bool:
        """Tear down the remote object.

        Safe to call repeatedly: a missing identifier, a malformed composite
        identifier and a not-found response all count as done.

        Returns:
            True when the finalizer may be removed

        Raises:
            ResourceKindMismatchError: If ``resource`` is not of this engine's kind
            RemoteServiceError: If the delete failed and this kind propagates delete errors
        """
        self._check_kind(resource)
        label = self._label(resource)

        remote_id = status.remote_id or self.kind.explicit_id(resource.spec)
        if not remote_id:
            logger.info(f"{label}: no identifier recorded, nothing to delete")
            return True

        if self.kind.composite_id:
            try:
                split_composite_id(remote_id)
            except MalformedIdentityError:
                logger.warning(f"{label}: ignoring malformed identifier {remote_id!r} on delete")
                return True

        try:
            self.client.delete(remote_id)
            logger.info(f"{label}: deleted {remote_id}")
        except RemoteNotFoundError:
            logger.info(f"{label}: {remote_id} already gone")
        except RemoteServiceError as e:
            if not self.kind.swallow_delete_errors:
                raise
            logger.warning(f"{label}: delete of {remote_id} failed, not retrying: {sanitize_exception(e)}")

        self._delete_secret(resource)
        return True

    def _delete_secret(self, resource: DesiredResource) -> None:
        if self.secrets is None or self.kind.secret_suffix is None:
            return
        name = self.kind.secret_name(resource.name)
        try:
            self.secrets.delete_secret(name, resource.namespace)
        except Exception as e:
            logger.warning(
                f"{self._label(resource)}: failed to delete secret {resource.namespace}/{name}: "
                f"{sanitize_exception(e)}"
            )
