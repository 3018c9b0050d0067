"""
Operator error hierarchy with categorization and retry logic.

Every error raised by the reconciliation engine or the OCI adapters derives
from :class:`OperatorError`, which knows whether kopf should retry it and
how to convert itself into the matching kopf exception.
"""

from __future__ import annotations

import kopf


class OperatorError(Exception):
    """
    Base error class for all operator-related exceptions.

    Provides categorization, retry behavior, and user guidance for resolution.
    """

    def __init__(
        self,
        message: str,
        category: str,
        retryable: bool = True,
        delay: float = 30,
        user_action: str | None = None,
        cause: Exception | None = None,
    ):
        """
        Initialize operator error.

        Args:
            message: Human-readable error description
            category: Error category (validation, remote, identity, contract, timeout)
            retryable: Whether kopf should retry this operation
            delay: Suggested retry delay in seconds
            user_action: What user should do to resolve the issue
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.category = category
        self.retryable = retryable
        self.delay = delay
        self.user_action = user_action
        self.cause = cause

    def as_kopf_error(self) -> kopf.TemporaryError | kopf.PermanentError:
        """Convert to appropriate kopf exception type."""
        if self.retryable:
            return kopf.TemporaryError(str(self), delay=self.delay)
        return kopf.PermanentError(str(self))


class ValidationError(OperatorError):
    """Error in resource specification validation."""

    def __init__(
        self, message: str, field: str | None = None, user_action: str | None = None
    ):
        action = user_action or "Check resource specification and fix validation errors"
        if field:
            message = f"Validation error in field '{field}': {message}"
        super().__init__(
            message=message, category="validation", retryable=False, user_action=action
        )
        self.field = field


class ResourceKindMismatchError(OperatorError):
    """The engine was handed an object of a kind it does not manage."""

    def __init__(self, expected: str, actual: str):
        super().__init__(
            message=f"expected resource kind {expected}, got {actual}",
            category="contract",
            retryable=False,
            user_action="Check handler registration for this resource kind",
        )
        self.expected = expected
        self.actual = actual


class MalformedIdentityError(OperatorError):
    """A composite identifier did not split into exactly two non-empty parts."""

    def __init__(self, identifier: str):
        super().__init__(
            message=f"malformed composite identifier {identifier!r}: expected '<scope>/<name>'",
            category="identity",
            retryable=False,
            user_action="Fix the id field of the resource specification",
        )
        self.identifier = identifier


class CreateRejectedError(OperatorError):
    """The remote API rejected a create request as invalid."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(
            message=message,
            category="validation",
            retryable=False,
            user_action="Correct the resource specification; the request will not succeed unmodified",
            cause=cause,
        )


class MissingIdentifierError(OperatorError):
    """A create call succeeded but returned nothing the engine can track."""

    def __init__(self, message: str):
        super().__init__(message=message, category="contract", retryable=True, delay=30)


class RemoteServiceError(OperatorError):
    """Error returned by an OCI service or its transport."""

    def __init__(
        self,
        service: str,
        operation: str,
        message: str,
        status: int | None = None,
        code: str | None = None,
        retryable: bool = True,
        delay: float = 60,
        cause: Exception | None = None,
    ):
        super().__init__(
            message=f"{service} {operation} failed: {message}",
            category="remote",
            retryable=retryable,
            delay=delay,
            user_action=f"Check {service} availability and operator credentials",
            cause=cause,
        )
        self.service = service
        self.operation = operation
        self.status = status
        self.code = code


class RemoteNotFoundError(RemoteServiceError):
    """The remote object does not exist (HTTP 404)."""

    def __init__(self, service: str, operation: str, message: str, cause: Exception | None = None):
        super().__init__(
            service, operation, message, status=404, code="NotFound", retryable=True, cause=cause
        )


class RemoteBadRequestError(RemoteServiceError):
    """The remote API refused the request as invalid (HTTP 400)."""

    def __init__(
        self,
        service: str,
        operation: str,
        message: str,
        code: str | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(
            service,
            operation,
            message,
            status=400,
            code=code or "InvalidParameter",
            retryable=False,
            cause=cause,
        )


class PollTimeoutError(OperatorError):
    """A bounded poll ran out of attempts while the resource was still creating."""

    def __init__(self, kind: str, display_name: str, attempts: int, last_state: str | None):
        super().__init__(
            message=(
                f"{kind} {display_name} still {last_state or 'unknown'} "
                f"after {attempts} poll attempts"
            ),
            category="timeout",
            retryable=True,
            delay=60,
        )
        self.attempts = attempts
        self.last_state = last_state


class SecretAlreadyExistsError(Exception):
    """The secret store already holds a secret under the requested name."""
