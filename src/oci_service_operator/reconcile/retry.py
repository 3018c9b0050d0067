"""Bounded polling while a remote resource is still being created."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable

from ..exceptions import PollTimeoutError
from ..models import RemoteObject

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PollingPolicy:
    """When to poll again and how long to wait in between.

    Attributes:
        max_attempts: Upper bound on fetches, including the first one
        creating_state: The only lifecycle state that keeps the loop going
        interval: Fixed delay in seconds, or the base for exponential delay
        exponential: Use ``interval ** attempt`` instead of a fixed delay
        max_delay: Optional cap applied to every delay
    """

    max_attempts: int
    creating_state: str = "CREATING"
    interval: float = 60.0
    exponential: bool = False
    max_delay: float | None = None

    def should_retry(self, remote: RemoteObject | None) -> bool:
        """Only "still creating" continues; success and failure both stop."""
        return remote is not None and remote.lifecycle_state == self.creating_state

    def next_delay(self, attempt: int) -> float:
        """Delay after the given zero-based attempt."""
        delay = self.interval ** attempt if self.exponential else self.interval
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return float(delay)


def fixed_policy(max_attempts: int, interval: float, creating_state: str = "CREATING") -> PollingPolicy:
    return PollingPolicy(max_attempts=max_attempts, creating_state=creating_state, interval=interval)


def exponential_policy(
    max_attempts: int,
    base: float = 2.0,
    creating_state: str = "CREATING",
    max_delay: float | None = None,
) -> PollingPolicy:
    return PollingPolicy(
        max_attempts=max_attempts,
        creating_state=creating_state,
        interval=base,
        exponential=True,
        max_delay=max_delay,
    )


def wait_while_creating(
    fetch: Callable[[], RemoteObject],
    policy: PollingPolicy,
    kind: str,
    display_name: str,
    sleep: Callable[[float], None] = time.sleep,
) -> RemoteObject:
    """Fetch until the resource leaves its creating state.

    Args:
        fetch: Returns the current remote object
        policy: Attempt bound and delay schedule
        kind: Resource kind, for the timeout error
        display_name: Display name, for the timeout error
        sleep: Injected for tests

    Returns:
        The first remote object observed outside the creating state

    Raises:
        PollTimeoutError: If every attempt still saw the creating state
    """
    remote: RemoteObject | None = None
    for attempt in range(policy.max_attempts):
        remote = fetch()
        if not policy.should_retry(remote):
            return remote
        if attempt + 1 < policy.max_attempts:
            delay = policy.next_delay(attempt)
            logger.debug(f"{kind} {display_name} still {remote.lifecycle_state}, polling again in {delay}s")
            sleep(delay)

    raise PollTimeoutError(
        kind,
        display_name,
        policy.max_attempts,
        remote.lifecycle_state if remote is not None else None,
    )
