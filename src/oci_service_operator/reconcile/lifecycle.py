"""Map remote lifecycle states onto status conditions."""

from __future__ import annotations

from dataclasses import dataclass

from ..constants import COND_ACTIVE, COND_FAILED, COND_PROVISIONING


@dataclass(frozen=True)
class LifecycleDecision:
    condition: str
    is_successful: bool
    should_requeue: bool


ACTIVE = LifecycleDecision(COND_ACTIVE, is_successful=True, should_requeue=False)
FAILED = LifecycleDecision(COND_FAILED, is_successful=False, should_requeue=False)
PROVISIONING = LifecycleDecision(COND_PROVISIONING, is_successful=False, should_requeue=True)


@dataclass(frozen=True)
class LifecycleClassifier:
    """Three-way classification of one kind's lifecycle enum.

    Only the usable and the terminally failed states are listed; every
    other value, including states the API adds later, is transitional.

    Attributes:
        active: States in which the resource is usable
        failed: States that are terminal failures
        states: Every state the API currently documents
    """

    active: frozenset[str]
    failed: frozenset[str]
    states: tuple[str, ...] = ()

    def classify(self, state: str | None) -> LifecycleDecision:
        if state in self.active:
            return ACTIVE
        if state in self.failed:
            return FAILED
        return PROVISIONING
