"""Resolve which remote object a desired resource refers to."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..constants import COMPOSITE_ID_SEPARATOR
from ..exceptions import MalformedIdentityError
from ..models import RemoteObject, ResourceStatus

if TYPE_CHECKING:
    from ..kinds.base import ResourceKind
    from ..services.base import ServiceClient

logger = logging.getLogger(__name__)


class IdentityStrategy(enum.Enum):
    EXPLICIT = "Explicit"
    RECORDED = "Recorded"
    LOOKUP = "Lookup"
    CREATE = "Create"


@dataclass(frozen=True)
class IdentityPath:
    """The strategy chosen for this pass and the identifier it is bound to, if any."""

    strategy: IdentityStrategy
    remote_id: str = ""
    match: RemoteObject | None = None


def split_composite_id(value: str) -> tuple[str, str]:
    """Split ``"<scope>/<name>"`` into its two parts.

    Raises:
        MalformedIdentityError: If the value does not contain exactly one
            separator with non-empty text on both sides
    """
    parts = (value or "").split(COMPOSITE_ID_SEPARATOR)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise MalformedIdentityError(value)
    return parts[0], parts[1]


def join_composite_id(scope: str, name: str) -> str:
    """Inverse of :func:`split_composite_id`."""
    if (
        not scope
        or not name
        or COMPOSITE_ID_SEPARATOR in scope
        or COMPOSITE_ID_SEPARATOR in name
    ):
        raise MalformedIdentityError(f"{scope}{COMPOSITE_ID_SEPARATOR}{name}")
    return f"{scope}{COMPOSITE_ID_SEPARATOR}{name}"


def is_valid_composite_id(value: str) -> bool:
    try:
        split_composite_id(value)
    except MalformedIdentityError:
        return False
    return True


def resolve_identity(
    kind: ResourceKind,
    spec: dict[str, Any],
    status: ResourceStatus,
) -> IdentityPath:
    """Decide how to locate the remote object without calling the remote API.

    An explicit identifier in the spec wins over one recorded in status;
    with neither, the caller has to look the object up by name.

    Raises:
        MalformedIdentityError: If the kind uses composite identifiers and
            the identifier in play does not parse
    """
    explicit = kind.explicit_id(spec)
    if explicit:
        if kind.composite_id:
            split_composite_id(explicit)
        return IdentityPath(IdentityStrategy.EXPLICIT, explicit)

    if status.remote_id:
        if kind.composite_id:
            split_composite_id(status.remote_id)
        return IdentityPath(IdentityStrategy.RECORDED, status.remote_id)

    return IdentityPath(IdentityStrategy.LOOKUP)


def find_live_match(
    kind: ResourceKind,
    client: ServiceClient,
    spec: dict[str, Any],
    limit: int,
) -> IdentityPath:
    """List candidates by scope and display name and bind to the first live one.

    Candidates are taken in the order the list call returns them; the first
    one in a live lifecycle state wins.

    Returns:
        A LOOKUP path carrying the match, or a CREATE path if nothing live exists
    """
    display_name = kind.display_name(spec)
    candidates = client.list(
        kind.scope(spec),
        display_name,
        limit,
        **kind.list_filters(spec),
    )
    for candidate in candidates:
        if candidate.lifecycle_state in kind.live_states:
            logger.debug(
                f"{kind.name} {display_name} exists as {candidate.id} "
                f"({candidate.lifecycle_state})"
            )
            return IdentityPath(IdentityStrategy.LOOKUP, candidate.id, candidate)

    logger.debug(f"{kind.name} {display_name} does not exist")
    return IdentityPath(IdentityStrategy.CREATE)
