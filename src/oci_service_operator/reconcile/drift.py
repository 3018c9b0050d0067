"""Decide whether the remote object has drifted from the desired spec."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence


@dataclass(frozen=True)
class FieldMapping:
    """Pairs a spec key with the remote attribute it controls.

    Attributes:
        spec_key: camelCase key in the resource spec
        remote_key: snake_case attribute on the remote object
        normalize: Optional function applied to both sides before comparing;
            its result for the spec value is what gets sent in the update
    """

    spec_key: str
    remote_key: str
    normalize: Callable[[Any], Any] | None = None


def is_set(value: Any) -> bool:
    """A spec value takes part in comparison only when non-empty and non-zero."""
    return bool(value)


def changed_fields(
    spec: dict[str, Any],
    remote_fields: dict[str, Any],
    mappings: Sequence[FieldMapping],
) -> dict[str, Any]:
    """Return the desired values of every mapped field that differs remotely.

    Unset spec fields are skipped, so a partial spec never forces an update.
    Maps and lists compare by full equality.

    Returns:
        Mapping of remote attribute name to desired value
    """
    changes: dict[str, Any] = {}
    for mapping in mappings:
        desired = spec.get(mapping.spec_key)
        if not is_set(desired):
            continue
        current = remote_fields.get(mapping.remote_key)
        if mapping.normalize is not None:
            desired = mapping.normalize(desired)
            current = mapping.normalize(current)
        if desired != current:
            changes[mapping.remote_key] = desired
    return changes


def needs_update(
    spec: dict[str, Any],
    remote_fields: dict[str, Any],
    mappings: Sequence[FieldMapping],
) -> bool:
    return bool(changed_fields(spec, remote_fields, mappings))


def sorted_list(value: Any) -> list[Any]:
    """Order-insensitive list comparison."""
    return sorted(value or [])


def string_map(value: Any) -> dict[str, str]:
    """Treat a missing map as empty."""
    return dict(value or {})


def nested_string_map(value: Any) -> dict[str, dict[str, Any]]:
    """Defined tags are namespace -> key -> value."""
    return {ns: dict(tags or {}) for ns, tags in (value or {}).items()}
