"""Entity kinds that can appear in suggestions.

The set of kinds is owned by the indexer's schema. Nothing in ranking or
exact-match detection looks at a kind's value, so adding a member here is
the only change needed to surface a new kind.
"""

from __future__ import annotations

from enum import Enum


class EntityKind(str, Enum):
    UNKNOWN = "unknown"
    NAMESPACE = "namespace"
    SERVICE = "service"
    POD = "pod"
    SCRIPT = "script"
    NODE = "node"


def parse_entity_kind(value: object, *, strict: bool = False) -> EntityKind:
    """Map an index or caller value onto an ``EntityKind``.

    Accepts members, values ("service") and names ("SERVICE"). Unrecognised
    values map to ``EntityKind.UNKNOWN`` unless ``strict`` is set, in which
    case ``ValueError`` is raised.
    """
    if isinstance(value, EntityKind):
        return value
    text = str(value or "").strip().lower()
    for kind in EntityKind:
        if kind.value == text:
            return kind
    if strict:
        raise ValueError(f"Unknown entity kind: {value!r}")
    return EntityKind.UNKNOWN
