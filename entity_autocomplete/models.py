"""Request, result and index document shapes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable
from uuid import UUID

from entity_autocomplete.kinds import EntityKind, parse_entity_kind


def _kind_set(kinds: Iterable[object] | None) -> frozenset[EntityKind]:
    if not kinds:
        return frozenset()
    return frozenset(parse_entity_kind(kind, strict=True) for kind in kinds)


@dataclass(frozen=True)
class SuggestionRequest:
    """One independent lookup.

    ``allowed_kinds`` limits which kinds may match on their own name;
    ``allowed_args`` limits which kinds may match through their related
    entity names.
    """

    input: str
    org_id: str | UUID
    allowed_kinds: frozenset[EntityKind] = field(default_factory=frozenset)
    allowed_args: frozenset[EntityKind] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "input", str(self.input or ""))
        object.__setattr__(self, "org_id", str(self.org_id))
        object.__setattr__(self, "allowed_kinds", _kind_set(self.allowed_kinds))
        object.__setattr__(self, "allowed_args", _kind_set(self.allowed_args))


@dataclass(frozen=True)
class ParsedInput:
    raw: str
    namespace: str | None
    name_pattern: str

    @property
    def has_namespace(self) -> bool:
        return self.namespace is not None

    @property
    def is_wildcard(self) -> bool:
        return self.name_pattern == ""


@dataclass(frozen=True)
class Suggestion:
    name: str
    kind: EntityKind
    score: float
    matched_indexes: tuple[int, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "score": self.score,
            "matched_indexes": list(self.matched_indexes),
        }


@dataclass
class SuggestionResult:
    exact_match: bool = False
    suggestions: list[Suggestion] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "exact_match": self.exact_match,
            "suggestions": [suggestion.to_dict() for suggestion in self.suggestions],
        }


@dataclass
class IndexedEntity:
    """An entity document as the indexer writes it."""

    org_id: str
    uid: str
    name: str
    ns: str
    kind: EntityKind
    time_started_ns: int = 0
    time_stopped_ns: int = 0
    related_entity_names: list[str] = field(default_factory=list)
    resource_version: str = ""

    def to_document(self) -> dict[str, object]:
        return {
            "orgID": str(self.org_id),
            "uid": self.uid,
            "name": self.name,
            "ns": self.ns,
            "kind": parse_entity_kind(self.kind).value,
            "timeStartedNS": int(self.time_started_ns),
            "timeStoppedNS": int(self.time_stopped_ns),
            "relatedEntityNames": list(self.related_entity_names),
            "resourceVersion": self.resource_version,
        }

    @classmethod
    def from_source(cls, source: dict) -> IndexedEntity:
        related = source.get("relatedEntityNames") or []
        if not isinstance(related, list):
            related = [related]
        return cls(
            org_id=str(source.get("orgID", "")),
            uid=str(source.get("uid", "")),
            name=str(source.get("name", "")),
            ns=str(source.get("ns", "")),
            kind=parse_entity_kind(source.get("kind")),
            time_started_ns=int(source.get("timeStartedNS") or 0),
            time_stopped_ns=int(source.get("timeStoppedNS") or 0),
            related_entity_names=[str(name) for name in related],
            resource_version=str(source.get("resourceVersion", "") or ""),
        )

    @property
    def rendered_name(self) -> str:
        return f"{self.ns}/{self.name}"
