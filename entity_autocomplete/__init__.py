"""Resolve free-text input into ranked, namespace-qualified entity suggestions."""

from entity_autocomplete.errors import SuggestionBackendError
from entity_autocomplete.kinds import EntityKind, parse_entity_kind
from entity_autocomplete.models import (
    IndexedEntity,
    ParsedInput,
    Suggestion,
    SuggestionRequest,
    SuggestionResult,
)
from entity_autocomplete.suggester import ElasticSuggester

__all__ = [
    "ElasticSuggester",
    "EntityKind",
    "IndexedEntity",
    "ParsedInput",
    "Suggestion",
    "SuggestionBackendError",
    "SuggestionRequest",
    "SuggestionResult",
    "parse_entity_kind",
]
