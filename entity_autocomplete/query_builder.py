"""Build one OpenSearch query body per suggestion request.

Text matching is left to the index analyzers: ``name`` and
``relatedEntityNames`` are indexed with an edge-ngram analyzer, so a fuzzy
``match`` on them gives prefix and typo tolerance. ``orgID``, ``ns`` and
``kind`` are keyword fields matched with exact terms.
"""

from __future__ import annotations

from entity_autocomplete.input_parser import parse_input
from entity_autocomplete.kinds import EntityKind
from entity_autocomplete.models import ParsedInput, SuggestionRequest

ORG_ID_FIELD = "orgID"
NAMESPACE_FIELD = "ns"
NAME_FIELD = "name"
KIND_FIELD = "kind"
RELATED_NAMES_FIELD = "relatedEntityNames"

ENTITY_MATCH_PATH = "entity"
ARGUMENT_MATCH_PATH = "argument"

HIGHLIGHT_PRE_TAG = "<em>"
HIGHLIGHT_POST_TAG = "</em>"

_OVER_FETCH_FACTOR = 4
_MIN_FETCH_SIZE = 20


def over_fetch_size(max_suggestions: int) -> int:
    """Hits to request so that collapsing duplicates still fills the cap."""
    return max(max(1, max_suggestions) * _OVER_FETCH_FACTOR, _MIN_FETCH_SIZE)


def _kind_values(kinds: frozenset[EntityKind]) -> list[str]:
    return sorted(kind.value for kind in kinds)


def _fuzzy_match(field_name: str, pattern: str) -> dict:
    return {
        "match": {
            field_name: {
                "query": pattern,
                "fuzziness": "AUTO",
            }
        }
    }


def _match_path(
    path_name: str,
    kinds: frozenset[EntityKind],
    field_name: str,
    pattern: str,
) -> dict:
    text_clause = _fuzzy_match(field_name, pattern) if pattern else {"match_all": {}}
    return {
        "bool": {
            "_name": path_name,
            "filter": [{"terms": {KIND_FIELD: _kind_values(kinds)}}],
            "must": [text_clause],
        }
    }


def build_query(
    request: SuggestionRequest,
    parsed: ParsedInput | None = None,
    size: int = _MIN_FETCH_SIZE,
) -> dict:
    """Return the search body for ``request``.

    Every body is scoped to the request's organization. A present namespace
    (even an empty one) adds an exact ``ns`` filter. Entities can match on
    their own name when their kind is in ``allowed_kinds`` or on one of
    their related entity names when their kind is in ``allowed_args``; each
    path is a named query so hits report which one matched. The argument
    path needs a non-empty pattern, otherwise it would list every entity of
    those kinds.
    """
    if parsed is None:
        parsed = parse_input(request.input)

    filters: list[dict] = [{"term": {ORG_ID_FIELD: request.org_id}}]
    if parsed.namespace is not None:
        filters.append({"term": {NAMESPACE_FIELD: parsed.namespace}})

    paths: list[dict] = []
    if request.allowed_kinds:
        paths.append(
            _match_path(
                ENTITY_MATCH_PATH,
                request.allowed_kinds,
                NAME_FIELD,
                parsed.name_pattern,
            )
        )
    if request.allowed_args and not parsed.is_wildcard:
        paths.append(
            _match_path(
                ARGUMENT_MATCH_PATH,
                request.allowed_args,
                RELATED_NAMES_FIELD,
                parsed.name_pattern,
            )
        )

    if not paths:
        query: dict = {"match_none": {}}
    else:
        query = {
            "bool": {
                "filter": filters,
                "should": paths,
                "minimum_should_match": 1,
            }
        }

    body: dict = {
        "size": max(1, size),
        "query": query,
        "track_total_hits": False,
    }
    if not parsed.is_wildcard:
        body["highlight"] = {
            "pre_tags": [HIGHLIGHT_PRE_TAG],
            "post_tags": [HIGHLIGHT_POST_TAG],
            "fields": {NAME_FIELD: {"number_of_fragments": 0}},
        }
    return body
