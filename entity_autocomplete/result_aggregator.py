"""Turn raw search hits into ranked, de-duplicated suggestions."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from entity_autocomplete.config import MAX_SUGGESTIONS
from entity_autocomplete.kinds import EntityKind
from entity_autocomplete.models import (
    IndexedEntity,
    ParsedInput,
    Suggestion,
    SuggestionRequest,
    SuggestionResult,
)
from entity_autocomplete.query_builder import (
    ENTITY_MATCH_PATH,
    HIGHLIGHT_POST_TAG,
    HIGHLIGHT_PRE_TAG,
    NAME_FIELD,
)

logger = logging.getLogger(__name__)


@dataclass
class _Candidate:
    name: str
    bare_name: str
    kind: EntityKind
    score: float
    matched_indexes: tuple[int, ...]

    def to_suggestion(self) -> Suggestion:
        return Suggestion(
            name=self.name,
            kind=self.kind,
            score=self.score,
            matched_indexes=self.matched_indexes,
        )


def matched_indexes_from_highlight(
    highlighted: str,
    plain_name: str,
    offset: int = 0,
) -> tuple[int, ...]:
    """Character positions wrapped in highlight tags, shifted by ``offset``.

    Returns an empty tuple if the highlighted text does not reduce to
    ``plain_name`` once the tags are removed.
    """
    indexes: list[int] = []
    stripped: list[str] = []
    inside = False
    i = 0
    while i < len(highlighted):
        if highlighted.startswith(HIGHLIGHT_PRE_TAG, i):
            inside = True
            i += len(HIGHLIGHT_PRE_TAG)
            continue
        if highlighted.startswith(HIGHLIGHT_POST_TAG, i):
            inside = False
            i += len(HIGHLIGHT_POST_TAG)
            continue
        if inside:
            indexes.append(offset + len(stripped))
        stripped.append(highlighted[i])
        i += 1
    if "".join(stripped) != plain_name:
        return ()
    return tuple(indexes)


def _hit_matched_indexes(hit: dict, entity: IndexedEntity) -> tuple[int, ...]:
    highlight = hit.get("highlight")
    if not isinstance(highlight, dict):
        return ()
    fragments = highlight.get(NAME_FIELD)
    if not isinstance(fragments, list) or not fragments:
        return ()
    # The namespace and separator precede the name in the rendered form.
    return matched_indexes_from_highlight(
        str(fragments[0]),
        entity.name,
        offset=len(entity.ns) + 1,
    )


def _hit_score(hit: dict) -> float:
    try:
        return float(hit.get("_score") or 0.0)
    except (TypeError, ValueError):
        return 0.0


def _collect_candidates(request: SuggestionRequest, hits: list[dict]) -> list[_Candidate]:
    by_key: dict[tuple[str, EntityKind], _Candidate] = {}
    ordered: list[_Candidate] = []

    for hit in hits:
        source = hit.get("_source")
        if not isinstance(source, dict):
            continue
        entity = IndexedEntity.from_source(source)
        if "orgID" in source and entity.org_id != request.org_id:
            logger.warning(
                "Dropping hit outside the requested organization",
                extra={"uid": entity.uid},
            )
            continue
        matched_paths = hit.get("matched_queries") or []
        if matched_paths and ENTITY_MATCH_PATH not in matched_paths:
            logger.debug(
                "Suggestion matched only through related entity names",
                extra={"uid": entity.uid, "matched_queries": list(matched_paths)},
            )

        key = (entity.rendered_name, entity.kind)
        score = _hit_score(hit)
        matched_indexes = _hit_matched_indexes(hit, entity)
        existing = by_key.get(key)
        if existing is None:
            candidate = _Candidate(
                name=entity.rendered_name,
                bare_name=entity.name,
                kind=entity.kind,
                score=score,
                matched_indexes=matched_indexes,
            )
            by_key[key] = candidate
            ordered.append(candidate)
            continue
        if score > existing.score:
            existing.score = score
        if not existing.matched_indexes:
            existing.matched_indexes = matched_indexes

    # sorted() is stable, so equal scores keep backend order.
    return sorted(ordered, key=lambda candidate: candidate.score, reverse=True)


def _is_exact_match(parsed: ParsedInput, top: _Candidate) -> bool:
    if not parsed.raw:
        return False
    if top.name == parsed.raw:
        return True
    return not parsed.has_namespace and top.bare_name == parsed.raw


def aggregate(
    parsed: ParsedInput,
    request: SuggestionRequest,
    hits: list[dict],
    max_suggestions: int = MAX_SUGGESTIONS,
) -> SuggestionResult:
    """Build the result for one request from its hits.

    Suggestions are keyed by ``(namespace/name, kind)``; the best score of a
    key wins, ranking is by descending score, and at most
    ``max_suggestions`` are kept. The result is an exact match when the top
    suggestion is what the user typed: the full ``namespace/name`` form, or
    the bare name when no namespace was typed.
    """
    candidates = _collect_candidates(request, hits)
    if not candidates:
        return SuggestionResult(exact_match=False, suggestions=[])

    exact_match = _is_exact_match(parsed, candidates[0])
    kept = candidates[: max(1, max_suggestions)]
    return SuggestionResult(
        exact_match=exact_match,
        suggestions=[candidate.to_suggestion() for candidate in kept],
    )
