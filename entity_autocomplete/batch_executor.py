"""Run every per-request query in a single multi-search round trip."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from opensearchpy.exceptions import OpenSearchException

from entity_autocomplete.errors import SuggestionBackendError

logger = logging.getLogger(__name__)


def build_msearch_body(index_name: str, queries: Sequence[dict]) -> list[dict]:
    """Interleave header and body lines for the ``_msearch`` NDJSON payload."""
    lines: list[dict] = []
    for query in queries:
        lines.append({"index": index_name})
        lines.append(query)
    return lines


def _describe_error(error: object) -> str:
    if isinstance(error, dict):
        reason = error.get("reason") or error.get("type")
        root_causes = error.get("root_cause")
        if not reason and isinstance(root_causes, list) and root_causes:
            first = root_causes[0]
            if isinstance(first, dict):
                reason = first.get("reason") or first.get("type")
        if reason:
            return str(reason)
    return str(error)


def _extract_hits(position: int, response: object) -> list[dict]:
    if not isinstance(response, dict):
        raise SuggestionBackendError(
            f"Multi-search response {position} is not an object: {response!r}"
        )
    if "error" in response:
        raise SuggestionBackendError(
            f"Multi-search query {position} failed: {_describe_error(response['error'])}"
        )
    hits_obj = response.get("hits")
    if not isinstance(hits_obj, dict):
        raise SuggestionBackendError(f"Multi-search response {position} has no 'hits' object")
    hits = hits_obj.get("hits", [])
    if not isinstance(hits, list):
        return []
    return [hit for hit in hits if isinstance(hit, dict)]


def execute_all(client: Any, index_name: str, queries: Sequence[dict]) -> list[list[dict]]:
    """Submit ``queries`` against ``index_name`` as one ``msearch`` call.

    Returns one hit list per query, in submission order. A query that
    matches nothing yields an empty list. Any failure, whether of the call
    itself or of a single query inside it, raises ``SuggestionBackendError``;
    callers retry the whole batch.
    """
    if not queries:
        return []

    logger.debug(
        "Submitting suggestion batch",
        extra={"index": index_name, "num_queries": len(queries)},
    )
    try:
        response = client.msearch(body=build_msearch_body(index_name, queries))
    except OpenSearchException as e:
        logger.warning(
            "Suggestion batch failed",
            extra={"index": index_name, "num_queries": len(queries), "error": str(e)},
        )
        raise SuggestionBackendError(f"Multi-search against '{index_name}' failed: {e}") from e

    responses = response.get("responses") if isinstance(response, dict) else None
    if not isinstance(responses, list):
        raise SuggestionBackendError(
            f"Multi-search against '{index_name}' returned no 'responses' list."
        )
    if len(responses) != len(queries):
        raise SuggestionBackendError(
            f"Multi-search against '{index_name}' returned {len(responses)} responses "
            f"for {len(queries)} queries."
        )

    return [_extract_hits(position, item) for position, item in enumerate(responses)]
