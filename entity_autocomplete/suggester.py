"""Public entry point: resolve many autocomplete requests in one backend call."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from entity_autocomplete.batch_executor import execute_all
from entity_autocomplete.config import MAX_SUGGESTIONS, MD_INDEX_NAME
from entity_autocomplete.input_parser import parse_input
from entity_autocomplete.models import SuggestionRequest, SuggestionResult
from entity_autocomplete.query_builder import build_query, over_fetch_size
from entity_autocomplete.result_aggregator import aggregate

logger = logging.getLogger(__name__)


class ElasticSuggester:
    """Suggests entity names from an OpenSearch/Elasticsearch entity index.

    Holds only the injected client, the index name and the per-result cap,
    so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        client: Any,
        md_index_name: str = MD_INDEX_NAME,
        max_suggestions: int = MAX_SUGGESTIONS,
    ) -> None:
        self._client = client
        self._md_index_name = md_index_name
        self._max_suggestions = max(1, int(max_suggestions))

    def get_suggestions(
        self,
        requests: Sequence[SuggestionRequest],
    ) -> list[SuggestionResult]:
        """Return one result per request, in request order.

        Raises ``SuggestionBackendError`` if the batch fails; there are no
        partial results.
        """
        if not requests:
            return []

        parsed_inputs = [parse_input(request.input) for request in requests]
        size = over_fetch_size(self._max_suggestions)
        queries = [
            build_query(request, parsed, size=size)
            for request, parsed in zip(requests, parsed_inputs)
        ]
        hits_per_query = execute_all(self._client, self._md_index_name, queries)

        results = [
            aggregate(parsed, request, hits, max_suggestions=self._max_suggestions)
            for parsed, request, hits in zip(parsed_inputs, requests, hits_per_query)
        ]
        logger.debug(
            "Resolved suggestion batch",
            extra={
                "index": self._md_index_name,
                "num_requests": len(requests),
                "num_exact": sum(1 for result in results if result.exact_match),
            },
        )
        return results
