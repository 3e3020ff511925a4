"""Entity index definition and document writes for local development and tests.

The suggestion engine only reads the index. Production indexing belongs to
the indexer; these helpers give a local cluster the same analyzers so
queries behave the same way.
"""

from __future__ import annotations

import copy

from opensearchpy import OpenSearch

from entity_autocomplete.models import IndexedEntity

MD_ENTITY_INDEX_BODY: dict = {
    "settings": {
        "number_of_shards": 1,
        "number_of_replicas": 0,
        "analysis": {
            "tokenizer": {
                "ngram_tokenizer": {
                    "type": "edge_ngram",
                    "min_gram": 1,
                    "max_gram": 20,
                    "token_chars": [],
                },
            },
            "analyzer": {
                "autocomplete": {
                    "type": "custom",
                    "tokenizer": "ngram_tokenizer",
                    "filter": ["lowercase"],
                },
            },
        },
    },
    "mappings": {
        "properties": {
            "orgID": {"type": "keyword"},
            "uid": {"type": "keyword"},
            "name": {"type": "text", "analyzer": "autocomplete"},
            "ns": {"type": "keyword"},
            "kind": {"type": "keyword"},
            "timeStartedNS": {"type": "long"},
            "timeStoppedNS": {"type": "long"},
            "relatedEntityNames": {"type": "text", "analyzer": "autocomplete"},
            "resourceVersion": {"type": "keyword"},
        }
    },
}


def md_entity_index_body() -> dict:
    return copy.deepcopy(MD_ENTITY_INDEX_BODY)


def create_md_entity_index(
    opensearch_client: OpenSearch,
    index_name: str,
    replace_if_exists: bool = True,
) -> bool:
    """Create the entity index.

    Args:
        opensearch_client: Client for the target cluster.
        index_name: The name of the index to create.
        replace_if_exists: Delete and recreate the index if it already exists.

    Returns:
        bool: True if the index was created, False if it already existed and was kept.
    """
    if opensearch_client.indices.exists(index=index_name):
        if not replace_if_exists:
            return False
        opensearch_client.indices.delete(index=index_name, ignore=[404])
    opensearch_client.indices.create(index=index_name, body=md_entity_index_body())
    return True


def index_entity(
    opensearch_client: OpenSearch,
    index_name: str,
    entity: IndexedEntity,
    refresh: bool = True,
) -> None:
    """Write ``entity`` keyed by its uid, optionally making it searchable at once."""
    opensearch_client.index(
        index=index_name,
        body=entity.to_document(),
        id=entity.uid,
        refresh="true" if refresh else "false",
    )
