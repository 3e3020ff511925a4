"""Environment-driven settings for the autocomplete service."""

import os

OPENSEARCH_HOST = os.getenv("OPENSEARCH_HOST", "localhost")
OPENSEARCH_PORT = int(os.getenv("OPENSEARCH_PORT", "9200"))
OPENSEARCH_USER = os.getenv("OPENSEARCH_USER", "admin")
OPENSEARCH_PASSWORD = os.getenv("OPENSEARCH_PASSWORD", "myStrongPassword123!")
try:
    OPENSEARCH_TIMEOUT_SECONDS = max(1, int(os.getenv("OPENSEARCH_TIMEOUT_SECONDS", "10")))
except ValueError:
    OPENSEARCH_TIMEOUT_SECONDS = 10

MD_INDEX_NAME = os.getenv("AUTOCOMPLETE_MD_INDEX", "md_entities")

DEFAULT_MAX_SUGGESTIONS = 10


def _read_max_suggestions(raw_value: str | None) -> int:
    try:
        return max(1, int(str(raw_value or "").strip()))
    except ValueError:
        return DEFAULT_MAX_SUGGESTIONS


MAX_SUGGESTIONS = _read_max_suggestions(
    os.getenv("AUTOCOMPLETE_MAX_SUGGESTIONS", str(DEFAULT_MAX_SUGGESTIONS))
)
