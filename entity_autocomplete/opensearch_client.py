from opensearchpy import OpenSearch
from opensearchpy.exceptions import OpenSearchException

from entity_autocomplete.config import (
    OPENSEARCH_HOST,
    OPENSEARCH_PASSWORD,
    OPENSEARCH_PORT,
    OPENSEARCH_TIMEOUT_SECONDS,
    OPENSEARCH_USER,
)


def build_client(use_ssl: bool) -> OpenSearch:
    return OpenSearch(
        hosts=[{"host": OPENSEARCH_HOST, "port": OPENSEARCH_PORT}],
        use_ssl=use_ssl,
        verify_certs=False,
        ssl_show_warn=False,
        http_auth=(OPENSEARCH_USER, OPENSEARCH_PASSWORD),
        timeout=OPENSEARCH_TIMEOUT_SECONDS,
    )


def can_connect(opensearch_client: OpenSearch) -> bool:
    try:
        opensearch_client.info()
        return True
    except OpenSearchException:
        return False


def create_client() -> OpenSearch:
    """Return a client for the configured cluster, preferring TLS.

    Raises ``RuntimeError`` when the cluster answers neither over HTTPS nor
    over plain HTTP.
    """
    # Local clusters are commonly run with a self-signed certificate, so try
    # https first and fall back to http when the security plugin is off.
    secure_client = build_client(use_ssl=True)
    if can_connect(secure_client):
        return secure_client

    insecure_client = build_client(use_ssl=False)
    if can_connect(insecure_client):
        return insecure_client

    raise RuntimeError(
        f"OpenSearch is not reachable at {OPENSEARCH_HOST}:{OPENSEARCH_PORT} "
        "over https or http."
    )
