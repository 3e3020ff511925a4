# /// script
# dependencies = ["anyio", "mcp", "opensearch-py"]
# ///

"""MCP server exposing entity autocomplete as a tool.

Clients call ``get_suggestions`` with a list of requests and receive one
result per request, in the same order.
"""

from __future__ import annotations

if __package__ in {None, ""}:
    from pathlib import Path
    import sys

    _SCRIPT_EXECUTION_PROJECT_ROOT = str(Path(__file__).resolve().parents[1])
    if _SCRIPT_EXECUTION_PROJECT_ROOT not in sys.path:
        sys.path.insert(0, _SCRIPT_EXECUTION_PROJECT_ROOT)

import errno
import logging
import sys

import anyio
from mcp.server.fastmcp import FastMCP

from entity_autocomplete.config import MAX_SUGGESTIONS, MD_INDEX_NAME
from entity_autocomplete.models import SuggestionRequest
from entity_autocomplete.opensearch_client import create_client
from entity_autocomplete.suggester import ElasticSuggester

logger = logging.getLogger(__name__)

# -------------------------------------------------------------------------
# Suggester (one per process, created on first use)
# -------------------------------------------------------------------------

_suggester: ElasticSuggester | None = None


def _get_suggester() -> ElasticSuggester:
    global _suggester
    if _suggester is None:
        _suggester = ElasticSuggester(
            create_client(),
            md_index_name=MD_INDEX_NAME,
            max_suggestions=MAX_SUGGESTIONS,
        )
    return _suggester


def _as_name_list(value: object) -> list[object]:
    if value is None:
        return []
    if isinstance(value, str):
        return [part for part in (item.strip() for item in value.split(",")) if part]
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def _parse_request(raw: object, position: int) -> SuggestionRequest:
    if not isinstance(raw, dict):
        raise ValueError(f"request {position}: expected an object, got {type(raw).__name__}.")
    # A missing org id matches nothing through the orgID filter.
    org_id = str(raw.get("org_id", "") or "").strip()
    try:
        return SuggestionRequest(
            input=str(raw.get("input", "") or ""),
            org_id=org_id,
            allowed_kinds=_as_name_list(raw.get("allowed_kinds")),
            allowed_args=_as_name_list(raw.get("allowed_args")),
        )
    except ValueError as e:
        raise ValueError(f"request {position}: {e}") from e


# -------------------------------------------------------------------------
# MCP server
# -------------------------------------------------------------------------

mcp = FastMCP("Entity Autocomplete", json_response=True)


@mcp.tool()
def get_suggestions(requests: list[dict]) -> dict:
    """Resolve autocomplete input into ranked entity suggestions.

    Each request is an object with:
    - input: text typed by the user, optionally "namespace/name"
    - org_id: organization whose entities may be suggested
    - allowed_kinds: kinds that may match by their own name (e.g. ["service", "pod"])
    - allowed_args: kinds that may match through related entity names

    Returns {"results": [...]} with one {exact_match, suggestions} entry per
    request, in request order.
    """
    parsed_requests: list[SuggestionRequest] = []
    details: list[str] = []
    for position, raw in enumerate(requests or []):
        try:
            parsed_requests.append(_parse_request(raw, position))
        except ValueError as e:
            details.append(str(e))
    if details:
        return {"error": "Invalid suggestion request.", "details": details}

    if not parsed_requests:
        return {"results": []}

    try:
        results = _get_suggester().get_suggestions(parsed_requests)
    except RuntimeError as e:
        # Failed batch or unreachable cluster.
        logger.warning("get_suggestions failed: %s", e)
        return {"error": "Suggestion lookup failed.", "details": [str(e)]}
    return {"results": [result.to_dict() for result in results]}


def _flatten_exception_leaves(exc: BaseException) -> list[BaseException]:
    if isinstance(exc, BaseExceptionGroup):
        leaves: list[BaseException] = []
        for nested in exc.exceptions:
            leaves.extend(_flatten_exception_leaves(nested))
        return leaves
    return [exc]


def _is_expected_stdio_disconnect(exc: BaseException) -> bool:
    leaves = _flatten_exception_leaves(exc)
    if not leaves:
        return False

    expected_types = (
        anyio.BrokenResourceError,
        anyio.ClosedResourceError,
        BrokenPipeError,
        EOFError,
    )

    for leaf in leaves:
        if isinstance(leaf, expected_types):
            continue
        if isinstance(leaf, OSError) and leaf.errno in {errno.EPIPE, errno.EBADF}:
            continue
        return False
    return True


def main() -> None:
    """Entry point for the MCP server (console script ``entity-autocomplete-mcp``)."""
    if sys.stdin.isatty():
        print(
            "This MCP server uses JSON-RPC over stdio and must be launched by an MCP client "
            "(Cursor/Claude Desktop/Inspector)."
        )
        raise SystemExit(0)
    logging.basicConfig(level=logging.INFO, stream=sys.stderr)
    # A closed stdio pipe means the client went away; exit cleanly and let
    # the client start a fresh process on reconnect.
    try:
        mcp.run(transport="stdio")
    except BaseException as exc:
        if _is_expected_stdio_disconnect(exc):
            raise SystemExit(0)
        raise


if __name__ == "__main__":
    main()
