"""
Paginator — Cursor-based fetching of whole GraphQL connections.

query_all() walks a top-level connection page by page:

    request(first, after=None) -> edges[0..k], hasNextPage=True
    sleep(delay)
    request(first, after=edges[k].cursor) -> ...
    ...until hasNextPage is false or absent

and returns every edge's node in server order. The page count is never known
up front; the loop keeps going for as long as the server says there is more.

A response that lacks the connection at the given path is treated as zero
items, so optional or missing fields in the remote schema do not fail a run.
Client errors are not caught here.
"""

import logging
import time
from typing import Any, Dict, List, Optional, Sequence

DEFAULT_DELAY = 500
DEFAULT_FIRST_OBJECTS = 250


def get_in(data: Any, path: Sequence[str], default: Any = None) -> Any:
    """Look up a nested value, returning default on any missing step."""
    current = data
    for key in path:
        if not isinstance(current, dict) or current.get(key) is None:
            return default
        current = current[key]
    return current


def query_once(client, query: str, first: int = DEFAULT_FIRST_OBJECTS,
               after: Optional[str] = None) -> Dict[str, Any]:
    """Request a single page (or a non-paginated query) from a client."""
    return client.request(query, {"first": first, "after": after})


def query_all(
    client,
    path: Sequence[str],
    query: str,
    delay: int = DEFAULT_DELAY,
    first: int = DEFAULT_FIRST_OBJECTS,
    logger: Optional[logging.Logger] = None,
) -> List[Dict[str, Any]]:
    """Fetch every node of a paginated connection.

    Args:
        client: Locale-bound client exposing request(query, variables).
        path: Field names locating the connection in the response,
              e.g. ["products"].
        query: GraphQL document accepting $first and $after.
        delay: Minimum wait between page requests, in milliseconds.
        first: Page size.
        logger: Optional logger; defaults to this module's logger.

    Returns:
        All nodes, in the order the server returned them.
    """
    log = logger or logging.getLogger(__name__)
    path = list(path)
    nodes: List[Dict[str, Any]] = []
    after = None
    page = 0

    while True:
        page += 1
        started = time.monotonic()
        data = query_once(client, query, first, after)
        log.debug("%s page %d requested in %.3fs",
                  ".".join(path), page, time.monotonic() - started)

        edges = get_in(data, path + ["edges"], [])
        nodes.extend(edge.get("node") for edge in edges)

        if not get_in(data, path + ["pageInfo", "hasNextPage"], False):
            break

        if not edges:
            log.warning("%s reported another page but returned no edges; stopping",
                        ".".join(path))
            break

        after = edges[-1].get("cursor")

        started = time.monotonic()
        time.sleep(delay / 1000)
        log.debug("awaited %.3fs", time.monotonic() - started)

    return nodes
