"""
Errors — Remote query failures and their console rendering.

ShopifyQueryError is raised by the Storefront client whenever the API answers
with a failure: a non-2xx HTTP status or a GraphQL payload carrying "errors".
It keeps the request and response that produced it so the orchestrator can
print a readable diagnostic instead of a stack trace.

Any other exception (a bug, a connection failure without a response) is not a
ShopifyQueryError and is re-raised untouched by the orchestrator.
"""

import json
from typing import Any, Dict, List, Optional

REDACTED = "***"

ACCESS_DENIED_HINT = (
    "Check your token has this read authorization, or omit fetching this "
    "object using the INCLUDE_COLLECTIONS setting."
)


class ShopifyQueryError(RuntimeError):
    """A Storefront API request that the remote side rejected.

    Attributes:
        request: {"url", "query", "variables", "headers"}; the access token
                 header is already redacted.
        response: {"status", "errors"}; errors is the GraphQL error list, or a
                  single synthesized entry for HTTP failures.
    """

    def __init__(self, message: str, request: Dict[str, Any], response: Dict[str, Any]):
        super().__init__(message)
        self.request = request
        self.response = response

    @property
    def errors(self) -> List[Dict[str, Any]]:
        return self.response.get("errors") or []

    @property
    def status(self) -> Optional[int]:
        return self.response.get("status")

    @property
    def is_access_denied(self) -> bool:
        return any(
            str(e.get("message", "")).lower().startswith("access denied")
            for e in self.errors
        )


def redact_headers(headers: Dict[str, str], secret_headers: tuple) -> Dict[str, str]:
    """Copy headers with every header named in secret_headers masked."""
    lowered = {h.lower() for h in secret_headers}
    return {k: (REDACTED if k.lower() in lowered else v) for k, v in headers.items()}


def format_query_error(error: ShopifyQueryError) -> str:
    """Render a ShopifyQueryError as a multi-line diagnostic.

    Layout: optional access-denied hint, the response errors, then the request
    (query, variables, redacted headers) as indented JSON.
    """
    lines = []
    if error.is_access_denied:
        lines.append(ACCESS_DENIED_HINT)

    if error.errors:
        lines.append("Response errors:")
        lines.append(json.dumps(error.errors, indent=2, default=str))

    if error.request:
        lines.append("Request:")
        lines.append(json.dumps(error.request, indent=2, default=str))

    return "\n".join(lines)


def print_graphql_error(error: ShopifyQueryError):
    """Print the diagnostic for a remote query failure."""
    print(f"\n  ERROR: {error}")
    print(format_query_error(error))
