"""
Shopify Storefront Client — Locale-bound GraphQL transport.

All requests go to the Storefront API endpoint of one shop:

    POST https://{shop_name}.myshopify.com/api/{api_version}/graphql.json
    Headers:
        X-Shopify-Storefront-Access-Token: {access_token}
        Accept-Language: {locale}
    Body: {"query": "...", "variables": {"first": 250, "after": null}}

The Accept-Language header makes Shopify return translated content, so one
client instance is bound to exactly one locale. The orchestrator builds one
client per configured locale and reuses it for the whole run.

Failure classification happens here, where the response is available:
  - non-2xx status            -> ShopifyQueryError (status + synthesized error)
  - payload with "errors"     -> ShopifyQueryError (status + GraphQL errors)
  - no response at all        -> requests.RequestException, propagated as-is

There are no retries at this layer or above it.
"""

import logging
from typing import Any, Dict, Optional

import requests

from .errors import ShopifyQueryError, redact_headers

TOKEN_HEADER = "X-Shopify-Storefront-Access-Token"
DEFAULT_TIMEOUT = 30


class ShopifyStorefrontClient:
    """Storefront API client bound to one shop and one locale.

    Attributes:
        shop_name: Shop sub-domain (the "acme" in acme.myshopify.com).
        api_version: Storefront API version (e.g., "2023-01").
        locale: Language tag sent as Accept-Language.
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        shop_name: str,
        access_token: str,
        api_version: str,
        locale: str,
        timeout: float = DEFAULT_TIMEOUT,
        logger: Optional[logging.Logger] = None,
        session: Optional[requests.Session] = None,
    ):
        self.shop_name = shop_name
        self.api_version = api_version
        self.locale = locale
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)
        self._session = session or requests.Session()
        self._session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Accept-Language": locale,
            TOKEN_HEADER: access_token,
        })

    @property
    def url(self) -> str:
        return f"https://{self.shop_name}.myshopify.com/api/{self.api_version}/graphql.json"

    def request(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Execute a GraphQL document and return the "data" member.

        Args:
            query: The GraphQL document.
            variables: Optional variables (the paginator sends first/after).

        Returns:
            The "data" portion of the response (an empty dict if absent).

        Raises:
            ShopifyQueryError: If the API rejects the request.
            requests.RequestException: If no response could be obtained.
        """
        payload = {"query": query, "variables": variables or {}}

        self.logger.debug(
            "POST %s [%s] variables=%s", self.url, self.locale, payload["variables"]
        )

        response = self._session.post(self.url, json=payload, timeout=self.timeout)

        if not response.ok:
            raise self._query_error(
                f"HTTP {response.status_code} from Storefront API",
                payload,
                response.status_code,
                [{"message": f"HTTP {response.status_code}: {response.text[:500]}"}],
            )

        result = response.json()

        if result.get("errors"):
            errors = result["errors"]
            messages = "; ".join(e.get("message", str(e)) for e in errors)
            raise self._query_error(messages, payload, response.status_code, errors)

        return result.get("data") or {}

    def _query_error(self, message: str, payload: Dict[str, Any], status: int,
                     errors: list) -> ShopifyQueryError:
        request = {
            "url": self.url,
            "query": payload["query"],
            "variables": payload["variables"],
            "headers": redact_headers(dict(self._session.headers), (TOKEN_HEADER,)),
        }
        return ShopifyQueryError(message, request, {"status": status, "errors": errors})


def create_client(shop_name: str, access_token: str, api_version: str, locale: str,
                  timeout: float = DEFAULT_TIMEOUT,
                  logger: Optional[logging.Logger] = None) -> ShopifyStorefrontClient:
    """Build a Storefront client translated to the given locale."""
    return ShopifyStorefrontClient(
        shop_name, access_token, api_version, locale, timeout=timeout, logger=logger
    )
