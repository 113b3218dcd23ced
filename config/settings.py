"""
Settings — Default configuration values for the Shopify Storefront sourcer.

This module provides the DEFAULT_SETTINGS dict that the orchestrator uses as
fallback values when environment variables are not set. The actual configuration
is loaded from .env at runtime.

Configuration precedence (highest to lowest):
  1. CLI flags (--debug, --quiet, --languages, --include)
  2. Environment variables (from .env file)
  3. DEFAULT_SETTINGS (this file)

Settings reference:
  SHOPIFY_SHOP_NAME       Shop sub-domain, e.g. "acme" for acme.myshopify.com (required)
  SHOPIFY_ACCESS_TOKEN    Storefront API access token (required)
  SHOPIFY_API_VERSION     Storefront API version
  SHOPIFY_LANGUAGES       Comma-separated locales, sourced in the given order
  INCLUDE_COLLECTIONS     Comma-separated family groups: "shop", "content"
  SHOPIFY_QUERIES_FILE    JSON file mapping a family key (e.g. "products") to a
                          query document that replaces the default one
  PAGINATION_SIZE         Page size requested per paginated query
  PAGINATION_DELAY        Minimum milliseconds between two page requests
  REQUEST_TIMEOUT         Seconds before a single HTTP request times out
  VERBOSE                 Log how long each entity family took
  DEBUG                   Debug logging and a traceback on failure
  PROVIDER_NAME           Label used in output folder naming
  OUTPUT_DIR              Where to write run output
  OUTPUT_RETENTION_DAYS   How many days to keep old output folders (0 = keep forever)
  SAVE_JSON               Whether to write the node snapshot to disk
"""

PROVIDER_NAME = "Shopify_Storefront"

DEFAULT_SETTINGS = {
    "SHOPIFY_API_VERSION": "2023-01",
    "SHOPIFY_LANGUAGES": "en",
    "INCLUDE_COLLECTIONS": "shop,content",
    "SHOPIFY_QUERIES_FILE": "",
    "PAGINATION_SIZE": 250,
    "PAGINATION_DELAY": 500,
    "REQUEST_TIMEOUT": 30,
    "VERBOSE": True,
    "DEBUG": False,
    "PROVIDER_NAME": PROVIDER_NAME,
    "OUTPUT_DIR": "./output",
    "OUTPUT_RETENTION_DAYS": 30,
    "SAVE_JSON": True,
}
