"""
Core package — The node sourcing pipeline modules.

Each module handles one concern:

  orchestrator.py     Configuration, family order and the failure boundary
  materializer.py     Fetch -> rewrite -> build -> store, per family and locale
  paginator.py        Cursor-based fetching of whole connections
  locale_ids.py       Locale-qualified identities for entities and children
  node_factories.py   Entity -> node conversion per family
  shopify_client.py   HTTP communication with the Storefront API
  graphql_queries.py  Default query documents
  errors.py           Remote query failure type and diagnostics
  constants.py        Family names, groups and endpoint mapping
"""

from .orchestrator import SourcingOrchestrator
from .materializer import EntityMaterializer
from .paginator import query_all, query_once
from .locale_ids import map_entity_ids, node_with_locale
from .shopify_client import ShopifyStorefrontClient, create_client
from .errors import ShopifyQueryError, format_query_error, print_graphql_error
from .graphql_queries import DEFAULT_QUERIES
