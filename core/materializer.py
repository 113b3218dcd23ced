"""
Entity Materializer — Fetch, rewrite, build and store nodes per entity family.

For every configured locale, in order, one call of create_nodes():

    client = create_translated_client(locale)
    for entity in query_all(client, [endpoint], query):       # cursor order
        node = node_factory(map_entity_ids(entity, locale))
        node_store.create_node(node)
        on_child(entity, node)                                # children first

Locale n is finished before locale n+1 starts, and the children of entity i
are stored before entity i+1 is touched. Any exception stops the call where it
happened and propagates; nodes already handed to the store stay there.

Two family shapes exist:
  create_nodes       the factory receives the locale-qualified entity
  create_page_nodes  the factory receives the raw entity and the locale
                     rewrite is applied to the node it returns; the content
                     digest is then recomputed over the rewritten node

Shop policies and shop details are single-object queries, fetched once per
locale without pagination.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional, Sequence

from .constants import NODE_TO_ENDPOINT_MAPPING, SHOP_DETAILS, SHOP_POLICY
from .locale_ids import map_entity_ids, node_with_locale
from .node_factories import shop_details_node, shop_policy_node, with_content_digest
from .paginator import DEFAULT_DELAY, DEFAULT_FIRST_OBJECTS, query_all, query_once

Node = Dict[str, Any]
NodeFactory = Callable[[Dict[str, Any]], Node]
ChildHandler = Callable[[Dict[str, Any], Node], None]

SHOP_FALLBACK_ID = "shop"


class EntityMaterializer:
    """Materializes entity families into a node store, locale by locale.

    Attributes:
        create_translated_client: Callable returning the client for a locale.
        node_store: Sink exposing create_node(node).
        languages: Locales to source, in processing order.
        pagination_size: Page size ("first") for paginated families.
        pagination_delay: Minimum milliseconds between page requests.
        verbose: If True, log how long each family took.
        label: Prefix for log messages (e.g. "shopify-source/acme").
    """

    def __init__(
        self,
        create_translated_client: Callable[[str], Any],
        node_store,
        languages: Sequence[str],
        pagination_size: int = DEFAULT_FIRST_OBJECTS,
        pagination_delay: int = DEFAULT_DELAY,
        verbose: bool = True,
        label: str = "shopify-source",
        logger: Optional[logging.Logger] = None,
    ):
        self.create_translated_client = create_translated_client
        self.node_store = node_store
        self.languages = list(languages)
        self.pagination_size = pagination_size
        self.pagination_delay = pagination_delay
        self.verbose = verbose
        self.label = label
        self.logger = logger or logging.getLogger(__name__)

    def create_nodes(self, endpoint: str, query: str, node_factory: NodeFactory,
                     on_child: Optional[ChildHandler] = None):
        """Source a paginated family whose factory takes locale-qualified entities."""
        started = time.monotonic()

        for locale in self.languages:
            for entity in self._fetch(endpoint, query, locale):
                node = node_factory(map_entity_ids(entity, locale))
                self.node_store.create_node(node)
                if on_child:
                    on_child(entity, node)

        self._report(endpoint, started)

    def create_page_nodes(self, endpoint: str, query: str, node_factory: NodeFactory,
                          on_child: Optional[ChildHandler] = None):
        """Source a paginated family whose factory runs on raw entities."""
        started = time.monotonic()

        for locale in self.languages:
            for entity in self._fetch(endpoint, query, locale):
                node = with_content_digest(node_with_locale(node_factory(entity), locale))
                self.node_store.create_node(node)
                if on_child:
                    on_child(entity, node)

        self._report(endpoint, started)

    def create_shop_policies(self, query: str):
        """Create one ShopPolicy node per non-null policy field, per locale."""
        started = time.monotonic()

        for locale in self.languages:
            data = query_once(self.create_translated_client(locale), query)
            policies = data.get("shop") or {}

            for policy_type, policy in policies.items():
                if not policy:
                    continue
                # default policies (e.g. subscriptionPolicy) carry no id
                if not policy.get("id"):
                    policy = {**policy, "id": policy_type}
                node = shop_policy_node(node_with_locale(policy, locale), policy_type)
                self.node_store.create_node(node)

        self._report(SHOP_POLICY, started)

    def create_shop_details(self, query: str):
        """Create one ShopDetails node per locale."""
        started = time.monotonic()

        for locale in self.languages:
            data = query_once(self.create_translated_client(locale), query)
            shop = data.get("shop")
            if not shop:
                self.logger.warning("%s no shop details returned for locale %s",
                                    self.label, locale)
                continue

            if not shop.get("id"):
                shop = {**shop, "id": SHOP_FALLBACK_ID}
            self.node_store.create_node(shop_details_node(node_with_locale(shop, locale)))

        self._report(SHOP_DETAILS, started)

    def _fetch(self, endpoint: str, query: str, locale: str):
        return query_all(
            self.create_translated_client(locale),
            [NODE_TO_ENDPOINT_MAPPING[endpoint]],
            query,
            delay=self.pagination_delay,
            first=self.pagination_size,
            logger=self.logger,
        )

    def _report(self, endpoint: str, started: float):
        if self.verbose:
            self.logger.info("%s fetched and processed %s nodes in %.3fs",
                             self.label, endpoint, time.monotonic() - started)
