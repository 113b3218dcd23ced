"""
Sourcing Orchestrator — Pipeline coordination for Shopify node sourcing.

This module ties the pipeline together (ShopifyStorefrontClient, paginator,
locale rewriter, EntityMaterializer, node store) and runs the entity families
in a fixed order:

  "shop" group
      1. collections
      2. products          (+ one node per variant and per option)
      3. shop policies     (one node per non-null policy, per locale)
      4. shop details      (one node per locale)

  "content" group
      5. blogs
      6. articles          (+ one node per comment)
      7. pages

Each group runs only if it is listed in INCLUDE_COLLECTIONS; the order above
does not depend on the order of that list.

Failure boundary:
    run() catches ShopifyQueryError (the Storefront API rejected a request),
    prints a redacted diagnostic and reports the run as failed. Every other
    exception is re-raised unchanged after a one-line notice.

Configuration:
    All settings are loaded from environment variables (typically via .env file).
    Required: SHOPIFY_SHOP_NAME, SHOPIFY_ACCESS_TOKEN.
    See config/settings.py for defaults.

Typical usage:
    orchestrator = SourcingOrchestrator(env_file="./.env")
    if orchestrator.validate_config():
        results = orchestrator.run()
        orchestrator.print_summary(results)
"""

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from dotenv import load_dotenv

from shopify_source_shared import JsonNodeStore, OutputManager

from config import DEFAULT_SETTINGS

from .constants import (
    ARTICLE,
    BLOG,
    COLLECTION,
    CONTENT,
    FAMILY_GROUPS,
    PAGE,
    PRODUCT,
    SHOP,
)
from .errors import ShopifyQueryError, print_graphql_error
from .graphql_queries import DEFAULT_QUERIES
from .locale_ids import map_entity_ids
from .materializer import EntityMaterializer
from .node_factories import (
    article_node,
    blog_node,
    collection_node,
    comment_node,
    connection_nodes,
    page_node,
    product_node,
    product_option_node,
    product_variant_node,
)
from .shopify_client import create_client

logger = logging.getLogger(__name__)


def _setting(name: str) -> str:
    return os.getenv(name, str(DEFAULT_SETTINGS[name]))


def _flag(name: str) -> bool:
    return _setting(name).lower() == "true"


def _csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _int_setting(name: str, minimum: int = 1) -> Optional[int]:
    """Parse an integer setting; None if it is not an integer >= minimum."""
    try:
        value = int(_setting(name))
    except ValueError:
        return None
    return value if value >= minimum else None


class SourcingOrchestrator:
    """Orchestrates sourcing of Shopify Storefront data into a node store.

    Attributes:
        shop_name: Shop sub-domain (the "acme" in acme.myshopify.com).
        access_token: Storefront API access token.
        api_version: Storefront API version.
        languages: Locales to source, in order.
        include_collections: Family groups to run ("shop", "content").
        queries_file: Optional JSON file with per-family query overrides.
        pagination_size: Page size for paginated families (None if invalid).
        pagination_delay: Milliseconds between page requests (None if invalid).
        request_timeout: Seconds per HTTP request.
        output_retention_days: Days to keep output folders (None if invalid).
        verbose: Whether to log per-family timings.
        debug: Whether to print a traceback on failure.
        save_json: Whether to write nodes and run results to disk.
        node_store: Where nodes are created.
        output_manager: Handles timestamped output directories and retention cleanup.
    """

    def __init__(
        self,
        env_file: str = "./.env",
        node_store=None,
        client_factory: Optional[Callable[..., Any]] = None,
    ):
        """Initialize the orchestrator by loading configuration from environment.

        Args:
            env_file: Path to a .env file. If the file exists, it is loaded via
                      python-dotenv. Otherwise, falls back to system environment.
            node_store: Node sink; defaults to a fresh JsonNodeStore.
            client_factory: Builds a locale-bound client from
                            (shop_name, access_token, api_version, locale);
                            defaults to create_client.
        """
        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path)
            print(f"Loaded configuration from: {env_file}")
        else:
            print(f"Warning: {env_file} not found, using defaults/environment")

        # Shopify connection (required)
        self.shop_name = os.getenv("SHOPIFY_SHOP_NAME", "")
        self.access_token = os.getenv("SHOPIFY_ACCESS_TOKEN", "")
        self.api_version = _setting("SHOPIFY_API_VERSION")

        # What to source
        self.languages = _csv(_setting("SHOPIFY_LANGUAGES"))
        self.include_collections = _csv(_setting("INCLUDE_COLLECTIONS").lower())
        self.queries_file = _setting("SHOPIFY_QUERIES_FILE")

        # Rate limiting and transport
        self.pagination_size = _int_setting("PAGINATION_SIZE")
        self.pagination_delay = _int_setting("PAGINATION_DELAY", minimum=0)
        self.request_timeout = _int_setting("REQUEST_TIMEOUT")

        # Processing options
        self.verbose = _flag("VERBOSE")
        self.debug = _flag("DEBUG")
        self.save_json = _flag("SAVE_JSON")
        self.provider_name = _setting("PROVIDER_NAME")

        output_dir = _setting("OUTPUT_DIR")
        self.output_retention_days = _int_setting("OUTPUT_RETENTION_DAYS", minimum=0)
        self.output_manager = OutputManager(
            output_dir, self.provider_name, self.output_retention_days or 0
        )

        self.node_store = node_store if node_store is not None else JsonNodeStore()
        self._client_factory = client_factory or create_client
        self._clients: Dict[str, Any] = {}
        self._queries: Optional[Dict[str, str]] = None

    @property
    def label(self) -> str:
        return f"shopify-source/{self.shop_name}"

    def validate_config(self) -> bool:
        """Validate that all required configuration values are present.

        Checks:
            - SHOPIFY_SHOP_NAME and SHOPIFY_ACCESS_TOKEN are set
            - At least one language is configured
            - INCLUDE_COLLECTIONS only names known family groups
            - PAGINATION_SIZE and REQUEST_TIMEOUT are positive integers,
              PAGINATION_DELAY and OUTPUT_RETENTION_DAYS non-negative ones
            - SHOPIFY_QUERIES_FILE, if set, is a readable JSON object of strings

        Returns:
            True if the configuration is usable, False otherwise.
            Prints specific error messages for each problem.
        """
        errors = []
        if not self.shop_name:
            errors.append("SHOPIFY_SHOP_NAME is required")
        if not self.access_token:
            errors.append("SHOPIFY_ACCESS_TOKEN is required")
        if not self.languages:
            errors.append("SHOPIFY_LANGUAGES must list at least one locale")

        unknown = [g for g in self.include_collections if g not in FAMILY_GROUPS]
        if unknown:
            errors.append(
                f"INCLUDE_COLLECTIONS has unknown groups: {', '.join(unknown)} "
                f"(expected any of: {', '.join(FAMILY_GROUPS)})"
            )

        if self.pagination_size is None:
            errors.append("PAGINATION_SIZE must be a positive integer")
        if self.pagination_delay is None:
            errors.append("PAGINATION_DELAY must be a non-negative integer")
        if self.request_timeout is None:
            errors.append("REQUEST_TIMEOUT must be a positive integer")
        if self.output_retention_days is None:
            errors.append("OUTPUT_RETENTION_DAYS must be a non-negative integer")

        try:
            self.queries
        except (OSError, ValueError) as e:
            errors.append(f"SHOPIFY_QUERIES_FILE could not be loaded: {e}")

        if errors:
            print("\nConfiguration Errors:")
            for err in errors:
                print(f"  - {err}")
            return False
        return True

    @property
    def queries(self) -> Dict[str, str]:
        """Default query documents with SHOPIFY_QUERIES_FILE overrides applied."""
        if self._queries is None:
            overrides = {}
            if self.queries_file:
                with open(self.queries_file) as f:
                    overrides = json.load(f)
                if not isinstance(overrides, dict) or not all(
                    isinstance(v, str) for v in overrides.values()
                ):
                    raise ValueError("expected a JSON object mapping family keys to query strings")
                unknown = sorted(set(overrides) - set(DEFAULT_QUERIES))
                if unknown:
                    raise ValueError(f"unknown query keys: {', '.join(unknown)}")
            self._queries = {**DEFAULT_QUERIES, **overrides}
        return self._queries

    def create_translated_client(self, locale: str):
        """Return the client for a locale, building it on first use."""
        if locale not in self._clients:
            self._clients[locale] = self._client_factory(
                self.shop_name, self.access_token, self.api_version, locale,
                timeout=self.request_timeout,
            )
        return self._clients[locale]

    def build_materializer(self) -> EntityMaterializer:
        return EntityMaterializer(
            self.create_translated_client,
            self.node_store,
            self.languages,
            pagination_size=self.pagination_size,
            pagination_delay=self.pagination_delay,
            verbose=self.verbose,
            label=self.label,
        )

    def source_nodes(self):
        """Run the selected family groups in their fixed order."""
        materializer = self.build_materializer()
        queries = self.queries

        if SHOP in self.include_collections:
            materializer.create_nodes(COLLECTION, queries["collections"], collection_node)
            materializer.create_nodes(
                PRODUCT, queries["products"], product_node, self._create_product_children
            )
            materializer.create_shop_policies(queries["shopPolicies"])
            materializer.create_shop_details(queries["shopDetails"])

        if CONTENT in self.include_collections:
            materializer.create_nodes(BLOG, queries["blogs"], blog_node)
            materializer.create_nodes(
                ARTICLE, queries["articles"], article_node, self._create_article_children
            )
            materializer.create_page_nodes(PAGE, queries["pages"], page_node)

    def _create_product_children(self, product: Dict[str, Any], product_node: Dict[str, Any]):
        """Create variant and option nodes for one product."""
        locale = product_node["locale"]
        for variant in connection_nodes(product.get("variants")):
            self.node_store.create_node(
                product_variant_node(map_entity_ids(variant, locale), product_node)
            )
        for option in product.get("options") or []:
            self.node_store.create_node(product_option_node(map_entity_ids(option, locale)))

    def _create_article_children(self, article: Dict[str, Any], article_node: Dict[str, Any]):
        """Create comment nodes for one article."""
        locale = article_node["locale"]
        for comment in connection_nodes(article.get("comments")):
            self.node_store.create_node(
                comment_node(map_entity_ids(comment, locale), article_node)
            )

    def run(self) -> Dict[str, Any]:
        """Source all selected families and save the output.

        Returns:
            A dict containing:
                - started_at/completed_at: ISO timestamps
                - connector: "shopify-storefront"
                - config: Shop, API version, languages and family groups
                - success: True if sourcing completed without a remote failure
                - summary: Node counts per node type and in total
                - nodes_path: Path to the node snapshot (if save_json=True)
                - error: Error message (if success=False)

        Raises:
            Exception: Anything that is not a ShopifyQueryError, unchanged.
        """
        results = {
            "started_at": datetime.now(timezone.utc).isoformat(),
            "connector": "shopify-storefront",
            "config": {
                "shop_name": self.shop_name,
                "api_version": self.api_version,
                "languages": self.languages,
                "include_collections": self.include_collections,
            },
            "success": False,
        }

        print(f"\n{'='*60}")
        print("STEP 1: SOURCE NODES")
        print("="*60)
        print(f"  {self.label} starting to fetch data from Shopify")

        try:
            self.source_nodes()
        except ShopifyQueryError as e:
            print(f"\n  {self.label} an error occurred while sourcing data")
            print_graphql_error(e)
            results["error"] = str(e)
            if self.debug:
                logger.exception("Sourcing failed")
        except Exception:
            print(f"\n  {self.label} an error occurred while sourcing data")
            raise
        else:
            print(f"  {self.label} finished fetching data from Shopify")
            results["success"] = True
            results["summary"] = {
                "nodes": len(self.node_store),
                "by_type": self.node_store.count_by_type(),
            }

        results["completed_at"] = datetime.now(timezone.utc).isoformat()

        if self.save_json:
            self._save_output(results)

        return results

    def _save_output(self, results: Dict[str, Any]):
        print(f"\n{'='*60}")
        print("STEP 2: SAVE OUTPUT")
        print("="*60)
        self.output_manager.create_timestamped_dir()

        if results["success"]:
            nodes_path = self.node_store.save(self.output_manager.get_output_path("nodes.json"))
            results["nodes_path"] = nodes_path
            print(f"  Saved node snapshot: {nodes_path}")

        results_path = self.output_manager.write_json("sourcing_results.json", results)
        print(f"  Results saved to: {results_path}")

    def print_summary(self, results: Dict):
        """Print a human-readable execution summary.

        Args:
            results: The dict returned by run().
        """
        print(f"\n{'='*60}")
        print("SOURCING COMPLETE")
        print("="*60)
        print(f"Status: {'SUCCESS' if results.get('success') else 'FAILED'}")

        summary = results.get("summary", {})
        if summary:
            print(f"Nodes: {summary.get('nodes', 0)}")
            for node_type, count in sorted(summary.get("by_type", {}).items()):
                print(f"  {node_type}: {count}")

        if results.get("error"):
            print(f"Error: {results['error']}")
