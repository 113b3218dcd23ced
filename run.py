#!/usr/bin/env python3
"""
Shopify Storefront Node Sourcer — Entry Point.

This is the main script that users run to mirror a Shopify shop's catalog and
content into a local node graph. It reads configuration from a .env file,
sources every selected entity family for every configured locale, and saves
the resulting nodes as JSON.

The pipeline (managed by SourcingOrchestrator):
  1. Source nodes: collections, products (+ variants, options), shop policies,
     shop details, blogs, articles (+ comments), pages
  2. Save the node snapshot and run metadata to a timestamped folder

Usage:
    python run.py                      # Source and save JSON
    python run.py --debug              # Debug logging
    python run.py --quiet              # No per-family timings
    python run.py --languages en,fr    # Override SHOPIFY_LANGUAGES
    python run.py --include shop       # Override INCLUDE_COLLECTIONS
    python run.py --version            # Show version
    python run.py --env /path          # Use alternate .env file
"""

import sys
import argparse
import logging
from pathlib import Path

from core import SourcingOrchestrator

# Read version from the repo-root VERSION file (e.g., "0.1.0").
VERSION_FILE = Path(__file__).resolve().parent / "VERSION"
VERSION = VERSION_FILE.read_text().strip() if VERSION_FILE.exists() else "unknown"


def main():
    """Parse CLI arguments and run the sourcing pipeline."""
    parser = argparse.ArgumentParser(
        description="Shopify Storefront Node Sourcer - Mirror catalog and content into a node graph"
    )
    parser.add_argument("--env", "-e", default="./.env", help="Path to .env file")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--quiet", action="store_true", help="Disable per-family timing messages")
    parser.add_argument("--languages", help="Comma-separated locales (overrides SHOPIFY_LANGUAGES)")
    parser.add_argument("--include", help="Comma-separated family groups: shop,content")
    parser.add_argument("--version", "-v", action="store_true", help="Show version and exit")

    args = parser.parse_args()

    if args.version:
        print(f"shopify-storefront-source {VERSION}")
        sys.exit(0)

    # Initialize the orchestrator (loads .env and builds internal config)
    orchestrator = SourcingOrchestrator(env_file=args.env)

    # Apply CLI overrides on top of .env values
    if args.debug:
        orchestrator.debug = True
    if args.quiet:
        orchestrator.verbose = False
    if args.languages:
        orchestrator.languages = [locale.strip() for locale in args.languages.split(",") if locale.strip()]
    if args.include:
        orchestrator.include_collections = [
            g.strip().lower() for g in args.include.split(",") if g.strip()
        ]

    logging.basicConfig(
        level=logging.DEBUG if orchestrator.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # urllib3 request logging is noise even in debug mode
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    # Print header
    print(f"\n{'='*60}")
    print(f"SHOPIFY STOREFRONT NODE SOURCER v{VERSION}")
    print("="*60)
    print(f"Shop: {orchestrator.shop_name}")
    print(f"Languages: {', '.join(orchestrator.languages)}")
    print(f"Families: {', '.join(orchestrator.include_collections)}")

    # Validate required configuration before proceeding
    if not orchestrator.validate_config():
        sys.exit(1)

    # Cleanup old output folders based on retention policy
    if orchestrator.output_manager.retention_days > 0:
        deleted = orchestrator.output_manager.cleanup_old_folders()
        if deleted > 0:
            print(f"Cleaned up {deleted} old output folder(s)")

    results = orchestrator.run()

    orchestrator.print_summary(results)

    # Exit with error code if sourcing failed
    if not results.get("success"):
        sys.exit(1)


if __name__ == "__main__":
    main()
