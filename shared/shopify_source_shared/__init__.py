"""
shopify-source-shared — Shared library for the Shopify Storefront node sourcer.

This package provides the host-side building blocks the sourcing pipeline
writes into:

  node_store.py      In-memory node store that dedups nodes by id and
                     snapshots them to JSON at the end of a run.
  output_manager.py  Timestamped output directory creation and
                     retention-based cleanup of old runs.
"""

from .node_store import JsonNodeStore, content_digest
from .output_manager import OutputManager
