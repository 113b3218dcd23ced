"""
Node Store — The sink every materialized node is handed to.

The static-site build host owns nodes once they are created. This module is
the stand-in for that host store: it keeps nodes in creation order, dedups
them by id, and writes a JSON snapshot of everything it holds.

Dedup rules for create_node():
  - A node whose id is not yet known is appended.
  - A node with a known id and identical content is a no-op.
  - A node with a known id and different content replaces the stored node
    in place (its position in the creation order is kept).

Stored nodes are deep copies, so callers cannot change a node after handoff.
"""

import copy
import hashlib
import json
import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


def content_digest(payload: Dict[str, Any]) -> str:
    """Return a stable SHA-256 hex digest of a JSON-serializable payload."""
    encoded = json.dumps(payload, sort_keys=True, default=str).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()


class JsonNodeStore:
    """Append-only node sink keyed by node id.

    Attributes:
        created: Number of nodes appended.
        replaced: Number of nodes replaced by a newer payload with the same id.
    """

    def __init__(self):
        self._nodes: Dict[str, Dict[str, Any]] = {}
        self._order: List[str] = []
        self.created = 0
        self.replaced = 0

    def create_node(self, node: Dict[str, Any]) -> None:
        """Persist a node, deduplicating by its id.

        Args:
            node: A mapping with at least an "id" key.

        Raises:
            ValueError: If the node has no id.
        """
        node_id = node.get("id")
        if not node_id:
            raise ValueError(f"Node is missing an id: {node!r}")

        stored = copy.deepcopy(node)
        existing = self._nodes.get(node_id)

        if existing is None:
            self._nodes[node_id] = stored
            self._order.append(node_id)
            self.created += 1
            return

        if content_digest(existing) == content_digest(stored):
            return

        logger.debug("Replacing node %s with updated content", node_id)
        self._nodes[node_id] = stored
        self.replaced += 1

    def get_node(self, node_id: str) -> Optional[Dict[str, Any]]:
        node = self._nodes.get(node_id)
        return copy.deepcopy(node) if node is not None else None

    @property
    def nodes(self) -> List[Dict[str, Any]]:
        """All stored nodes, in creation order."""
        return [copy.deepcopy(self._nodes[node_id]) for node_id in self._order]

    def count_by_type(self) -> Dict[str, int]:
        """Count stored nodes per internal type (e.g. "ShopifyProduct")."""
        counts: Dict[str, int] = {}
        for node_id in self._order:
            node_type = self._nodes[node_id].get("internal", {}).get("type", "Unknown")
            counts[node_type] = counts.get(node_type, 0) + 1
        return counts

    def save(self, path: str) -> str:
        """Write a JSON snapshot of all nodes to path and return the path."""
        with open(path, "w") as f:
            json.dump({"nodes": self.nodes}, f, indent=2, default=str)
        return path

    def __len__(self) -> int:
        return len(self._order)
