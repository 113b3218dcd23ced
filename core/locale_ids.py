"""
Locale Identity Rewriter — Namespaces entity ids by locale.

The same remote entity is fetched once per configured locale, so its remote id
alone cannot identify a node. Every id is rewritten as

    {locale}__{remote id}        e.g. "en__gid://shopify/Product/1"

which keeps (locale, remote id) pairs distinct and is stable across runs.

map_entity_ids() rewrites an entity and, one level deep, the sub-entities it
carries in the fields listed in NESTED_FIELDS. Deeper levels are rewritten when
the materializer turns those children into nodes of their own and calls the
rewriter again for each of them.
"""

import copy
from enum import Enum
from typing import Any, Dict

from .constants import LOCALE_SEPARATOR


class NestedShape(Enum):
    SINGLE = "single"          # {"id": ...}
    CONNECTION = "connection"  # {"edges": [{"node": {...}}]} or [{"node": {...}}]
    LIST = "list"              # [{"id": ...}, ...]


NESTED_FIELDS = {
    "image": NestedShape.SINGLE,
    "blog": NestedShape.SINGLE,
    "products": NestedShape.CONNECTION,
    "variants": NestedShape.CONNECTION,
    "images": NestedShape.CONNECTION,
    "comments": NestedShape.CONNECTION,
    "options": NestedShape.LIST,
}


def locale_id(locale: str, remote_id: str) -> str:
    return f"{locale}{LOCALE_SEPARATOR}{remote_id}"


def node_with_locale(node: Dict[str, Any], locale: str) -> Dict[str, Any]:
    """Return a shallow copy of node with a locale-qualified id and a locale field.

    A null id (nullable in the Storefront schema, e.g. on Image) is left as is.
    """
    if node.get("id") is None:
        return {**node, "locale": locale}
    return {**node, "id": locale_id(locale, node["id"]), "locale": locale}


def map_entity_ids(entity: Dict[str, Any], locale: str) -> Dict[str, Any]:
    """Rewrite an entity's id and the ids of its directly nested sub-entities.

    Args:
        entity: Raw entity payload from the Storefront API. Not modified.
        locale: Locale tag to namespace ids with.

    Returns:
        A new entity with every recognised id locale-qualified.

    Raises:
        TypeError: If a recognised nested field holds an unexpected type.
    """
    rewritten = copy.deepcopy(entity)

    for field, shape in NESTED_FIELDS.items():
        value = rewritten.get(field)
        if value is None:
            continue

        if shape is NestedShape.SINGLE:
            rewritten[field] = node_with_locale(_expect(value, dict, field), locale)
        elif shape is NestedShape.CONNECTION:
            _rewrite_edges(value, field, locale)
        else:
            rewritten[field] = [
                node_with_locale(item, locale) for item in _expect(value, list, field)
            ]

    return node_with_locale(rewritten, locale)


def _rewrite_edges(value: Any, field: str, locale: str):
    """Rewrite edge nodes in place on the (already copied) connection value."""
    if isinstance(value, dict):
        edges = _expect(value.get("edges") or [], list, field)
    else:
        edges = _expect(value, list, field)

    for i, edge in enumerate(edges):
        if isinstance(edge, dict) and isinstance(edge.get("node"), dict):
            edge["node"] = node_with_locale(edge["node"], locale)
        else:
            # a bare entity listed without an edge wrapper
            edges[i] = node_with_locale(_expect(edge, dict, field), locale)


def _expect(value: Any, kind: type, field: str) -> Any:
    if not isinstance(value, kind):
        raise TypeError(
            f"Field '{field}' expected {kind.__name__}, got {type(value).__name__}"
        )
    return value
