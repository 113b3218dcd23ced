"""
Node Factories — Turn locale-qualified entities into store-ready nodes.

A node is the entity payload plus:
  - shopify_id:      the remote id, with the locale prefix stripped
  - internal.type:   "Shopify" + family name (e.g. "ShopifyProduct")
  - internal.content_digest: SHA-256 of the node content
  - *___NODE fields: ids of related nodes, replacing nested connections
                     that become nodes of their own

Factories copy their input; the entity handed in is never modified. Most
factories expect an entity already passed through map_entity_ids(). page_node
is the exception: it runs on the raw entity and the materializer applies the
locale rewrite to its output.
"""

from typing import Any, Dict, List, Optional

from shopify_source_shared import content_digest

from .constants import (
    TYPE_PREFIX,
    LOCALE_SEPARATOR,
    ARTICLE,
    BLOG,
    COLLECTION,
    COMMENT,
    PAGE,
    PRODUCT,
    PRODUCT_OPTION,
    PRODUCT_VARIANT,
    SHOP_DETAILS,
    SHOP_POLICY,
)
from .paginator import get_in


def connection_nodes(value: Any) -> List[Dict[str, Any]]:
    """Return the nodes of a nested connection, edge list, or plain entity list."""
    if value is None:
        return []
    edges = (value.get("edges") or []) if isinstance(value, dict) else value
    return [edge["node"] if "node" in edge else edge for edge in edges]


def _remote_id(node: Dict[str, Any]) -> Optional[str]:
    locale = node.get("locale")
    node_id = node.get("id")
    if node_id is None:
        return None
    prefix = f"{locale}{LOCALE_SEPARATOR}" if locale else ""
    return node_id[len(prefix):] if prefix and node_id.startswith(prefix) else node_id


def with_content_digest(node: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of node whose internal.content_digest covers its current content."""
    content = {k: v for k, v in node.items() if k != "internal"}
    internal = {**(node.get("internal") or {}), "content_digest": content_digest(content)}
    return {**content, "internal": internal}


def create_node(family: str, entity: Dict[str, Any], **fields) -> Dict[str, Any]:
    """Build a node of the given family from an entity and extra fields."""
    node = {**entity, **fields}
    node["shopify_id"] = _remote_id(node)
    node["internal"] = {"type": f"{TYPE_PREFIX}{family}"}
    return with_content_digest(node)


def _without(entity: Dict[str, Any], *fields: str) -> Dict[str, Any]:
    return {k: v for k, v in entity.items() if k not in fields}


def collection_node(entity: Dict[str, Any]) -> Dict[str, Any]:
    products = [p["id"] for p in connection_nodes(entity.get("products"))]
    return create_node(COLLECTION, _without(entity, "products"), products___NODE=products)


def product_node(entity: Dict[str, Any]) -> Dict[str, Any]:
    fields = {
        "variants___NODE": [v["id"] for v in connection_nodes(entity.get("variants"))],
        "options___NODE": [o["id"] for o in entity.get("options") or []],
    }
    if "images" in entity:
        fields["images"] = connection_nodes(entity["images"])
    return create_node(PRODUCT, _without(entity, "variants", "options"), **fields)


def product_variant_node(entity: Dict[str, Any], parent: Dict[str, Any]) -> Dict[str, Any]:
    return create_node(PRODUCT_VARIANT, entity, product___NODE=parent["id"])


def product_option_node(entity: Dict[str, Any]) -> Dict[str, Any]:
    return create_node(PRODUCT_OPTION, entity)


def blog_node(entity: Dict[str, Any]) -> Dict[str, Any]:
    return create_node(BLOG, entity)


def article_node(entity: Dict[str, Any]) -> Dict[str, Any]:
    fields = {
        "comments___NODE": [c["id"] for c in connection_nodes(entity.get("comments"))],
    }
    blog_id = get_in(entity, ["blog", "id"])
    if blog_id:
        fields["blog___NODE"] = blog_id
    return create_node(ARTICLE, _without(entity, "blog", "comments"), **fields)


def comment_node(entity: Dict[str, Any], parent: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    if parent is None:
        return create_node(COMMENT, entity)
    return create_node(COMMENT, entity, article___NODE=parent["id"])


def page_node(entity: Dict[str, Any]) -> Dict[str, Any]:
    return create_node(PAGE, entity)


def shop_policy_node(entity: Dict[str, Any], policy_type: str) -> Dict[str, Any]:
    return create_node(SHOP_POLICY, entity, type=policy_type)


def shop_details_node(entity: Dict[str, Any]) -> Dict[str, Any]:
    return create_node(SHOP_DETAILS, entity)
