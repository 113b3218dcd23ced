"""Tests for shopify_source_shared.node_store."""

import json

import pytest

from shopify_source_shared.node_store import JsonNodeStore, content_digest


def _node(node_id, node_type="ShopifyProduct", **fields):
    return {"id": node_id, "internal": {"type": node_type}, **fields}


def test_content_digest_ignores_key_order():
    assert content_digest({"a": 1, "b": 2}) == content_digest({"b": 2, "a": 1})
    assert content_digest({"a": 1}) != content_digest({"a": 2})


def test_create_node_keeps_creation_order():
    store = JsonNodeStore()
    store.create_node(_node("en__2"))
    store.create_node(_node("en__1"))
    assert [n["id"] for n in store.nodes] == ["en__2", "en__1"]
    assert len(store) == 2
    assert store.created == 2


def test_create_node_requires_id():
    store = JsonNodeStore()
    with pytest.raises(ValueError):
        store.create_node({"title": "no id"})


def test_identical_node_is_idempotent():
    store = JsonNodeStore()
    store.create_node(_node("en__1", title="Shirt"))
    store.create_node(_node("en__1", title="Shirt"))
    assert len(store) == 1
    assert store.created == 1
    assert store.replaced == 0


def test_changed_node_replaces_in_place():
    store = JsonNodeStore()
    store.create_node(_node("en__1", title="Shirt"))
    store.create_node(_node("en__2"))
    store.create_node(_node("en__1", title="Linen Shirt"))

    assert [n["id"] for n in store.nodes] == ["en__1", "en__2"]
    assert store.get_node("en__1")["title"] == "Linen Shirt"
    assert store.replaced == 1


def test_stored_nodes_are_isolated_from_callers():
    store = JsonNodeStore()
    node = _node("en__1", tags=["a"])
    store.create_node(node)
    node["tags"].append("b")
    store.get_node("en__1")["tags"].append("c")
    assert store.get_node("en__1")["tags"] == ["a"]


def test_get_node_unknown_id():
    assert JsonNodeStore().get_node("missing") is None


def test_count_by_type():
    store = JsonNodeStore()
    store.create_node(_node("en__1"))
    store.create_node(_node("en__2"))
    store.create_node(_node("en__3", node_type="ShopifyPage"))
    store.create_node({"id": "raw"})
    assert store.count_by_type() == {"ShopifyProduct": 2, "ShopifyPage": 1, "Unknown": 1}


def test_save_writes_snapshot(tmp_path):
    store = JsonNodeStore()
    store.create_node(_node("en__1", title="Shirt"))
    path = store.save(str(tmp_path / "nodes.json"))

    with open(path) as f:
        snapshot = json.load(f)
    assert snapshot == {"nodes": [_node("en__1", title="Shirt")]}
