"""Tests for core.paginator."""

from unittest.mock import MagicMock, patch, call

import pytest

from core.paginator import get_in, query_all, query_once


def _page(ids, has_next, root="products"):
    return {
        root: {
            "pageInfo": {"hasNextPage": has_next},
            "edges": [{"cursor": f"cursor-{i}", "node": {"id": i}} for i in ids],
        }
    }


def _make_client(*pages):
    client = MagicMock()
    client.request.side_effect = list(pages)
    return client


@pytest.fixture(autouse=True)
def no_sleep():
    with patch("core.paginator.time.sleep") as sleep:
        yield sleep


def test_get_in_nested_value():
    assert get_in({"a": {"b": {"c": 1}}}, ["a", "b", "c"]) == 1


def test_get_in_missing_and_null_steps():
    assert get_in({"a": {}}, ["a", "b", "c"], []) == []
    assert get_in({"a": None}, ["a", "b"], "x") == "x"
    assert get_in({"a": "scalar"}, ["a", "b"]) is None


def test_query_once_sends_first_and_after():
    client = MagicMock()
    client.request.return_value = {"shop": {}}
    assert query_once(client, "QUERY") == {"shop": {}}
    client.request.assert_called_once_with("QUERY", {"first": 250, "after": None})


def test_query_all_concatenates_pages_in_order(no_sleep):
    client = _make_client(
        _page(["1", "2"], True),
        _page(["3", "4"], True),
        _page(["5"], False),
    )

    nodes = query_all(client, ["products"], "QUERY", delay=500, first=2)

    assert [n["id"] for n in nodes] == ["1", "2", "3", "4", "5"]
    assert client.request.call_count == 3
    assert client.request.call_args_list == [
        call("QUERY", {"first": 2, "after": None}),
        call("QUERY", {"first": 2, "after": "cursor-2"}),
        call("QUERY", {"first": 2, "after": "cursor-4"}),
    ]


def test_query_all_waits_between_pages(no_sleep):
    client = _make_client(_page(["1"], True), _page(["2"], True), _page(["3"], False))

    query_all(client, ["products"], "QUERY", delay=750)

    assert no_sleep.call_count == 2
    for sleep_call in no_sleep.call_args_list:
        assert sleep_call.args[0] >= 0.75


def test_query_all_single_page_makes_one_request(no_sleep):
    client = _make_client(_page(["1", "2"], False))

    nodes = query_all(client, ["products"], "QUERY")

    assert len(nodes) == 2
    client.request.assert_called_once()
    no_sleep.assert_not_called()


def test_query_all_missing_path_yields_empty_result():
    client = _make_client({"somethingElse": {}})
    assert query_all(client, ["products"], "QUERY") == []
    client.request.assert_called_once()


def test_query_all_null_connection_yields_empty_result():
    client = _make_client({"products": None})
    assert query_all(client, ["products"], "QUERY") == []


def test_query_all_missing_page_info_stops():
    client = _make_client({"products": {"edges": [{"cursor": "c", "node": {"id": "1"}}]}})
    assert query_all(client, ["products"], "QUERY") == [{"id": "1"}]
    client.request.assert_called_once()


def test_query_all_stops_when_next_page_has_no_edges():
    client = _make_client(_page([], True))
    assert query_all(client, ["products"], "QUERY") == []
    client.request.assert_called_once()


def test_query_all_nested_path():
    client = _make_client({"shop": _page(["1"], False, root="articles")})
    assert query_all(client, ["shop", "articles"], "QUERY") == [{"id": "1"}]


def test_query_all_propagates_client_errors():
    client = _make_client(_page(["1"], True), RuntimeError("boom"))
    with pytest.raises(RuntimeError, match="boom"):
        query_all(client, ["products"], "QUERY")
    assert client.request.call_count == 2


def test_query_all_handles_many_pages_without_recursion():
    pages = [_page([str(i)], True) for i in range(2000)] + [_page(["last"], False)]
    client = _make_client(*pages)
    nodes = query_all(client, ["products"], "QUERY", delay=0)
    assert len(nodes) == 2001
    assert nodes[-1] == {"id": "last"}
