"""Tests for core.shopify_client.ShopifyStorefrontClient."""

from unittest.mock import MagicMock

import pytest
import requests

from core.errors import ShopifyQueryError
from core.shopify_client import ShopifyStorefrontClient, TOKEN_HEADER, create_client


def _response(status=200, payload=None, text=""):
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.json.return_value = payload if payload is not None else {}
    response.text = text
    return response


def _make_client(response=None, side_effect=None, locale="en"):
    session = requests.Session()
    session.post = MagicMock(return_value=response, side_effect=side_effect)
    client = ShopifyStorefrontClient("acme", "secret-token", "2023-01", locale, session=session)
    return client, session


def test_url_and_headers():
    client, session = _make_client(_response(payload={"data": {}}), locale="fr")
    assert client.url == "https://acme.myshopify.com/api/2023-01/graphql.json"
    assert session.headers["Accept-Language"] == "fr"
    assert session.headers[TOKEN_HEADER] == "secret-token"


def test_request_returns_data():
    client, session = _make_client(_response(payload={"data": {"shop": {"name": "Acme"}}}))

    data = client.request("QUERY", {"first": 10, "after": None})

    assert data == {"shop": {"name": "Acme"}}
    session.post.assert_called_once_with(
        client.url,
        json={"query": "QUERY", "variables": {"first": 10, "after": None}},
        timeout=30,
    )


def test_request_missing_data_returns_empty_dict():
    client, _ = _make_client(_response(payload={"data": None}))
    assert client.request("QUERY") == {}


def test_graphql_errors_raise_query_error():
    payload = {"errors": [{"message": "Field 'foo' doesn't exist"}, {"message": "second"}]}
    client, _ = _make_client(_response(payload=payload))

    with pytest.raises(ShopifyQueryError) as exc_info:
        client.request("QUERY", {"first": 1, "after": None})

    error = exc_info.value
    assert str(error) == "Field 'foo' doesn't exist; second"
    assert error.status == 200
    assert error.errors == payload["errors"]
    assert error.request["query"] == "QUERY"
    assert error.request["variables"] == {"first": 1, "after": None}


def test_http_error_raises_query_error():
    client, _ = _make_client(_response(status=401, text="Unauthorized"))

    with pytest.raises(ShopifyQueryError) as exc_info:
        client.request("QUERY")

    assert exc_info.value.status == 401
    assert "Unauthorized" in exc_info.value.errors[0]["message"]


def test_query_error_redacts_access_token():
    client, _ = _make_client(_response(status=403, text="Forbidden"))

    with pytest.raises(ShopifyQueryError) as exc_info:
        client.request("QUERY")

    headers = exc_info.value.request["headers"]
    assert headers[TOKEN_HEADER] == "***"
    assert "secret-token" not in str(exc_info.value.request)


def test_connection_errors_propagate_unchanged():
    failure = requests.ConnectionError("no route to host")
    client, _ = _make_client(side_effect=failure)

    with pytest.raises(requests.ConnectionError) as exc_info:
        client.request("QUERY")

    assert exc_info.value is failure


def test_create_client_binds_locale_and_timeout():
    client = create_client("acme", "token", "2024-04", "de", timeout=5)
    assert isinstance(client, ShopifyStorefrontClient)
    assert client.locale == "de"
    assert client.timeout == 5
    assert client.url == "https://acme.myshopify.com/api/2024-04/graphql.json"
