"""Tests for RequestBuilder."""

import base64
import json

import pytest

from bitfinex_rest.domain.exchanges.value_objects import Credentials
from bitfinex_rest.infrastructure.exchanges.auth import Authenticator
from bitfinex_rest.infrastructure.exchanges.http import POST_BODY, RequestBuilder

BASE_URL = "https://api.bitfinex.com/v1"


@pytest.fixture
def builder():
    return RequestBuilder(BASE_URL, Authenticator())


class TestBuildGet:
    """Tests for unauthenticated requests."""

    def test_plain_path(self, builder):
        request = builder.build_get("/pubticker/btcusd")

        assert request.method == "GET"
        assert request.url == "https://api.bitfinex.com/v1/pubticker/btcusd"
        assert request.body is None
        assert dict(request.headers) == {}
        assert request.timeout == 30.0

    def test_no_trailing_slash(self, builder):
        assert builder.build_get("/symbols/").url == "https://api.bitfinex.com/v1/symbols"

    def test_query_params_in_order(self, builder):
        request = builder.build_get("/book/btcusd", {"limit_bids": 50, "limit_asks": 10, "group": 1})

        assert request.url == "https://api.bitfinex.com/v1/book/btcusd?limit_bids=50&limit_asks=10&group=1"

    def test_none_params_dropped(self, builder):
        request = builder.build_get("/trades/btcusd", {"timestamp": None})

        assert request.url == "https://api.bitfinex.com/v1/trades/btcusd"

    def test_path_and_query_are_encoded(self, builder):
        request = builder.build_get("/pubticker/btc usd", {"q": "a&b"})

        assert request.url == "https://api.bitfinex.com/v1/pubticker/btc%20usd?q=a%26b"

    def test_custom_timeout(self):
        builder = RequestBuilder(BASE_URL + "/", Authenticator(), timeout=5.0)

        request = builder.build_get("/symbols")

        assert request.timeout == 5.0
        assert request.url == "https://api.bitfinex.com/v1/symbols"


class TestBuildPost:
    """Tests for signed requests."""

    def test_request_path_carries_version(self, builder):
        assert builder.request_path("/balances") == "/v1/balances"
        assert builder.payload("/balances", "1").request == "/v1/balances"

    def test_signed_post(self, builder):
        payload = builder.payload("/order/new", "1530620498412", {"symbol": "btcusd"})

        request = builder.build_post("/order/new", payload, Credentials("access", "secret"))

        assert request.method == "POST"
        assert request.url == "https://api.bitfinex.com/v1/order/new"
        assert request.body == POST_BODY == b"\n"
        assert request.timeout == 30.0
        assert set(request.headers) == {"X-BFX-APIKEY", "X-BFX-PAYLOAD", "X-BFX-SIGNATURE"}
        assert request.headers["X-BFX-APIKEY"] == "access"

        decoded = json.loads(base64.b64decode(request.headers["X-BFX-PAYLOAD"]))
        assert decoded == {"request": "/v1/order/new", "nonce": "1530620498412", "symbol": "btcusd"}

    def test_signature_matches_payload_header(self, builder):
        payload = builder.payload("/balances", "1")

        request = builder.build_post("/balances", payload, Credentials("access", "secret"))

        _, expected = Authenticator().sign(payload.to_json(), "secret")
        assert request.headers["X-BFX-SIGNATURE"] == expected
