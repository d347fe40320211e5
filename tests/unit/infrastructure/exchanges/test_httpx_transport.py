"""Tests for HttpxTransport."""

import httpx
import pytest

from bitfinex_rest.domain.exchanges.exceptions import ExchangeConnectionError
from bitfinex_rest.infrastructure.exchanges.http import HttpxTransport


def transport_for(handler) -> tuple[HttpxTransport, httpx.AsyncClient]:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpxTransport(client), client


class TestHttpxTransport:
    """Tests for HttpxTransport.perform()."""

    @pytest.mark.asyncio
    async def test_returns_status_and_raw_body(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["headers"] = request.headers
            seen["body"] = request.content
            return httpx.Response(200, content=b'{"mid":"6500.5"}')

        transport, client = transport_for(handler)

        response = await transport.perform(
            "POST",
            "https://api.bitfinex.com/v1/balances",
            {"X-BFX-APIKEY": "k"},
            b"\n",
            30.0,
        )

        assert response.status_code == 200
        assert response.text == '{"mid":"6500.5"}'
        assert seen["method"] == "POST"
        assert seen["url"] == "https://api.bitfinex.com/v1/balances"
        assert seen["headers"]["X-BFX-APIKEY"] == "k"
        assert seen["body"] == b"\n"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_error_status_is_a_response(self):
        transport, client = transport_for(lambda request: httpx.Response(400, content=b'{"message":"bad"}'))

        response = await transport.perform("GET", "https://api.bitfinex.com/v1/x", {}, None, 30.0)

        assert response.is_error
        assert response.text == '{"message":"bad"}'
        await client.aclose()

    @pytest.mark.asyncio
    async def test_connect_error_is_mapped(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        transport, client = transport_for(handler)

        with pytest.raises(ExchangeConnectionError) as exc_info:
            await transport.perform("GET", "https://api.bitfinex.com/v1/x", {}, None, 30.0)

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        await client.aclose()

    @pytest.mark.asyncio
    async def test_timeout_is_mapped(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        transport, client = transport_for(handler)

        with pytest.raises(ExchangeConnectionError, match="timed out"):
            await transport.perform("GET", "https://api.bitfinex.com/v1/x", {}, None, 1.0)
        await client.aclose()

    @pytest.mark.asyncio
    async def test_shared_client_not_closed(self):
        transport, client = transport_for(lambda request: httpx.Response(200))

        await transport.close()

        assert not client.is_closed
        await client.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_closed(self):
        transport = HttpxTransport()

        await transport.close()

        assert transport._client.is_closed
