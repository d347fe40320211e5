"""Tests for create_client."""

import base64
import json

import pytest
from pydantic import SecretStr

from bitfinex_rest.infrastructure.exchanges.factories import create_client


class TestCreateClient:
    @pytest.mark.asyncio
    async def test_credentials_from_settings(self, settings, transport, sample_symbols):
        configured = settings.model_copy(update={"api_key": "cfg-key", "api_secret": SecretStr("cfg-secret")})
        client = create_client(configured, transport=transport, symbols=sample_symbols)

        await client.get_balances()

        headers = transport.calls[0]["headers"]
        assert headers["X-BFX-APIKEY"] == "cfg-key"
        assert json.loads(base64.b64decode(headers["X-BFX-PAYLOAD"]))["request"] == "/v1/balances"

    def test_withdraw_path_from_settings(self, settings, transport):
        configured = settings.model_copy(update={"withdraw_config_path": "/etc/bfx/withdraw.conf"})

        client = create_client(configured, transport=transport, symbols=[])

        assert str(client.withdraw_config_path) == "/etc/bfx/withdraw.conf"
