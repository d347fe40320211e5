"""Pytest configuration and fixtures."""

from typing import Mapping

import pytest

from bitfinex_rest.config import Settings
from bitfinex_rest.domain.exchanges.ports import HttpTransportPort
from bitfinex_rest.domain.exchanges.value_objects import TransportResponse


class RecordingTransport(HttpTransportPort):
    """Transport double that records calls and replays queued responses."""

    def __init__(self, *responses: TransportResponse | Exception) -> None:
        self.responses = list(responses)
        self.calls: list[dict] = []
        self.closed = False

    def queue(self, response: TransportResponse | Exception) -> None:
        self.responses.append(response)

    async def perform(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes | None,
        timeout: float,
    ) -> TransportResponse:
        self.calls.append(
            {"method": method, "url": url, "headers": dict(headers), "body": body, "timeout": timeout}
        )
        response = self.responses.pop(0) if self.responses else TransportResponse(200, b"{}")
        if isinstance(response, Exception):
            raise response
        return response

    async def close(self) -> None:
        self.closed = True


class FixedClock:
    """Clock returning a fixed millisecond value."""

    def __init__(self, now_ms: int = 1_530_620_498_412) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms


@pytest.fixture
def settings():
    """Settings isolated from the environment and any .env file."""
    return Settings(_env_file=None, api_key="", api_secret="", log_format="console")


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def sample_symbols():
    return frozenset({"btcusd", "ltcusd", "ethusd", "ltcbtc"})


@pytest.fixture
def withdraw_conf(tmp_path):
    """Write a withdrawal config file and return its path."""

    def _write(text: str):
        path = tmp_path / "withdraw.conf"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def make_client(settings, transport, sample_symbols, clock):
    """Build a BitfinexClient wired to the recording transport."""
    from bitfinex_rest.infrastructure.exchanges.adapters import BitfinexClient
    from bitfinex_rest.infrastructure.exchanges.auth import NonceGenerator

    def _make(**kwargs):
        kwargs.setdefault("settings", settings)
        kwargs.setdefault("transport", transport)
        kwargs.setdefault("symbols", sample_symbols)
        kwargs.setdefault("nonce_generator", NonceGenerator(clock=clock))
        kwargs.setdefault("access_key", "test-access-key")
        kwargs.setdefault("secret_key", "test-secret-key")
        return BitfinexClient(**kwargs)

    return _make
