"""Outcome of the last call made by a client instance."""

from dataclasses import dataclass

from bitfinex_rest.domain.exchanges.exceptions import ExchangeConnectionError, ExchangeError


@dataclass
class ClientState:
    """Per-session record of the last call.

    Transport failures and semantic failures are kept in separate slots so
    "the exchange rejected the request" and "the request never arrived"
    stay distinguishable after the fact.
    """

    last_response: str = ""
    transport_error: ExchangeConnectionError | None = None
    api_error: ExchangeError | None = None
    status_code: int | None = None

    @property
    def has_api_error(self) -> bool:
        return self.transport_error is not None or self.api_error is not None

    def reset(self) -> None:
        self.last_response = ""
        self.transport_error = None
        self.api_error = None
        self.status_code = None
