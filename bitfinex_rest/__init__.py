"""Async client for the Bitfinex v1 REST trading API.

Example usage:
    from bitfinex_rest import BitfinexClient

    async with BitfinexClient(access_key="...", secret_key="...") as client:
        ticker = await client.get_ticker("btcusd")
        balances = await client.get_balances()
"""

from .domain.exchanges.exceptions import (
    AddressParamsMissing,
    BadCurrency,
    BadDepositMethod,
    BadOrderType,
    BadSymbol,
    BadWalletType,
    ExchangeAPIError,
    ExchangeConnectionError,
    ExchangeError,
    InvalidWithdrawalValue,
    ParseError,
    RequiredParamsMissing,
    SchemaViolation,
    SigningError,
    TransportError,
    WireParamsMissing,
)
from .domain.exchanges.value_objects import Credentials, Order, ParamSets
from .infrastructure.exchanges.adapters import BitfinexClient
from .infrastructure.exchanges.factories import create_client

__version__ = "0.1.0"
__all__ = [
    "BitfinexClient",
    "create_client",
    "Credentials",
    "Order",
    "ParamSets",
    "ExchangeError",
    "ExchangeConnectionError",
    "TransportError",
    "ExchangeAPIError",
    "BadSymbol",
    "BadCurrency",
    "BadDepositMethod",
    "BadWalletType",
    "BadOrderType",
    "RequiredParamsMissing",
    "WireParamsMissing",
    "AddressParamsMissing",
    "InvalidWithdrawalValue",
    "SchemaViolation",
    "ParseError",
    "SigningError",
]
