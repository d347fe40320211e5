"""Exceptions for the Exchange bounded context."""

from .exchange_exceptions import (
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
    SchemaExtractionError,
    SchemaViolation,
    SigningError,
    TransportError,
    ValidationError,
    WireParamsMissing,
    WithdrawalConfigError,
)

__all__ = [
    "ExchangeError",
    "ExchangeConnectionError",
    "TransportError",
    "ExchangeAPIError",
    "ValidationError",
    "BadSymbol",
    "BadCurrency",
    "BadDepositMethod",
    "BadWalletType",
    "BadOrderType",
    "WithdrawalConfigError",
    "RequiredParamsMissing",
    "WireParamsMissing",
    "AddressParamsMissing",
    "InvalidWithdrawalValue",
    "SchemaExtractionError",
    "ParseError",
    "SchemaViolation",
    "SigningError",
]
