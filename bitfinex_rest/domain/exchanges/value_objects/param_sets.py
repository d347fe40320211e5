"""ParamSets value object - whitelists for pre-flight validation."""

from dataclasses import dataclass, field, replace
from typing import Iterable

from bitfinex_rest.domain.exchanges.exceptions import (
    BadCurrency,
    BadDepositMethod,
    BadOrderType,
    BadSymbol,
    BadWalletType,
    ValidationError,
)
from bitfinex_rest.domain.shared import ValueObject

SYMBOLS = "symbols"
CURRENCIES = "currencies"
WALLET_NAMES = "wallet_names"
ORDER_TYPES = "order_types"
DEPOSIT_METHODS = "deposit_methods"

DEFAULT_CURRENCIES = frozenset({
    "BTG",
    "DSH",
    "ETC",
    "ETP",
    "EUR",
    "GBP",
    "IOT",
    "JPY",
    "LTC",
    "NEO",
    "OMG",
    "SAN",
    "USD",
    "XMR",
    "XRP",
    "ZEC",
})

# https://bitfinex.readme.io/v1/reference#rest-auth-deposit
DEFAULT_DEPOSIT_METHODS = frozenset({
    "bcash",
    "bitcoin",
    "ethereum",
    "ethereumc",
    "litecoin",
    "mastercoin",
    "monero",
    "tetheruso",
    "zcash",
})

DEFAULT_WALLET_NAMES = frozenset({"trading", "exchange", "deposit"})

# "type" parameter of the new order endpoint
DEFAULT_ORDER_TYPES = frozenset({
    "market",
    "limit",
    "stop",
    "trailing-stop",
    "fill-or-kill",
    "exchange market",
    "exchange limit",
    "exchange stop",
    "exchange trailing-stop",
    "exchange fill-or-kill",
})

_ERRORS: dict[str, type[ValidationError]] = {
    SYMBOLS: BadSymbol,
    CURRENCIES: BadCurrency,
    WALLET_NAMES: BadWalletType,
    ORDER_TYPES: BadOrderType,
    DEPOSIT_METHODS: BadDepositMethod,
}


@dataclass(frozen=True)
class ParamSets(ValueObject):
    """Named whitelists of legal parameter values.

    Lookups are exact and case-sensitive. Only ``symbols`` is filled at
    runtime (from the exchange), via ``with_symbols`` which returns a new
    registry instead of mutating this one.

    Example:
        >>> sets = ParamSets(symbols=frozenset({"btcusd"}))
        >>> sets.contains("symbols", "btcusd")
        True
        >>> sets.require("currencies", "usd")  # raises BadCurrency
    """

    symbols: frozenset[str] = frozenset()
    currencies: frozenset[str] = DEFAULT_CURRENCIES
    wallet_names: frozenset[str] = DEFAULT_WALLET_NAMES
    order_types: frozenset[str] = DEFAULT_ORDER_TYPES
    deposit_methods: frozenset[str] = DEFAULT_DEPOSIT_METHODS
    _index: dict[str, frozenset[str]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        sets = {name: frozenset(getattr(self, name)) for name in _ERRORS}
        self._normalize(**sets, _index=sets)

    def contains(self, set_name: str, value: str) -> bool:
        """Check whitelist membership.

        Raises:
            KeyError: If ``set_name`` is not a known whitelist.
        """
        return value in self._index[set_name]

    def require(self, set_name: str, value: str) -> str:
        """Return ``value`` if whitelisted, otherwise raise the set's error.

        Raises:
            BadSymbol | BadCurrency | BadWalletType | BadOrderType | BadDepositMethod
        """
        if not self.contains(set_name, value):
            raise _ERRORS[set_name](value)
        return value

    def with_symbols(self, symbols: Iterable[str]) -> "ParamSets":
        """Build a registry with ``symbols`` replaced (not merged)."""
        return replace(self, symbols=frozenset(symbols))
