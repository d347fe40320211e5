"""Order value object - one entry of a multi-order request."""

from dataclasses import dataclass
from decimal import Decimal

from bitfinex_rest.domain.shared import ValueObject, validate_value_object

ORDER_SIDES = frozenset({"buy", "sell"})


@dataclass(frozen=True)
class Order(ValueObject):
    """Order placed through the multi-order endpoint.

    Example:
        >>> Order("btcusd", Decimal("0.01"), Decimal("6500"), "buy", "exchange limit")
    """

    symbol: str
    amount: Decimal
    price: Decimal
    side: str
    type: str

    def __post_init__(self) -> None:
        validate_value_object(self.side in ORDER_SIDES, f"Order side must be buy or sell, got {self.side!r}")
        self._normalize(amount=Decimal(str(self.amount)), price=Decimal(str(self.price)))

    def as_dict(self) -> dict[str, str]:
        return {
            "symbol": self.symbol,
            "amount": format(self.amount, "f"),
            "price": format(self.price, "f"),
            "side": self.side,
            "type": self.type,
        }
