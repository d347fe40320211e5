"""Base ValueObject class for domain model.

Everything that travels between the client and the wire (payloads, signed
headers, requests, parsed configs) is a ValueObject: built once, never
mutated, compared by value.
"""

from abc import ABC
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True, eq=True)
class ValueObject(ABC):
    """Base class for all domain value objects.

    Subclasses validate in ``__post_init__`` and normalize their fields
    (``Decimal`` amounts, read-only mappings) through ``_normalize``.

    Example:
        >>> @dataclass(frozen=True)
        ... class Quote(ValueObject):
        ...     symbol: str
        ...     price: Decimal
        ...
        ...     def __post_init__(self):
        ...         self._normalize(price=Decimal(str(self.price)))

        >>> Quote("btcusd", "6500.5") == Quote("btcusd", Decimal("6500.5"))
        True
    """

    def __post_init__(self) -> None:
        """Hook for validation after initialization.

        Raises:
            ValueError: If validation fails.
        """
        pass

    def _normalize(self, **values: Any) -> None:
        """Replace field values while the instance is being built."""
        for name, value in values.items():
            object.__setattr__(self, name, value)


def frozen_mapping(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    """Read-only copy of ``mapping`` that keeps insertion order."""
    return MappingProxyType(dict(mapping))


def validate_value_object(condition: bool, message: str) -> None:
    """Helper for validation in value objects.

    Raises:
        ValueError: If condition is False.

    Example:
        >>> validate_value_object(timeout > 0, "Timeout must be positive")
    """
    if not condition:
        raise ValueError(message)
