"""Credentials value object - API key pair."""

from dataclasses import dataclass, field

from bitfinex_rest.domain.shared import ValueObject


@dataclass(frozen=True)
class Credentials(ValueObject):
    """Bitfinex API key pair.

    The secret is excluded from ``repr`` so credentials can appear in
    debug output without leaking it.
    """

    access_key: str
    secret_key: str = field(repr=False)

    @property
    def is_empty(self) -> bool:
        return not (self.access_key or self.secret_key)
