"""WithdrawalConfig value object - parsed withdraw.conf contents."""

import json
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

from bitfinex_rest.domain.shared import ValueObject, frozen_mapping

REQUIRED_KEYS = ("withdraw_type", "walletselected", "amount")
WIRE_KEYS = ("account_number", "bank_name", "bank_address", "bank_city", "bank_country")
ADDRESS_KEYS = ("address",)
WIRE = "wire"


def unquote(raw: str) -> str:
    """Strip one pair of surrounding double quotes."""
    if len(raw) >= 2 and raw.startswith('"') and raw.endswith('"'):
        return raw[1:-1]
    return raw


@dataclass(frozen=True)
class WithdrawalConfig(ValueObject):
    """Ordered key -> raw value mapping read from a withdrawal config.

    Raw values keep the file's own quoting (``"exchange"``, ``0.1``).
    """

    entries: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self._normalize(entries=frozen_mapping(self.entries))

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def withdraw_type(self) -> str | None:
        raw = self.entries.get("withdraw_type")
        return unquote(raw) if raw is not None else None

    def missing(self, keys: tuple[str, ...]) -> list[str]:
        return sorted(k for k in keys if k not in self.entries)

    def to_fragment(self) -> str:
        """Render ``,"key":value`` for every pair, values verbatim.

        The fragment is meant to be appended inside an open JSON object,
        right after the ``nonce`` member.
        """
        return "".join(f',"{key}":{value}' for key, value in self.entries.items())

    def as_payload_fields(self) -> dict[str, Any]:
        """Decode raw values for the structured payload builder.

        Values that are valid JSON (quoted strings, numbers, booleans) are
        decoded; bare text is kept as a string.
        """
        fields: dict[str, Any] = {}
        for key, raw in self.entries.items():
            try:
                fields[key] = json.loads(raw)
            except ValueError:
                fields[key] = unquote(raw)
        return fields
