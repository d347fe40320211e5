"""Payload value object - logical body of one authenticated call."""

import json
from dataclasses import dataclass, field
from typing import Any, Mapping

from bitfinex_rest.domain.shared import ValueObject, frozen_mapping, validate_value_object

RESERVED_KEYS = frozenset({"request", "nonce"})


@dataclass(frozen=True)
class Payload(ValueObject):
    """Canonical JSON object describing one authenticated API call.

    ``request`` and ``nonce`` always come first, followed by endpoint
    fields in insertion order, then ``raw_fragment`` (pre-rendered
    ``,"key":value`` members) when given. The field mapping is read-only, so
    a payload cannot change between serialization and signing.

    Example:
        >>> payload = Payload("/v1/order/status", "1530620498412", {"order_id": 42})
        >>> payload.to_json()
        '{"request":"/v1/order/status","nonce":"1530620498412","order_id":42}'
    """

    request: str
    nonce: str
    fields: Mapping[str, Any] = field(default_factory=dict)
    raw_fragment: str = ""

    def __post_init__(self) -> None:
        validate_value_object(self.request.startswith("/"), "Payload request must be an absolute path")
        validate_value_object(self.nonce.isdigit(), "Payload nonce must be a decimal string")
        clash = RESERVED_KEYS.intersection(self.fields)
        validate_value_object(not clash, f"Payload fields cannot override {sorted(clash)}")
        validate_value_object(
            not self.raw_fragment or self.raw_fragment.startswith(","),
            "Payload raw fragment must start with a comma",
        )
        self._normalize(fields=frozen_mapping(self.fields))

    def as_dict(self) -> dict[str, Any]:
        return {"request": self.request, "nonce": self.nonce, **self.fields}

    def to_json(self) -> str:
        """Serialize compactly; output always begins with ``{"request":``.

        ``raw_fragment`` is spliced in verbatim before the closing brace.
        """
        text = json.dumps(self.as_dict(), separators=(",", ":"), ensure_ascii=False)
        if self.raw_fragment:
            text = text[:-1] + self.raw_fragment + "}"
        return text
