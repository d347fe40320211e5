"""HTTP message value objects exchanged with the transport port."""

from dataclasses import dataclass, field
from typing import Literal, Mapping

from bitfinex_rest.domain.shared import ValueObject, frozen_mapping, validate_value_object


@dataclass(frozen=True)
class HttpRequest(ValueObject):
    """Fully built request, ready for the transport."""

    method: Literal["GET", "POST"]
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes | None = None
    timeout: float = 30.0

    def __post_init__(self) -> None:
        validate_value_object(self.timeout > 0, "Timeout must be positive")
        self._normalize(headers=frozen_mapping(self.headers))


@dataclass(frozen=True)
class TransportResponse(ValueObject):
    """Raw answer from the transport: status code and body bytes."""

    status_code: int
    body: bytes = b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400
