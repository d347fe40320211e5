"""SignedRequestHeaders value object - authentication triple."""

from dataclasses import dataclass, field

from bitfinex_rest.domain.shared import ValueObject

API_KEY_HEADER = "X-BFX-APIKEY"
PAYLOAD_HEADER = "X-BFX-PAYLOAD"
SIGNATURE_HEADER = "X-BFX-SIGNATURE"


@dataclass(frozen=True)
class SignedRequestHeaders(ValueObject):
    """Headers authenticating one request.

    Computed fresh per request and discarded after the call.
    """

    api_key: str
    payload: str
    """Base64 of the payload JSON."""

    signature: str = field(repr=False)
    """Lower-case hex HMAC-SHA384 of ``payload``."""

    def as_headers(self) -> dict[str, str]:
        return {
            API_KEY_HEADER: self.api_key,
            PAYLOAD_HEADER: self.payload,
            SIGNATURE_HEADER: self.signature,
        }
