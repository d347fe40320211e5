"""Payload signing for authenticated Bitfinex v1 calls.

Scheme:
    payload_header   = base64(payload_json)
    signature_header = lower(hex(HMAC-SHA384(secret_key, payload_header)))
"""

import base64
import binascii
import hashlib
import hmac

from bitfinex_rest.config.logging import get_logger
from bitfinex_rest.domain.exchanges.exceptions import SigningError
from bitfinex_rest.domain.exchanges.value_objects import Credentials, SignedRequestHeaders

logger = get_logger(__name__)


class Authenticator:
    """Stateless signer turning a payload into authentication headers.

    Example:
        >>> auth = Authenticator()
        >>> payload_b64, signature = auth.sign('{"request":"/v1/balances","nonce":"1"}', "secret")
        >>> len(signature)
        96
    """

    def sign(self, payload_json: str, secret_key: str) -> tuple[str, str]:
        """Encode and sign a payload.

        Args:
            payload_json: Serialized payload.
            secret_key: API secret used as the HMAC key.

        Returns:
            Tuple of (base64 payload, hex signature).

        Raises:
            SigningError: If the payload or key cannot be encoded.
        """
        try:
            payload_b64 = base64.b64encode(payload_json.encode("utf-8"))
            digest = hmac.new(secret_key.encode("utf-8"), payload_b64, hashlib.sha384).hexdigest()
        except (AttributeError, TypeError, UnicodeError, binascii.Error) as e:
            logger.error("auth.sign_failed", error_type=type(e).__name__)
            raise SigningError(f"Cannot sign payload: {type(e).__name__}") from e

        return payload_b64.decode("ascii"), digest.lower()

    def headers(self, payload_json: str, credentials: Credentials) -> SignedRequestHeaders:
        """Build the three authentication headers for a payload."""
        payload_b64, signature = self.sign(payload_json, credentials.secret_key)
        return SignedRequestHeaders(
            api_key=credentials.access_key,
            payload=payload_b64,
            signature=signature,
        )
