"""Request authentication: payload signing and nonce issuance."""

from .authenticator import Authenticator
from .nonce import NonceGenerator

__all__ = ["Authenticator", "NonceGenerator"]
