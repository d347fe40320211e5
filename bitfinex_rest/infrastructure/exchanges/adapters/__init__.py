"""Exchange adapters."""

from .bitfinex_client import BitfinexClient
from .client_state import ClientState

__all__ = ["BitfinexClient", "ClientState"]
