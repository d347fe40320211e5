"""Client factory - builds a BitfinexClient from Settings."""

from typing import Any

from bitfinex_rest.config import Settings, get_logger, get_settings
from bitfinex_rest.infrastructure.exchanges.adapters import BitfinexClient

logger = get_logger(__name__)


def create_client(settings: Settings | None = None, **overrides: Any) -> BitfinexClient:
    """Create a client with credentials and paths taken from settings.

    Args:
        settings: Settings (default: ``get_settings()``).
        **overrides: Extra BitfinexClient keyword arguments
            (transport, symbols, schema_resolver...).

    Returns:
        Client ready for ``await client.initialize()``.

    Example:
        >>> client = create_client()
        >>> async with client:
        ...     await client.get_balances()
    """
    settings = settings or get_settings()

    logger.info(
        "client_factory.creating",
        base_url=settings.base_url,
        authenticated=bool(settings.api_key),
    )

    return BitfinexClient(
        settings.api_key,
        settings.api_secret.get_secret_value(),
        settings=settings,
        **overrides,
    )
