"""HTTP transport adapter backed by httpx."""

from typing import Mapping

import httpx

from bitfinex_rest.config.logging import get_logger
from bitfinex_rest.domain.exchanges.exceptions import ExchangeConnectionError
from bitfinex_rest.domain.exchanges.ports import HttpTransportPort
from bitfinex_rest.domain.exchanges.value_objects import TransportResponse

logger = get_logger(__name__)


class HttpxTransport(HttpTransportPort):
    """HttpTransportPort over ``httpx.AsyncClient``.

    Example:
        >>> transport = HttpxTransport()
        >>> response = await transport.perform("GET", url, {}, None, 30.0)
        >>> await transport.close()
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        """Initialize transport.

        Args:
            client: Shared AsyncClient. When omitted the transport creates
                and owns one, and ``close()`` closes it.
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient()

    async def perform(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes | None,
        timeout: float,
    ) -> TransportResponse:
        try:
            response = await self._client.request(
                method,
                url,
                headers=dict(headers),
                content=body,
                timeout=timeout,
            )
        except httpx.TimeoutException as e:
            logger.warning("transport.timeout", method=method, url=url, timeout=timeout)
            raise ExchangeConnectionError(f"Request timed out after {timeout}s", url=url) from e
        except httpx.HTTPError as e:
            logger.warning("transport.failed", method=method, url=url, error=str(e))
            raise ExchangeConnectionError(f"Request failed: {type(e).__name__}", url=url) from e

        return TransportResponse(status_code=response.status_code, body=response.content)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
