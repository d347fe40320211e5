"""HttpTransportPort - abstract interface for the HTTP transfer.

This is a PORT in Hexagonal Architecture. The client core decides WHAT
to send (method, url, headers, body, timeout); an adapter decides HOW
(connection pooling, TLS).

Example (Infrastructure implements):
    >>> class HttpxTransport(HttpTransportPort):
    ...     async def perform(self, method, url, headers, body, timeout):
    ...         response = await self._client.request(method, url, ...)
    ...         return TransportResponse(response.status_code, response.content)
"""

from abc import ABC, abstractmethod
from typing import Mapping

from ..value_objects import TransportResponse


class HttpTransportPort(ABC):
    """Abstract transport used by the Bitfinex client."""

    @abstractmethod
    async def perform(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes | None,
        timeout: float,
    ) -> TransportResponse:
        """Send one request and return the raw answer.

        Any HTTP status is a successful transfer; interpreting it is the
        caller's job.

        Args:
            method: "GET" or "POST".
            url: Absolute URL including query string.
            headers: Request headers.
            body: Request body, None for no body.
            timeout: Timeout in seconds for the whole exchange.

        Returns:
            TransportResponse with status code and body bytes.

        Raises:
            ExchangeConnectionError: If no response was received.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release connections held by the transport."""
        pass
