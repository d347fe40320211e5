"""Request construction for public and authenticated endpoints."""

from typing import Any, Mapping
from urllib.parse import quote

import httpx

from bitfinex_rest.domain.exchanges.value_objects import Credentials, HttpRequest, Payload
from bitfinex_rest.infrastructure.exchanges.auth import Authenticator

DEFAULT_TIMEOUT = 30.0

# v1 authenticated calls carry their parameters in headers only
POST_BODY = b"\n"


class RequestBuilder:
    """Compose URLs, payloads and signed headers.

    Args:
        base_url: Versioned API root, e.g. ``https://api.bitfinex.com/v1``.
        authenticator: Signer used for authenticated requests.
        timeout: Timeout attached to every request, in seconds.

    Example:
        >>> builder = RequestBuilder("https://api.bitfinex.com/v1", Authenticator())
        >>> builder.build_get("/pubticker/btcusd").url
        'https://api.bitfinex.com/v1/pubticker/btcusd'
    """

    def __init__(
        self,
        base_url: str,
        authenticator: Authenticator,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_prefix = httpx.URL(self.base_url).path.rstrip("/")
        self.authenticator = authenticator
        self.timeout = timeout

    def url(self, path: str) -> str:
        """Join ``path`` to the base URL, percent-encoding each segment."""
        return self.base_url + quote("/" + path.strip("/"), safe="/")

    def request_path(self, path: str) -> str:
        """Versioned path placed in the payload ``request`` field."""
        return f"{self.api_prefix}/{path.strip('/')}"

    def payload(
        self,
        path: str,
        nonce: str,
        fields: Mapping[str, Any] | None = None,
        raw_fragment: str = "",
    ) -> Payload:
        return Payload(
            request=self.request_path(path),
            nonce=nonce,
            fields=fields or {},
            raw_fragment=raw_fragment,
        )

    def build_get(self, path: str, query_params: Mapping[str, Any] | None = None) -> HttpRequest:
        """Build an unauthenticated GET.

        Query values are URL-encoded; ``None`` values are left out.
        """
        url = self.url(path)
        if query_params:
            query = str(httpx.QueryParams({k: v for k, v in query_params.items() if v is not None}))
            if query:
                url = f"{url}?{query}"
        return HttpRequest(method="GET", url=url, timeout=self.timeout)

    def build_post(self, path: str, payload: Payload, credentials: Credentials) -> HttpRequest:
        """Build a signed POST.

        The payload is serialized once, signed, and travels only in the
        ``X-BFX-PAYLOAD`` header; the body is a single newline.

        Raises:
            SigningError: If the payload cannot be signed.
        """
        signed = self.authenticator.headers(payload.to_json(), credentials)
        return HttpRequest(
            method="POST",
            url=self.url(path),
            headers=signed.as_headers(),
            body=POST_BODY,
            timeout=self.timeout,
        )
