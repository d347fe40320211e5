"""HTTP request construction and transport."""

from .httpx_transport import HttpxTransport
from .request_builder import POST_BODY, RequestBuilder

__all__ = ["HttpxTransport", "RequestBuilder", "POST_BODY"]
