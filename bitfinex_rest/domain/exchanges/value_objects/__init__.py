"""Value objects for the Exchange bounded context."""

from .credentials import Credentials
from .http_messages import HttpRequest, TransportResponse
from .order import Order
from .param_sets import ParamSets
from .payload import Payload
from .signed_headers import SignedRequestHeaders
from .withdrawal_config import WithdrawalConfig

__all__ = [
    "Credentials",
    "HttpRequest",
    "TransportResponse",
    "Order",
    "ParamSets",
    "Payload",
    "SignedRequestHeaders",
    "WithdrawalConfig",
]
