"""Exceptions for the Exchange bounded context.

Two channels never mix:

- transport: ``ExchangeConnectionError`` (the request never got an answer)
- semantic: validation, withdrawal config, schema, signing and
  ``ExchangeAPIError`` (the exchange answered and rejected the request)
"""

from bitfinex_rest.domain.shared import DomainException


class ExchangeError(DomainException):
    """Base exception for all exchange-related errors."""

    pass


# --- Transport channel ---


class ExchangeConnectionError(ExchangeError):
    """Raised when the request could not reach the exchange.

    Connection refused, DNS failure, TLS failure, timeout.
    """

    pass


TransportError = ExchangeConnectionError


class ExchangeAPIError(ExchangeError):
    """Raised when the exchange answered with an HTTP error status.

    Attributes:
        status_code: HTTP status returned by the exchange.
        response_text: Raw response body.
    """

    def __init__(self, message: str, status_code: int, response_text: str = "", **context) -> None:
        super().__init__(message, status_code=status_code, **context)
        self.status_code = status_code
        self.response_text = response_text


# --- Pre-flight validation ---


class ValidationError(ExchangeError):
    """Raised when a parameter is not in its whitelist.

    Raised before any payload is built, signed or sent.
    """

    param_set: str = ""

    def __init__(self, value: str, **context) -> None:
        super().__init__(f"Invalid {self.param_set} value: {value!r}", value=value, **context)
        self.value = value


class BadSymbol(ValidationError):
    """Symbol is not a trading pair listed by the exchange."""

    param_set = "symbols"


class BadCurrency(ValidationError):
    """Currency is not a supported currency code."""

    param_set = "currencies"


class BadDepositMethod(ValidationError):
    """Deposit/withdrawal method is not recognized."""

    param_set = "deposit_methods"


class BadWalletType(ValidationError):
    """Wallet name is not one of trading/exchange/deposit."""

    param_set = "wallet_names"


class BadOrderType(ValidationError):
    """Order type is not accepted by the new order endpoint."""

    param_set = "order_types"


# --- Withdrawal config ---


class WithdrawalConfigError(ExchangeError):
    """Raised when the withdrawal config lacks keys for its withdraw_type.

    Attributes:
        missing: Sorted names of the absent keys.
    """

    def __init__(self, message: str, missing: list[str], **context) -> None:
        super().__init__(message, missing=", ".join(missing), **context)
        self.missing = missing


class RequiredParamsMissing(WithdrawalConfigError):
    """One of withdraw_type, walletselected, amount is absent."""

    pass


class WireParamsMissing(WithdrawalConfigError):
    """Wire withdrawal without the full set of bank fields."""

    pass


class AddressParamsMissing(WithdrawalConfigError):
    """Crypto withdrawal without a destination address."""

    pass


class InvalidWithdrawalValue(WithdrawalConfigError):
    """A value cannot be signed verbatim: NaN/Infinity literal or reserved key.

    Attributes:
        invalid: Sorted names of the offending keys.
    """

    def __init__(self, message: str, invalid: list[str], **context) -> None:
        super().__init__(message, [], invalid=", ".join(invalid), **context)
        self.invalid = invalid


# --- Schema extraction ---


class SchemaExtractionError(ExchangeError):
    """Raised when a JSON document cannot be turned into a value set.

    Attributes:
        offset: Byte offset in the input where extraction stopped.
    """

    def __init__(self, message: str, offset: int, **context) -> None:
        super().__init__(message, offset=offset, **context)
        self.offset = offset


class ParseError(SchemaExtractionError):
    """Input is not well-formed JSON."""

    pass


class SchemaViolation(SchemaExtractionError):
    """Input is JSON but does not satisfy the schema.

    Attributes:
        keyword: Schema keyword that failed (``type``, ``items``...).
        schema_pointer: JSON pointer into the schema.
        document_pointer: JSON pointer into the input document.
    """

    def __init__(
        self,
        message: str,
        offset: int,
        keyword: str,
        schema_pointer: str = "",
        document_pointer: str = "",
    ) -> None:
        super().__init__(
            message,
            offset=offset,
            keyword=keyword,
            schema_pointer=schema_pointer,
            document_pointer=document_pointer,
        )
        self.keyword = keyword
        self.schema_pointer = schema_pointer
        self.document_pointer = document_pointer


# --- Signing ---


class SigningError(ExchangeError):
    """Raised when a payload cannot be encoded or signed."""

    pass
