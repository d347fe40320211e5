"""Bitfinex v1 REST client.

Every endpoint method validates its parameters against the client's
ParamSets first, then builds the request (signing it for authenticated
endpoints) and sends it through the transport. Methods return the raw
response text.
"""

import asyncio
import json
from decimal import Decimal
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

from bitfinex_rest.config import Settings, get_logger, get_settings
from bitfinex_rest.domain.exchanges.exceptions import (
    BadDepositMethod,
    BadWalletType,
    ExchangeAPIError,
    ExchangeConnectionError,
    ExchangeError,
    SchemaExtractionError,
    SigningError,
    ValidationError,
    WithdrawalConfigError,
)
from bitfinex_rest.domain.exchanges.ports import HttpTransportPort, SchemaResolverPort
from bitfinex_rest.domain.exchanges.value_objects import Credentials, HttpRequest, Order, ParamSets
from bitfinex_rest.domain.exchanges.value_objects.order import ORDER_SIDES
from bitfinex_rest.domain.exchanges.value_objects.param_sets import (
    CURRENCIES,
    DEPOSIT_METHODS,
    ORDER_TYPES,
    SYMBOLS,
    WALLET_NAMES,
)
from bitfinex_rest.infrastructure.exchanges.auth import Authenticator, NonceGenerator
from bitfinex_rest.infrastructure.exchanges.http import HttpxTransport, RequestBuilder
from bitfinex_rest.infrastructure.exchanges.schema import (
    BundledSchemaResolver,
    FileSchemaResolver,
    SchemaSetExtractor,
)
from bitfinex_rest.infrastructure.exchanges.withdrawal import parse_withdrawal_config

from .client_state import ClientState

logger = get_logger(__name__)

ALL = "all"
WIRE = "wire"
OFFER_DIRECTIONS = frozenset({"lend", "loan"})


def _decimal(value: Decimal | float | int | str) -> str:
    """Plain decimal string, never in exponent notation."""
    return format(Decimal(str(value)), "f")


class BitfinexClient:
    """Async client for the Bitfinex v1 REST API.

    One instance is one sequential session: calls on the same instance are
    serialized, and the outcome of the last one is kept in ``state``.

    Example:
        >>> async with BitfinexClient(access_key="key", secret_key="secret") as client:
        ...     ticker = await client.get_ticker("btcusd")
        ...     order = await client.new_order("btcusd", "0.01", "6500", "buy", "exchange limit")
    """

    def __init__(
        self,
        access_key: str = "",
        secret_key: str = "",
        *,
        settings: Settings | None = None,
        transport: HttpTransportPort | None = None,
        param_sets: ParamSets | None = None,
        symbols: Iterable[str] | None = None,
        schema_resolver: SchemaResolverPort | None = None,
        nonce_generator: NonceGenerator | None = None,
        withdraw_config_path: str | Path | None = None,
    ) -> None:
        """Initialize client.

        Args:
            access_key: API access key (empty for public endpoints only).
            secret_key: API secret key.
            settings: Settings (default: ``get_settings()``).
            transport: HTTP transport (default: an owned HttpxTransport).
            param_sets: Whitelists (default: built-in vocabularies).
            symbols: Symbol whitelist. When given, ``initialize()`` does not
                fetch symbols from the exchange.
            schema_resolver: Resolver for the symbols schema ``$ref``.
            nonce_generator: Nonce source (default: wall-clock milliseconds).
            withdraw_config_path: Config file used by ``withdraw()``.
        """
        self._settings = settings or get_settings()
        self._credentials = Credentials(access_key, secret_key)
        self._builder = RequestBuilder(
            self._settings.base_url,
            Authenticator(),
            timeout=self._settings.request_timeout,
        )
        self._owns_transport = transport is None
        self._transport = transport or HttpxTransport()
        self._nonces = nonce_generator or NonceGenerator()

        self._param_sets = param_sets or ParamSets()
        self._symbols_loaded = symbols is not None
        if symbols is not None:
            self._param_sets = self._param_sets.with_symbols(symbols)

        if schema_resolver is None:
            if self._settings.definitions_path:
                schema_resolver = FileSchemaResolver(self._settings.definitions_path)
            else:
                schema_resolver = BundledSchemaResolver()
        self._extractor = SchemaSetExtractor(schema_resolver)

        self._withdraw_config_path = Path(withdraw_config_path or self._settings.withdraw_config_path)
        self._lock = asyncio.Lock()
        self.state = ClientState()

    # --- lifecycle ---

    async def initialize(self) -> None:
        """Populate the symbol whitelist from the exchange.

        Raises:
            ExchangeConnectionError: If the symbols request fails in transit.
            ExchangeAPIError: If the exchange rejects the symbols request.
            ParseError | SchemaViolation: If the response is not a flat string array.
        """
        if self._symbols_loaded:
            return

        text = await self.get_symbols()
        try:
            symbols = self._extractor.extract_string_set(text, self._settings.symbols_schema_ref)
        except SchemaExtractionError as e:
            self.state.api_error = e
            raise

        self._param_sets = self._param_sets.with_symbols(symbols)
        self._symbols_loaded = True
        logger.info("bitfinex.symbols_loaded", count=len(symbols))

    async def close(self) -> None:
        if self._owns_transport:
            await self._transport.close()

    async def __aenter__(self) -> "BitfinexClient":
        await self.initialize()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # --- accessors ---

    @property
    def param_sets(self) -> ParamSets:
        return self._param_sets

    @property
    def withdraw_config_path(self) -> Path:
        return self._withdraw_config_path

    @withdraw_config_path.setter
    def withdraw_config_path(self, path: str | Path) -> None:
        self._withdraw_config_path = Path(path)

    @property
    def last_response(self) -> str:
        return self.state.last_response

    @property
    def has_api_error(self) -> bool:
        return self.state.has_api_error

    def set_keys(self, access_key: str, secret_key: str) -> None:
        """Replace credentials for subsequent requests.

        A request already being signed keeps the credentials it started with.
        """
        self._credentials = Credentials(access_key, secret_key)

    # --- plumbing ---

    def _fail(self, error: ExchangeError) -> ExchangeError:
        self.state.reset()
        self.state.api_error = error
        return error

    def _require(self, set_name: str, value: str) -> str:
        try:
            return self._param_sets.require(set_name, value)
        except ValidationError as e:
            logger.warning("bitfinex.validation_failed", param_set=set_name, value=value)
            raise self._fail(e) from None

    def _until(self, until: int) -> str:
        return self._nonces.now() if not until else str(until)

    async def _dispatch(self, request: HttpRequest, endpoint: str) -> str:
        """Send a built request. Caller holds ``self._lock``."""
        self.state.reset()
        logger.info("bitfinex.request.start", method=request.method, endpoint=endpoint)

        try:
            response = await self._transport.perform(
                request.method,
                request.url,
                request.headers,
                request.body,
                request.timeout,
            )
        except ExchangeConnectionError as e:
            self.state.transport_error = e
            logger.error("bitfinex.request.transport_failed", endpoint=endpoint, error=str(e))
            raise

        self.state.status_code = response.status_code
        self.state.last_response = response.text

        if response.is_error:
            error = ExchangeAPIError(
                _error_message(response.text, response.status_code),
                status_code=response.status_code,
                response_text=response.text,
                endpoint=endpoint,
            )
            self.state.api_error = error
            logger.warning(
                "bitfinex.request.rejected",
                endpoint=endpoint,
                status_code=response.status_code,
            )
            raise error

        logger.info("bitfinex.request.success", endpoint=endpoint, status_code=response.status_code)
        return response.text

    async def _get(self, path: str, query_params: Mapping[str, Any] | None = None) -> str:
        request = self._builder.build_get(path, query_params)
        async with self._lock:
            return await self._dispatch(request, path)

    async def _post(
        self,
        path: str,
        fields: Mapping[str, Any] | None = None,
        raw_fragment: str = "",
    ) -> str:
        credentials = self._credentials
        if credentials.is_empty:
            logger.warning("bitfinex.unauthenticated_private_call", endpoint=path)

        async with self._lock:
            payload = self._builder.payload(path, self._nonces.next(), fields, raw_fragment)
            try:
                request = self._builder.build_post(path, payload, credentials)
            except SigningError as e:
                raise self._fail(e)
            return await self._dispatch(request, path)

    # ==================== Public endpoints ====================

    async def get_ticker(self, symbol: str) -> str:
        """Top of book and last trade for a symbol."""
        self._require(SYMBOLS, symbol)
        return await self._get(f"/pubticker/{symbol}")

    async def get_stats(self, symbol: str) -> str:
        """Traded volume over recent periods."""
        self._require(SYMBOLS, symbol)
        return await self._get(f"/stats/{symbol}")

    async def get_funding_book(self, currency: str, limit_bids: int = 50, limit_asks: int = 50) -> str:
        """Margin funding book for a currency."""
        self._require(CURRENCIES, currency)
        return await self._get(
            f"/lendbook/{currency}",
            {"limit_bids": limit_bids, "limit_asks": limit_asks},
        )

    async def get_order_book(
        self,
        symbol: str,
        limit_bids: int = 50,
        limit_asks: int = 50,
        group: bool = True,
    ) -> str:
        """Order book for a symbol."""
        self._require(SYMBOLS, symbol)
        return await self._get(
            f"/book/{symbol}",
            {"limit_bids": limit_bids, "limit_asks": limit_asks, "group": int(group)},
        )

    async def get_trades(self, symbol: str, since: int = 0, limit_trades: int = 50) -> str:
        """Recent public trades for a symbol."""
        self._require(SYMBOLS, symbol)
        return await self._get(
            f"/trades/{symbol}",
            {"timestamp": since, "limit_trades": limit_trades},
        )

    async def get_lends(self, currency: str, since: int = 0, limit_lends: int = 50) -> str:
        """Funding rate and amount history for a currency."""
        self._require(CURRENCIES, currency)
        return await self._get(
            f"/lends/{currency}",
            {"timestamp": since, "limit_lends": limit_lends},
        )

    async def get_symbols(self) -> str:
        return await self._get("/symbols")

    async def get_symbol_details(self) -> str:
        return await self._get("/symbols_details")

    # ==================== Account ====================

    async def get_account_info(self) -> str:
        return await self._post("/account_infos")

    async def get_account_fees(self) -> str:
        return await self._post("/account_fees")

    async def get_summary(self) -> str:
        """30-day trading summary."""
        return await self._post("/summary")

    async def deposit(self, method: str, wallet_name: str, renew: bool = False) -> str:
        """Get (or renew) a deposit address."""
        self._require(DEPOSIT_METHODS, method)
        self._require(WALLET_NAMES, wallet_name)
        return await self._post(
            "/deposit/new",
            {"method": method, "wallet_name": wallet_name, "renew": int(renew)},
        )

    async def get_key_permissions(self) -> str:
        return await self._post("/key_info")

    async def get_margin_infos(self) -> str:
        return await self._post("/margin_infos")

    async def get_balances(self) -> str:
        return await self._post("/balances")

    async def transfer(
        self,
        amount: Decimal | float | str,
        currency: str,
        wallet_from: str,
        wallet_to: str,
    ) -> str:
        """Move funds between wallets."""
        self._require(CURRENCIES, currency)
        self._require(WALLET_NAMES, wallet_from)
        self._require(WALLET_NAMES, wallet_to)
        return await self._post(
            "/transfer",
            {
                "amount": _decimal(amount),
                "currency": currency,
                "walletfrom": wallet_from,
                "walletto": wallet_to,
            },
        )

    async def withdraw(self) -> str:
        """Request a withdrawal described by the withdrawal config file.

        Config values are signed exactly as written in the file.

        Raises:
            RequiredParamsMissing | WireParamsMissing | AddressParamsMissing
            InvalidWithdrawalValue: If a value is NaN/Infinity or a key is reserved.
            OSError: If the config file cannot be read.
        """
        try:
            config = parse_withdrawal_config(
                self._withdraw_config_path,
                self._param_sets.deposit_methods,
            )
        except WithdrawalConfigError as e:
            raise self._fail(e) from None
        return await self._post("/withdraw", raw_fragment=config.to_fragment())

    # ==================== Orders ====================

    def _validate_order(self, symbol: str, side: str, type: str) -> None:
        self._require(SYMBOLS, symbol)
        self._require(ORDER_TYPES, type)
        if side not in ORDER_SIDES:
            raise ValueError(f"Order side must be buy or sell, got {side!r}")

    async def new_order(
        self,
        symbol: str,
        amount: Decimal | float | str,
        price: Decimal | float | str,
        side: str,
        type: str,
        is_hidden: bool = False,
        is_postonly: bool = False,
        use_all_available: bool = False,
        ocoorder: bool = False,
        buy_price_oco: Decimal | float | str = 0,
    ) -> str:
        """Submit a new order."""
        self._validate_order(symbol, side, type)
        fields: dict[str, Any] = {
            "symbol": symbol,
            "amount": _decimal(amount),
            "price": _decimal(price),
            "side": side,
            "type": type,
            "is_hidden": is_hidden,
            "is_postonly": is_postonly,
            "use_all_available": use_all_available,
            "ocoorder": ocoorder,
        }
        if ocoorder:
            fields["buy_price_oco"] = _decimal(buy_price_oco)
        return await self._post("/order/new", fields)

    async def new_orders(self, orders: Sequence[Order]) -> str:
        """Submit several orders at once."""
        if not orders:
            raise ValueError("new_orders() needs at least one order")
        for order in orders:
            self._validate_order(order.symbol, order.side, order.type)
        return await self._post("/order/new/multi", {"orders": [order.as_dict() for order in orders]})

    async def cancel_order(self, order_id: int) -> str:
        return await self._post("/order/cancel", {"order_id": int(order_id)})

    async def cancel_orders(self, order_ids: Sequence[int]) -> str:
        if not order_ids:
            raise ValueError("cancel_orders() needs at least one order id")
        return await self._post("/order/cancel/multi", {"order_ids": [int(i) for i in order_ids]})

    async def cancel_all_orders(self) -> str:
        return await self._post("/order/cancel/all")

    async def replace_order(
        self,
        order_id: int,
        symbol: str,
        amount: Decimal | float | str,
        price: Decimal | float | str,
        side: str,
        type: str,
        is_hidden: bool = False,
        use_remaining: bool = False,
    ) -> str:
        """Cancel an order and submit a replacement atomically."""
        self._validate_order(symbol, side, type)
        return await self._post(
            "/order/cancel/replace",
            {
                "order_id": int(order_id),
                "symbol": symbol,
                "amount": _decimal(amount),
                "price": _decimal(price),
                "side": side,
                "type": type,
                "is_hidden": is_hidden,
                "use_remaining": use_remaining,
            },
        )

    async def get_order_status(self, order_id: int) -> str:
        return await self._post("/order/status", {"order_id": int(order_id)})

    async def get_active_orders(self) -> str:
        return await self._post("/orders")

    async def get_orders_history(self, limit: int = 50) -> str:
        return await self._post("/orders/hist", {"limit": limit})

    # ==================== Positions ====================

    async def get_active_positions(self) -> str:
        return await self._post("/positions")

    async def claim_position(self, position_id: int, amount: Decimal | float | str) -> str:
        return await self._post(
            "/position/claim",
            {"position_id": int(position_id), "amount": _decimal(amount)},
        )

    async def close_position(self, position_id: int) -> str:
        return await self._post("/position/close", {"position_id": int(position_id)})

    # ==================== Historical data ====================

    async def get_balance_history(
        self,
        currency: str,
        since: int = 0,
        until: int = 0,
        limit: int = 500,
        wallet: str = ALL,
    ) -> str:
        """Balance ledger entries. ``wallet="all"`` covers every wallet."""
        self._require(CURRENCIES, currency)
        if wallet != ALL and not self._param_sets.contains(WALLET_NAMES, wallet):
            raise self._fail(BadWalletType(wallet))

        fields: dict[str, Any] = {
            "currency": currency,
            "since": str(since),
            "until": self._until(until),
            "limit": limit,
        }
        if wallet != ALL:
            fields["wallet"] = wallet
        return await self._post("/history", fields)

    async def get_withdrawal_history(
        self,
        currency: str,
        method: str = ALL,
        since: int = 0,
        until: int = 0,
        limit: int = 500,
    ) -> str:
        """Deposits and withdrawals. ``method`` may also be "wire" or "all"."""
        self._require(CURRENCIES, currency)
        if method not in (ALL, WIRE) and not self._param_sets.contains(DEPOSIT_METHODS, method):
            raise self._fail(BadDepositMethod(method))

        fields: dict[str, Any] = {"currency": currency}
        if method != ALL:
            fields["method"] = method
        fields.update({"since": str(since), "until": self._until(until), "limit": limit})
        return await self._post("/history/movements", fields)

    async def get_past_trades(
        self,
        symbol: str,
        timestamp: int,
        until: int = 0,
        limit_trades: int = 500,
        reverse: bool = False,
    ) -> str:
        """Own trades for a symbol since ``timestamp``."""
        self._require(SYMBOLS, symbol)
        return await self._post(
            "/mytrades",
            {
                "symbol": symbol,
                "timestamp": str(timestamp),
                "until": self._until(until),
                "limit_trades": limit_trades,
                "reverse": int(reverse),
            },
        )

    # ==================== Margin funding ====================

    async def new_offer(
        self,
        currency: str,
        amount: Decimal | float | str,
        rate: Decimal | float | str,
        period: int,
        direction: str,
    ) -> str:
        """Submit a funding offer. ``direction`` is "lend" or "loan"."""
        self._require(CURRENCIES, currency)
        if direction not in OFFER_DIRECTIONS:
            raise ValueError(f"Offer direction must be lend or loan, got {direction!r}")
        return await self._post(
            "/offer/new",
            {
                "currency": currency,
                "amount": _decimal(amount),
                "rate": _decimal(rate),
                "period": int(period),
                "direction": direction,
            },
        )

    async def cancel_offer(self, offer_id: int) -> str:
        return await self._post("/offer/cancel", {"offer_id": int(offer_id)})

    async def get_offer_status(self, offer_id: int) -> str:
        return await self._post("/offer/status", {"offer_id": int(offer_id)})

    async def get_active_credits(self) -> str:
        return await self._post("/credits")

    async def get_offers(self) -> str:
        return await self._post("/offers")

    async def get_offers_history(self, limit: int = 50) -> str:
        return await self._post("/offers/hist", {"limit": limit})

    async def get_past_funding_trades(self, currency: str, until: int = 0, limit_trades: int = 50) -> str:
        """Own funding trades for a currency."""
        self._require(CURRENCIES, currency)
        # the endpoint names its currency parameter "symbol"
        return await self._post(
            "/mytrades_funding",
            {"symbol": currency, "until": int(self._until(until)), "limit_trades": limit_trades},
        )

    async def get_taken_funds(self) -> str:
        return await self._post("/taken_funds")

    async def get_unused_taken_funds(self) -> str:
        return await self._post("/unused_taken_funds")

    async def get_total_taken_funds(self) -> str:
        return await self._post("/total_taken_funds")

    async def close_loan(self, offer_id: int) -> str:
        return await self._post("/funding/close", {"swap_id": int(offer_id)})


def _error_message(text: str, status_code: int) -> str:
    """Pull the exchange's ``message`` out of an error body when present."""
    try:
        body = json.loads(text)
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return f"Bitfinex API returned HTTP {status_code}"
