"""Tests for ParamSets whitelist registry."""

import dataclasses

import pytest

from bitfinex_rest.domain.exchanges.exceptions import (
    BadCurrency,
    BadDepositMethod,
    BadOrderType,
    BadSymbol,
    BadWalletType,
    ValidationError,
)
from bitfinex_rest.domain.exchanges.value_objects import ParamSets
from bitfinex_rest.domain.exchanges.value_objects.param_sets import (
    DEFAULT_CURRENCIES,
    DEFAULT_DEPOSIT_METHODS,
    DEFAULT_ORDER_TYPES,
    DEFAULT_WALLET_NAMES,
)


class TestParamSetsContains:
    """Tests for ParamSets.contains()."""

    def test_contains_is_true_only_for_inserted_values(self):
        sets = ParamSets(symbols=frozenset({"btcusd", "ltcusd"}))

        assert sets.contains("symbols", "btcusd")
        assert sets.contains("symbols", "ltcusd")
        assert not sets.contains("symbols", "ethusd")

    def test_lookup_is_case_sensitive(self):
        sets = ParamSets()

        assert sets.contains("currencies", "USD")
        assert not sets.contains("currencies", "usd")
        assert not sets.contains("order_types", "Market")

    @pytest.mark.parametrize(
        "set_name, values",
        [
            ("currencies", DEFAULT_CURRENCIES),
            ("wallet_names", DEFAULT_WALLET_NAMES),
            ("order_types", DEFAULT_ORDER_TYPES),
            ("deposit_methods", DEFAULT_DEPOSIT_METHODS),
        ],
    )
    def test_default_vocabularies(self, set_name, values):
        sets = ParamSets()

        for value in values:
            assert sets.contains(set_name, value)
        assert not sets.contains(set_name, "")

    def test_deposit_methods_list_bcash_and_bitcoin_separately(self):
        sets = ParamSets()

        assert sets.contains("deposit_methods", "bcash")
        assert sets.contains("deposit_methods", "bitcoin")
        assert not sets.contains("deposit_methods", "bcashbitcoin")

    def test_symbols_empty_by_default(self):
        assert not ParamSets().contains("symbols", "btcusd")

    def test_unknown_set_name_raises_key_error(self):
        with pytest.raises(KeyError):
            ParamSets().contains("colors", "red")


class TestParamSetsRequire:
    """Tests for ParamSets.require() error mapping."""

    @pytest.mark.parametrize(
        "set_name, error",
        [
            ("symbols", BadSymbol),
            ("currencies", BadCurrency),
            ("wallet_names", BadWalletType),
            ("order_types", BadOrderType),
            ("deposit_methods", BadDepositMethod),
        ],
    )
    def test_each_set_raises_its_own_error(self, set_name, error):
        with pytest.raises(error) as exc_info:
            ParamSets().require(set_name, "nope")

        assert isinstance(exc_info.value, ValidationError)
        assert exc_info.value.value == "nope"

    def test_require_returns_value(self):
        assert ParamSets().require("wallet_names", "exchange") == "exchange"


class TestParamSetsImmutability:
    """Tests that the registry is replaced, never mutated."""

    def test_with_symbols_returns_new_registry(self):
        original = ParamSets(symbols=frozenset({"btcusd"}))

        updated = original.with_symbols(["ethusd"])

        assert updated is not original
        assert original.contains("symbols", "btcusd")
        assert not updated.contains("symbols", "btcusd")
        assert updated.contains("symbols", "ethusd")
        assert updated.currencies == original.currencies

    def test_fields_cannot_be_assigned(self):
        sets = ParamSets()

        with pytest.raises(dataclasses.FrozenInstanceError):
            sets.symbols = frozenset({"btcusd"})

    def test_iterables_are_frozen(self):
        sets = ParamSets(symbols=["btcusd", "btcusd"])  # type: ignore[arg-type]

        assert sets.symbols == frozenset({"btcusd"})
        assert isinstance(sets.symbols, frozenset)
