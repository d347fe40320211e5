"""Tests for the withdrawal config parser."""

import pytest

from bitfinex_rest.domain.exchanges.exceptions import (
    AddressParamsMissing,
    InvalidWithdrawalValue,
    RequiredParamsMissing,
    WireParamsMissing,
    WithdrawalConfigError,
)
from bitfinex_rest.domain.exchanges.value_objects.param_sets import DEFAULT_DEPOSIT_METHODS
from bitfinex_rest.infrastructure.exchanges.withdrawal import (
    parse_withdrawal_config,
    read_withdrawal_config,
)

WIRE_HEADER = """\
# wire withdrawal
withdraw_type = "wire"
walletselected = "exchange"
amount = "1000.0"
"""

BANK_FIELDS = """\
account_number = "123456789"
bank_name = "First Bank"
bank_address = "1 Main St"
bank_city = "Springfield"
bank_country = "US"
"""


def parse(text: str):
    return parse_withdrawal_config(text.splitlines(), DEFAULT_DEPOSIT_METHODS)


class TestReadWithdrawalConfig:
    """Tests for line handling."""

    def test_comments_and_indented_lines_are_skipped(self):
        config = read_withdrawal_config(
            [
                "# amount = \"5\"",
                "  amount = \"6\"",
                "",
                "1abc = 2",
                "amount = \"0.5\"",
            ]
        )

        assert dict(config.entries) == {"amount": '"0.5"'}

    def test_empty_values_are_dropped(self):
        config = read_withdrawal_config(['address = ""', "note =", 'amount = "1"'])

        assert list(config) == ["amount"]

    def test_lines_without_equals_are_ignored(self):
        assert len(read_withdrawal_config(["just some words"])) == 0

    def test_later_duplicate_overwrites(self):
        config = read_withdrawal_config(['amount = "1"', 'walletselected = "exchange"', 'amount = "2"'])

        assert list(config) == ["amount", "walletselected"]
        assert config.entries["amount"] == '"2"'

    def test_key_stops_at_first_equals(self):
        config = read_withdrawal_config(['detail_1 = "a=b"'])

        assert config.entries == {"detail_1": '"a=b"'}

    def test_whitespace_around_equals_is_optional(self):
        config = read_withdrawal_config(['amount="1"', "renew   =   1  "])

        assert dict(config.entries) == {"amount": '"1"', "renew": "1"}

    def test_reads_from_path(self, withdraw_conf):
        path = withdraw_conf('withdraw_type = "bitcoin"\r\namount = "0.1"\r\n')

        config = read_withdrawal_config(path)

        assert dict(config.entries) == {"withdraw_type": '"bitcoin"', "amount": '"0.1"'}


class TestParseWithdrawalConfig:
    """Tests for the required-key gates."""

    def test_missing_required_keys(self):
        with pytest.raises(RequiredParamsMissing) as exc_info:
            parse('withdraw_type = "bitcoin"\n')

        assert exc_info.value.missing == ["amount", "walletselected"]

    def test_wire_without_bank_fields(self):
        with pytest.raises(WireParamsMissing) as exc_info:
            parse(WIRE_HEADER)

        assert exc_info.value.missing == sorted(
            ["account_number", "bank_name", "bank_address", "bank_city", "bank_country"]
        )

    def test_wire_with_bank_fields(self):
        config = parse(WIRE_HEADER + BANK_FIELDS)

        fragment = config.to_fragment()
        for key in ("withdraw_type", "account_number", "bank_name", "bank_address", "bank_city", "bank_country"):
            assert fragment.count(f'"{key}":') == 1
        assert fragment.startswith(',"withdraw_type":"wire","walletselected":"exchange","amount":"1000.0"')

    def test_crypto_without_address(self):
        with pytest.raises(AddressParamsMissing) as exc_info:
            parse('withdraw_type = "bitcoin"\nwalletselected = "exchange"\namount = "0.1"\naddress = ""\n')

        assert exc_info.value.missing == ["address"]

    def test_crypto_with_address(self):
        config = parse(
            'withdraw_type = "litecoin"\nwalletselected = "exchange"\namount = "0.1"\naddress = "LTCaddr"\n'
        )

        assert config.as_payload_fields() == {
            "withdraw_type": "litecoin",
            "walletselected": "exchange",
            "amount": "0.1",
            "address": "LTCaddr",
        }

    def test_unknown_type_needs_only_required_keys(self):
        config = parse('withdraw_type = "paypal"\nwalletselected = "exchange"\namount = "1"\n')

        assert config.withdraw_type == "paypal"

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_literal_rejected(self, literal):
        with pytest.raises(InvalidWithdrawalValue) as exc_info:
            parse(f'withdraw_type = "bitcoin"\nwalletselected = "exchange"\namount = {literal}\naddress = "x"\n')

        assert exc_info.value.invalid == ["amount"]

    def test_quoted_nan_is_a_string(self):
        config = parse('withdraw_type = "paypal"\nwalletselected = "exchange"\namount = "NaN"\n')

        assert config.entries["amount"] == '"NaN"'

    def test_reserved_key_rejected(self):
        with pytest.raises(InvalidWithdrawalValue) as exc_info:
            parse('withdraw_type = "paypal"\nwalletselected = "exchange"\namount = "1"\nnonce = "1"\n')

        assert exc_info.value.invalid == ["nonce"]

    def test_errors_share_base_class(self):
        with pytest.raises(WithdrawalConfigError):
            parse("")

    def test_reparse_gives_equal_config(self, withdraw_conf):
        path = withdraw_conf(WIRE_HEADER + BANK_FIELDS)

        first = parse_withdrawal_config(path, DEFAULT_DEPOSIT_METHODS)
        second = parse_withdrawal_config(path, DEFAULT_DEPOSIT_METHODS)

        assert first == second
        assert first.to_fragment() == second.to_fragment()

    def test_missing_file_raises_os_error(self, tmp_path):
        with pytest.raises(OSError):
            parse_withdrawal_config(tmp_path / "absent.conf", DEFAULT_DEPOSIT_METHODS)
