"""Withdrawal config parser.

Reads a line-oriented ``key = value`` file and gates it on the keys the
withdraw endpoint needs for the chosen ``withdraw_type``. Values are not
checked beyond presence.

File format:
    # comment
    withdraw_type = "bitcoin"
    walletselected = "exchange"
    amount = "0.01"
    address = "1BvBMSEYstWetqTFn5Au4m4GFg7xJaNVN2"
"""

import os
import re
from pathlib import Path
from typing import Iterable

from bitfinex_rest.config.logging import get_logger
from bitfinex_rest.domain.exchanges.exceptions import (
    AddressParamsMissing,
    InvalidWithdrawalValue,
    RequiredParamsMissing,
    WireParamsMissing,
    WithdrawalConfigError,
)
from bitfinex_rest.domain.exchanges.value_objects import WithdrawalConfig
from bitfinex_rest.domain.exchanges.value_objects.withdrawal_config import (
    ADDRESS_KEYS,
    REQUIRED_KEYS,
    WIRE,
    WIRE_KEYS,
)

logger = get_logger(__name__)

# key runs up to the first "=", value is the rest of the line
LINE_PATTERN = re.compile(r"^(?P<key>[^=]*?)\s*=\s*(?P<value>.*?)\s*$")
EMPTY_VALUES = frozenset({'""', ""})
# bare literals that strict JSON parsers reject
NON_FINITE_VALUES = frozenset({"NaN", "Infinity", "-Infinity"})
RESERVED_KEYS = frozenset({"request", "nonce"})

ConfigSource = str | os.PathLike | Iterable[str]


def _read_lines(source: ConfigSource) -> Iterable[str]:
    if isinstance(source, (str, os.PathLike)):
        return Path(source).read_text(encoding="utf-8").splitlines()
    return source


def read_withdrawal_config(source: ConfigSource) -> WithdrawalConfig:
    """Collect ``key = value`` pairs without checking required keys.

    Only lines whose first character is a letter are considered. Pairs
    with an empty value are dropped; a repeated key keeps its last value.
    """
    entries: dict[str, str] = {}
    for line in _read_lines(source):
        line = line.rstrip("\r\n")
        if not line[:1].isalpha():
            continue
        match = LINE_PATTERN.match(line)
        if match is None:
            continue
        value = match["value"]
        if value in EMPTY_VALUES:
            continue
        entries[match["key"]] = value
    return WithdrawalConfig(entries)


def validate_withdrawal_config(config: WithdrawalConfig, deposit_methods: Iterable[str]) -> WithdrawalConfig:
    """Check the key set required by ``withdraw_type``.

    Raises:
        RequiredParamsMissing: withdraw_type, walletselected or amount absent.
        WireParamsMissing: wire withdrawal without all bank fields.
        AddressParamsMissing: crypto withdrawal without an address.
        InvalidWithdrawalValue: NaN/Infinity value or reserved key.
    """
    invalid = sorted(
        key for key, value in config.entries.items() if key in RESERVED_KEYS or value in NON_FINITE_VALUES
    )
    if invalid:
        raise InvalidWithdrawalValue("Withdrawal config has values that cannot be signed", invalid)

    missing = config.missing(REQUIRED_KEYS)
    if missing:
        raise RequiredParamsMissing("Withdrawal config lacks required keys", missing)

    withdraw_type = config.withdraw_type
    if withdraw_type == WIRE:
        missing = config.missing(WIRE_KEYS)
        if missing:
            raise WireParamsMissing("Wire withdrawal lacks bank details", missing)
    elif withdraw_type in frozenset(deposit_methods):
        missing = config.missing(ADDRESS_KEYS)
        if missing:
            raise AddressParamsMissing("Withdrawal lacks destination address", missing, withdraw_type=withdraw_type)

    return config


def parse_withdrawal_config(source: ConfigSource, deposit_methods: Iterable[str]) -> WithdrawalConfig:
    """Read and validate a withdrawal config.

    Args:
        source: Path to the config file, or an iterable of its lines.
        deposit_methods: Recognized crypto withdrawal methods.

    Returns:
        WithdrawalConfig with the file's pairs in first-seen order.

    Raises:
        OSError: If ``source`` is a path that cannot be read.
        RequiredParamsMissing | WireParamsMissing | AddressParamsMissing
        InvalidWithdrawalValue
    """
    config = read_withdrawal_config(source)
    try:
        validate_withdrawal_config(config, deposit_methods)
    except WithdrawalConfigError as e:
        logger.warning("withdrawal.config_invalid", error_type=type(e).__name__, **e.context)
        raise

    logger.debug("withdrawal.config_parsed", keys=list(config))
    return config
