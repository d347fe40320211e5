"""Withdrawal config parsing."""

from .config_parser import parse_withdrawal_config, read_withdrawal_config, validate_withdrawal_config

__all__ = ["parse_withdrawal_config", "read_withdrawal_config", "validate_withdrawal_config"]
