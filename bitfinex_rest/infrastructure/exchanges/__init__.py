"""Bitfinex infrastructure adapters."""
