"""Shared Kernel - base classes for the whole domain layer.

- ValueObject: Immutable object compared by value
- DomainException: Base of every error the client raises
"""

from .exceptions import DomainException
from .value_object import ValueObject, frozen_mapping, validate_value_object

__all__ = [
    "ValueObject",
    "validate_value_object",
    "frozen_mapping",
    "DomainException",
]
