"""Base domain exceptions.

Domain exceptions represent rejected requests and protocol failures.
They are part of the domain layer and do not depend on infrastructure.
"""

from typing import Any


class DomainException(Exception):
    """Base exception for all client errors.

    Example:
        >>> raise DomainException("Symbol not tradable", symbol="foousd")
    """

    def __init__(self, message: str, **context: Any) -> None:
        """Initialize domain exception.

        Args:
            message: Human-readable error message.
            **context: Additional context (symbol, endpoint, offset, etc).
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context.

        Returns:
            Error message with context if available.
        """
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message
