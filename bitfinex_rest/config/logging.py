"""Structured Logging Configuration.

Logging with:
- JSON format for production (easy parsing by log aggregators)
- Human-readable format for development
- Sensitive data filtering (API secrets, signatures, signed payloads)

Usage:
    from bitfinex_rest.config.logging import setup_logging, get_logger

    setup_logging()  # Call once at startup
    logger = get_logger(__name__)
    logger.info("bitfinex.request.start", endpoint="/pubticker/btcusd")
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any

import structlog
from structlog.typing import EventDict

from .settings import Settings, get_settings

# ============================================================================
# SENSITIVE DATA FILTER
# ============================================================================


SENSITIVE_KEYS = frozenset({
    "secret",
    "secret_key",
    "api_secret",
    "signature",
    "payload",
    "authorization",
    "x-bfx-payload",
    "x-bfx-signature",
})


def filter_sensitive_data(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Filter sensitive data from log output.

    Replaces values of sensitive keys with '[REDACTED]'.

    Args:
        logger: The logger instance.
        method_name: The logging method name.
        event_dict: The event dictionary to filter.

    Returns:
        Filtered event dictionary.
    """
    for key in list(event_dict.keys()):
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = "[REDACTED]"
        elif isinstance(event_dict[key], dict):
            event_dict[key] = _filter_dict(event_dict[key])
    return event_dict


def _filter_dict(d: dict[str, Any]) -> dict[str, Any]:
    """Recursively filter sensitive data from nested dicts."""
    result = {}
    for key, value in d.items():
        if str(key).lower() in SENSITIVE_KEYS:
            result[key] = "[REDACTED]"
        elif isinstance(value, dict):
            result[key] = _filter_dict(value)
        else:
            result[key] = value
    return result


# ============================================================================
# CUSTOM PROCESSORS
# ============================================================================


def add_timestamp(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add ISO format timestamp to log events."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_service_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add service context to log events."""
    settings = get_settings()
    event_dict["service"] = settings.app_name
    event_dict["environment"] = settings.environment
    return event_dict


# ============================================================================
# LOGGING SETUP
# ============================================================================


def setup_logging(settings: Settings | None = None) -> None:
    """Configure structured logging for the client.

    Call this once at application startup. Libraries embedding the client
    may skip it and keep their own logging configuration.

    Configuration based on ``settings.log_format``:
    - console: Console output with colors
    - json: JSON output for log aggregation
    """
    settings = settings or get_settings()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        add_timestamp,
        add_service_context,
        filter_sensitive_data,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ]
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)
        processors = shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ]

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(getattr(logging, settings.log_level))

    # Reduce noise from the HTTP stack
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Configured structlog logger.

    Usage:
        logger = get_logger(__name__)
        logger.info("bitfinex.symbols.loaded", count=120)
    """
    return structlog.get_logger(name)
