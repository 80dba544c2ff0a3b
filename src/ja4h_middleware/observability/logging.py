"""Structured logging configuration for JA4H middleware.

This module provides structured logging using structlog to emit
JSON-formatted logs with contextual information, so fingerprints can be
correlated with other request logs in a log aggregation system.

Events emitted by the middleware:
- ``ja4h.computed``: a fingerprint was computed (debug)
- ``ja4h.reused``: a fingerprint was reused from the request state (debug)
- ``ja4h.invalid_request``: the request view was malformed (warning)

Examples:
    Configure logging::

        from ja4h_middleware.observability.logging import configure_logging

        configure_logging(level="DEBUG", json_output=True)

    Output (JSON)::

        {
            "event": "ja4h.computed",
            "fingerprint": "ge11cn5enus_8f1e0a2c3b4d_...",
            "header_count": 5,
            "timestamp": "2024-01-01T00:00:00.000000Z",
            "level": "debug"
        }
"""

import logging
import sys
from typing import Any

import structlog


def configure_logging(
    level: str = "INFO",
    json_output: bool = True,
) -> None:
    """Configure structured logging for the application.

    This should be called once at application startup.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, emit JSON logs; if False, use console format

    Examples:
        >>> configure_logging(level="DEBUG", json_output=False)
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    processors: list[object] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,  # type: ignore[arg-type]
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ from the calling module)

    Returns:
        A structlog logger instance
    """
    return structlog.get_logger(name)
