"""Observability utilities for JA4H middleware.

This package provides:
- Prometheus metrics for fingerprint computation and reuse
- Structured logging with contextual information
"""

from ja4h_middleware.observability.logging import configure_logging, get_logger
from ja4h_middleware.observability.metrics import record_fingerprint

__all__ = [
    "configure_logging",
    "get_logger",
    "record_fingerprint",
]
