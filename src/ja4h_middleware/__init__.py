"""
JA4H HTTP client fingerprinting middleware for Python web applications.

This package computes JA4H fingerprints from the method, protocol version,
headers and cookies of incoming HTTP requests, and injects them into the
request for downstream bot detection and anomaly scoring.
"""

from ja4h_middleware.config import JA4HConfig
from ja4h_middleware.exceptions import InvalidInputError, JA4HError
from ja4h_middleware.fingerprint import compute_fingerprint
from ja4h_middleware.models import (
    FingerprintOptions,
    FingerprintResult,
    HTTPVersion,
    RequestView,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "FingerprintOptions",
    "FingerprintResult",
    "HTTPVersion",
    "InvalidInputError",
    "JA4HConfig",
    "JA4HError",
    "RequestView",
    "compute_fingerprint",
]
