"""Utility modules for JA4H middleware."""

from .headers import (
    canonicalize_headers,
    counted_header_names,
    trim_forwarded_for,
)

__all__ = [
    "canonicalize_headers",
    "counted_header_names",
    "trim_forwarded_for",
]
