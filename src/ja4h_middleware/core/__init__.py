"""Core logic for JA4H fingerprinting.

This package contains:
- Components: extractors for the six leading fingerprint fields
- Cookies: Cookie header parsing into sorted names and pairs
- Digest: truncated SHA-256 with the empty-input sentinel
- Middleware: framework-agnostic per-request fingerprint handling

The middleware is framework-agnostic and can be wrapped by adapters
for different web frameworks (FastAPI, Starlette, etc.).
"""

from ja4h_middleware.core.cookies import parse_cookies
from ja4h_middleware.core.digest import EMPTY_HASH, truncated_sha256

__all__ = ["EMPTY_HASH", "parse_cookies", "truncated_sha256"]
