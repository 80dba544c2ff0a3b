"""Framework adapters for JA4H middleware.

This package provides adapters that integrate the framework-agnostic core
middleware with specific web frameworks:

- asgi.py: ASGI middleware for FastAPI, Starlette, etc.

The adapters convert framework-specific requests into the fingerprint's
request view and inject the result back into the request and response.
"""

from ja4h_middleware.adapters.asgi import ASGIJA4HMiddleware

__all__ = ["ASGIJA4HMiddleware"]
