"""ASGI middleware adapter for FastAPI and Starlette applications.

The middleware:
1. Builds a request view from the raw ASGI header list and http_version
2. Computes the fingerprint once per request (reused via ``scope["state"]``)
3. Rewrites the request headers seen by the application: client-supplied
   fingerprint headers are dropped, the computed ones are added, and
   X-Forwarded-For is trimmed when configured
4. Optionally mirrors the fingerprint onto the response

Handlers can read the fingerprint from the injected header or from
``request.state.ja4h_fingerprint`` / ``request.state.ja4h_fingerprint_raw``.

Examples:
    FastAPI integration::

        from fastapi import FastAPI, Request
        from ja4h_middleware.adapters.asgi import ASGIJA4HMiddleware
        from ja4h_middleware.config import JA4HConfig

        app = FastAPI()
        app.add_middleware(
            ASGIJA4HMiddleware,
            config=JA4HConfig(include_raw=True, ignore_headers=["x-request-id"]),
        )

        @app.get("/whoami")
        async def whoami(request: Request):
            return {"ja4h": request.headers["x-ja4h-fingerprint"]}

    Starlette integration::

        from starlette.applications import Starlette
        from starlette.middleware import Middleware

        app = Starlette(middleware=[Middleware(ASGIJA4HMiddleware, config=config)])
"""

from collections.abc import Awaitable, Callable
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request as StarletteRequest
from starlette.responses import Response

from ja4h_middleware.config import JA4HConfig
from ja4h_middleware.core.middleware import JA4HMiddleware
from ja4h_middleware.models import FingerprintResult, HTTPVersion, RequestView
from ja4h_middleware.utils.headers import FORWARDED_FOR, decode_wire, encode_wire

RawHeaders = list[tuple[bytes, bytes]]


class ASGIJA4HMiddleware(BaseHTTPMiddleware):
    """ASGI middleware injecting the JA4H fingerprint into requests.

    Attributes:
        config: Configuration object
        middleware: Core middleware instance
    """

    def __init__(self, app: Any, config: JA4HConfig | None = None) -> None:
        """Initialize the ASGI middleware.

        Args:
            app: The ASGI application
            config: Configuration object (uses defaults if not provided)
        """
        super().__init__(app)
        self.config = config or JA4HConfig()
        self.middleware = JA4HMiddleware(self.config)

    async def dispatch(
        self,
        request: StarletteRequest,
        call_next: Callable[[StarletteRequest], Awaitable[Response]],
    ) -> Response:
        """Fingerprint the request, forward it, and decorate the response.

        Args:
            request: The Starlette request object
            call_next: Function to call the next middleware/handler

        Returns:
            Starlette Response object
        """
        view = self._convert_request(request)
        state = request.scope.setdefault("state", {})
        result = self.middleware.fingerprint(view, state)

        request.scope["headers"] = self._rewrite_headers(request.scope["headers"], result)

        response = await call_next(request)

        if result is not None:
            for name, value in self.middleware.response_headers(result).items():
                del response.headers[name]
                response.raw_headers.append(
                    (name.lower().encode("latin-1"), encode_wire(value))
                )

        return response

    def _convert_request(self, request: StarletteRequest) -> RequestView:
        """Convert a Starlette request to a fingerprint request view.

        Args:
            request: Starlette request object

        Returns:
            RequestView built from the raw header list (first-seen wins)
        """
        return RequestView.from_header_pairs(
            request.method,
            request.scope["headers"],
            HTTPVersion.from_asgi(request.scope.get("http_version")),
        )

    def _rewrite_headers(
        self,
        raw_headers: RawHeaders,
        result: FingerprintResult | None,
    ) -> RawHeaders:
        """Build the header list the application will see.

        Args:
            raw_headers: Original ASGI header list
            result: Computed fingerprint, or None if it could not be computed

        Returns:
            New ASGI header list
        """
        # Never let a client supply its own fingerprint headers
        owned = {
            self.config.header_name.lower().encode("latin-1"),
            self.config.raw_header_name.lower().encode("latin-1"),
        }
        trim_xff = self.config.trim_xff_header_count > 0
        xff = FORWARDED_FOR.encode("latin-1")

        headers: RawHeaders = []
        forwarded: list[str] = []
        for name, value in raw_headers:
            name_lower = name.lower()
            if name_lower in owned:
                continue
            if trim_xff and name_lower == xff:
                forwarded.append(decode_wire(value))
                continue
            headers.append((name, value))

        if forwarded:
            trimmed = self.middleware.forwarded_for(", ".join(forwarded))
            if trimmed is not None:
                headers.append((xff, encode_wire(trimmed)))

        if result is not None:
            for name, value in self.middleware.upstream_headers(result).items():
                headers.append((name.lower().encode("latin-1"), encode_wire(value)))

        return headers
