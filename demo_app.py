"""Demo FastAPI application with JA4H fingerprinting middleware.

This application echoes the fingerprint the middleware injected.
Run with: python demo_app.py
Then test with: curl -H 'Accept-Language: en-US' -b 'session=abc' http://localhost:8000/whoami
"""

import uvicorn
from fastapi import FastAPI, Header, Request
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from ja4h_middleware.adapters.asgi import ASGIJA4HMiddleware
from ja4h_middleware.config import JA4HConfig
from ja4h_middleware.observability.logging import configure_logging

configure_logging(level="DEBUG", json_output=False)

# Create FastAPI app
app = FastAPI(
    title="JA4H Middleware Demo",
    description="Demo API showing JA4H request fingerprinting",
    version="0.1.0",
)

config = JA4HConfig(
    include_raw=True,
    response_debug_headers=True,
    ignore_headers=["x-request-id"],
    trim_xff_header_count=1,  # one load balancer in front of the demo
)

app.add_middleware(ASGIJA4HMiddleware, config=config)


@app.get("/")
async def root():
    """Root endpoint - returns API info."""
    return {
        "name": "JA4H Middleware Demo",
        "version": "0.1.0",
        "endpoints": {
            "GET /whoami": "Echo the fingerprint computed for this request",
            "GET /metrics": "Prometheus metrics",
        },
    }


@app.get("/whoami")
async def whoami(
    request: Request,
    fingerprint: str | None = Header(None, alias="X-JA4H-Fingerprint"),
    fingerprint_raw: str | None = Header(None, alias="X-JA4H-Fingerprint-Raw"),
    forwarded_for: str | None = Header(None, alias="X-Forwarded-For"),
):
    """Echo the injected fingerprint headers and the request state copy."""
    return {
        "ja4h": fingerprint,
        "ja4h_raw": fingerprint_raw,
        "state": getattr(request.state, "ja4h_fingerprint", None),
        "x_forwarded_for": forwarded_for,
    }


@app.get("/metrics")
async def metrics():
    """Expose Prometheus metrics."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


if __name__ == "__main__":
    print("=" * 60)
    print("JA4H Middleware Demo Server")
    print("=" * 60)
    print("\nStarting server at http://localhost:8000")
    print("\nTry these commands:")
    print("  curl http://localhost:8000/whoami")
    print("  curl -H 'Accept-Language: en-US' -b 'session=abc' http://localhost:8000/whoami")
    print("\nPress Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
