"""Shared fixtures for the ASGI scenario tests."""

from collections.abc import Callable

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from ja4h_middleware.adapters.asgi import ASGIJA4HMiddleware
from ja4h_middleware.config import JA4HConfig


def build_app(config: JA4HConfig) -> FastAPI:
    """Create a FastAPI app that echoes what the middleware handed it."""
    test_app = FastAPI()
    test_app.add_middleware(ASGIJA4HMiddleware, config=config)

    @test_app.get("/echo")
    async def echo(request: Request):
        """Return the headers and state the application sees."""
        return {
            "headers": [
                [name.decode("latin-1"), value.decode("latin-1")]
                for name, value in request.headers.raw
            ],
            "state_fingerprint": getattr(request.state, "ja4h_fingerprint", None),
            "state_fingerprint_raw": getattr(request.state, "ja4h_fingerprint_raw", None),
        }

    @test_app.post("/echo")
    async def echo_post(request: Request):
        """POST variant of the echo endpoint."""
        return {"fingerprint": request.headers.get("x-ja4h-fingerprint")}

    return test_app


@pytest.fixture
def make_client() -> Callable[..., TestClient]:
    """Create a test client for an app configured with the given settings."""

    def factory(**settings: object) -> TestClient:
        return TestClient(build_app(JA4HConfig(**settings)))

    return factory


@pytest.fixture
def client(make_client: Callable[..., TestClient]) -> TestClient:
    """Create a test client with the default configuration."""
    return make_client()
