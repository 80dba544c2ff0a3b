"""
Pytest configuration and shared fixtures for ja4h_middleware tests.
"""

import pytest

from ja4h_middleware.models import FingerprintOptions, HTTPVersion, RequestView


@pytest.fixture
def browser_headers() -> dict[str, str]:
    """Provide headers resembling a desktop browser request."""
    return {
        "Host": "example.com",
        "User-Agent": "Mozilla/5.0 (X11; Linux x86_64; rv:128.0) Gecko/20100101 Firefox/128.0",
        "Accept": "text/html,application/xhtml+xml",
        "Accept-Language": "en-US,en;q=0.5",
        "Accept-Encoding": "gzip, deflate, br",
        "Referer": "https://example.com/",
        "Cookie": "session=abc; theme=dark",
    }


@pytest.fixture
def browser_request(browser_headers: dict[str, str]) -> RequestView:
    """Provide a GET request view with browser headers over HTTP/2."""
    return RequestView(method="GET", headers=browser_headers, protocol_version=HTTPVersion.HTTP_2)


@pytest.fixture
def default_options() -> FingerprintOptions:
    """Provide options with no ignored headers and no version override."""
    return FingerprintOptions()
