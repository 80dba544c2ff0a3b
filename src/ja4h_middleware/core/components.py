"""Extractors for the six leading JA4H fingerprint fields.

Every function here is pure. Functions taking ``headers`` expect the
canonical form produced by ``canonicalize_headers`` (lower-cased names).

The six leading fields, in fingerprint order:

    method_code | version_code | cookie_flag | referer_flag | header_count_code | lang_prefix
        "ge"    |     "11"     |    "c"      |     "n"      |        "7"        |   "enus"
"""

import re
from collections.abc import Mapping

from ja4h_middleware.models import HTTPVersion
from ja4h_middleware.utils.headers import ascii_lower

MAX_HEADER_COUNT = 99

DEFAULT_LANG = "0000"
LANG_PREFIX_LENGTH = 4

_NON_ALPHANUMERIC = re.compile(r"[^0-9A-Za-z]")

# Checked in order; first match wins
_VERSION_MARKERS: list[tuple[str, str, HTTPVersion]] = [
    ("HTTP/3", "3.0", HTTPVersion.HTTP_3),
    ("HTTP/2", "2.0", HTTPVersion.HTTP_2),
    ("HTTP/1.1", "1.1", HTTPVersion.HTTP_1_1),
    ("HTTP/1.0", "1.0", HTTPVersion.HTTP_1_0),
]

_VERSION_CODES = {
    HTTPVersion.HTTP_3: "30",
    HTTPVersion.HTTP_2: "20",
    HTTPVersion.HTTP_1_1: "11",
}


def method_code(method: str) -> str:
    """First two characters of the lower-cased HTTP method.

    Methods shorter than two characters give a shorter code.

    Example:
        >>> method_code("OPTIONS")
        'op'
    """
    return ascii_lower(method)[:2]


def parse_http_version(value: str) -> HTTPVersion:
    """Parse a protocol version override header value.

    Matching is case-insensitive. ``HTTP/x`` may appear anywhere in the
    value; the bare ``x.y`` form must start the value. Anything else is
    treated as HTTP/1.0.

    Args:
        value: Raw header value, e.g. "HTTP/2.0", "h2" or "1.1"

    Returns:
        The parsed version

    Example:
        >>> parse_http_version("http/2")
        <HTTPVersion.HTTP_2: '2.0'>
        >>> parse_http_version("h2c")
        <HTTPVersion.HTTP_1_0: '1.0'>
    """
    version_str = value.upper()
    for marker, prefix, version in _VERSION_MARKERS:
        if marker in version_str or version_str.startswith(prefix):
            return version
    return HTTPVersion.HTTP_1_0


def resolve_http_version(
    override_value: str | None,
    detected: HTTPVersion | None,
) -> HTTPVersion | None:
    """Pick the protocol version used for the fingerprint.

    An override value, when present, always wins over the detected version.

    Args:
        override_value: Value of the override header, or None if the header
            is not configured or not sent
        detected: Version detected by the transport

    Returns:
        The resolved version (None only when nothing was detected)
    """
    if override_value is not None:
        return parse_http_version(override_value)
    return detected


def version_code(version: HTTPVersion | None) -> str:
    """Two-character code for a protocol version.

    HTTP/1.0 and unknown versions both map to "10".

    Example:
        >>> version_code(HTTPVersion.HTTP_1_1)
        '11'
        >>> version_code(None)
        '10'
    """
    if version is None:
        return "10"
    return _VERSION_CODES.get(version, "10")


def cookie_flag(headers: Mapping[str, str]) -> str:
    """'c' if a Cookie header is present (even if empty), else 'n'."""
    return "c" if "cookie" in headers else "n"


def referer_flag(headers: Mapping[str, str]) -> str:
    """'r' if a Referer header is present (even if empty), else 'n'."""
    return "r" if "referer" in headers else "n"


def header_count_code(count: int) -> str:
    """Decimal header count, capped at 99, without padding.

    Example:
        >>> header_count_code(5)
        '5'
        >>> header_count_code(150)
        '99'
    """
    return str(min(count, MAX_HEADER_COUNT))


def lang_prefix(accept_language: str | None) -> str:
    """Four-character prefix of the Accept-Language header.

    Non-alphanumeric characters are stripped and the result lower-cased.
    Short values are left-padded with '0'; an absent header gives "0000".

    Args:
        accept_language: Raw Accept-Language value, or None if absent

    Returns:
        Four-character language code

    Example:
        >>> lang_prefix("en-US,en;q=0.9")
        'enus'
        >>> lang_prefix("a")
        '000a'
    """
    if accept_language is None:
        return DEFAULT_LANG

    cleaned = _NON_ALPHANUMERIC.sub("", accept_language).lower()[:LANG_PREFIX_LENGTH]
    return cleaned.rjust(LANG_PREFIX_LENGTH, "0")
