"""Header canonicalization and manipulation utilities for JA4H fingerprinting.

This module provides functions for:
- Canonicalizing request headers (ASCII lower-cased names, first-seen values)
- Converting header text to and from its wire bytes
- Selecting the headers counted by the fingerprint
- Trimming proxy entries from X-Forwarded-For
"""

import string
from collections.abc import Iterable, Mapping

# Headers whose names start with this prefix are never counted
COOKIE_PREFIX = "cookie"

# Header excluded from the count; reported through the referer flag instead
REFERER = "referer"

FORWARDED_FOR = "x-forwarded-for"

# Header values travel as UTF-8 text; undecodable bytes are kept as surrogates
WIRE_ENCODING = "utf-8"
WIRE_ERRORS = "surrogateescape"

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def ascii_lower(value: str) -> str:
    """Lower-case ASCII letters only, leaving every other character as is.

    Example:
        >>> ascii_lower("X-À-Id")
        'x-À-id'
    """
    return value.translate(_ASCII_LOWER)


def decode_wire(value: str | bytes) -> str:
    """Decode raw header bytes so that ``encode_wire`` restores them exactly."""
    if isinstance(value, bytes):
        return value.decode(WIRE_ENCODING, WIRE_ERRORS)
    return value


def encode_wire(value: str) -> bytes:
    """Encode header text back to the bytes it was decoded from."""
    return value.encode(WIRE_ENCODING, WIRE_ERRORS)


def canonicalize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Lower-case header names, keeping the first value seen for each name.

    Only ASCII letters are lower-cased, matching HTTP's case-insensitive
    token comparison.

    Args:
        headers: Raw headers mapping (any name case)

    Returns:
        Headers keyed by lower-cased name

    Example:
        >>> canonicalize_headers({"Host": "a", "HOST": "b", "Accept": "*/*"})
        {'host': 'a', 'accept': '*/*'}
    """
    canonical: dict[str, str] = {}
    for key, value in headers.items():
        key_lower = ascii_lower(key)
        if key_lower not in canonical:
            canonical[key_lower] = value
    return canonical


def build_ignored_lookup(ignored_headers: Iterable[str] | None) -> frozenset[str]:
    """Build a lower-cased lookup set of ignored header names.

    Example:
        >>> sorted(build_ignored_lookup(["X-Request-ID", "Via"]))
        ['via', 'x-request-id']
    """
    if not ignored_headers:
        return frozenset()
    return frozenset(ascii_lower(name) for name in ignored_headers)


def is_counted_header(name: str, ignored_lookup: frozenset[str]) -> bool:
    """Check whether a lower-cased header name counts toward the fingerprint.

    Cookie-prefixed headers, Referer and ignored headers are excluded.
    """
    return (
        not name.startswith(COOKIE_PREFIX)
        and name != REFERER
        and name not in ignored_lookup
    )


def counted_header_names(
    headers: Mapping[str, str],
    ignored_headers: Iterable[str] | None = None,
) -> list[str]:
    """Return the lower-cased names of the headers counted by the fingerprint.

    Names are de-duplicated case-insensitively and returned in first-seen
    order; callers sort them as needed.

    Args:
        headers: Request headers (any name case)
        ignored_headers: Header names to exclude (case-insensitive)

    Returns:
        Lower-cased names of the surviving headers

    Example:
        >>> counted_header_names(
        ...     {"Host": "x", "Cookie": "a=1", "Referer": "/", "X-Trace": "1"},
        ...     ["x-trace"],
        ... )
        ['host']
    """
    ignored_lookup = build_ignored_lookup(ignored_headers)
    return [
        name for name in canonicalize_headers(headers) if is_counted_header(name, ignored_lookup)
    ]


def trim_forwarded_for(value: str, count: int) -> str | None:
    """Remove the right-most ``count`` addresses from an X-Forwarded-For value.

    Reverse proxies in front of the application append their own view of
    the client address. Trimming them leaves the chain as the client side
    sent it.

    Args:
        value: Raw X-Forwarded-For header value
        count: Number of right-most entries to drop (0 keeps the value as is)

    Returns:
        The trimmed value, or None if no address remains

    Example:
        >>> trim_forwarded_for("203.0.113.7, 10.0.0.1, 10.0.0.2", 2)
        '203.0.113.7'
        >>> trim_forwarded_for("10.0.0.1", 1) is None
        True
    """
    if count <= 0:
        return value

    addresses = [part.strip() for part in value.split(",") if part.strip()]
    remaining = addresses[: max(len(addresses) - count, 0)]
    if not remaining:
        return None
    return ", ".join(remaining)
