"""Truncated SHA-256 digests for the JA4H fingerprint.

The digests compact the variable-length header and cookie lists. They are
not meant to resist collisions on adversarial input.
"""

import hashlib

from ja4h_middleware.utils.headers import encode_wire

DIGEST_LENGTH = 12

# Returned for empty input instead of hashing it
EMPTY_HASH = "0" * DIGEST_LENGTH


def truncated_sha256(value: str | bytes) -> str:
    """Return the first 12 lowercase hex characters of SHA-256(value).

    Empty input short-circuits to ``EMPTY_HASH``. Strings are encoded back
    to their wire bytes (UTF-8, with surrogate-escaped bytes restored), so
    the digest covers exactly the bytes the client sent. A fresh hash
    object is created on every call.

    Args:
        value: Data to hash

    Returns:
        12-character lowercase hex string

    Example:
        >>> truncated_sha256("")
        '000000000000'
        >>> len(truncated_sha256("host"))
        12
    """
    if not value:
        return EMPTY_HASH

    data = encode_wire(value) if isinstance(value, str) else value
    return hashlib.sha256(data).hexdigest()[:DIGEST_LENGTH]
