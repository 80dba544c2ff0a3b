"""Core type definitions for the JA4H fingerprint.

This module provides the data structures that flow through the fingerprint
pipeline: the read-only request view handed in by the caller, the immutable
options, the extracted components, and the final pair of fingerprint strings.

Examples:
    Building a request view and computing a fingerprint::

        from ja4h_middleware.fingerprint import compute_fingerprint
        from ja4h_middleware.models import (
            FingerprintOptions,
            HTTPVersion,
            RequestView,
        )

        view = RequestView(
            method="GET",
            headers={"Host": "example.com", "Accept-Language": "en-US"},
            protocol_version=HTTPVersion.HTTP_1_1,
        )
        result = compute_fingerprint(view, FingerprintOptions())
        result.compact  # 'ge11nn2enus_..._000000000000_000000000000'

    Building a view from a raw header list with duplicates::

        view = RequestView.from_header_pairs(
            "POST",
            [(b"host", b"a"), (b"Host", b"b")],
            HTTPVersion.HTTP_2,
        )
        view.headers  # {'host': 'a'}  (first-seen wins)
"""

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from ja4h_middleware.utils.headers import ascii_lower, decode_wire


class HTTPVersion(str, Enum):
    """HTTP protocol version detected for a request.

    Attributes:
        HTTP_1_0: HTTP/1.0
        HTTP_1_1: HTTP/1.1
        HTTP_2: HTTP/2
        HTTP_3: HTTP/3
    """

    HTTP_1_0 = "1.0"
    HTTP_1_1 = "1.1"
    HTTP_2 = "2.0"
    HTTP_3 = "3.0"

    @classmethod
    def from_asgi(cls, value: str | None) -> "HTTPVersion | None":
        """Map an ASGI ``http_version`` scope value to a version.

        ASGI servers report ``"1.0"``, ``"1.1"`` or ``"2"``; some HTTP/3
        capable servers report ``"3"``. Unknown values map to ``None``.

        Args:
            value: The ``http_version`` entry of an ASGI scope.

        Returns:
            The matching version, or None if the value is not recognized.

        Example:
            >>> HTTPVersion.from_asgi("2")
            <HTTPVersion.HTTP_2: '2.0'>
        """
        if value is None:
            return None
        return _ASGI_VERSIONS.get(value.strip())


_ASGI_VERSIONS = {
    "1.0": HTTPVersion.HTTP_1_0,
    "1.1": HTTPVersion.HTTP_1_1,
    "2": HTTPVersion.HTTP_2,
    "2.0": HTTPVersion.HTTP_2,
    "3": HTTPVersion.HTTP_3,
    "3.0": HTTPVersion.HTTP_3,
}


class RequestView:
    """Read-only view of the request parts the fingerprint depends on.

    Header names keep their original case; all matching done by the core is
    case-insensitive. When two names differ only in case, the first one in
    iteration order wins.

    The view is deliberately not validated at construction: the fingerprint
    core checks it and raises ``InvalidInputError`` for malformed input.

    Attributes:
        method: HTTP method (GET, POST, etc.)
        headers: Request headers as a mapping of name to value
        protocol_version: Version detected by the transport, or None
    """

    def __init__(
        self,
        method: str,
        headers: Mapping[str, str],
        protocol_version: HTTPVersion | None = HTTPVersion.HTTP_1_1,
    ) -> None:
        """Initialize a request view.

        Args:
            method: HTTP method
            headers: Request headers
            protocol_version: Detected protocol version
        """
        self.method = method
        self.headers = headers
        self.protocol_version = protocol_version

    @classmethod
    def from_header_pairs(
        cls,
        method: str,
        pairs: Iterable[tuple[str | bytes, str | bytes]],
        protocol_version: HTTPVersion | None = HTTPVersion.HTTP_1_1,
    ) -> "RequestView":
        """Build a view from a raw header list that may repeat names.

        Only the first occurrence of each (case-insensitive) name is kept.
        Byte strings, as found in ASGI scopes, are decoded as UTF-8 with
        undecodable bytes kept as surrogate escapes, so digests are taken
        over the exact bytes received.

        Args:
            method: HTTP method
            pairs: Sequence of (name, value) tuples in wire order
            protocol_version: Detected protocol version

        Returns:
            A RequestView whose headers are keyed by lower-cased name.

        Example:
            >>> view = RequestView.from_header_pairs(
            ...     "GET", [("Cookie", "a=1"), ("cookie", "b=2")]
            ... )
            >>> view.headers
            {'cookie': 'a=1'}
        """
        headers: dict[str, str] = {}
        for name, value in pairs:
            name_lower = ascii_lower(decode_wire(name))
            if name_lower not in headers:
                headers[name_lower] = decode_wire(value)
        return cls(method=method, headers=headers, protocol_version=protocol_version)

    def __repr__(self) -> str:
        return (
            f"RequestView(method={self.method!r}, headers={len(self.headers)} items, "
            f"protocol_version={self.protocol_version!r})"
        )


class FingerprintOptions(BaseModel):
    """Immutable options for one fingerprint computation.

    Attributes:
        ignored_headers: Header names excluded from the header count and
            header name list. Stored lower-cased.
        protocol_version_header: Name of a request header whose value
            overrides the detected protocol version, or None.

    Example:
        >>> options = FingerprintOptions(ignored_headers={"X-Request-ID"})
        >>> options.ignored_headers
        frozenset({'x-request-id'})
    """

    ignored_headers: frozenset[str] = Field(
        default=frozenset(),
        description="Header names excluded from the header count and name list",
    )
    protocol_version_header: str | None = Field(
        default=None,
        description="Request header carrying an HTTP version override",
    )

    model_config = {"frozen": True}

    @field_validator("ignored_headers", mode="before")
    @classmethod
    def lowercase_ignored_headers(cls, v: Any) -> frozenset[str]:
        """Normalize ignored header names to a lower-cased frozenset."""
        if v is None:
            return frozenset()
        if isinstance(v, str):
            raise ValueError("ignored_headers must be a collection of header names")
        return frozenset(ascii_lower(str(name).strip()) for name in v)

    @field_validator("protocol_version_header")
    @classmethod
    def blank_version_header_is_none(cls, v: str | None) -> str | None:
        """Treat a blank override header name as not configured."""
        if v is None or not v.strip():
            return None
        return v.strip()


class FingerprintComponents(BaseModel):
    """The nine fields a JA4H fingerprint is assembled from.

    The first six are short codes. The last three are the
    sorted, comma-joined lists that are hashed in the compact form and kept
    literally in the raw form.

    Attributes:
        method_code: First two characters of the lower-cased method.
        version_code: Two-digit protocol version code ("10", "11", "20", "30").
        cookie_flag: "c" if a Cookie header is present, else "n".
        referer_flag: "r" if a Referer header is present, else "n".
        header_count_code: Number of counted headers, capped at 99.
        lang_prefix: Four-character Accept-Language prefix.
        header_names: Sorted, comma-joined counted header names.
        cookie_names: Sorted, comma-joined cookie names.
        cookie_pairs: Sorted, comma-joined cookie name=value pairs.
    """

    method_code: str
    version_code: str
    cookie_flag: str
    referer_flag: str
    header_count_code: str
    lang_prefix: str
    header_names: str
    cookie_names: str
    cookie_pairs: str

    model_config = {"frozen": True}

    @property
    def prefix_fields(self) -> tuple[str, str, str, str, str, str]:
        """The six leading fields, in fingerprint order."""
        return (
            self.method_code,
            self.version_code,
            self.cookie_flag,
            self.referer_flag,
            self.header_count_code,
            self.lang_prefix,
        )


class FingerprintResult(BaseModel):
    """A computed JA4H fingerprint in compact and raw form.

    Attributes:
        compact: Fingerprint with the variable lists replaced by digests.
        raw: Human-readable fingerprint with the literal lists.

    Example:
        >>> result.as_headers("X-JA4H-Fingerprint", include_raw=True)
        {'X-JA4H-Fingerprint': 'ge11...', 'X-JA4H-Fingerprint-Raw': 'ge_11_...'}
    """

    compact: str
    raw: str

    model_config = {"frozen": True}

    def as_headers(self, header_name: str, include_raw: bool = False) -> dict[str, str]:
        """Render the fingerprint as headers to inject.

        Args:
            header_name: Name of the compact fingerprint header.
            include_raw: Also emit the raw form under ``<header_name>-Raw``.

        Returns:
            Mapping of header name to value.
        """
        headers = {header_name: self.compact}
        if include_raw:
            headers[f"{header_name}-Raw"] = self.raw
        return headers
