"""JA4H request fingerprinting.

This module assembles the JA4H fingerprint of an HTTP request from its
method, protocol version, headers and cookies. No TLS data is involved.

The fingerprint has two forms computed from the same snapshot:

    compact: ge11cr7enus_<hash(headers)>_<hash(cookie names)>_<hash(cookie pairs)>
    raw:     ge_11_c_r_7_enus_<headers>_<cookie names>_<cookie pairs>

The six leading fields are concatenated without separators in the compact
form. The three variable lists are sorted, comma-joined and
replaced by 12-character truncated SHA-256 digests in the compact form.
"""

from collections.abc import Mapping

from ja4h_middleware.core.components import (
    cookie_flag,
    header_count_code,
    lang_prefix,
    method_code,
    referer_flag,
    resolve_http_version,
    version_code,
)
from ja4h_middleware.core.cookies import parse_cookies
from ja4h_middleware.core.digest import truncated_sha256
from ja4h_middleware.exceptions import InvalidInputError
from ja4h_middleware.models import (
    FingerprintComponents,
    FingerprintOptions,
    FingerprintResult,
    HTTPVersion,
    RequestView,
)
from ja4h_middleware.utils.headers import (
    ascii_lower,
    canonicalize_headers,
    counted_header_names,
)


def compute_fingerprint(
    request: RequestView,
    options: FingerprintOptions | None = None,
) -> FingerprintResult:
    """Compute the JA4H fingerprint of a request.

    Args:
        request: Read-only view of the request
        options: Ignored headers and protocol version override settings.
                 Defaults to no ignored headers and no override.

    Returns:
        FingerprintResult with the compact and raw forms

    Raises:
        InvalidInputError: If the request view is malformed

    Examples:
        >>> view = RequestView(
        ...     method="GET",
        ...     headers={"Host": "x", "Accept-Language": "en-US", "Cookie": "id=1"},
        ... )
        >>> compute_fingerprint(view).raw
        'ge_11_c_n_2_enus_accept-language,host_id_id=1'
    """
    components = extract_components(request, options)
    return assemble(components)


def extract_components(
    request: RequestView,
    options: FingerprintOptions | None = None,
) -> FingerprintComponents:
    """Extract all nine fingerprint fields from one canonical header snapshot.

    Args:
        request: Read-only view of the request
        options: Fingerprint options (defaults used if None)

    Returns:
        The extracted components

    Raises:
        InvalidInputError: If the request view is malformed
    """
    if options is None:
        options = FingerprintOptions()

    _validate_request(request)

    headers = canonicalize_headers(request.headers)
    counted_names = counted_header_names(headers, options.ignored_headers)

    override_value = None
    if options.protocol_version_header is not None:
        override_value = headers.get(ascii_lower(options.protocol_version_header))
    version = resolve_http_version(override_value, request.protocol_version)

    cookie_names, cookie_pairs = parse_cookies(headers.get("cookie"))

    return FingerprintComponents(
        method_code=method_code(request.method),
        version_code=version_code(version),
        cookie_flag=cookie_flag(headers),
        referer_flag=referer_flag(headers),
        header_count_code=header_count_code(len(counted_names)),
        lang_prefix=lang_prefix(headers.get("accept-language")),
        header_names=",".join(sorted(counted_names)),
        cookie_names=cookie_names,
        cookie_pairs=cookie_pairs,
    )


def assemble(components: FingerprintComponents) -> FingerprintResult:
    """Build the compact and raw fingerprint strings from components.

    Args:
        components: Extracted fingerprint fields

    Returns:
        FingerprintResult with both forms
    """
    prefix = components.prefix_fields
    variable = (components.header_names, components.cookie_names, components.cookie_pairs)

    compact = "_".join(["".join(prefix), *(truncated_sha256(part) for part in variable)])
    raw = "_".join([*prefix, *variable])

    return FingerprintResult(compact=compact, raw=raw)


def _validate_request(request: RequestView) -> None:
    """Check the request view before any field is extracted.

    Args:
        request: Request view to check

    Raises:
        InvalidInputError: On the first malformed field found
    """
    if not isinstance(request.method, str):
        raise InvalidInputError(
            f"Request method must be a string, got {type(request.method).__name__}",
            field="method",
        )

    if not isinstance(request.headers, Mapping):
        raise InvalidInputError(
            f"Request headers must be a mapping, got {type(request.headers).__name__}",
            field="headers",
        )

    for name, value in request.headers.items():
        if not isinstance(name, str) or not isinstance(value, str):
            raise InvalidInputError(
                f"Header names and values must be strings, got {name!r}: {value!r}",
                field="headers",
            )

    if request.protocol_version is not None and not isinstance(
        request.protocol_version, HTTPVersion
    ):
        raise InvalidInputError(
            f"Protocol version must be an HTTPVersion, got {request.protocol_version!r}",
            field="protocol_version",
        )
