"""Comprehensive tests for JA4H request fingerprinting.

Tests cover all aspects of the fingerprinting algorithm including:
- Known fingerprints for realistic requests
- Compact and raw layout
- Header count capping and header exclusion rules
- Cookie absence and empty header sets
- Protocol version override
- Header order and case independence
- Duplicate header policy (first-seen wins)
- Digests over the exact bytes received
- Invalid request views
"""

import re

import pytest

from ja4h_middleware.core.digest import EMPTY_HASH
from ja4h_middleware.exceptions import InvalidInputError
from ja4h_middleware.fingerprint import assemble, compute_fingerprint, extract_components
from ja4h_middleware.models import (
    FingerprintComponents,
    FingerprintOptions,
    HTTPVersion,
    RequestView,
)

COMPACT_PATTERN = re.compile(r"^[a-z]{2}\d{2}[cn][rn]\d{1,2}[a-z0-9]{4}(_[0-9a-f]{12}){3}$")


class TestKnownFingerprints:
    """Fingerprints checked against independently computed digests."""

    def test_browser_request(self, browser_request: RequestView) -> None:
        """A typical browser request over HTTP/2."""
        result = compute_fingerprint(browser_request)

        assert result.compact == "ge20cr5enus_de2c6dbe475e_6263fd0189b4_0c1a39992693"
        assert result.raw == (
            "ge_20_c_r_5_enus_"
            "accept,accept-encoding,accept-language,host,user-agent_"
            "session,theme_"
            "session=abc,theme=dark"
        )

    def test_minimal_request_with_cookie(self) -> None:
        """GET over HTTP/1.1 with accept-language, host and one cookie.

        Accept-Language is counted; only cookie and referer are excluded.
        """
        view = RequestView(
            method="GET",
            headers={"accept-language": "en-US", "host": "x", "cookie": "id=1"},
            protocol_version=HTTPVersion.HTTP_1_1,
        )

        result = compute_fingerprint(view, FingerprintOptions())

        assert result.compact == "ge11cn2enus_17621c9d8320_a56145270ce6_d9fc91d45c09"
        assert result.raw == "ge_11_c_n_2_enus_accept-language,host_id_id=1"

    def test_request_without_cookie(self) -> None:
        """Both cookie digests are the sentinel and the raw form ends with '__'."""
        view = RequestView(method="GET", headers={"Host": "x"})

        result = compute_fingerprint(view)

        assert result.compact == f"ge11nn10000_4740ae6347b0_{EMPTY_HASH}_{EMPTY_HASH}"
        assert result.raw == "ge_11_n_n_1_0000_host__"
        assert result.raw.endswith("__")

    def test_request_without_headers(self) -> None:
        """All three digests are the sentinel when nothing is counted."""
        view = RequestView(method="POST", headers={}, protocol_version=HTTPVersion.HTTP_1_0)

        result = compute_fingerprint(view)

        assert result.compact == f"po10nn00000_{EMPTY_HASH}_{EMPTY_HASH}_{EMPTY_HASH}"
        assert result.raw == "po_10_n_n_0_0000___"

    def test_empty_cookie_header(self) -> None:
        """An empty Cookie header sets the flag but yields no cookies."""
        view = RequestView(method="GET", headers={"Host": "x", "Cookie": ""})

        result = compute_fingerprint(view)

        assert result.compact == f"ge11cn10000_4740ae6347b0_{EMPTY_HASH}_{EMPTY_HASH}"
        assert result.raw == "ge_11_c_n_1_0000_host__"


class TestLayout:
    """Tests for the compact and raw string layout."""

    def test_compact_shape(self, browser_request: RequestView) -> None:
        assert COMPACT_PATTERN.match(compute_fingerprint(browser_request).compact)

    def test_compact_has_three_digest_segments(self, browser_request: RequestView) -> None:
        prefix, *digests = compute_fingerprint(browser_request).compact.split("_")

        assert prefix == "ge20cr5enus"
        assert len(digests) == 3
        assert all(len(d) == 12 for d in digests)

    def test_raw_has_nine_fields(self, browser_request: RequestView) -> None:
        """Header names never contain '_' here, so splitting is safe."""
        fields = compute_fingerprint(browser_request).raw.split("_")

        assert fields[:6] == ["ge", "20", "c", "r", "5", "enus"]
        assert len(fields) == 9

    def test_compact_and_raw_share_prefix_fields(self, browser_request: RequestView) -> None:
        result = compute_fingerprint(browser_request)

        assert result.compact.split("_")[0] == "".join(result.raw.split("_")[:6])

    def test_assemble_from_components(self) -> None:
        components = FingerprintComponents(
            method_code="ge",
            version_code="11",
            cookie_flag="c",
            referer_flag="n",
            header_count_code="1",
            lang_prefix="0000",
            header_names="host",
            cookie_names="id",
            cookie_pairs="id=1",
        )

        result = assemble(components)

        assert result.compact == "ge11cn10000_4740ae6347b0_a56145270ce6_d9fc91d45c09"
        assert result.raw == "ge_11_c_n_1_0000_host_id_id=1"


class TestHeaderCount:
    """Tests for header counting rules."""

    def test_cap_at_99(self) -> None:
        headers = {f"X-Header-{i}": "v" for i in range(150)}
        view = RequestView(method="GET", headers=headers)

        components = extract_components(view)
        result = compute_fingerprint(view)

        assert components.header_count_code == "99"
        assert result.compact.startswith("ge11nn990000_")
        # The name list still contains every counted header
        assert len(components.header_names.split(",")) == 150

    def test_exactly_five(self) -> None:
        headers = {f"X-Header-{i}": "v" for i in range(5)}

        components = extract_components(RequestView(method="GET", headers=headers))

        assert components.header_count_code == "5"

    def test_ignored_headers_are_excluded(self, browser_request: RequestView) -> None:
        options = FingerprintOptions(ignored_headers={"User-Agent"})

        result = compute_fingerprint(browser_request, options)

        assert result.raw.startswith(
            "ge_20_c_r_4_enus_accept,accept-encoding,accept-language,host_"
        )
        assert result.compact.startswith("ge20cr4enus_a6592aaf3d22_")

    def test_cookie_prefixed_headers_are_excluded(self) -> None:
        view = RequestView(method="GET", headers={"Host": "x", "Cookie2": "$Version=1"})

        components = extract_components(view)

        assert components.header_count_code == "1"
        assert components.header_names == "host"
        assert components.cookie_flag == "n"

    def test_referer_is_excluded_but_flagged(self) -> None:
        view = RequestView(method="GET", headers={"Host": "x", "Referer": "/"})

        components = extract_components(view)

        assert components.header_count_code == "1"
        assert components.referer_flag == "r"


class TestProtocolVersion:
    """Tests for protocol version resolution."""

    def test_override_header_mixed_case_value(self) -> None:
        options = FingerprintOptions(protocol_version_header="X-HTTP-Version")
        view = RequestView(
            method="GET",
            headers={"x-http-version": "http/2"},
            protocol_version=HTTPVersion.HTTP_1_1,
        )

        assert extract_components(view, options).version_code == "20"

    def test_override_header_name_is_case_insensitive(self) -> None:
        options = FingerprintOptions(protocol_version_header="x-http-version")
        view = RequestView(method="GET", headers={"X-HTTP-VERSION": "HTTP/3"})

        assert extract_components(view, options).version_code == "30"

    def test_override_configured_but_absent_uses_detected(self) -> None:
        options = FingerprintOptions(protocol_version_header="X-HTTP-Version")
        view = RequestView(method="GET", headers={}, protocol_version=HTTPVersion.HTTP_2)

        assert extract_components(view, options).version_code == "20"

    def test_override_header_not_configured_is_ignored(self) -> None:
        view = RequestView(
            method="GET",
            headers={"X-HTTP-Version": "HTTP/2"},
            protocol_version=HTTPVersion.HTTP_1_1,
        )

        assert extract_components(view).version_code == "11"

    def test_override_header_is_still_counted(self) -> None:
        """The override header is a normal header unless ignored."""
        options = FingerprintOptions(protocol_version_header="X-HTTP-Version")
        view = RequestView(method="GET", headers={"X-HTTP-Version": "1.1", "Host": "x"})

        assert extract_components(view, options).header_names == "host,x-http-version"

    def test_unknown_detected_version(self) -> None:
        view = RequestView(method="GET", headers={}, protocol_version=None)

        assert extract_components(view).version_code == "10"


class TestOrderAndCaseIndependence:
    """Tests for header order and case independence."""

    def test_header_order_does_not_matter(self, browser_headers: dict[str, str]) -> None:
        forward = RequestView(method="GET", headers=browser_headers)
        backward = RequestView(method="GET", headers=dict(reversed(browser_headers.items())))

        assert compute_fingerprint(forward) == compute_fingerprint(backward)

    def test_header_name_case_does_not_matter(self, browser_headers: dict[str, str]) -> None:
        lower = RequestView(method="GET", headers={k.lower(): v for k, v in browser_headers.items()})
        upper = RequestView(method="GET", headers={k.upper(): v for k, v in browser_headers.items()})

        assert compute_fingerprint(lower) == compute_fingerprint(upper)

    def test_cookie_order_does_not_matter(self) -> None:
        first = RequestView(method="GET", headers={"Cookie": "a=1; b=2; c=3"})
        second = RequestView(method="GET", headers={"Cookie": "c=3; a=1; b=2"})

        assert compute_fingerprint(first) == compute_fingerprint(second)

    def test_method_case_does_not_matter(self) -> None:
        assert compute_fingerprint(RequestView(method="get", headers={})) == compute_fingerprint(
            RequestView(method="GET", headers={})
        )

    def test_deterministic(self, browser_request: RequestView) -> None:
        options = FingerprintOptions(ignored_headers={"accept"})

        assert compute_fingerprint(browser_request, options) == compute_fingerprint(
            browser_request, options
        )


class TestDuplicateHeaders:
    """Tests for the first-seen duplicate header policy."""

    def test_first_cookie_header_wins(self) -> None:
        view = RequestView.from_header_pairs(
            "GET",
            [(b"cookie", b"a=1"), (b"host", b"x"), (b"Cookie", b"b=2")],
        )

        components = extract_components(view)

        assert components.cookie_names == "a"
        assert components.cookie_pairs == "a=1"
        assert components.header_count_code == "1"

    def test_first_case_variant_wins_in_mapping(self) -> None:
        view = RequestView(
            method="GET",
            headers={"Accept-Language": "fr-FR", "accept-language": "en-US"},
        )

        assert extract_components(view).lang_prefix == "frfr"


class TestWireBytes:
    """Tests that digests cover the bytes the client actually sent."""

    def test_utf8_cookie_value(self) -> None:
        view = RequestView.from_header_pairs(
            "GET",
            [(b"host", b"x"), (b"cookie", "n=\u00e9".encode())],
        )

        result = compute_fingerprint(view)

        assert result.compact == "ge11cn10000_4740ae6347b0_1b16b1df538b_733220a1f57a"

    def test_non_utf8_cookie_value(self) -> None:
        view = RequestView.from_header_pairs(
            "GET",
            [(b"host", b"x"), (b"cookie", b"n=\xe9")],
        )

        result = compute_fingerprint(view)

        assert result.compact.endswith("_1b16b1df538b_8842c1dcd50d")

    def test_bytes_and_text_agree(self) -> None:
        """A view built from UTF-8 bytes matches the same text given directly."""
        from_bytes = RequestView.from_header_pairs("GET", [(b"cookie", "n=\u20ac".encode())])
        from_text = RequestView(method="GET", headers={"Cookie": "n=\u20ac"})

        assert compute_fingerprint(from_bytes) == compute_fingerprint(from_text)
        assert compute_fingerprint(from_text).compact.endswith("_9e9c555d41f6")


class TestInvalidInput:
    """Tests for malformed request views."""

    def test_none_method(self) -> None:
        view = RequestView(method=None, headers={})  # type: ignore[arg-type]

        with pytest.raises(InvalidInputError) as exc_info:
            compute_fingerprint(view)

        assert exc_info.value.field == "method"

    def test_headers_not_a_mapping(self) -> None:
        view = RequestView(method="GET", headers=[("Host", "x")])  # type: ignore[arg-type]

        with pytest.raises(InvalidInputError) as exc_info:
            compute_fingerprint(view)

        assert exc_info.value.field == "headers"

    def test_header_value_none(self) -> None:
        view = RequestView(method="GET", headers={"Host": None})  # type: ignore[dict-item]

        with pytest.raises(InvalidInputError) as exc_info:
            compute_fingerprint(view)

        assert exc_info.value.field == "headers"

    def test_protocol_version_string(self) -> None:
        view = RequestView(method="GET", headers={}, protocol_version="1.1")  # type: ignore[arg-type]

        with pytest.raises(InvalidInputError) as exc_info:
            compute_fingerprint(view)

        assert exc_info.value.field == "protocol_version"

    def test_short_method_is_valid(self) -> None:
        """A one-character method is an accepted edge case."""
        result = compute_fingerprint(RequestView(method="X", headers={}))

        assert result.raw.startswith("x_11_")
