"""Framework-agnostic core middleware for JA4H fingerprinting.

This module wires the fingerprint core into a request lifecycle. It is
framework-agnostic and can be wrapped by adapters for different web
frameworks.

The middleware:
1. Reuses a fingerprint already stored in the per-request state, if any
2. Otherwise computes the fingerprint once and stores it in that state
3. Builds the headers to inject upstream and, optionally, on the response
4. Trims trusted proxy entries from X-Forwarded-For

The per-request state is any mutable mapping that lives exactly as long as
the request, such as the ASGI ``scope["state"]`` dict. The core itself
never caches anything.

Examples:
    Using the middleware directly::

        from ja4h_middleware.config import JA4HConfig
        from ja4h_middleware.core.middleware import JA4HMiddleware
        from ja4h_middleware.models import RequestView

        middleware = JA4HMiddleware(JA4HConfig(include_raw=True))

        state: dict[str, object] = {}
        view = RequestView(method="GET", headers={"Host": "example.com"})
        result = middleware.fingerprint(view, state)
        middleware.upstream_headers(result)
        # {'X-JA4H-Fingerprint': 'ge11nn1...', 'X-JA4H-Fingerprint-Raw': 'ge_11_n_n_1_...'}
"""

import time
from collections.abc import MutableMapping
from typing import Any

from ja4h_middleware.config import JA4HConfig
from ja4h_middleware.exceptions import InvalidInputError
from ja4h_middleware.fingerprint import assemble, extract_components
from ja4h_middleware.models import FingerprintResult, RequestView
from ja4h_middleware.observability.logging import get_logger
from ja4h_middleware.observability.metrics import record_fingerprint
from ja4h_middleware.utils.headers import trim_forwarded_for

logger = get_logger(__name__)

# Per-request state slots shared with downstream consumers
FINGERPRINT_SLOT = "ja4h_fingerprint"
FINGERPRINT_RAW_SLOT = "ja4h_fingerprint_raw"


class JA4HMiddleware:
    """Framework-agnostic JA4H middleware.

    Attributes:
        config: Configuration object
        options: Fingerprint options derived from the configuration
    """

    def __init__(self, config: JA4HConfig | None = None) -> None:
        """Initialize the middleware.

        Args:
            config: Configuration object (uses defaults if not provided)
        """
        self.config = config or JA4HConfig()
        self.options = self.config.to_options()

    def fingerprint(
        self,
        request: RequestView,
        state: MutableMapping[str, Any] | None = None,
    ) -> FingerprintResult | None:
        """Return the fingerprint for a request, computing it at most once.

        Args:
            request: Read-only view of the request
            state: Per-request state mapping used as the cache slot. When
                None the fingerprint is computed and not stored.

        Returns:
            The fingerprint, or None if the request view is malformed
        """
        cached = self._load(state)
        if cached is not None:
            record_fingerprint("cached")
            logger.debug("ja4h.reused", fingerprint=cached.compact)
            return cached

        started = time.perf_counter()
        try:
            components = extract_components(request, self.options)
        except InvalidInputError as e:
            record_fingerprint("invalid")
            logger.warning(
                "ja4h.invalid_request",
                field=e.field,
                error=e.message,
            )
            return None

        result = assemble(components)
        duration = time.perf_counter() - started

        record_fingerprint(
            "computed",
            duration_seconds=duration,
            header_count_value=int(components.header_count_code),
        )
        logger.debug(
            "ja4h.computed",
            fingerprint=result.compact,
            header_count=components.header_count_code,
            duration_us=round(duration * 1_000_000, 1),
        )

        if state is not None:
            state[FINGERPRINT_SLOT] = result.compact
            state[FINGERPRINT_RAW_SLOT] = result.raw

        return result

    def upstream_headers(self, result: FingerprintResult) -> dict[str, str]:
        """Headers to inject into the request passed to the application.

        Args:
            result: The computed fingerprint

        Returns:
            The compact fingerprint header, plus the raw header when
            ``include_raw`` is enabled
        """
        return result.as_headers(self.config.header_name, include_raw=self.config.include_raw)

    def response_headers(self, result: FingerprintResult) -> dict[str, str]:
        """Headers to mirror onto the response for debugging.

        Both forms are mirrored when ``response_debug_headers`` is enabled,
        regardless of ``include_raw``.
        """
        if not self.config.response_debug_headers:
            return {}
        return result.as_headers(self.config.header_name, include_raw=True)

    def forwarded_for(self, value: str) -> str | None:
        """Apply ``trim_xff_header_count`` to an X-Forwarded-For value.

        Returns:
            The trimmed value, or None if the header should be dropped
        """
        return trim_forwarded_for(value, self.config.trim_xff_header_count)

    @staticmethod
    def _load(state: MutableMapping[str, Any] | None) -> FingerprintResult | None:
        if state is None:
            return None

        compact = state.get(FINGERPRINT_SLOT)
        raw = state.get(FINGERPRINT_RAW_SLOT)
        if isinstance(compact, str) and isinstance(raw, str):
            return FingerprintResult(compact=compact, raw=raw)

        return None
