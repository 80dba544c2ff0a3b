"""Prometheus metrics for JA4H middleware.

Metrics:
- Fingerprint counter by result (computed, cached, invalid)
- Fingerprint computation time histogram
- Counted header histogram (capped at 99)

Examples:
    Recording a computed fingerprint::

        from ja4h_middleware.observability.metrics import record_fingerprint

        record_fingerprint(result="computed", duration_seconds=0.00004, header_count_value=7)
"""

from prometheus_client import Counter, Histogram

# Labels: result (computed, cached, invalid)
fingerprints_total = Counter(
    "ja4h_fingerprints_total",
    "Total number of requests handled by the JA4H middleware",
    ["result"],
)

compute_seconds = Histogram(
    "ja4h_compute_seconds",
    "Time spent computing a JA4H fingerprint in seconds",
    buckets=[0.00001, 0.000025, 0.00005, 0.0001, 0.00025, 0.0005, 0.001, 0.005],
)

header_count = Histogram(
    "ja4h_header_count",
    "Number of headers counted by the JA4H fingerprint (capped at 99)",
    buckets=[1, 2, 4, 8, 12, 16, 24, 32, 64, 99],
)


def record_fingerprint(
    result: str,
    duration_seconds: float | None = None,
    header_count_value: int | None = None,
) -> None:
    """Record a handled request in metrics.

    Args:
        result: The result type (computed, cached, invalid)
        duration_seconds: Computation time, only for computed fingerprints
        header_count_value: Number of counted headers, only for computed
            fingerprints

    Examples:
        >>> record_fingerprint("cached")
        >>> record_fingerprint("computed", duration_seconds=0.00004, header_count_value=7)
    """
    fingerprints_total.labels(result=result).inc()

    if duration_seconds is not None:
        compute_seconds.observe(duration_seconds)

    if header_count_value is not None:
        header_count.observe(header_count_value)
