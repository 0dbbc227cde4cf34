"""Monitoring helpers and Prometheus metrics exporters."""
from __future__ import annotations

from typing import Final

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

_HTTP_REQUEST_TOTAL: Final = Counter(
    "promptqr_http_requests_total",
    "Total HTTP requests",
    labelnames=("method", "route", "status"),
)
_HTTP_REQUEST_LATENCY: Final = Histogram(
    "promptqr_http_request_duration_seconds",
    "Latency of HTTP requests",
    labelnames=("method", "route"),
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1),
)
_PAYLOADS_TOTAL: Final = Counter(
    "promptqr_payloads_total",
    "Payloads built by merchant kind and initiation method",
    labelnames=("kind", "initiation"),
)
_ENCODE_ERRORS_TOTAL: Final = Counter(
    "promptqr_encode_errors_total",
    "Rejected payload requests by error code",
    labelnames=("code", "route"),
)


def observe_request(method: str, route: str, status_code: int, duration_ms: float) -> None:
    _HTTP_REQUEST_TOTAL.labels(method=method, route=route, status=str(status_code)).inc()
    _HTTP_REQUEST_LATENCY.labels(method=method, route=route).observe(duration_ms / 1000)


def record_payload(kind: str, dynamic: bool) -> None:
    _PAYLOADS_TOTAL.labels(kind=kind, initiation="dynamic" if dynamic else "static").inc()


def record_encode_error(code: str, route: str) -> None:
    _ENCODE_ERRORS_TOTAL.labels(code=code, route=route).inc()


def metrics_payload() -> tuple[bytes, str]:
    """Return Prometheus exposition payload and content type."""

    return generate_latest(), CONTENT_TYPE_LATEST
