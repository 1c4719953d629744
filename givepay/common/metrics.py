"""Prometheus metric definitions for the donations service."""

from prometheus_client import Counter, Histogram, generate_latest
from starlette.responses import Response


donation_requests_total = Counter("donation_requests_total", "Total donation requests", ["service"])
donation_success_total = Counter("donation_success_total", "Total settled donations", ["service"])
donation_failure_total = Counter(
    "donation_failure_total",
    "Total failed donations",
    ["service", "reason"],
)
gateway_latency_seconds = Histogram(
    "gateway_latency_seconds",
    "Payment gateway sale call latency seconds",
    ["service"],
)
donation_persist_failures_total = Counter(
    "donation_persist_failures_total",
    "Donation records that could not be written to the document store",
    ["service", "collection"],
)
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["service", "route", "method", "status_code"],
)
http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration seconds",
    ["service", "route", "method"],
)


def metrics_response() -> Response:
    """Expose all registered Prometheus metrics in text format."""

    return Response(content=generate_latest(), media_type="text/plain")
