"""Prometheus metrics for iDEAL API call volume, latency and transaction outcomes"""

from prometheus_client import Counter, Histogram

# API call metrics
request_counter = Counter(
    "ideal_requests_total",
    "Total iDEAL API calls",
    ["operation", "outcome"],  # ok | transport_error | decode_error
)

request_latency_histogram = Histogram(
    "ideal_request_latency_seconds",
    "iDEAL API response time",
    ["operation"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# Transaction outcomes
transaction_status_counter = Counter(
    "ideal_transaction_status_total",
    "Transaction statuses reported by the iDEAL API",
    ["status"],  # Success | CheckedBefore | Failure | Expired | Cancelled | Unknown
)


def record_api_call(operation: str, outcome: str, duration_seconds: float) -> None:
    """Record call count and latency for one operation"""
    request_counter.labels(operation=operation, outcome=outcome).inc()
    request_latency_histogram.labels(operation=operation).observe(duration_seconds)


def record_transaction_status(status: str) -> None:
    transaction_status_counter.labels(status=status).inc()
