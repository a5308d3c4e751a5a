"""
Prometheus metrics for API usage, store latency and translated errors.
Exposed via /metrics endpoint for Prometheus scraping.
"""

from prometheus_client import Counter, Histogram

# API usage by operation (create, list, get, update, delete)
recipe_requests_total = Counter(
    "recipe_api_requests_total",
    "Recipe API requests by operation",
    ["operation"],
)

# Store query duration (seconds)
store_operation_duration_seconds = Histogram(
    "recipe_api_store_operation_duration_seconds",
    "Document store operation duration in seconds",
    ["operation"],  # insert, find, find_by_id, update_by_id, delete_by_id
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

# Error responses produced by the error translator
recipe_errors_total = Counter(
    "recipe_api_errors_total",
    "Error responses by failure kind and HTTP status",
    ["kind", "status"],
)


def record_request(operation: str) -> None:
    """Record an API request for the given operation."""
    recipe_requests_total.labels(operation=operation).inc()


def record_error(kind: str, status: int) -> None:
    """Record a translated error response."""
    recipe_errors_total.labels(kind=kind, status=str(status)).inc()


def timed_store(operation: str):
    """Context manager to time a store operation and record it to the histogram."""
    return store_operation_duration_seconds.labels(operation=operation).time()
