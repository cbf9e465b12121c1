"""
Prometheus metrics definitions for ghe-client.

Counters and histograms for API exchanges, classified errors, pagination
and the memoization cache. Naming: snake_case, ghe_client_ prefix.
"""

from prometheus_client import Counter, Histogram

# ==============================================================================
# COUNTERS
# ==============================================================================

requests_total = Counter(
    "ghe_client_requests_total",
    "Total HTTP exchanges performed",
    ["method", "status"],
    # status: HTTP status code as string, or "transport_error"
)

api_errors_total = Counter(
    "ghe_client_api_errors_total",
    "Failed calls by classified error kind",
    ["kind"],
    # kind: ErrorKind value (not_found, validation_failed, rate_limited, ...)
)

pages_fetched_total = Counter(
    "ghe_client_pages_fetched_total",
    "Collection pages fetched by the pagination engine",
)

cache_lookups_total = Counter(
    "ghe_client_cache_lookups_total",
    "Memoization cache lookups",
    ["result"],
    # result: hit, miss, race_lost
)

retries_total = Counter(
    "ghe_client_retries_total",
    "Retried safe requests",
    ["kind"],
)

# ==============================================================================
# HISTOGRAMS
# ==============================================================================

request_duration_seconds = Histogram(
    "ghe_client_request_duration_seconds",
    "Duration of a single HTTP exchange",
    ["method"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)
