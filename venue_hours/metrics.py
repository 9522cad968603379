"""Prometheus metrics definitions for venue-hours-server.

Exposes metrics for:
1. HTTP API metrics (requests, latency, errors)
2. Schedule updates and authentication attempts
3. Background job metrics (runs, duration)
4. Current open/closed venue counts
"""
from prometheus_client import Counter, Histogram, Gauge, Info

# =============================================================================
# HTTP API METRICS
# =============================================================================

HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "endpoint", "status_code"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

HTTP_REQUESTS_IN_PROGRESS = Gauge(
    "http_requests_in_progress",
    "Number of HTTP requests currently being processed",
    ["method", "endpoint"],
)

# =============================================================================
# SCHEDULE AND AUTH METRICS
# =============================================================================

SCHEDULE_UPDATES_TOTAL = Counter(
    "schedule_updates_total",
    "Schedule update attempts",
    ["status"],  # status: success, validation_error, not_found, store_error
)

AUTH_ATTEMPTS_TOTAL = Counter(
    "auth_attempts_total",
    "Authentication attempts",
    ["operation", "result"],  # operation: login, authorize
)

# =============================================================================
# BACKGROUND JOB METRICS
# =============================================================================

BACKGROUND_JOB_RUNS_TOTAL = Counter(
    "background_job_runs_total",
    "Total number of background job runs",
    ["job_name", "status"],  # status: success, error
)

BACKGROUND_JOB_DURATION_SECONDS = Histogram(
    "background_job_duration_seconds",
    "Background job execution duration in seconds",
    ["job_name"],
    buckets=(0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0),
)

BACKGROUND_JOB_LAST_RUN_TIMESTAMP = Gauge(
    "background_job_last_run_timestamp_seconds",
    "Unix timestamp of the last successful job run",
    ["job_name"],
)

# =============================================================================
# VENUE STATUS METRICS
# =============================================================================

VENUES_OPEN_NOW = Gauge(
    "venues_open_now",
    "Venues open at the last status projection",
)

VENUES_CLOSED_TODAY = Gauge(
    "venues_closed_today",
    "Venues force-closed for today at the last status projection",
)

APP_INFO = Info(
    "venue_hours",
    "venue-hours-server application information",
)

APP_INFO.info({
    "version": "1.0.0",
    "service": "venue-hours-server",
})
