from __future__ import annotations

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.responses import Response

REQUESTS_TOTAL = Counter(
    "total_requests",
    "Total HTTP requests",
    labelnames=("method", "path", "status"),
)
REQUEST_LATENCY_SECONDS = Histogram(
    "request_latency_seconds",
    "HTTP request latency in seconds",
    labelnames=("method", "path"),
)
DB_QUERY_DURATION_SECONDS = Histogram(
    "db_query_duration_seconds",
    "Database query duration in seconds",
    labelnames=("operation",),
)
ACCESS_DENIALS_TOTAL = Counter(
    "access_denials_total",
    "Authorization gate denials",
    labelnames=("operation",),
)
SLUG_COLLISIONS_TOTAL = Counter(
    "slug_collisions_total",
    "Slug candidates rejected because the scope already used them",
    labelnames=("table",),
)


def record_request(method: str, path: str, status_code: int, duration_seconds: float) -> None:
    REQUESTS_TOTAL.labels(method=method, path=path, status=str(status_code)).inc()
    REQUEST_LATENCY_SECONDS.labels(method=method, path=path).observe(duration_seconds)


def observe_db_query(duration_seconds: float, operation: str = "sql") -> None:
    DB_QUERY_DURATION_SECONDS.labels(operation=operation).observe(duration_seconds)


def record_access_denial(operation: str) -> None:
    ACCESS_DENIALS_TOTAL.labels(operation=operation).inc()


def record_slug_collision(table: str, amount: int = 1) -> None:
    if amount > 0:
        SLUG_COLLISIONS_TOTAL.labels(table=table).inc(amount)


def metrics_response() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
