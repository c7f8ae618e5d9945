"""
Prometheus metrics.

``PrometheusMiddleware`` records every HTTP request under a normalized
route label. The ``teamhub_*`` counters are bumped by the services once a
mutation has been written.
"""

import re
import time
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Callable

from fastapi import Request, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    Counter,
    Gauge,
    Histogram,
    Info,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware

try:
    APP_VERSION = get_version("teamhub")
except PackageNotFoundError:
    APP_VERSION = "unknown"

app_info = Info("teamhub_app", "TeamHub build information")
app_info.info({"version": APP_VERSION})

# -- HTTP ---------------------------------------------------------------------

http_requests_total = Counter(
    "teamhub_http_requests_total",
    "HTTP requests by method, route and status code",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "teamhub_http_request_duration_seconds",
    "HTTP request latency by method and route",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

http_requests_in_progress = Gauge(
    "teamhub_http_requests_in_progress",
    "HTTP requests currently being served",
    ["method", "endpoint"],
)

# -- Domain -------------------------------------------------------------------

invites_created_total = Counter(
    "teamhub_invites_created_total",
    "Invite codes issued by admins",
)

invites_redeemed_total = Counter(
    "teamhub_invites_redeemed_total",
    "Invite codes successfully redeemed",
)

tasks_mutations_total = Counter(
    "teamhub_tasks_mutations_total",
    "Task mutations by action",
    ["action"],
)

documents_versions_total = Counter(
    "teamhub_documents_versions_total",
    "Document versions stored (including the initial upload)",
)

storage_operations_total = Counter(
    "teamhub_storage_operations_total",
    "Blob storage operations by operation and status",
    ["operation", "status"],
)


uptime_seconds = Gauge("teamhub_uptime_seconds", "Seconds since the process started")
startup_time = time.time()

_TOKEN_SEGMENT = re.compile(r"/(upload|download)/[^/]+")
_ID_SEGMENTS = (
    re.compile(r"/[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE),
    re.compile(r"/[0-9a-f]{24}", re.IGNORECASE),
    re.compile(r"/\d+"),
)


async def metrics_endpoint(request: Request) -> Response:
    uptime_seconds.set(time.time() - startup_time)
    return Response(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)


class PrometheusMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path == "/metrics":
            return await call_next(request)

        method = request.method
        endpoint = self._normalize_path(request.url.path)
        in_progress = http_requests_in_progress.labels(method=method, endpoint=endpoint)

        in_progress.inc()
        started = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(
                time.perf_counter() - started
            )
            http_requests_total.labels(method=method, endpoint=endpoint, status=status).inc()
            in_progress.dec()

    def _normalize_path(self, path: str) -> str:
        """
        One label value per route.

          /api/v1/tasks/550e8400-e29b-41d4-a716-446655440000 -> /api/v1/tasks/{id}
          /api/v1/storage/download/eyJhbGciOi... -> /api/v1/storage/download/{token}
        """
        path = _TOKEN_SEGMENT.sub(r"/\1/{token}", path)
        for pattern in _ID_SEGMENTS:
            path = pattern.sub("/{id}", path)
        return path
