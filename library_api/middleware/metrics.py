"""
Library API: Prometheus Metrics Middleware
===========================================

What:  Request counters, latency histograms and an in-flight gauge, served
       in the Prometheus text format at ``GET /metrics``.
How:   Each app owns its own ``CollectorRegistry`` (kept on ``app.state``),
       so building several apps in one process never registers a metric
       twice. Requests are labelled by route template (``/author/{author_id}``),
       not by raw path, to keep label cardinality bounded.

Metrics (``service="library-api"`` on every series):
    http_requests_total{status_code, method, path}
    http_request_duration_seconds{status_code, method, path}
    http_requests_in_progress_total{method}
"""

import time

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Match
from starlette.types import ASGIApp

SERVICE_NAME = "library-api"
METRICS_PATH = "/metrics"


class RequestMetrics:
    """The collectors for one application, registered in their own registry."""

    def __init__(self, service: str = SERVICE_NAME):
        self.service = service
        self.registry = CollectorRegistry(auto_describe=True)

        self.requests = Counter(
            "http_requests_total",
            "Count all http requests by status code, method and path.",
            ["service", "status_code", "method", "path"],
            registry=self.registry,
        )
        self.duration = Histogram(
            "http_request_duration_seconds",
            "Duration of all HTTP requests by status code, method and path.",
            ["service", "status_code", "method", "path"],
            registry=self.registry,
        )
        self.in_progress = Gauge(
            "http_requests_in_progress_total",
            "All the requests in progress",
            ["service", "method"],
            registry=self.registry,
        )

    def observe(self, method: str, path: str, status: int, seconds: float) -> None:
        labels = (self.service, str(status), method, path)
        self.requests.labels(*labels).inc()
        self.duration.labels(*labels).observe(seconds)


def _route_path(request: Request) -> str:
    for route in request.app.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return getattr(route, "path", request.url.path)
    return request.url.path


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Records every request except scrapes of the metrics endpoint itself."""

    def __init__(self, app: ASGIApp, metrics: RequestMetrics):
        super().__init__(app)
        self.metrics = metrics

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path == METRICS_PATH:
            return await call_next(request)

        gauge = self.metrics.in_progress.labels(self.metrics.service, request.method)
        gauge.inc()
        start_time = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            gauge.dec()
            self.metrics.observe(
                request.method,
                _route_path(request),
                status,
                time.perf_counter() - start_time,
            )
