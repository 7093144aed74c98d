"""
Performance Monitoring Middleware

ASGI middleware that records HTTP request latency in a Prometheus histogram
and logs slow requests.
"""

import re
import time
import logging

from fastapi import Request
from prometheus_client import Histogram

from trackii.core.config import settings

logger = logging.getLogger(__name__)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status_code"],
)

_ID_SEGMENT = re.compile(r"/\d+(?=/|$)")


class PerformanceMiddleware:
    """Middleware to track HTTP request performance metrics"""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)

        # Skip monitoring for certain paths
        if self._should_skip_monitoring(request.url.path):
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        status_code = 500

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            response_time_ms = (time.perf_counter() - start_time) * 1000
            self._record_request_metrics(request, status_code, response_time_ms)

    def _should_skip_monitoring(self, path: str) -> bool:
        skip_paths = [
            "/docs",
            "/redoc",
            "/openapi.json",
            "/favicon.ico",
            "/health",
            "/metrics",  # Avoid recursion on metrics endpoints
        ]
        return any(path.startswith(skip_path) for skip_path in skip_paths)

    def _clean_endpoint_path(self, path: str) -> str:
        # Numeric ids and reminder keys would explode label cardinality
        path = _ID_SEGMENT.sub("/{id}", path)
        if "/reminders/" in path and path.endswith("/dismiss"):
            path = path.split("/reminders/")[0] + "/reminders/{key}/dismiss"
        return path

    def _record_request_metrics(self, request: Request, status_code: int, response_time_ms: float):
        endpoint = self._clean_endpoint_path(request.url.path)
        http_request_duration_seconds.labels(
            method=request.method, endpoint=endpoint, status_code=str(status_code)
        ).observe(response_time_ms / 1000)

        if response_time_ms > settings.SLOW_REQUEST_THRESHOLD_MS:
            logger.warning(
                f"Slow request: {request.method} {endpoint} "
                f"took {response_time_ms:.0f}ms (status: {status_code})"
            )
