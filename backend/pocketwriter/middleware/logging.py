"""
Pocket Writer Backend — Request Logging Middleware
===================================================

What:  One access line per request with status, duration and request id.
How:   Measures wall time around call_next and picks the log level from
       the status code (5xx ERROR, 4xx WARNING, else INFO).
When:  Inside RequestIDMiddleware, so the correlation id is already set.

Skipped paths:
    /api/ping and /api/health are polled by the discovery client and by
    monitoring. Logging them would drown out real traffic.

Not logged: request bodies (article content belongs to the user).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from pocketwriter.middleware.request_id import request_id_var

logger = logging.getLogger("pocketwriter.access")

QUIET_PATHS = frozenset({"/api/ping", "/api/health"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status, duration and client for each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
