"""
Pocket Writer Backend — Request ID Middleware
==============================================

What:  Assigns a short correlation id to each request and echoes it back.
How:   Uses the client's X-Request-ID header when present, otherwise a
       fresh 8-character UUID prefix. The id is stored in a ContextVar
       (for loggers and exception handlers) and in request.state.
Who:   Applied to every request via Starlette middleware.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one thread each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a unique ID to each request for tracing.

    The mobile client does not send X-Request-ID today, but honoring it
    lets a caller correlate its own logs with ours.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
