"""
Notes API — Request Context Middleware
=======================================

Every request gets a correlation ID (the client's X-Request-ID if it sent
one) that is echoed back in the response and attached to the access line
written once the response is ready:

    PUT /api/notes/17 -> 200 in 6.2ms [a1b2c3d4]
    GET /api/notes -> 200 in 11.8ms [e5f6a7b8] total=42

Note text and query strings are never logged.
"""

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("notes_api.access")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Probes hit these constantly
QUIET_PATHS = frozenset({"/health"})


def _access_level(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assigns the request ID and writes the access log line."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
        request_id_var.set(rid)
        request.state.request_id = rid
        started = time.perf_counter()

        response = await call_next(request)

        response.headers["X-Request-ID"] = rid
        path = request.url.path
        if path in QUIET_PATHS:
            return response

        elapsed_ms = (time.perf_counter() - started) * 1000
        total = response.headers.get("X-Total-Count")
        logger.log(
            _access_level(response.status_code),
            "%s %s -> %d in %.1fms [%s]%s",
            request.method,
            path,
            response.status_code,
            elapsed_ms,
            rid,
            f" total={total}" if total is not None else "",
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
            },
        )
        return response
