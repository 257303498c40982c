"""
Notes API — Rate Limiting Middleware
=====================================

Per-client sliding window over /api routes. Each client address keeps a
deque of request times; times older than the window fall off the left,
and a request that finds the deque full is answered with 429 and a
Retry-After header.

Limits are per process: N workers allow N times the configured rate.
"""

import logging
import time
from collections import deque
from typing import Deque, Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from notes_api.config import settings

logger = logging.getLogger(__name__)

LIMITED_PREFIX = "/api/"
SWEEP_EVERY = 1000


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Sliding window log keyed by client host.

    Window size and request budget come from RATE_LIMIT_WINDOW and
    RATE_LIMIT_REQUESTS; /health and the docs are outside /api and are
    never counted.
    """

    def __init__(self, app, **kwargs):
        super().__init__(app, **kwargs)
        self._hits: Dict[str, Deque[float]] = {}
        self._since_sweep = 0

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not request.url.path.startswith(LIMITED_PREFIX):
            return await call_next(request)

        client = request.client.host if request.client else "unknown"
        now = time.monotonic()
        hits = self._hits.setdefault(client, deque())
        self._expire(hits, now)

        if len(hits) >= settings.rate_limit_requests:
            retry_after = int(hits[0] + settings.rate_limit_window - now) + 1
            logger.warning(
                "Rate limit hit by %s (%d requests in %ds)",
                client, len(hits), settings.rate_limit_window,
            )
            return JSONResponse(
                status_code=429,
                content={
                    "error": "rate_limit_exceeded",
                    "message": f"Too many requests, retry in {retry_after}s",
                    "details": {"retry_after": retry_after},
                },
                headers={"Retry-After": str(retry_after)},
            )

        hits.append(now)
        self._since_sweep += 1
        if self._since_sweep >= SWEEP_EVERY:
            self._sweep(now)

        return await call_next(request)

    @staticmethod
    def _expire(hits: Deque[float], now: float) -> None:
        cutoff = now - settings.rate_limit_window
        while hits and hits[0] <= cutoff:
            hits.popleft()

    def _sweep(self, now: float) -> None:
        """Forget clients whose window has emptied."""
        self._since_sweep = 0
        for client in list(self._hits):
            hits = self._hits[client]
            self._expire(hits, now)
            if not hits:
                del self._hits[client]
