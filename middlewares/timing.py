"""
middlewares/timing.py

Per-request latency.
- Every response carries X-Latency-Ms.
- Requests taking SLOW_REQUEST_MS or longer are logged at WARNING,
  the rest at DEBUG.
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from config.settings import settings

logger = logging.getLogger(__name__)

LATENCY_HEADER = "X-Latency-Ms"


class TimingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, slow_request_ms: Optional[int] = None):
        super().__init__(app)
        self.slow_request_ms = settings.SLOW_REQUEST_MS if slow_request_ms is None else slow_request_ms

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = int((time.perf_counter() - started) * 1000)
        response.headers[LATENCY_HEADER] = str(elapsed_ms)

        level = logging.WARNING if elapsed_ms >= self.slow_request_ms else logging.DEBUG
        logger.log(
            level, "%s %s -> %s in %d ms",
            request.method, request.url.path, response.status_code, elapsed_ms,
        )
        return response
