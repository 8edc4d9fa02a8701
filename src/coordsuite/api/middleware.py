"""
FastAPI middleware for request correlation.

Each request gets an ID, taken from the X-Request-ID header when present,
which is echoed in the response and attached to every log record emitted
while the request is processed.
"""

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from coordsuite.core.logging_config import log_context

logger = logging.getLogger(__name__)


class RequestCorrelationMiddleware(BaseHTTPMiddleware):
    """Add a correlation ID and timing to every request."""

    def __init__(self, app, header_name: str = "X-Request-ID"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process request with a correlation ID in the logging context.

        Args:
            request: FastAPI request object
            call_next: Next middleware/route handler

        Returns:
            Response with request ID header
        """
        request_id = request.headers.get(self.header_name, str(uuid.uuid4()))
        request.state.request_id = request_id

        with log_context(
            request_id=request_id,
            http_method=request.method,
            request_path=request.url.path,
        ):
            start_time = time.perf_counter()
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start_time) * 1000

            logger.info(
                f"{request.method} {request.url.path} {response.status_code} ({duration_ms:.1f} ms)",
                extra={"status_code": response.status_code, "duration_ms": round(duration_ms, 2)},
            )

        response.headers[self.header_name] = request_id
        return response
