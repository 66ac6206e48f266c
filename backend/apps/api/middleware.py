# ============================================================
#  PixelWords — Request Correlation Middleware
# ============================================================
"""
Every request gets an ID (the caller's ``X-Request-ID`` or a fresh uuid4).
The ID is stored on ``request.state`` for the error envelope, echoed back in
the response header, and bound to the loguru context so every log line
written while the request is handled (routes, exception handlers, the
threadpool pipeline run) carries it as ``extra["request_id"]``.
"""
from __future__ import annotations

import time
import uuid
from typing import TYPE_CHECKING

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag the request with an ID and log its outcome under that ID."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        t_start = time.perf_counter()
        with logger.contextualize(request_id=request_id):
            response = await call_next(request)
            logger.info(
                "{} {} → {} ({:.1f}ms)",
                request.method,
                request.url.path,
                response.status_code,
                (time.perf_counter() - t_start) * 1000.0,
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
