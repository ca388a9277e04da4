"""Middleware for model-viewer.

Assigns a request ID to every request and writes one canonical log line
per completed request.
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.core.logging import set_request_id

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Paths excluded from the request log
_QUIET_PREFIXES = ("/health", "/models/", "/static/")


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Middleware that assigns a unique ID to each request.

    - Uses existing X-Request-ID header if present
    - Generates new UUID if not present
    - Sets request_id in context for logging
    - Logs method, path, status and duration once per request
    - Returns request_id in response header
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        set_request_id(request_id)

        start = time.monotonic()
        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "Request failed",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "duration_ms": (time.monotonic() - start) * 1000,
                },
            )
            raise

        if not request.url.path.startswith(_QUIET_PREFIXES):
            logger.info(
                "Request completed",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status": response.status_code,
                    "duration_ms": (time.monotonic() - start) * 1000,
                },
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
