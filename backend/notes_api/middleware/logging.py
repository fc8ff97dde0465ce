"""
Notes Functions Backend - Request Logging Middleware
======================================================

What:  One structured access line per HTTP request.
How:   Measures the handler duration and logs method, path, status, duration,
       request id and client address; the level follows the status class.
When:  Inside RequestIDMiddleware, so the request id is already set.

Log line:
    GET /getUserNotes 200 183.4ms [a1b2c3d4] from 10.0.0.7
    The same fields are attached as `extra` for structured log handlers.

What we log vs what we DON'T log (privacy):
    ✅ Log: method, path, status, duration, IP, request ID
    ❌ Don't log: Authorization header, request body, note contents
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notes_api.middleware.request_id import request_id_var

logger = logging.getLogger("notes_api.access")

# Liveness probes are not worth an access line each
QUIET_PATHS = {"/helloWorld"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs structured information about each HTTP request and response.

    Duration covers everything inside the handler: token verification,
    Firestore reads and, for /summarizeNote, the OpenAI round trip.

    Typical durations:
        - /getUserNotes: 50-300ms (token check + one collection read)
        - /summarizeNote (live): 500-3000ms (OpenAI call dominates)
        - /summarizeNote (mock): 50-300ms

    Levels:
        5xx → ERROR
        4xx → WARNING
        2xx/3xx → INFO
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        # perf_counter: monotonic, unaffected by wall-clock adjustments
        start_time = time.perf_counter()

        # request.client is None under some ASGI test transports
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        # Level follows the status class so alerting can key on severity:
        # 5xx is ours to investigate, 4xx is usually a client or token problem
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
