"""
StrayLink Backend — Request Logging Middleware
================================================

What:  One access log line per request on the `straylink.access` logger.
How:   Measures duration around call_next and picks the level from the
       status code (5xx ERROR, 4xx WARNING, else INFO).

Share pages are mostly fetched by link-preview crawlers, so the user agent
is logged for /share/ paths; it tells which network requested the preview.
Request bodies and auth headers are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("straylink.access")

QUIET_PATHS = {"/health"}


def client_ip_of(request: Request) -> str:
    """
    Socket peer address.

    X-Forwarded-For is client-controlled and ignored here. Behind a reverse
    proxy, run uvicorn with --proxy-headers and --forwarded-allow-ips so the
    peer is rewritten from the trusted hop.
    """
    return request.client.host if request.client else "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status, duration, request ID and client IP."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        rid = request_id_var.get("")
        client_ip = client_ip_of(request)
        extra = {
            "request_id": rid,
            "method": request.method,
            "path": path,
            "status": status,
            "duration_ms": round(duration_ms, 2),
            "client_ip": client_ip,
        }

        if path.startswith("/share/"):
            user_agent = request.headers.get("user-agent", "-")
            extra["user_agent"] = user_agent
            logger.log(
                log_level,
                "%s %s %d %.1fms [%s] from %s ua=%s",
                request.method, path, status, duration_ms, rid, client_ip, user_agent,
                extra=extra,
            )
        else:
            logger.log(
                log_level,
                "%s %s %d %.1fms [%s] from %s",
                request.method, path, status, duration_ms, rid, client_ip,
                extra=extra,
            )

        return response
