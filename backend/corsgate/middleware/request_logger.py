"""
Request logging middleware.

Logs host, method, url, response status, duration, client IP, referer,
user agent and (optionally) a trace id for every request. Responses with
a 5xx status are logged at ERROR, everything else at INFO. Never logs
request bodies.
"""

from __future__ import annotations

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from corsgate.utils.logger import get_logger

logger = get_logger("request")


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """Access log with severity chosen from the final status code."""

    def __init__(
        self,
        app: ASGIApp,
        trace_id_header: str = "",
        client_ip_header: str = "",
    ) -> None:
        super().__init__(app)
        self.trace_id_header = trace_id_header
        self.client_ip_header = client_ip_header

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start) * 1000
        fields = {
            "host": request.headers.get("host", ""),
            "duration_ms": round(duration_ms, 1),
            "client_ip": self._client_ip(request),
            "method": request.method,
            "url": str(request.url.path)
            + (f"?{request.url.query}" if request.url.query else ""),
            "status": response.status_code,
            "referer": request.headers.get("referer", ""),
            "user_agent": request.headers.get("user-agent", ""),
        }
        if self.trace_id_header:
            fields[self.trace_id_header] = request.headers.get(self.trace_id_header, "")

        level = logging.ERROR if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "%s %s → %d  %.1fms  ip=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            fields["client_ip"],
            extra={"fields": fields},
        )

        return response

    def _client_ip(self, request: Request) -> str:
        if self.client_ip_header:
            ip = request.headers.get(self.client_ip_header)
            if ip:
                return ip
        return request.client.host if request.client else "unknown"
