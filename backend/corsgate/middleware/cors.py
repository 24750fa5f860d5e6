"""
CORS middleware.

Evaluates each request against a CorsPolicy and writes the Access-Control-*
headers.  Rejected origins get a 403 but downstream handlers still run;
preflights are answered with 204 only when the policy lists OPTIONS.
"""

from __future__ import annotations

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from corsgate.config import get_settings
from corsgate.models.policy import CorsPolicy
from corsgate.services.cors_decider import VARY, CorsDecision, decide
from corsgate.utils.logger import get_logger

logger = get_logger("cors")


class CorsMiddleware(BaseHTTPMiddleware):
    """Apply *policy* to every request passing through the app."""

    def __init__(self, app: ASGIApp, policy: CorsPolicy) -> None:
        super().__init__(app)
        self.policy = policy

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        origin = request.headers.get("origin")
        decision = decide(self.policy, request.method, origin)

        if not decision.is_cross_origin:
            return await call_next(request)

        if not decision.origin_allowed:
            logger.warning(
                "CORS origin rejected: %s  %s %s",
                origin,
                request.method,
                request.url.path,
            )
        elif decision.terminate:
            response = Response(status_code=decision.status_code)
            _apply_headers(response, decision)
            return response

        # Deny-but-continue: downstream still runs for rejected origins
        response = await call_next(request)
        _apply_headers(response, decision)
        if decision.status_code is not None:
            response.status_code = decision.status_code
        return response


def _apply_headers(response: Response, decision: CorsDecision) -> None:
    for name, value in decision.headers:
        if name == VARY:
            response.headers.append(name, value)
        else:
            response.headers[name] = value


def setup_cors(app: FastAPI, policy: CorsPolicy | None = None) -> None:
    """Attach CorsMiddleware to the application, defaulting to the configured policy."""
    if policy is None:
        policy = get_settings().cors_policy()

    app.add_middleware(CorsMiddleware, policy=policy)
