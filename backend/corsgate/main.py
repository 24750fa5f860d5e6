"""
FastAPI application entry point.

Builds the FastAPI app, registers the middleware chain (CORS, no-cache
headers, error handling, request logging) and defines the health-check
endpoint.  Any ASGI app can use CorsMiddleware directly; this module is
the reference wiring.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from corsgate.config import Settings, get_settings
from corsgate.middleware.cors import setup_cors
from corsgate.middleware.error_handler import setup_error_handlers
from corsgate.middleware.no_cache import NoCacheMiddleware
from corsgate.middleware.request_logger import RequestLoggerMiddleware
from corsgate.models.policy import CorsPolicy
from corsgate.models.schemas import HealthResponse
from corsgate.utils.logger import get_logger

logger = get_logger(__name__)

VERSION = "1.0.0"


def create_app(
    settings: Settings | None = None,
    policy: CorsPolicy | None = None,
) -> FastAPI:
    """Create the application. *policy* overrides the one built from *settings*."""
    settings = settings or get_settings()
    if policy is None:
        policy = settings.cors_policy()

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan: runs on startup and shutdown."""
        logger.info(
            "corsgate started  env=%s  origins=%s  all_origins=%s  credentials=%s",
            settings.ENVIRONMENT,
            sorted(policy.allow_origins),
            policy.allow_all_origins,
            policy.allow_credentials,
        )
        yield
        logger.info("corsgate shutting down")

    app = FastAPI(
        title="corsgate",
        version=VERSION,
        description="CORS enforcement middleware reference application",
        lifespan=lifespan,
    )

    # ── Middleware (last added runs first) ────────────────────
    setup_cors(app, policy)
    if settings.HTTP_NO_CACHE:
        app.add_middleware(NoCacheMiddleware)
    setup_error_handlers(app)

    # Request logging sees the final status, including a CORS 403
    app.add_middleware(
        RequestLoggerMiddleware,
        trace_id_header=settings.TRACE_ID_HEADER,
        client_ip_header=settings.CLIENT_IP_HEADER,
    )

    # ── Health Check ──────────────────────────────────────────
    @app.get("/health", tags=["system"], response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Return API health status."""
        return HealthResponse(version=VERSION)

    return app


app = create_app()
