"""
JSON error envelope for routes mounted behind the CORS middleware.

Route handlers of the host application raise AppException to answer with
an ErrorResponse body.  That handler runs inside the middleware stack, so
the envelope still carries the Access-Control-* headers a browser needs to
read it.  Anything else escaping a route becomes a 500 with the same
envelope, produced by Starlette's outermost error middleware (no CORS
headers are added there).
"""

from __future__ import annotations

import traceback
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from corsgate.models.schemas import ErrorResponse
from corsgate.utils.logger import get_logger

logger = get_logger(__name__)


class AppException(Exception):
    """Raised by route handlers to return *status_code* with an error envelope."""

    def __init__(
        self,
        status_code: int = 400,
        error_code: str = "BAD_REQUEST",
        message: str = "An error occurred.",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.envelope = ErrorResponse(error_code=error_code, message=message, details=details or {})


_INTERNAL_ERROR = ErrorResponse(
    error_code="INTERNAL_SERVER_ERROR",
    message="An unexpected error occurred. Please try again later.",
    details={},
)


def setup_error_handlers(app: FastAPI) -> None:
    """Render AppException and unhandled errors as ErrorResponse JSON."""

    async def on_app_exception(_request: Request, exc: AppException) -> JSONResponse:
        logger.warning("AppException %s: %s", exc.envelope.error_code, exc.envelope.message)
        return JSONResponse(status_code=exc.status_code, content=exc.envelope.model_dump())

    async def on_unhandled(_request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled exception: %s\n%s", exc, traceback.format_exc())
        return JSONResponse(status_code=500, content=_INTERNAL_ERROR.model_dump())

    app.add_exception_handler(AppException, on_app_exception)
    app.add_exception_handler(Exception, on_unhandled)
