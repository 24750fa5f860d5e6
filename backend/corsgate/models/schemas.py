"""
Pydantic response models (schemas).

Defines the data transfer objects returned by the host application:
ErrorResponse (shared error envelope) and HealthResponse.
"""

from __future__ import annotations

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standardised error envelope."""
    error: bool = True
    error_code: str
    message: str
    details: dict | None = None


class HealthResponse(BaseModel):
    """GET /health response body."""
    status: str = "ok"
    version: str
