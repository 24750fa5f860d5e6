"""
Configuration loader.

Uses pydantic-settings to read environment variables from .env and expose
them as a typed Settings object. Provides a cached get_settings() accessor
and builds the CorsPolicy the middleware runs with.
"""

from datetime import timedelta
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from corsgate.models.policy import CorsPolicy


def _split(value: str) -> list[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parent.parent / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── CORS ──────────────────────────────────────────────────
    CORS_ALLOW_ALL_ORIGINS: bool = False
    CORS_ALLOW_ORIGINS: str = "http://localhost:3000"
    CORS_ALLOW_METHODS: str = "GET,POST,PUT,PATCH,DELETE,HEAD,OPTIONS"
    CORS_ALLOW_HEADERS: str = "Origin,Content-Length,Content-Type"
    CORS_EXPOSE_HEADERS: str = ""
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_MAX_AGE_SECONDS: int = 86400

    # ── HTTP ──────────────────────────────────────────────────
    HTTP_NO_CACHE: bool = False
    TRACE_ID_HEADER: str = "X-Request-Id"
    CLIENT_IP_HEADER: str = "X-Forwarded-For"

    # ── Environment ───────────────────────────────────────────
    ENVIRONMENT: str = "development"

    @property
    def allowed_origins_list(self) -> list[str]:
        """Return CORS_ALLOW_ORIGINS as a list split on commas."""
        return _split(self.CORS_ALLOW_ORIGINS)

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    def cors_policy(self) -> CorsPolicy:
        """Build the CorsPolicy. Raises ValidationError on a contradictory setup."""
        return CorsPolicy(
            allow_all_origins=self.CORS_ALLOW_ALL_ORIGINS,
            allow_origins=frozenset(self.allowed_origins_list),
            allow_methods=tuple(_split(self.CORS_ALLOW_METHODS)),
            allow_headers=tuple(_split(self.CORS_ALLOW_HEADERS)),
            expose_headers=tuple(_split(self.CORS_EXPOSE_HEADERS)),
            allow_credentials=self.CORS_ALLOW_CREDENTIALS,
            max_age=timedelta(seconds=self.CORS_MAX_AGE_SECONDS),
        )


@lru_cache()
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
