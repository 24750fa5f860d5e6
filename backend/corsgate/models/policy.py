"""
CORS policy model.

CorsPolicy is the immutable configuration shared by every request: which
origins, methods and headers are permitted, whether credentials may be
sent and how long a preflight result may be cached.  It answers the yes/no
questions the middleware asks and pre-renders the list-valued header
values.
"""

from __future__ import annotations

from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field, model_validator

from corsgate.utils.headers import canonical_header_key, convert, normalize

DEFAULT_MAX_AGE = timedelta(seconds=86400)


class CorsPolicy(BaseModel):
    """Validated, read-only CORS configuration."""

    model_config = ConfigDict(frozen=True)

    allow_all_origins: bool = False
    allow_origins: frozenset[str] = Field(default_factory=frozenset)
    allow_methods: tuple[str, ...] = ()
    allow_headers: tuple[str, ...] = ()
    expose_headers: tuple[str, ...] = ()
    allow_credentials: bool = False
    max_age: timedelta = timedelta(0)

    @model_validator(mode="after")
    def reject_wildcard_with_credentials(self) -> "CorsPolicy":
        # Browsers discard "Access-Control-Allow-Origin: *" on credentialed requests
        if self.allow_all_origins and self.allow_credentials:
            raise ValueError(
                "allow_all_origins and allow_credentials cannot both be enabled; "
                "list the trusted origins in allow_origins instead"
            )
        return self

    @classmethod
    def default(cls) -> "CorsPolicy":
        """Generic policy for local development; no origin is allowed until listed."""
        return cls(
            allow_methods=("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"),
            allow_headers=("Origin", "Content-Length", "Content-Type"),
            allow_credentials=True,
            max_age=DEFAULT_MAX_AGE,
        )

    # ── Predicates ────────────────────────────────────────────

    def is_origin_allowed(self, origin: str) -> bool:
        """Exact, case-sensitive match against the allow-list (or wildcard)."""
        if self.allow_all_origins:
            return True
        return origin in self.allow_origins

    def supports_preflight_method(self) -> bool:
        """Whether OPTIONS is itself listed, which lets preflights end with 204."""
        return "OPTIONS" in convert(normalize(self.allow_methods), str.upper)

    # ── Rendered header values ────────────────────────────────

    @property
    def allow_methods_value(self) -> str | None:
        return ",".join(convert(normalize(self.allow_methods), str.upper)) or None

    @property
    def allow_headers_value(self) -> str | None:
        return _header_list(self.allow_headers)

    @property
    def expose_headers_value(self) -> str | None:
        return _header_list(self.expose_headers)

    @property
    def max_age_seconds(self) -> int:
        """max_age floored to whole seconds (a positive sub-second age gives 0)."""
        return int(self.max_age // timedelta(seconds=1))


def _header_list(values: tuple[str, ...]) -> str | None:
    return ",".join(convert(normalize(values), canonical_header_key)) or None
