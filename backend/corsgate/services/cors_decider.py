"""
CORS decision service.

Classifies a single request (not cross-origin / rejected / simple /
preflight) against a CorsPolicy and lists the response headers that must
be written.  Pure computation: no I/O and nothing shared is mutated, so
one policy can serve any number of concurrent requests.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from corsgate.models.policy import CorsPolicy

# ── Wire-exact header names ───────────────────────────────────

ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ALLOW_METHODS = "Access-Control-Allow-Methods"
ALLOW_HEADERS = "Access-Control-Allow-Headers"
ALLOW_CREDENTIALS = "Access-Control-Allow-Credentials"
EXPOSE_HEADERS = "Access-Control-Expose-Headers"
MAX_AGE = "Access-Control-Max-Age"
VARY = "Vary"

VARY_VALUES = ("Origin", "Access-Control-Request-Method", "Access-Control-Request-Headers")

STATUS_FORBIDDEN = 403
STATUS_NO_CONTENT = 204


@dataclass(frozen=True)
class CorsDecision:
    """Outcome of evaluating one request against the policy."""

    is_cross_origin: bool
    is_preflight: bool = False
    origin_allowed: bool = False
    # Ordered entries; a name may repeat (Vary is emitted three times)
    headers: tuple[tuple[str, str], ...] = ()
    terminate: bool = False

    @property
    def status_code(self) -> int | None:
        """Status this component imposes, or None when downstream decides."""
        if self.is_cross_origin and not self.origin_allowed:
            return STATUS_FORBIDDEN
        if self.terminate:
            return STATUS_NO_CONTENT
        return None


def decide(policy: CorsPolicy, method: str, origin: str | None) -> CorsDecision:
    """Evaluate a request's method and Origin header against *policy*."""
    if not origin:
        return CorsDecision(is_cross_origin=False)

    is_preflight = method.upper() == "OPTIONS"

    if not policy.is_origin_allowed(origin):
        return CorsDecision(is_cross_origin=True, is_preflight=is_preflight)

    headers: list[tuple[str, str]] = []

    if is_preflight:
        if policy.allow_methods_value:
            headers.append((ALLOW_METHODS, policy.allow_methods_value))
        if policy.allow_headers_value:
            headers.append((ALLOW_HEADERS, policy.allow_headers_value))
        if policy.max_age > timedelta(0):
            headers.append((MAX_AGE, str(policy.max_age_seconds)))

    if policy.allow_all_origins:
        headers.append((ALLOW_ORIGIN, "*"))
    else:
        headers.append((ALLOW_ORIGIN, origin))
        headers.extend((VARY, value) for value in VARY_VALUES)

    if policy.allow_credentials:
        headers.append((ALLOW_CREDENTIALS, "true"))

    if policy.expose_headers_value:
        headers.append((EXPOSE_HEADERS, policy.expose_headers_value))

    return CorsDecision(
        is_cross_origin=True,
        is_preflight=is_preflight,
        origin_allowed=True,
        headers=tuple(headers),
        terminate=is_preflight and policy.supports_preflight_method(),
    )
