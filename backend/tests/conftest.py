"""Shared fixtures: policies and a minimal Starlette app wrapped in CorsMiddleware."""

from __future__ import annotations

from datetime import timedelta

import pytest
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from corsgate.middleware.cors import CorsMiddleware
from corsgate.models.policy import CorsPolicy


@pytest.fixture
def foo_policy() -> CorsPolicy:
    """https://foo.com only; PUT/PATCH/OPTIONS; credentials; 12h preflight cache."""
    return CorsPolicy(
        allow_origins=["https://foo.com"],
        allow_methods=["PUT", "PATCH", "OPTIONS"],
        allow_headers=["Origin"],
        expose_headers=["Content-Length"],
        allow_credentials=True,
        max_age=timedelta(hours=12),
    )


@pytest.fixture
def downstream_calls() -> list[str]:
    return []


@pytest.fixture
def make_client(downstream_calls):
    """Build a TestClient for a one-route app guarded by the given policy."""

    def _make(policy: CorsPolicy) -> TestClient:
        async def endpoint(request: Request) -> PlainTextResponse:
            downstream_calls.append(request.method)
            return PlainTextResponse("downstream")

        app = Starlette(
            routes=[Route("/x", endpoint, methods=["GET", "PUT", "PATCH", "OPTIONS"])],
            middleware=[Middleware(CorsMiddleware, policy=policy)],
        )
        return TestClient(app)

    return _make
