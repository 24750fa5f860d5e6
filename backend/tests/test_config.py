"""Tests for Settings and the CorsPolicy built from environment variables."""

from __future__ import annotations

from datetime import timedelta

import pytest
from pydantic import ValidationError

from corsgate.config import Settings


def _settings(**kwargs) -> Settings:
    return Settings(_env_file=None, **kwargs)


class TestDefaults:

    def test_default_policy(self):
        policy = _settings().cors_policy()

        assert policy.allow_origins == frozenset({"http://localhost:3000"})
        assert policy.allow_methods == ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS")
        assert policy.allow_headers == ("Origin", "Content-Length", "Content-Type")
        assert policy.expose_headers == ()
        assert policy.allow_credentials is True
        assert policy.max_age == timedelta(days=1)
        assert policy.supports_preflight_method() is True

    def test_is_development(self):
        assert _settings().is_development is True
        assert _settings(ENVIRONMENT="production").is_development is False


class TestFromEnvironment:

    def test_lists_split_on_commas(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://foo.com, https://github.com ,")
        monkeypatch.setenv("CORS_ALLOW_METHODS", "PUT,PATCH")
        monkeypatch.setenv("CORS_EXPOSE_HEADERS", "Content-Length")
        monkeypatch.setenv("CORS_MAX_AGE_SECONDS", "43200")

        settings = _settings()
        policy = settings.cors_policy()

        assert settings.allowed_origins_list == ["https://foo.com", "https://github.com"]
        assert policy.allow_origins == frozenset({"https://foo.com", "https://github.com"})
        assert policy.allow_methods == ("PUT", "PATCH")
        assert policy.expose_headers == ("Content-Length",)
        assert policy.max_age_seconds == 43200

    def test_case_insensitive_names(self, monkeypatch):
        monkeypatch.setenv("cors_allow_credentials", "false")
        assert _settings().cors_policy().allow_credentials is False

    def test_empty_origins(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "")
        assert _settings().cors_policy().allow_origins == frozenset()

    def test_wildcard_with_credentials_fails_fast(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOW_ALL_ORIGINS", "true")
        settings = _settings()

        with pytest.raises(ValidationError):
            settings.cors_policy()

    def test_wildcard_without_credentials(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOW_ALL_ORIGINS", "true")
        monkeypatch.setenv("CORS_ALLOW_CREDENTIALS", "false")

        assert _settings().cors_policy().allow_all_origins is True
