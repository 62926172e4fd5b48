"""Tests for client configuration — env-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from mpak import __version__
from mpak.config import DEFAULT_REGISTRY_URL, DEFAULT_TIMEOUT_MS, ClientSettings


class TestClientSettings:
    def test_defaults(self):
        settings = ClientSettings()
        assert settings.registry_url == DEFAULT_REGISTRY_URL == "https://api.mpak.dev"
        assert settings.timeout_ms == DEFAULT_TIMEOUT_MS == 30000
        assert settings.github_url == "https://github.com"
        assert settings.user_agent == f"mpak-client/{__version__}"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("MPAK_TIMEOUT_MS", "2500")
        monkeypatch.setenv("MPAK_LOG_LEVEL", "DEBUG")
        settings = ClientSettings()
        assert settings.timeout_ms == 2500
        assert settings.log_level == "DEBUG"

    def test_trailing_slash_stripped(self):
        assert ClientSettings(registry_url="https://r.example.com/").registry_url == "https://r.example.com"

    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_timeout_rejected(self, value):
        with pytest.raises(ValidationError):
            ClientSettings(timeout_ms=value)

    def test_frozen(self):
        settings = ClientSettings()
        with pytest.raises(ValidationError):
            settings.timeout_ms = 1  # type: ignore[misc]
