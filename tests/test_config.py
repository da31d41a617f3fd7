"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from sigverify.core.config import Settings


class TestSettings:
    """Test suite for Settings parsing."""

    def test_defaults(self, monkeypatch):
        for name in ("PORT", "HOST", "LOG_LEVEL", "FRONTEND_URL", "CORS_ORIGINS"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.port == 3001
        assert settings.host == "0.0.0.0"
        assert settings.log_level == "INFO"
        assert settings.cors_origins_list == ["http://localhost:3000"]

    def test_reads_environment_variables(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("FRONTEND_URL", "https://signer.example")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.port == 8080
        assert settings.log_level == "DEBUG"
        assert settings.cors_origins_list == ["https://signer.example"]

    def test_cors_origins_override_frontend_url(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", " http://a.example , ,http://b.example")

        settings = Settings(_env_file=None)

        assert settings.cors_origins_list == ["http://a.example", "http://b.example"]

    def test_unknown_log_level_is_rejected(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ValidationError, match="LOG_LEVEL must be one of"):
            Settings(_env_file=None)
