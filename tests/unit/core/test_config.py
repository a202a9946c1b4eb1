"""Unit tests for application settings."""

import pytest
from pydantic import ValidationError

from authbase.core.config import Settings, get_settings


class TestSettings:
    """Tests for Settings loading and validation."""

    def test_defaults(self, monkeypatch):
        """Test the documented defaults."""
        monkeypatch.delenv("AUTHBASE_JWT_SECRET", raising=False)
        settings = Settings(_env_file=None)

        assert settings.jwt_secret is None
        assert settings.jwt_algorithm == "HS256"
        assert settings.access_token_expire_minutes == 15
        assert settings.refresh_token_expire_days == 7
        assert settings.session_store == "redis"
        assert settings.password_hash_rounds == 12

    def test_reads_prefixed_environment(self, monkeypatch):
        """Test that AUTHBASE_* variables are picked up."""
        monkeypatch.setenv("AUTHBASE_JWT_SECRET", "from-env")
        monkeypatch.setenv("AUTHBASE_SESSION_STORE", "memory")
        monkeypatch.setenv("AUTHBASE_ACCESS_TOKEN_EXPIRE_MINUTES", "5")

        settings = Settings(_env_file=None)

        assert settings.jwt_secret == "from-env"
        assert settings.session_store == "memory"
        assert settings.access_token_ttl_seconds == 300

    def test_blank_secret_is_unset(self):
        """Test that a whitespace-only secret counts as missing."""
        settings = Settings(_env_file=None, jwt_secret="   ")
        assert settings.jwt_secret is None

    def test_ttl_seconds(self):
        settings = Settings(
            _env_file=None, access_token_expire_minutes=15, refresh_token_expire_days=7
        )
        assert settings.access_token_ttl_seconds == 900
        assert settings.refresh_token_ttl_seconds == 604800

    def test_rejects_unknown_session_store(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, session_store="memcached")

    def test_rejects_low_hash_rounds(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, password_hash_rounds=3)

    def test_cors_origins_from_comma_separated_string(self):
        settings = Settings(_env_file=None, cors_origins="http://a.test, http://b.test")
        assert settings.cors_origins == ["http://a.test", "http://b.test"]

    def test_environment_flags(self):
        assert Settings(_env_file=None, environment="production").is_production
        assert Settings(_env_file=None, environment="testing").is_testing
        assert Settings(_env_file=None, environment="development").is_development


def test_get_settings_is_cached():
    """Test that get_settings returns the same instance."""
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
