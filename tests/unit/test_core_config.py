"""
Unit tests for configuration management (flat Settings).

Tests cover:
- Required values and defaults
- Validation (secret length, bcrypt rounds, lockout window, token bytes)
- Derived properties (environment flags, CORS parsing)
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from marketplace_auth.core.config import Settings, get_settings
from marketplace_auth.core.enums import Environment


@pytest.fixture
def base_test_env():
    """Minimal environment for building Settings."""
    return {
        "DATABASE_URL": "postgresql+asyncpg://user:pass@db:5432/auth",
        "SECRET_KEY": "k" * 32,
    }


def _settings(env: dict[str, str]) -> Settings:
    with patch.dict(os.environ, env, clear=True):
        return Settings()


@pytest.mark.unit
class TestSettingsDefaults:
    def test_policy_defaults(self, base_test_env):
        settings = _settings(base_test_env)

        assert settings.environment == Environment.DEVELOPMENT
        assert settings.access_token_expire_minutes == 60
        assert settings.refresh_token_expire_days == 7
        assert settings.refresh_token_bytes == 64
        assert settings.lockout_max_failed_attempts == 5
        assert settings.lockout_duration_minutes == 15
        assert settings.otp_ttl_minutes == 10
        assert settings.otp_resend_cooldown_seconds == 60
        assert settings.otp_max_per_window == 5
        assert settings.otp_window_minutes == 60
        assert settings.api_prefix == "/api/account"

    def test_database_url_is_required(self):
        with pytest.raises(ValidationError):
            _settings({"SECRET_KEY": "k" * 32})

    def test_secret_key_is_required(self):
        with pytest.raises(ValidationError):
            _settings({"DATABASE_URL": "sqlite+aiosqlite:///x.db"})


@pytest.mark.unit
class TestSettingsValidation:
    def test_short_secret_rejected(self, base_test_env):
        with pytest.raises(ValidationError, match="at least 32 characters"):
            _settings(base_test_env | {"SECRET_KEY": "short"})

    @pytest.mark.parametrize("rounds", ["9", "21"])
    def test_bcrypt_rounds_out_of_range(self, base_test_env, rounds):
        with pytest.raises(ValidationError):
            _settings(base_test_env | {"BCRYPT_ROUNDS": rounds})

    @pytest.mark.parametrize("minutes", ["4", "16"])
    def test_lockout_duration_out_of_range(self, base_test_env, minutes):
        with pytest.raises(ValidationError):
            _settings(base_test_env | {"LOCKOUT_DURATION_MINUTES": minutes})

    def test_refresh_token_bytes_minimum(self, base_test_env):
        with pytest.raises(ValidationError):
            _settings(base_test_env | {"REFRESH_TOKEN_BYTES": "16"})

    def test_zero_ttl_rejected(self, base_test_env):
        with pytest.raises(ValidationError):
            _settings(base_test_env | {"OTP_TTL_MINUTES": "0"})

    def test_zero_cooldown_allowed(self, base_test_env):
        assert _settings(base_test_env | {"OTP_RESEND_COOLDOWN_SECONDS": "0"}).otp_resend_cooldown_seconds == 0

    def test_reset_url_trailing_slash_removed(self, base_test_env):
        settings = _settings(
            base_test_env | {"PASSWORD_RESET_URL_BASE": "https://shop.example.com/reset/"}
        )

        assert settings.password_reset_url_base == "https://shop.example.com/reset"


@pytest.mark.unit
class TestSettingsProperties:
    def test_cors_origin_list(self, base_test_env):
        settings = _settings(
            base_test_env | {"CORS_ORIGINS": "https://a.example.com, https://b.example.com,"}
        )

        assert settings.cors_origin_list == ["https://a.example.com", "https://b.example.com"]

    @pytest.mark.parametrize(
        ("environment", "development", "testing", "production"),
        [
            ("development", True, False, False),
            ("testing", False, True, False),
            ("ci", False, True, False),
            ("production", False, False, True),
        ],
    )
    def test_environment_flags(self, base_test_env, environment, development, testing, production):
        settings = _settings(base_test_env | {"ENVIRONMENT": environment})

        assert settings.is_development is development
        assert settings.is_testing is testing
        assert settings.is_production is production

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
