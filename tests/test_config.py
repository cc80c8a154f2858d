"""Unit tests for configuration loading."""

import pytest

from braiins_mcp.config import (
    DEFAULT_API_BASE_URL,
    DEFAULT_REDIS_URL,
    Settings,
    validate_settings,
)


class TestSettingsFromEnv:
    """Test suite for Settings.from_env."""

    def test_defaults(self):
        settings = Settings.from_env({})

        assert settings.environment == "development"
        assert settings.api_base_url == DEFAULT_API_BASE_URL
        assert settings.api_token is None
        assert settings.has_token is False
        assert settings.redis_url == DEFAULT_REDIS_URL
        assert settings.redis_enabled is True
        assert settings.log_format == "json"
        assert settings.request_timeout_ms == 30000
        assert settings.request_timeout_seconds == 30.0
        assert settings.max_retries == 3
        assert settings.retry_base_delay_ms == 1000

    def test_reads_environment(self):
        settings = Settings.from_env(
            {
                "ENVIRONMENT": "production",
                "BRAIINS_API_BASE_URL": "https://pool.example.com/api/v1",
                "BRAIINS_POOL_API_TOKEN": "secret",
                "REDIS_URL": "redis://cache:6380/1",
                "LOG_LEVEL": "DEBUG",
                "LOG_FORMAT": "pretty",
                "REQUEST_TIMEOUT": "5000",
                "MAX_RETRIES": "1",
                "RETRY_BASE_DELAY": "250",
            }
        )

        assert settings.environment == "production"
        assert settings.api_base_url == "https://pool.example.com/api/v1"
        assert settings.has_token is True
        assert settings.redis_url == "redis://cache:6380/1"
        assert settings.log_level == "debug"
        assert settings.log_format == "pretty"
        assert settings.request_timeout_ms == 5000
        assert settings.max_retries == 1
        assert settings.retry_base_delay_ms == 250

    def test_node_env_fallback(self):
        assert Settings.from_env({"NODE_ENV": "test"}).environment == "test"

    @pytest.mark.parametrize("value,expected", [("true", True), ("false", False), ("1", False), ("TRUE", False)])
    def test_redis_enabled_only_exact_true(self, value, expected):
        assert Settings.from_env({"REDIS_ENABLED": value}).redis_enabled is expected

    @pytest.mark.parametrize(
        "name,value,field,default",
        [
            ("MAX_RETRIES", "abc", "max_retries", 3),
            ("MAX_RETRIES", "9", "max_retries", 3),
            ("REQUEST_TIMEOUT", "10", "request_timeout_ms", 30000),
            ("RETRY_BASE_DELAY", "-1", "retry_base_delay_ms", 1000),
        ],
    )
    def test_invalid_numbers_fall_back(self, name, value, field, default):
        settings = Settings.from_env({name: value})

        assert getattr(settings, field) == default

    def test_unknown_environment_falls_back(self):
        assert Settings.from_env({"ENVIRONMENT": "staging"}).environment == "development"

    def test_settings_are_frozen(self):
        settings = Settings.from_env({})

        with pytest.raises(Exception):
            settings.max_retries = 5


class TestValidateSettings:
    """Test suite for validate_settings."""

    def test_valid(self):
        assert validate_settings(Settings.from_env({})) == []

    def test_production_requires_token(self):
        problems = validate_settings(Settings.from_env({"ENVIRONMENT": "production"}))

        assert problems == ["BRAIINS_POOL_API_TOKEN is required in production"]

    def test_development_without_token_is_fine(self):
        assert validate_settings(Settings.from_env({"ENVIRONMENT": "development"})) == []

    def test_invalid_urls(self):
        problems = validate_settings(
            Settings.from_env({"BRAIINS_API_BASE_URL": "ftp://x", "REDIS_URL": "localhost:6379"})
        )

        assert len(problems) == 2
