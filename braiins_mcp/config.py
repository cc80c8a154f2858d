"""
Configuration loading for the Braiins Pool MCP server.

Settings are read from environment variables once at startup and passed
explicitly to the components that need them (API client, Redis connection,
logging). Malformed or out-of-range values fall back to defaults.
"""
import os
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, Field

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_API_BASE_URL = "https://pool.braiins.com/api/v1"
DEFAULT_REDIS_URL = "redis://localhost:6379"


class Settings(BaseModel):
    """
    Runtime configuration for the server.

    Attributes:
        environment: development, production or test
        api_base_url: Braiins Pool API base URL
        api_token: Bearer token for the pool API (optional)
        redis_url: Redis connection URL (may embed credentials)
        redis_enabled: Whether the Redis cache backend is used at all
        log_level: debug, info, warning or error
        log_format: json or pretty
        request_timeout_ms: Upstream request timeout in milliseconds
        max_retries: Retry attempts for retryable upstream failures
        retry_base_delay_ms: Base delay for exponential backoff
    """

    model_config = {"frozen": True}

    environment: Literal["development", "production", "test"] = "development"
    api_base_url: str = DEFAULT_API_BASE_URL
    api_token: Optional[str] = None
    redis_url: str = DEFAULT_REDIS_URL
    redis_enabled: bool = True
    log_level: str = "info"
    log_format: Literal["json", "pretty"] = "json"
    request_timeout_ms: int = Field(30000, ge=1000, le=60000)
    max_retries: int = Field(3, ge=0, le=5)
    retry_base_delay_ms: int = Field(1000, ge=100, le=5000)

    @property
    def has_token(self) -> bool:
        """True if a non-empty API token is configured."""
        return bool(self.api_token)

    @property
    def request_timeout_seconds(self) -> float:
        return self.request_timeout_ms / 1000

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Settings instance; invalid values are replaced by defaults

        Example:
            >>> settings = Settings.from_env({"MAX_RETRIES": "2"})
            >>> settings.max_retries
            2
        """
        env = os.environ if environ is None else environ

        environment = env.get("ENVIRONMENT") or env.get("NODE_ENV") or "development"
        if environment not in ("development", "production", "test"):
            logger.warning("config_invalid_value", field="environment", value=environment)
            environment = "development"

        log_format = (env.get("LOG_FORMAT") or "json").lower()
        if log_format not in ("json", "pretty"):
            logger.warning("config_invalid_value", field="log_format", value=log_format)
            log_format = "json"

        return cls(
            environment=environment,
            api_base_url=env.get("BRAIINS_API_BASE_URL") or DEFAULT_API_BASE_URL,
            api_token=env.get("BRAIINS_POOL_API_TOKEN") or None,
            redis_url=env.get("REDIS_URL") or DEFAULT_REDIS_URL,
            redis_enabled=env.get("REDIS_ENABLED", "true") == "true",
            log_level=(env.get("LOG_LEVEL") or "info").lower(),
            log_format=log_format,
            request_timeout_ms=_parse_bounded_int(
                env.get("REQUEST_TIMEOUT"), "request_timeout_ms", 30000, 1000, 60000
            ),
            max_retries=_parse_bounded_int(env.get("MAX_RETRIES"), "max_retries", 3, 0, 5),
            retry_base_delay_ms=_parse_bounded_int(
                env.get("RETRY_BASE_DELAY"), "retry_base_delay_ms", 1000, 100, 5000
            ),
        )


def _parse_bounded_int(
    raw: Optional[str], field: str, default: int, minimum: int, maximum: int
) -> int:
    if raw is None or raw == "":
        return default

    try:
        value = int(raw, 10)
    except ValueError:
        logger.warning("config_invalid_value", field=field, value=raw, default=default)
        return default

    if value < minimum or value > maximum:
        logger.warning(
            "config_value_out_of_range",
            field=field,
            value=value,
            minimum=minimum,
            maximum=maximum,
            default=default,
        )
        return default

    return value


def validate_settings(settings: Settings) -> list[str]:
    """
    Check settings for problems that should prevent startup.

    Returns:
        List of human-readable problems (empty if the settings are usable)
    """
    errors: list[str] = []

    if not settings.api_base_url.startswith(("http://", "https://")):
        errors.append("BRAIINS_API_BASE_URL must be a valid URL")

    if not settings.redis_url.startswith(("redis://", "rediss://", "unix://")):
        errors.append("REDIS_URL must be a valid URL")

    if settings.environment == "production" and not settings.has_token:
        errors.append("BRAIINS_POOL_API_TOKEN is required in production")

    return errors
