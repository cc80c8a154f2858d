"""
Braiins Pool MCP Server - Main Entry Point

Initializes logging, validates configuration, wires the Redis cache and
Braiins API client together and runs the FastMCP server over stdio.
"""
import asyncio
import sys

from braiins_mcp.api.cached_client import CachedBraiinsClient, configure_cached_client
from braiins_mcp.api.client import BraiinsClient
from braiins_mcp.api.exceptions import ConfigError
from braiins_mcp.cache.connection import RedisCache, sanitize_redis_url
from braiins_mcp.cache.manager import CacheManager
from braiins_mcp.cache.ttl import get_cache_policy
from braiins_mcp.config import Settings, validate_settings
from braiins_mcp.server import SERVER_VERSION, mcp
from braiins_mcp.utils.logger import get_logger, setup_logging

# Import tools to register them with the MCP server
import braiins_mcp.tools  # noqa: F401

# Initialize logger (will be reconfigured in main())
logger = get_logger(__name__)


def load_settings() -> Settings:
    """
    Read settings from the environment and configure logging.

    Raises:
        ConfigError: If the configuration is unusable (e.g. no API token
            in production)
    """
    settings = Settings.from_env()
    setup_logging(level=settings.log_level, log_format=settings.log_format)

    problems = validate_settings(settings)
    if problems:
        raise ConfigError(
            "Invalid configuration: " + "; ".join(problems),
            details={"problems": problems},
        )

    if not settings.has_token:
        logger.warning("api_token_missing", environment=settings.environment)

    return settings


def build_client(settings: Settings) -> CachedBraiinsClient:
    """Construct the cached API client from explicit settings."""
    cache = CacheManager(
        RedisCache(redis_url=settings.redis_url, enabled=settings.redis_enabled)
    )
    return CachedBraiinsClient(BraiinsClient(settings), cache, get_cache_policy())


async def main() -> None:
    """
    Main entry point.

    Initializes:
        1. Structured logging
        2. Braiins API client with retries
        3. Redis cache (connected lazily on first use)
        4. FastMCP server on stdio
    """
    settings = load_settings()

    logger.info(
        "server_starting",
        version=SERVER_VERSION,
        environment=settings.environment,
        log_level=settings.log_level,
        api_base_url=settings.api_base_url,
        redis_url=sanitize_redis_url(settings.redis_url),
        redis_enabled=settings.redis_enabled,
        cache_ttls=get_cache_policy().all_ttls(),
    )

    client = build_client(settings)
    configure_cached_client(client)

    logger.info("mcp_server_ready", name=mcp.name, version=SERVER_VERSION)

    try:
        # Run server (blocks until stdin closes)
        await mcp.run_stdio_async()
    except Exception as e:
        logger.error(
            "server_error",
            error=str(e),
            exc_info=True,
        )
        raise
    finally:
        await client.shutdown()
        logger.info("server_shutdown_complete")


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except ConfigError as e:
        logger.error("configuration_invalid", error=e.message, **(e.details or {}))
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("shutdown_signal_received", signal="SIGINT")


if __name__ == "__main__":
    run()
