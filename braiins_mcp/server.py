"""
FastMCP Server initialization and configuration.

Sets up the MCP server with metadata and the health check tool. The pool
tools register themselves on import of braiins_mcp.tools.
"""
from typing import Any

from mcp.server.fastmcp import FastMCP

from braiins_mcp import __version__
from braiins_mcp.api.cached_client import get_cached_client
from braiins_mcp.models.responses import HealthCheckResponse
from braiins_mcp.utils.logger import get_logger

# Initialize logger
logger = get_logger(__name__)

# Server metadata
SERVER_NAME = "braiins-pool-mcp-server"
SERVER_VERSION = __version__
SERVER_INSTRUCTIONS = (
    "Read-only access to Braiins Pool mining data: account overview, workers, "
    "hashrate and rewards history, pool statistics and Bitcoin network statistics."
)


def create_mcp_server() -> FastMCP:
    """
    Create and configure the FastMCP server instance.

    Returns:
        FastMCP server with the health check tool registered

    Example:
        >>> server = create_mcp_server()
        >>> await server.run_stdio_async()
    """
    mcp = FastMCP(name=SERVER_NAME, instructions=SERVER_INSTRUCTIONS)

    logger.info(
        "mcp_server_initialized",
        name=SERVER_NAME,
        version=SERVER_VERSION,
        capabilities=["tools"],
    )

    register_health_check(mcp)

    return mcp


async def check_health() -> HealthCheckResponse:
    """
    Probe Redis and collect cache statistics.

    A disabled or unreachable cache reports "degraded", not "unhealthy".
    """
    cache = get_cached_client().cache

    if cache.redis_cache.enabled:
        redis_status = "healthy" if await cache.redis_cache.ping() else "unhealthy"
    else:
        redis_status = "disabled"

    components = {"server": "healthy", "redis": redis_status}

    if all(status == "healthy" for status in components.values()):
        overall_status = "healthy"
    else:
        overall_status = "degraded"

    stats = cache.get_stats()
    response = HealthCheckResponse(
        status=overall_status,
        version=SERVER_VERSION,
        components=components,
        cache_stats=stats.model_dump(),
    )

    logger.debug("health_check_performed", status=overall_status, redis=redis_status)

    return response


def register_health_check(mcp: FastMCP) -> None:
    """
    Register the health check tool.

    Args:
        mcp: FastMCP server instance
    """

    @mcp.tool()
    async def health_check() -> dict[str, Any]:
        """
        Health check endpoint for monitoring.

        Returns server health status, Redis connectivity and cache statistics.
        """
        response = await check_health()
        return response.model_dump()


# Create global MCP server instance (singleton)
mcp = create_mcp_server()
