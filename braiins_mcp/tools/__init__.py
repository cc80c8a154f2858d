"""MCP tool implementations for Braiins Pool data access.

Importing this package registers every tool with the FastMCP server.
"""

from braiins_mcp.tools.get_network_stats import get_network_stats
from braiins_mcp.tools.get_pool_stats import get_pool_stats
from braiins_mcp.tools.get_user_overview import get_user_overview
from braiins_mcp.tools.get_user_rewards import get_user_rewards
from braiins_mcp.tools.get_worker_details import get_worker_details
from braiins_mcp.tools.get_worker_hashrate import get_worker_hashrate
from braiins_mcp.tools.list_workers import list_workers

TOOL_NAMES = (
    "getUserOverview",
    "listWorkers",
    "getWorkerDetails",
    "getWorkerHashrate",
    "getUserRewards",
    "getPoolStats",
    "getNetworkStats",
)

__all__ = [
    # Account tools
    "get_user_overview",
    "get_user_rewards",
    # Worker tools
    "list_workers",
    "get_worker_details",
    "get_worker_hashrate",
    # Pool and network tools
    "get_pool_stats",
    "get_network_stats",
    "TOOL_NAMES",
]
