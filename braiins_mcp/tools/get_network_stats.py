"""
Get Network Stats MCP Tool.

Implements the getNetworkStats tool: Bitcoin network difficulty, estimated
hashrate, block timing and the next difficulty adjustment.
"""

import time
from typing import Optional

from braiins_mcp.api.cached_client import get_cached_client
from braiins_mcp.models.inputs import GetNetworkStatsInput
from braiins_mcp.models.responses import NetworkStatsResponse
from braiins_mcp.server import mcp
from braiins_mcp.tools.common import elapsed_ms, parse_response, raw_json, tool_error
from braiins_mcp.tools.formatting import (
    POOL_HASHRATE_UNITS,
    block_time_indicator,
    format_block_time,
    format_date,
    format_difficulty,
    format_hashrate,
    format_time_until,
)
from braiins_mcp.utils.logger import get_logger, log_tool_execution

logger = get_logger(__name__)

TOOL_NAME = "getNetworkStats"


def format_network_stats(data: NetworkStatsResponse) -> str:
    indicator = block_time_indicator(data.block_time_avg, data.block_time_target)
    lines = [
        "## Bitcoin Network Statistics",
        "",
        "### Network Metrics",
        "| Metric | Value |",
        "|--------|-------|",
        f"| Network Hashrate | {format_hashrate(data.hashrate_estimate, POOL_HASHRATE_UNITS)} |",
        f"| Mining Difficulty | {format_difficulty(data.difficulty)} |",
        "",
        "### Block Timing",
        "| Metric | Value |",
        "|--------|-------|",
        f"| Target Block Time | {format_block_time(data.block_time_target)} |",
        f"| Average Block Time | {format_block_time(data.block_time_avg)} {indicator} |",
        "",
        "### Difficulty Adjustment",
        "| Metric | Value |",
        "|--------|-------|",
        f"| Next Adjustment | {format_time_until(data.next_difficulty_change_eta)} |",
        f"| Adjustment Date | {format_date(data.next_difficulty_change_eta)} |",
    ]
    return "\n".join(lines)


@mcp.tool(
    name=TOOL_NAME,
    description=(
        "Get Bitcoin network statistics including difficulty, estimated network "
        "hashrate, average block time, and the next difficulty adjustment."
    ),
)
async def get_network_stats(params: Optional[GetNetworkStatsInput] = None) -> str:
    """
    Get Bitcoin network statistics.

    Cache Strategy:
        - TTL: 60s (CACHE_TTL_NETWORK_STATS)
        - Key: braiins:network-stats
    """
    start_time = time.time()
    logger.debug("get_network_stats_started")

    try:
        raw = await get_cached_client().get_network_stats()
    except Exception as e:
        raise tool_error(TOOL_NAME, e, start_time) from e

    data = parse_response(NetworkStatsResponse, raw, TOOL_NAME)
    log_tool_execution(tool_name=TOOL_NAME, duration_ms=elapsed_ms(start_time), validated=data is not None)

    if data is None:
        return raw_json(raw)
    return format_network_stats(data)
