"""
Get Pool Stats MCP Tool.

Implements the getPoolStats tool: global Braiins Pool statistics including
total hashrate, active workers, last block found and pool luck.
"""

import time
from typing import Optional

from braiins_mcp.api.cached_client import get_cached_client
from braiins_mcp.models.inputs import GetPoolStatsInput
from braiins_mcp.models.responses import PoolStatsResponse
from braiins_mcp.server import mcp
from braiins_mcp.tools.common import elapsed_ms, parse_response, raw_json, tool_error
from braiins_mcp.tools.formatting import (
    POOL_HASHRATE_UNITS,
    format_datetime,
    format_hashrate,
    format_luck,
    format_number,
    format_relative_time,
)
from braiins_mcp.utils.logger import get_logger, log_tool_execution

logger = get_logger(__name__)

TOOL_NAME = "getPoolStats"


def format_pool_stats(data: PoolStatsResponse) -> str:
    lines = [
        f"## Braiins Pool Statistics ({data.coin})",
        "",
        "### Pool Performance",
        "| Metric | Value |",
        "|--------|-------|",
        f"| Total Hashrate | {format_hashrate(data.pool_hashrate, POOL_HASHRATE_UNITS)} |",
        f"| Active Workers | {format_number(data.workers_active)} |",
        "",
        "### Last Block Found",
        "| Metric | Value |",
        "|--------|-------|",
        f"| Block Height | {format_number(data.last_block.height)} |",
        f"| Reward | {data.last_block.reward} BTC |",
        f"| Found | {format_relative_time(data.last_block.found_at)} |",
        "",
        "### Pool Luck",
        "| Metric | Value |",
        "|--------|-------|",
        f"| Luck ({data.luck.window_blocks} blocks) | {format_luck(data.luck.value)} |",
        "",
        "---",
        f"*Last updated: {format_datetime(data.updated_at)}*",
    ]
    return "\n".join(lines)


@mcp.tool(
    name=TOOL_NAME,
    description=(
        "Get global Braiins Pool statistics including total pool hashrate, "
        "number of active workers, last block found, and pool luck metrics."
    ),
)
async def get_pool_stats(params: Optional[GetPoolStatsInput] = None) -> str:
    """
    Get global Braiins Pool statistics.

    Cache Strategy:
        - TTL: 60s (CACHE_TTL_POOL_STATS)
        - Key: braiins:pool-stats
    """
    start_time = time.time()
    logger.debug("get_pool_stats_started")

    try:
        raw = await get_cached_client().get_pool_stats()
    except Exception as e:
        raise tool_error(TOOL_NAME, e, start_time) from e

    data = parse_response(PoolStatsResponse, raw, TOOL_NAME)
    log_tool_execution(tool_name=TOOL_NAME, duration_ms=elapsed_ms(start_time), validated=data is not None)

    if data is None:
        return raw_json(raw)
    return format_pool_stats(data)
