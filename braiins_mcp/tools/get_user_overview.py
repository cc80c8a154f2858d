"""
Get User Overview MCP Tool.

Implements the getUserOverview tool: account summary with hashrate,
rewards balance and worker counts for the authenticated user.
"""

import time
from typing import Optional

from braiins_mcp.api.cached_client import get_cached_client
from braiins_mcp.models.inputs import GetUserOverviewInput
from braiins_mcp.models.responses import UserOverviewResponse
from braiins_mcp.server import mcp
from braiins_mcp.tools.common import elapsed_ms, parse_response, raw_json, tool_error
from braiins_mcp.tools.formatting import format_datetime, format_hashrate
from braiins_mcp.utils.logger import get_logger, log_tool_execution

logger = get_logger(__name__)

TOOL_NAME = "getUserOverview"


def format_user_overview(data: UserOverviewResponse) -> str:
    if data.rewards.last_payout_at is not None:
        last_payout_at = format_datetime(data.rewards.last_payout_at)
    else:
        last_payout_at = "Never"

    lines = [
        f"## Mining Overview for {data.username}",
        "",
        "### Hashrate",
        f"- **Current**: {format_hashrate(data.hashrate.current)}",
        f"- **1h Average**: {format_hashrate(data.hashrate.avg_1h)}",
        f"- **24h Average**: {format_hashrate(data.hashrate.avg_24h)}",
        "",
        f"### Rewards ({data.currency})",
        f"- **Confirmed**: {data.rewards.confirmed}",
        f"- **Unconfirmed**: {data.rewards.unconfirmed}",
        f"- **Last Payout**: {data.rewards.last_payout}",
        f"- **Last Payout At**: {last_payout_at}",
        "",
        "### Workers",
        f"- **Active**: {data.workers.active}",
        f"- **Inactive**: {data.workers.inactive}",
        f"- **Total**: {data.workers.total}",
        "",
        f"*Last updated: {format_datetime(data.updated_at)}*",
    ]
    return "\n".join(lines)


@mcp.tool(
    name=TOOL_NAME,
    description=(
        "Get a high-level summary of your Braiins Pool mining account including "
        "current hashrate, rewards balance, and worker status."
    ),
)
async def get_user_overview(params: Optional[GetUserOverviewInput] = None) -> str:
    """
    Get the authenticated user's account overview.

    Cache Strategy:
        - TTL: 30s (CACHE_TTL_USER_OVERVIEW)
        - Key: braiins:user-overview
    """
    start_time = time.time()
    logger.debug("get_user_overview_started")

    try:
        raw = await get_cached_client().get_user_overview()
    except Exception as e:
        raise tool_error(TOOL_NAME, e, start_time) from e

    data = parse_response(UserOverviewResponse, raw, TOOL_NAME)
    log_tool_execution(tool_name=TOOL_NAME, duration_ms=elapsed_ms(start_time), validated=data is not None)

    if data is None:
        return raw_json(raw)
    return format_user_overview(data)
