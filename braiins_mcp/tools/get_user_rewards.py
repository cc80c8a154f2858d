"""
Get User Rewards MCP Tool.

Implements the getUserRewards tool: rewards time series with totals,
an earnings sparkline and the most recent data points.
"""

import time
from typing import NamedTuple, Optional

from braiins_mcp.api.cached_client import get_cached_client
from braiins_mcp.models.inputs import GetUserRewardsInput
from braiins_mcp.models.responses import RewardsPoint, UserRewardsResponse
from braiins_mcp.server import mcp
from braiins_mcp.tools.common import elapsed_ms, parse_response, raw_json, tool_error
from braiins_mcp.tools.formatting import format_btc, format_date, format_short_timestamp, sparkline
from braiins_mcp.utils.logger import get_logger, log_tool_execution

logger = get_logger(__name__)

TOOL_NAME = "getUserRewards"
RECENT_POINTS = 10


class RewardsTotals(NamedTuple):
    confirmed: float
    unconfirmed: float
    payout: float


def rewards_totals(points: list[RewardsPoint]) -> RewardsTotals:
    return RewardsTotals(
        confirmed=sum(float(point.confirmed) for point in points),
        unconfirmed=sum(float(point.unconfirmed) for point in points),
        payout=sum(float(point.payout) for point in points),
    )


def format_user_rewards(data: UserRewardsResponse, granularity: Optional[str] = None) -> str:
    lines = [f"## Rewards History ({data.currency})", ""]

    if not data.points:
        lines.append("*No rewards data available for the specified time range.*")
        return "\n".join(lines)

    # Hourly series need the time of day, coarser ones only the date
    format_time = format_short_timestamp if granularity == "hour" else format_date
    first, last = data.points[0], data.points[-1]
    suffix = f" ({granularity})" if granularity else ""

    lines.append(f"**Period**: {format_time(first.timestamp)} → {format_time(last.timestamp)}")
    lines.append(f"**Data Points**: {len(data.points)}{suffix}")
    lines.append("")

    totals = rewards_totals(data.points)
    lines.extend(
        [
            "### Totals",
            "| Type | Amount |",
            "|------|--------|",
            f"| Confirmed | {format_btc(f'{totals.confirmed:.8f}')} |",
            f"| Unconfirmed | {format_btc(f'{totals.unconfirmed:.8f}')} |",
            f"| Payouts | {format_btc(f'{totals.payout:.8f}')} |",
            "",
        ]
    )

    trend = sparkline([float(point.confirmed) for point in data.points])
    if trend:
        lines.extend(["### Earnings Trend", "```", trend, "```", ""])

    lines.extend(
        [
            "### Recent Rewards",
            "| Date | Confirmed | Unconfirmed | Payout |",
            "|------|-----------|-------------|--------|",
        ]
    )
    for point in data.points[-RECENT_POINTS:]:
        lines.append(
            f"| {format_time(point.timestamp)} | {point.confirmed} | {point.unconfirmed} | {point.payout} |"
        )

    if len(data.points) > RECENT_POINTS:
        lines.append(f"*Showing last {RECENT_POINTS} of {len(data.points)} points*")

    return "\n".join(lines)


@mcp.tool(
    name=TOOL_NAME,
    description=(
        "Get rewards history for your Braiins Pool account over a time range, "
        "with totals and an earnings trend. Granularity: hour, day, or week."
    ),
)
async def get_user_rewards(params: GetUserRewardsInput) -> str:
    """
    Get rewards history for the authenticated account.

    Cache Strategy:
        - TTL: 300s (CACHE_TTL_HISTORICAL)
        - Key: braiins:user-rewards:{params_hash}
    """
    start_time = time.time()
    api_params = params.to_api_params()

    logger.debug("get_user_rewards_started", params=api_params)

    try:
        raw = await get_cached_client().get_user_rewards(api_params)
    except Exception as e:
        raise tool_error(TOOL_NAME, e, start_time, params=api_params) from e

    data = parse_response(UserRewardsResponse, raw, TOOL_NAME)
    log_tool_execution(
        tool_name=TOOL_NAME,
        duration_ms=elapsed_ms(start_time),
        validated=data is not None,
        point_count=len(data.points) if data is not None else None,
    )

    if data is None:
        return raw_json(raw)
    return format_user_rewards(data, params.granularity)
