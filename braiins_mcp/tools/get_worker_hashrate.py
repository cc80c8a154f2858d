"""
Get Worker Hashrate MCP Tool.

Implements the getWorkerHashrate tool: hashrate time series for a worker
with summary statistics and a sparkline trend.
"""

import time
from typing import NamedTuple, Optional

from braiins_mcp.api.cached_client import get_cached_client
from braiins_mcp.models.inputs import GetWorkerHashrateInput
from braiins_mcp.models.responses import HashratePoint, WorkerHashrateResponse
from braiins_mcp.server import mcp
from braiins_mcp.tools.common import elapsed_ms, parse_response, raw_json, tool_error
from braiins_mcp.tools.formatting import format_hashrate, format_short_timestamp, sparkline
from braiins_mcp.utils.logger import get_logger, log_tool_execution

logger = get_logger(__name__)

TOOL_NAME = "getWorkerHashrate"
RECENT_POINTS = 10


class HashrateStats(NamedTuple):
    minimum: float
    maximum: float
    average: float
    latest: float


def hashrate_stats(points: list[HashratePoint]) -> HashrateStats:
    values = [point.hashrate for point in points]
    return HashrateStats(
        minimum=min(values),
        maximum=max(values),
        average=sum(values) / len(values),
        latest=values[-1],
    )


def format_worker_hashrate(data: WorkerHashrateResponse, granularity: Optional[str] = None) -> str:
    lines = [f"## Hashrate History: {data.worker_id}", ""]

    if not data.points:
        lines.append("*No hashrate data available for the specified time range.*")
        return "\n".join(lines)

    first, last = data.points[0], data.points[-1]
    suffix = f" ({granularity})" if granularity else ""
    lines.append(
        f"**Period**: {format_short_timestamp(first.timestamp)} → {format_short_timestamp(last.timestamp)}"
    )
    lines.append(f"**Data Points**: {len(data.points)}{suffix}")
    lines.append("")

    stats = hashrate_stats(data.points)
    lines.extend(
        [
            "### Statistics",
            "| Metric | Value |",
            "|--------|-------|",
            f"| Latest | {format_hashrate(stats.latest)} |",
            f"| Average | {format_hashrate(stats.average)} |",
            f"| Minimum | {format_hashrate(stats.minimum)} |",
            f"| Maximum | {format_hashrate(stats.maximum)} |",
            "",
        ]
    )

    trend = sparkline([point.hashrate for point in data.points])
    if trend:
        lines.extend(["### Trend", "```", trend, "```", ""])

    lines.extend(["### Recent Data Points", "| Time | Hashrate |", "|------|----------|"])
    for point in data.points[-RECENT_POINTS:]:
        lines.append(f"| {format_short_timestamp(point.timestamp)} | {format_hashrate(point.hashrate)} |")

    if len(data.points) > RECENT_POINTS:
        lines.append(f"*Showing last {RECENT_POINTS} of {len(data.points)} points*")

    return "\n".join(lines)


@mcp.tool(
    name=TOOL_NAME,
    description=(
        "Get historical hashrate data for a specific worker over a time range, "
        "with summary statistics and a trend sparkline. Granularity: minute, hour, or day."
    ),
)
async def get_worker_hashrate(params: GetWorkerHashrateInput) -> str:
    """
    Get hashrate history for one worker.

    Cache Strategy:
        - TTL: 300s (CACHE_TTL_HISTORICAL)
        - Key: braiins:worker-hashrate:{sanitized_worker_id}:{params_hash}
    """
    start_time = time.time()
    api_params = params.to_api_params()

    logger.debug("get_worker_hashrate_started", worker_id=params.worker_id, params=api_params)

    try:
        raw = await get_cached_client().get_worker_hashrate(params.worker_id, api_params)
    except Exception as e:
        raise tool_error(TOOL_NAME, e, start_time, worker_id=params.worker_id) from e

    data = parse_response(WorkerHashrateResponse, raw, TOOL_NAME)
    log_tool_execution(
        tool_name=TOOL_NAME,
        duration_ms=elapsed_ms(start_time),
        validated=data is not None,
        worker_id=params.worker_id,
    )

    if data is None:
        return raw_json(raw)
    return format_worker_hashrate(data, params.granularity)
