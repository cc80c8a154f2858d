"""
Get Worker Details MCP Tool.

Implements the getWorkerDetails tool: hashrate, share statistics,
hardware and environment information for a single worker.
"""

import time

from braiins_mcp.api.cached_client import get_cached_client
from braiins_mcp.models.inputs import GetWorkerDetailsInput
from braiins_mcp.models.responses import WorkerDetailsResponse
from braiins_mcp.server import mcp
from braiins_mcp.tools.common import elapsed_ms, parse_response, raw_json, tool_error
from braiins_mcp.tools.formatting import (
    format_datetime,
    format_hashrate,
    format_number,
    format_relative_time,
    format_status,
    rejection_rate,
)
from braiins_mcp.utils.logger import get_logger, log_tool_execution

logger = get_logger(__name__)

TOOL_NAME = "getWorkerDetails"


def format_worker_details(data: WorkerDetailsResponse) -> str:
    shares = data.shares
    lines = [
        f"## Worker: {data.name}",
        "",
        f"**ID**: `{data.id}`",
        f"**Status**: {format_status(data.status)}",
        f"**Last Share**: {format_relative_time(data.last_share_at)}",
        "",
        "### Hashrate",
        "| Metric | Value |",
        "|--------|-------|",
        f"| Current | {format_hashrate(data.hashrate.current)} |",
        f"| 1h Average | {format_hashrate(data.hashrate.avg_1h)} |",
        f"| 24h Average | {format_hashrate(data.hashrate.avg_24h)} |",
        "",
        "### Shares",
        "| Type | Count |",
        "|------|-------|",
        f"| Valid | {format_number(shares.valid)} |",
        f"| Invalid | {format_number(shares.invalid)} |",
        f"| Stale | {format_number(shares.stale)} |",
        f"| **Rejection Rate** | {rejection_rate(shares.valid, shares.invalid, shares.stale)} |",
    ]

    if data.hardware is not None:
        lines.extend(
            [
                "",
                "### Hardware",
                f"- **Model**: {data.hardware.model}",
                f"- **Firmware**: {data.hardware.firmware}",
            ]
        )
        if data.hardware.power_mode:
            lines.append(f"- **Power Mode**: {data.hardware.power_mode}")

    if data.environment is not None:
        temp = data.environment.temperature
        lines.extend(
            [
                "",
                "### Environment",
                f"- **Temperature**: {temp.avg:.1f}°{temp.unit} avg / {temp.max:.1f}°{temp.unit} max",
            ]
        )

    lines.extend(
        [
            "",
            "---",
            f"*Created: {format_datetime(data.created_at)}*",
            f"*Updated: {format_datetime(data.updated_at)}*",
        ]
    )
    return "\n".join(lines)


@mcp.tool(
    name=TOOL_NAME,
    description=(
        "Get detailed information about a specific mining worker including "
        "hashrate history, share statistics, hardware info, and temperature."
    ),
)
async def get_worker_details(params: GetWorkerDetailsInput) -> str:
    """
    Get details for one worker.

    Cache Strategy:
        - TTL: 30s (CACHE_TTL_WORKERS)
        - Key: braiins:worker-details:{sanitized_worker_id}
    """
    start_time = time.time()
    logger.debug("get_worker_details_started", worker_id=params.worker_id)

    try:
        raw = await get_cached_client().get_worker_details(params.worker_id)
    except Exception as e:
        raise tool_error(TOOL_NAME, e, start_time, worker_id=params.worker_id) from e

    data = parse_response(WorkerDetailsResponse, raw, TOOL_NAME)
    log_tool_execution(
        tool_name=TOOL_NAME,
        duration_ms=elapsed_ms(start_time),
        validated=data is not None,
        worker_id=params.worker_id,
    )

    if data is None:
        return raw_json(raw)
    return format_worker_details(data)
