"""
List Workers MCP Tool.

Implements the listWorkers tool: paginated list of mining workers with
status filtering, name search and sorting.
"""

import math
import time

from braiins_mcp.api.cached_client import get_cached_client
from braiins_mcp.models.inputs import ListWorkersInput
from braiins_mcp.models.responses import ListWorkersResponse, Worker
from braiins_mcp.server import mcp
from braiins_mcp.tools.common import elapsed_ms, parse_response, raw_json, tool_error
from braiins_mcp.tools.formatting import format_hashrate, format_relative_time, format_status
from braiins_mcp.utils.logger import get_logger, log_tool_execution

logger = get_logger(__name__)

TOOL_NAME = "listWorkers"


def format_worker_row(worker: Worker) -> str:
    # 24h average is steadier than current hashrate
    return (
        f"| {worker.name} | {format_status(worker.status)} | "
        f"{format_hashrate(worker.hashrate.avg_24h)} | "
        f"{format_relative_time(worker.last_share_at)} |"
    )


def format_workers(data: ListWorkersResponse, page: int, page_size: int) -> str:
    total_pages = max(1, math.ceil(data.total / page_size))
    lines = [
        f"## Workers (Page {page} of {total_pages})",
        "",
        f"**Total workers**: {data.total} | **Showing**: {len(data.workers)}",
        "",
    ]

    if not data.workers:
        lines.append("*No workers found matching your criteria.*")
    else:
        lines.append("| Name | Status | Hashrate (24h avg) | Last Share |")
        lines.append("|------|--------|-------------------|------------|")
        lines.extend(format_worker_row(worker) for worker in data.workers)

    lines.append("")
    if data.total > page_size:
        lines.append(f"*Page {page}/{total_pages}. Use `page` parameter to navigate.*")

    return "\n".join(lines)


@mcp.tool(
    name=TOOL_NAME,
    description=(
        "List mining workers for your Braiins Pool account with pagination and "
        "filtering. Filter by status (active/inactive), search by name, and sort "
        "by hashrate or name."
    ),
)
async def list_workers(params: ListWorkersInput) -> str:
    """
    List workers for the authenticated account.

    Args:
        params: Validated input parameters (ListWorkersInput)

    Cache Strategy:
        - TTL: 30s (CACHE_TTL_WORKERS)
        - Key: braiins:workers-list:{params_hash}
    """
    start_time = time.time()
    api_params = params.to_api_params()

    logger.debug("list_workers_started", params=api_params)

    try:
        raw = await get_cached_client().list_workers(api_params)
    except Exception as e:
        raise tool_error(TOOL_NAME, e, start_time, params=api_params) from e

    data = parse_response(ListWorkersResponse, raw, TOOL_NAME)
    log_tool_execution(
        tool_name=TOOL_NAME,
        duration_ms=elapsed_ms(start_time),
        validated=data is not None,
        worker_count=len(data.workers) if data is not None else None,
    )

    if data is None:
        return raw_json(raw)
    return format_workers(data, params.page, params.page_size)
