"""Shared utilities (logging)."""

from braiins_mcp.utils.logger import get_logger, log_tool_execution, setup_logging

__all__ = ["get_logger", "log_tool_execution", "setup_logging"]
