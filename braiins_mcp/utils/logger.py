"""
Structured logging configuration using structlog.

Provides JSON-formatted logging with context processors for
timestamps, log levels, and redaction of sensitive values. Logs are
written to stderr so they never interleave with the stdio MCP transport.
"""
import logging
import os
import sys
from typing import Any

import structlog

SENSITIVE_KEYS = (
    "token",
    "api_key",
    "apikey",
    "password",
    "secret",
    "authorization",
    "credential",
)

REDACTED = "[REDACTED]"


def redact_sensitive(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """
    structlog processor that masks values of sensitive-looking keys.

    Any key containing one of SENSITIVE_KEYS (case-insensitive) has its
    value replaced with "[REDACTED]".
    """
    for key in list(event_dict):
        lowered = key.lower()
        if any(sensitive in lowered for sensitive in SENSITIVE_KEYS):
            event_dict[key] = REDACTED
    return event_dict


def setup_logging(level: str = "INFO", log_format: str | None = None) -> None:
    """
    Configure structured logging with structlog.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: "json" or "pretty"; when omitted, pretty output is used
            only if ENVIRONMENT=development

    Sets up:
        - JSON output format for production
        - Console output with colors for development
        - Context processors for timestamps and metadata
        - Integration with standard library logging
    """
    # "warn" is accepted for parity with LOG_LEVEL values used elsewhere
    normalized = "WARNING" if level.upper() == "WARN" else level.upper()
    log_level = getattr(logging, normalized, logging.INFO)

    # Configure standard library logging (httpx, redis)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )

    if log_format is None:
        is_pretty = os.getenv("ENVIRONMENT", "production") == "development"
    else:
        is_pretty = log_format == "pretty"

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        redact_sensitive,
    ]

    if is_pretty:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of calling module)

    Returns:
        Configured structlog logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("tool_request", tool="getPoolStats")
    """
    return structlog.get_logger(name)


def log_tool_execution(
    tool_name: str,
    duration_ms: float,
    error: str | None = None,
    **extra: Any,
) -> None:
    """
    Log tool execution metrics in structured format.

    Args:
        tool_name: Name of the MCP tool executed
        duration_ms: Execution time in milliseconds
        error: Error message if execution failed
        **extra: Additional context to log

    Example:
        >>> log_tool_execution(
        ...     tool_name="listWorkers",
        ...     duration_ms=123.4,
        ...     worker_count=25
        ... )
    """
    logger = get_logger("tool_execution")

    log_data = {
        "tool": tool_name,
        "duration_ms": round(duration_ms, 2),
        "error": error,
        **extra,
    }

    if error:
        logger.error("tool_execution_failed", **log_data)
    else:
        logger.info("tool_execution_success", **log_data)
