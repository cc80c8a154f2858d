"""Response validation and error reporting shared by the pool tools."""

import json
import time
from typing import Any, Optional, TypeVar

from mcp.server.fastmcp.exceptions import ToolError
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from braiins_mcp.api.exceptions import to_braiins_error
from braiins_mcp.utils.logger import get_logger, log_tool_execution

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_response(model: type[ModelT], raw: Any, tool_name: str) -> Optional[ModelT]:
    """
    Validate an API body against its response model.

    Returns None (after logging the issues) when the body does not match,
    so the caller can fall back to showing the raw JSON.
    """
    try:
        return model.model_validate(raw)
    except PydanticValidationError as e:
        logger.error(
            "api_response_validation_failed",
            tool=tool_name,
            issues=e.errors(include_url=False),
        )
        return None


def raw_json(raw: Any) -> str:
    return json.dumps(raw, indent=2, ensure_ascii=False, default=str)


def elapsed_ms(start_time: float) -> float:
    return (time.time() - start_time) * 1000


def tool_error(tool_name: str, error: Exception, start_time: float, **context: Any) -> ToolError:
    """
    Log a failed tool call and build the ToolError carrying the error payload.

    The ToolError message is the JSON form of BraiinsError.to_dict().
    """
    braiins_error = to_braiins_error(error)
    log_tool_execution(
        tool_name=tool_name,
        duration_ms=elapsed_ms(start_time),
        error=braiins_error.message,
        code=braiins_error.code.value,
        **context,
    )
    return ToolError(json.dumps(braiins_error.to_dict(), default=str))
