"""
Braiins Pool API integration layer.

This package provides:
- BraiinsClient: httpx client with exponential-backoff retries
- CachedBraiinsClient: cache-aside wrapper around BraiinsClient
- Typed exception hierarchy for upstream failures

Example:
    >>> from braiins_mcp.api import get_cached_client
    >>> stats = await get_cached_client().get_pool_stats()
"""

from braiins_mcp.api.cached_client import (
    CachedBraiinsClient,
    configure_cached_client,
    get_cached_client,
    reset_cached_client,
)
from braiins_mcp.api.client import BraiinsClient, get_braiins_client, reset_braiins_client
from braiins_mcp.api.exceptions import (
    BraiinsAPIError,
    BraiinsError,
    ConfigError,
    ErrorCode,
    NetworkError,
    RequestTimeoutError,
    ValidationError,
    is_braiins_error,
    to_braiins_error,
)

__all__ = [
    # Clients
    "BraiinsClient",
    "get_braiins_client",
    "reset_braiins_client",
    "CachedBraiinsClient",
    "get_cached_client",
    "configure_cached_client",
    "reset_cached_client",
    # Exceptions
    "ErrorCode",
    "BraiinsError",
    "BraiinsAPIError",
    "NetworkError",
    "RequestTimeoutError",
    "ValidationError",
    "ConfigError",
    "is_braiins_error",
    "to_braiins_error",
]
