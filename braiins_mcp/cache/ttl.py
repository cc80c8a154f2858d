"""TTL (Time To Live) policies for different resource kinds.

This module defines cache expiration policies based on how quickly each
kind of pool data changes, with per-kind overrides from the environment.
"""

import os
from enum import Enum
from typing import Mapping, Optional

import structlog

from braiins_mcp.cache.keys import ResourceKind

logger = structlog.get_logger(__name__)


class CacheTTL(Enum):
    """
    Cache TTL tiers for Braiins Pool data.

    TTL values are chosen by data volatility:
    - Real-time stats (worker status, overview): 30 seconds
    - Aggregate pool/network stats: 60 seconds
    - Historical timeseries (hashrate, rewards): 5 minutes

    Values are in seconds.
    """

    VOLATILE = 30
    MODERATE = 60
    HISTORICAL = 300


DEFAULT_TTL: dict[ResourceKind, int] = {
    ResourceKind.USER_OVERVIEW: CacheTTL.VOLATILE.value,
    ResourceKind.WORKERS_LIST: CacheTTL.VOLATILE.value,
    ResourceKind.WORKER_DETAILS: CacheTTL.VOLATILE.value,
    ResourceKind.WORKER_HASHRATE: CacheTTL.HISTORICAL.value,
    ResourceKind.USER_REWARDS: CacheTTL.HISTORICAL.value,
    ResourceKind.POOL_STATS: CacheTTL.MODERATE.value,
    ResourceKind.NETWORK_STATS: CacheTTL.MODERATE.value,
}

# Environment variable overriding each kind's TTL (several kinds share one)
TTL_ENV_VARS: dict[ResourceKind, str] = {
    ResourceKind.USER_OVERVIEW: "CACHE_TTL_USER_OVERVIEW",
    ResourceKind.WORKERS_LIST: "CACHE_TTL_WORKERS",
    ResourceKind.WORKER_DETAILS: "CACHE_TTL_WORKERS",
    ResourceKind.WORKER_HASHRATE: "CACHE_TTL_HISTORICAL",
    ResourceKind.USER_REWARDS: "CACHE_TTL_HISTORICAL",
    ResourceKind.POOL_STATS: "CACHE_TTL_POOL_STATS",
    ResourceKind.NETWORK_STATS: "CACHE_TTL_NETWORK_STATS",
}


def parse_ttl(raw: Optional[str], default: int) -> int:
    """
    Parse a TTL override, falling back to the default.

    Unset, empty, non-numeric and negative values yield the default;
    "0" is a valid TTL meaning "do not cache".

    Example:
        >>> parse_ttl("0", 30)
        0
        >>> parse_ttl("abc", 30)
        30
    """
    if raw is None or raw.strip() == "":
        return default

    try:
        parsed = int(raw.strip(), 10)
    except ValueError:
        return default

    if parsed < 0:
        return default

    return parsed


class CachePolicy:
    """
    Per-kind TTL table plus a global enabled flag.

    Attributes:
        enabled: Global switch; when False nothing is cached
    """

    def __init__(
        self,
        enabled: bool = True,
        ttls: Optional[Mapping[ResourceKind, int]] = None,
    ) -> None:
        self.enabled = enabled
        self._ttls: dict[ResourceKind, int] = dict(DEFAULT_TTL)
        if ttls:
            self._ttls.update({ResourceKind(k): v for k, v in ttls.items()})

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CachePolicy":
        """
        Load the policy from CACHE_ENABLED and CACHE_TTL_* variables.

        Caching is enabled unless CACHE_ENABLED is exactly "false".
        """
        env = os.environ if environ is None else environ

        enabled = env.get("CACHE_ENABLED") != "false"
        ttls = {
            kind: parse_ttl(env.get(TTL_ENV_VARS[kind]), DEFAULT_TTL[kind])
            for kind in ResourceKind
        }

        policy = cls(enabled=enabled, ttls=ttls)

        logger.debug(
            "cache_policy_loaded",
            enabled=enabled,
            ttls={kind.value: ttl for kind, ttl in ttls.items()},
        )

        return policy

    def ttl(self, kind: ResourceKind | str) -> int:
        """TTL in seconds for a resource kind."""
        return self._ttls[ResourceKind(kind)]

    def should_cache(self, kind: ResourceKind | str) -> bool:
        """True if caching is globally enabled and the kind has a positive TTL."""
        return self.enabled and self.ttl(kind) > 0

    def all_ttls(self) -> dict[ResourceKind, int]:
        return dict(self._ttls)


_policy: Optional[CachePolicy] = None


def get_cache_policy() -> CachePolicy:
    """Return the process-wide policy, loading it from the environment on first use."""
    global _policy
    if _policy is None:
        _policy = CachePolicy.from_env()
    return _policy


def reset_cache_policy() -> None:
    """Discard the memoized policy so the next access reloads the environment."""
    global _policy
    _policy = None


def get_ttl(kind: ResourceKind | str) -> int:
    return get_cache_policy().ttl(kind)


def should_cache(kind: ResourceKind | str) -> bool:
    return get_cache_policy().should_cache(kind)


def get_all_ttls() -> dict[ResourceKind, int]:
    return get_cache_policy().all_ttls()
