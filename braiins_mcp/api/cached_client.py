"""
Cached Braiins Pool API client.

Wraps BraiinsClient with the cache-aside pattern: read the cache first,
fall through to the API on a miss, then populate the cache in the
background. Cache failures never block or fail a request.
"""

from typing import Any, Awaitable, Callable, Optional

import structlog

from braiins_mcp.api.client import BraiinsClient, QueryParams, get_braiins_client
from braiins_mcp.cache.keys import (
    ResourceKind,
    build_network_stats_key,
    build_pool_stats_key,
    build_user_overview_key,
    build_user_rewards_key,
    build_worker_details_key,
    build_worker_hashrate_key,
    build_workers_list_key,
)
from braiins_mcp.cache.manager import CacheManager, get_cache_manager
from braiins_mcp.cache.ttl import CachePolicy, get_cache_policy

logger = structlog.get_logger(__name__)


class CachedBraiinsClient:
    """
    Same interface as BraiinsClient, with transparent caching.

    Concurrent misses for the same key each call the API and each write
    the cache; the last write wins.

    Attributes:
        client: Upstream API client
        cache: Cache store
        policy: TTL policy deciding whether and how long to cache
    """

    def __init__(
        self,
        client: BraiinsClient,
        cache: CacheManager,
        policy: Optional[CachePolicy] = None,
    ) -> None:
        self.client = client
        self.cache = cache
        self.policy = policy or get_cache_policy()

    async def _get_or_fetch(
        self,
        kind: ResourceKind,
        cache_key: str,
        fetch: Callable[[], Awaitable[Any]],
    ) -> Any:
        use_cache = self.policy.should_cache(kind)

        if use_cache:
            cached = await self.cache.get(cache_key)
            if cached is not None:
                logger.debug("cache_hit_served", kind=kind.value, key=cache_key)
                return cached

        logger.debug("upstream_fetch", kind=kind.value, key=cache_key, cache_enabled=use_cache)
        data = await fetch()

        if use_cache:
            self.cache.schedule_set(cache_key, data, self.policy.ttl(kind))

        return data

    async def get_user_overview(self) -> Any:
        return await self._get_or_fetch(
            ResourceKind.USER_OVERVIEW,
            build_user_overview_key(),
            self.client.get_user_overview,
        )

    async def list_workers(self, params: Optional[QueryParams] = None) -> Any:
        params = params or {}
        return await self._get_or_fetch(
            ResourceKind.WORKERS_LIST,
            build_workers_list_key(params),
            lambda: self.client.list_workers(params),
        )

    async def get_worker_details(self, worker_id: str) -> Any:
        return await self._get_or_fetch(
            ResourceKind.WORKER_DETAILS,
            build_worker_details_key(worker_id),
            lambda: self.client.get_worker_details(worker_id),
        )

    async def get_worker_hashrate(
        self, worker_id: str, params: Optional[QueryParams] = None
    ) -> Any:
        params = params or {}
        return await self._get_or_fetch(
            ResourceKind.WORKER_HASHRATE,
            build_worker_hashrate_key(worker_id, params),
            lambda: self.client.get_worker_hashrate(worker_id, params),
        )

    async def get_user_rewards(self, params: Optional[QueryParams] = None) -> Any:
        params = params or {}
        return await self._get_or_fetch(
            ResourceKind.USER_REWARDS,
            build_user_rewards_key(params),
            lambda: self.client.get_user_rewards(params),
        )

    async def get_pool_stats(self) -> Any:
        return await self._get_or_fetch(
            ResourceKind.POOL_STATS,
            build_pool_stats_key(),
            self.client.get_pool_stats,
        )

    async def get_network_stats(self) -> Any:
        return await self._get_or_fetch(
            ResourceKind.NETWORK_STATS,
            build_network_stats_key(),
            self.client.get_network_stats,
        )

    async def shutdown(self) -> None:
        """Flush background cache writes, then close Redis and HTTP connections."""
        await self.cache.close()
        await self.client.close()


_cached_client: Optional[CachedBraiinsClient] = None


def get_cached_client() -> CachedBraiinsClient:
    """Process-wide cached client (lazy)."""
    global _cached_client
    if _cached_client is None:
        _cached_client = CachedBraiinsClient(get_braiins_client(), get_cache_manager())
    return _cached_client


def configure_cached_client(client: CachedBraiinsClient) -> None:
    """Install an explicitly constructed client (done by main at startup)."""
    global _cached_client
    _cached_client = client


def reset_cached_client() -> None:
    global _cached_client
    _cached_client = None
