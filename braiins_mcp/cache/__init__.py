"""Redis caching layer for API response caching.

This package provides Redis-based caching with:
- Lazy, retried connection management (RedisCache)
- Cache key generation (CacheKeyGenerator, ResourceKind)
- TTL policies (CacheTTL, CachePolicy)
- Cache operations and statistics (CacheManager)
- Graceful fail-open behavior
"""

from braiins_mcp.cache.connection import RedisCache, sanitize_redis_url
from braiins_mcp.cache.keys import (
    CacheKeyGenerator,
    ParsedCacheKey,
    ResourceKind,
    build_key,
    build_network_stats_key,
    build_pool_stats_key,
    build_user_overview_key,
    build_user_rewards_key,
    build_worker_details_key,
    build_worker_hashrate_key,
    build_workers_list_key,
    key_generator,
    parse_key,
    sanitize,
)
from braiins_mcp.cache.manager import (
    CacheManager,
    CacheStats,
    get_cache_manager,
    reset_cache_manager,
)
from braiins_mcp.cache.ttl import (
    DEFAULT_TTL,
    CachePolicy,
    CacheTTL,
    get_all_ttls,
    get_cache_policy,
    get_ttl,
    reset_cache_policy,
    should_cache,
)

__all__ = [
    # Connection
    "RedisCache",
    "sanitize_redis_url",
    # Key generation
    "CacheKeyGenerator",
    "ParsedCacheKey",
    "ResourceKind",
    "build_key",
    "parse_key",
    "sanitize",
    "key_generator",
    "build_user_overview_key",
    "build_workers_list_key",
    "build_worker_details_key",
    "build_worker_hashrate_key",
    "build_user_rewards_key",
    "build_pool_stats_key",
    "build_network_stats_key",
    # Cache manager
    "CacheManager",
    "CacheStats",
    "get_cache_manager",
    "reset_cache_manager",
    # TTL policies
    "CacheTTL",
    "CachePolicy",
    "DEFAULT_TTL",
    "get_cache_policy",
    "reset_cache_policy",
    "get_ttl",
    "should_cache",
    "get_all_ttls",
]
