"""Cache manager for Redis operations with fail-open error handling.

This module provides the CacheManager class: JSON get/set/delete/flush
on top of RedisCache, hit/miss/error statistics, and fire-and-forget
background writes. No method ever raises to its caller; the cache is an
optimization, not a dependency.
"""

import asyncio
import json
from typing import Any, Optional, Set

from pydantic import BaseModel, ConfigDict
from redis.exceptions import ConnectionError as RedisConnectionError

import structlog

from braiins_mcp.cache.connection import RedisCache
from braiins_mcp.config import Settings

logger = structlog.get_logger(__name__)

DEFAULT_TTL_SECONDS = 60


class CacheStats(BaseModel):
    """Immutable snapshot of cache counters."""

    model_config = ConfigDict(frozen=True)

    hits: int = 0
    misses: int = 0
    errors: int = 0
    ratio: float = 0.0


class CacheManager:
    """
    Main cache operations manager with fail-open behavior.

    Attributes:
        redis_cache: Lazily connected Redis connection manager
    """

    def __init__(self, redis_cache: Optional[RedisCache] = None) -> None:
        self.redis_cache = redis_cache or RedisCache()
        self._hits = 0
        self._misses = 0
        self._errors = 0
        self._pending_writes: Set[asyncio.Task] = set()

    async def _client(self):
        if not await self.redis_cache.connect():
            return None
        return self.redis_cache.client

    def _record_error(self, error: Exception) -> None:
        self._errors += 1
        if isinstance(error, (RedisConnectionError, OSError)):
            self.redis_cache.mark_disconnected()

    async def get(self, key: str) -> Optional[Any]:
        """
        Retrieve a cached value by key.

        Args:
            key: Cache key to retrieve

        Returns:
            Deserialized value, or None on miss or any failure

        Example:
            >>> manager = CacheManager()
            >>> stats = await manager.get("braiins:pool-stats")
        """
        try:
            client = await self._client()
            if client is None:
                self._misses += 1
                logger.debug("cache_get_skipped", reason="redis_not_available", key=key)
                return None

            value = await client.get(key)

            if value is None:
                self._misses += 1
                logger.debug("cache_miss", key=key)
                return None

            parsed = json.loads(value)
            self._hits += 1
            logger.debug("cache_hit", key=key)
            return parsed

        except json.JSONDecodeError as e:
            self._record_error(e)
            self._misses += 1
            logger.warning("cache_get_json_decode_error", key=key, error=str(e))
            return None

        except Exception as e:
            self._record_error(e)
            self._misses += 1
            logger.warning(
                "cache_get_error",
                key=key,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

    async def set(self, key: str, value: Any, ttl: int = DEFAULT_TTL_SECONDS) -> None:
        """
        Store a value with an expiry.

        Args:
            key: Cache key
            value: JSON-serializable data
            ttl: Time to live in seconds

        Failures are counted and logged, never raised.
        """
        try:
            client = await self._client()
            if client is None:
                logger.debug("cache_set_skipped", reason="redis_not_available", key=key)
                return

            serialized = json.dumps(value, ensure_ascii=False)
            await client.set(key, serialized, ex=ttl)

            logger.debug("cache_set", key=key, ttl=ttl, data_size=len(serialized))

        except (TypeError, ValueError) as e:
            self._record_error(e)
            logger.warning(
                "cache_set_serialization_error",
                key=key,
                error=str(e),
                error_type=type(e).__name__,
            )

        except Exception as e:
            self._record_error(e)
            logger.warning(
                "cache_set_error",
                key=key,
                error=str(e),
                error_type=type(e).__name__,
            )

    def schedule_set(self, key: str, value: Any, ttl: int = DEFAULT_TTL_SECONDS) -> asyncio.Task:
        """
        Write to the cache in the background (fire-and-forget).

        The task is kept referenced until it finishes so it cannot be
        garbage collected mid-write. Anything escaping set() is logged and
        counted as a cache error.

        Returns:
            The background task (callers normally ignore it)
        """
        task = asyncio.create_task(self.set(key, value, ttl))
        self._pending_writes.add(task)
        task.add_done_callback(self._on_write_done)
        return task

    def _on_write_done(self, task: asyncio.Task) -> None:
        self._pending_writes.discard(task)

        if task.cancelled():
            logger.debug("cache_background_write_cancelled")
            return

        error = task.exception()
        if error is not None:
            self._errors += 1
            logger.warning(
                "cache_background_write_failed",
                error=str(error),
                error_type=type(error).__name__,
            )

    async def wait_for_pending_writes(self) -> None:
        """Wait for in-flight background writes (used on shutdown and in tests)."""
        if self._pending_writes:
            await asyncio.gather(*self._pending_writes, return_exceptions=True)

    async def delete(self, key: str) -> bool:
        """
        Delete a cached value by key.

        Returns:
            True if the key existed and was removed, False otherwise
        """
        try:
            client = await self._client()
            if client is None:
                logger.debug("cache_delete_skipped", reason="redis_not_available", key=key)
                return False

            result = await client.delete(key)
            logger.debug("cache_delete", key=key, deleted=result > 0)
            return result > 0

        except Exception as e:
            self._record_error(e)
            logger.warning(
                "cache_delete_error",
                key=key,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

    async def flush(self) -> None:
        """Remove every key from the current Redis database."""
        try:
            client = await self._client()
            if client is None:
                logger.debug("cache_flush_skipped", reason="redis_not_available")
                return

            await client.flushdb()
            logger.info("cache_flushed")

        except Exception as e:
            self._record_error(e)
            logger.warning(
                "cache_flush_error",
                error=str(e),
                error_type=type(e).__name__,
            )

    def get_stats(self) -> CacheStats:
        """
        Snapshot of cache statistics.

        Errors include failed connection attempts.
        """
        total = self._hits + self._misses
        return CacheStats(
            hits=self._hits,
            misses=self._misses,
            errors=self._errors + self.redis_cache.connection_errors,
            ratio=self._hits / total if total > 0 else 0.0,
        )

    def is_connected(self) -> bool:
        return self.redis_cache.is_connected()

    async def close(self) -> None:
        """Flush pending background writes and close the connection."""
        await self.wait_for_pending_writes()
        await self.redis_cache.close()


_cache_manager: Optional[CacheManager] = None


def get_cache_manager() -> CacheManager:
    """Process-wide cache store built from the environment on first use."""
    global _cache_manager
    if _cache_manager is None:
        settings = Settings.from_env()
        _cache_manager = CacheManager(
            RedisCache(redis_url=settings.redis_url, enabled=settings.redis_enabled)
        )
    return _cache_manager


async def reset_cache_manager() -> None:
    """Close and forget the process-wide cache store."""
    global _cache_manager
    if _cache_manager is not None:
        await _cache_manager.close()
        _cache_manager = None
