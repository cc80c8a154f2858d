"""Shared fixtures: in-process Redis and isolation of process-wide singletons."""

from unittest.mock import AsyncMock, MagicMock

import fakeredis
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

import braiins_mcp.cache.manager as cache_manager_module
from braiins_mcp.api.cached_client import reset_cached_client
from braiins_mcp.api.client import reset_braiins_client
from braiins_mcp.cache.connection import RedisCache
from braiins_mcp.cache.manager import CacheManager
from braiins_mcp.cache.ttl import reset_cache_policy


@pytest.fixture
def fake_redis():
    """In-process Redis with its own keyspace."""
    return fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer(), decode_responses=True)


@pytest.fixture
def cache_manager(fake_redis):
    """CacheManager backed by fakeredis."""
    return CacheManager(RedisCache(client_factory=lambda: fake_redis))


@pytest.fixture
def unreachable_redis():
    """Redis client double whose every command fails to connect."""
    client = MagicMock()
    client.ping = AsyncMock(side_effect=RedisConnectionError("Connection refused"))
    client.aclose = AsyncMock()
    return client


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Start every test with fresh lazily built policy, clients and store."""
    for name in (
        "CACHE_ENABLED",
        "CACHE_TTL_USER_OVERVIEW",
        "CACHE_TTL_WORKERS",
        "CACHE_TTL_HISTORICAL",
        "CACHE_TTL_POOL_STATS",
        "CACHE_TTL_NETWORK_STATS",
    ):
        monkeypatch.delenv(name, raising=False)

    reset_cache_policy()
    reset_braiins_client()
    reset_cached_client()
    monkeypatch.setattr(cache_manager_module, "_cache_manager", None)
    yield
    reset_cache_policy()
    reset_braiins_client()
    reset_cached_client()
