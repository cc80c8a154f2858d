"""Cache key generation for consistent, deterministic cache keys.

This module provides the CacheKeyGenerator class for building namespaced
cache keys from a resource kind, an optional identifier and optional
query parameters.
"""

import hashlib
import json
import re
from enum import Enum
from typing import Any, Mapping, NamedTuple, Optional

import structlog

logger = structlog.get_logger(__name__)


class ResourceKind(str, Enum):
    """The seven cacheable Braiins Pool resources, one per API endpoint."""

    USER_OVERVIEW = "user-overview"
    WORKERS_LIST = "workers-list"
    WORKER_DETAILS = "worker-details"
    WORKER_HASHRATE = "worker-hashrate"
    USER_REWARDS = "user-rewards"
    POOL_STATS = "pool-stats"
    NETWORK_STATS = "network-stats"


class ParsedCacheKey(NamedTuple):
    """Positional components of a cache key. Missing segments are None."""

    prefix: str
    kind: str
    identifier: Optional[str] = None
    params_hash: Optional[str] = None


_UNSAFE_CHARS = re.compile(r"[^a-z0-9_-]")
_REPEATED_UNDERSCORES = re.compile(r"_+")


class CacheKeyGenerator:
    """
    Generate cache keys for Braiins Pool resources.

    Cache keys follow the pattern: braiins:{kind}[:{identifier}][:{params_hash}]

    The params_hash is the first 16 hex characters of a SHA-256 digest of
    the canonical (key-sorted) JSON encoding of the parameters, so the
    same parameters always produce the same key regardless of order.

    Attributes:
        PREFIX: Namespace prefix for every key
        DELIMITER: Segment separator
        MAX_KEY_LENGTH: Keys longer than this collapse to a full digest
        MAX_IDENTIFIER_LENGTH: Sanitized identifiers are truncated to this
        PARAMS_HASH_LENGTH: Hex characters kept from the params digest
    """

    PREFIX = "braiins"
    DELIMITER = ":"
    MAX_KEY_LENGTH = 256
    MAX_IDENTIFIER_LENGTH = 64
    PARAMS_HASH_LENGTH = 16

    @staticmethod
    def sanitize(identifier: str) -> str:
        """
        Normalize an identifier for use inside a cache key.

        Lowercases, replaces characters outside [a-z0-9_-] with "_",
        collapses runs of "_" and truncates to 64 characters.

        Example:
            >>> CacheKeyGenerator.sanitize("Worker@123!test")
            'worker_123_test'
        """
        sanitized = _UNSAFE_CHARS.sub("_", identifier.lower())
        sanitized = _REPEATED_UNDERSCORES.sub("_", sanitized)
        return sanitized[: CacheKeyGenerator.MAX_IDENTIFIER_LENGTH]

    @staticmethod
    def hash_params(params: Mapping[str, Any]) -> str:
        """
        Hash parameters into a short, order-independent digest.

        Args:
            params: Query parameters (values may be nested objects/arrays)

        Returns:
            First 16 hex characters of the SHA-256 digest
        """
        canonical = json.dumps(
            dict(params),
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            default=str,
        )
        digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
        return digest[: CacheKeyGenerator.PARAMS_HASH_LENGTH]

    @staticmethod
    def build(
        kind: ResourceKind | str,
        identifier: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """
        Build the cache key for a resource request.

        Args:
            kind: Resource kind
            identifier: Optional resource identifier (e.g. worker id)
            params: Optional query parameters

        Returns:
            Cache key, never longer than MAX_KEY_LENGTH

        Example:
            >>> CacheKeyGenerator.build(ResourceKind.POOL_STATS)
            'braiins:pool-stats'
        """
        kind_value = ResourceKind(kind).value
        delimiter = CacheKeyGenerator.DELIMITER
        key = f"{CacheKeyGenerator.PREFIX}{delimiter}{kind_value}"

        if identifier:
            key += f"{delimiter}{CacheKeyGenerator.sanitize(identifier)}"

        if params:
            key += f"{delimiter}{CacheKeyGenerator.hash_params(params)}"

        if len(key) > CacheKeyGenerator.MAX_KEY_LENGTH:
            full_hash = hashlib.sha256(key.encode("utf-8")).hexdigest()
            logger.debug("cache_key_collapsed", kind=kind_value, original_length=len(key))
            key = f"{CacheKeyGenerator.PREFIX}{delimiter}{kind_value}{delimiter}{full_hash}"

        logger.debug("cache_key_generated", kind=kind_value, cache_key=key)

        return key

    @staticmethod
    def parse(cache_key: str) -> ParsedCacheKey:
        """
        Split a cache key back into its segments.

        Parsing is positional and lenient: absent segments are None and no
        error is ever raised.

        Example:
            >>> CacheKeyGenerator.parse("braiins:worker-details:rig_01")
            ParsedCacheKey(prefix='braiins', kind='worker-details', identifier='rig_01', params_hash=None)
        """
        parts = cache_key.split(CacheKeyGenerator.DELIMITER)

        return ParsedCacheKey(
            prefix=parts[0] if len(parts) > 0 else "",
            kind=parts[1] if len(parts) > 1 else "",
            identifier=parts[2] if len(parts) > 2 else None,
            params_hash=parts[3] if len(parts) > 3 else None,
        )


# Convenience singleton instance
key_generator = CacheKeyGenerator()

build_key = CacheKeyGenerator.build
parse_key = CacheKeyGenerator.parse
sanitize = CacheKeyGenerator.sanitize


def build_user_overview_key() -> str:
    return build_key(ResourceKind.USER_OVERVIEW)


def build_workers_list_key(params: Optional[Mapping[str, Any]] = None) -> str:
    return build_key(ResourceKind.WORKERS_LIST, params=params)


def build_worker_details_key(worker_id: str) -> str:
    return build_key(ResourceKind.WORKER_DETAILS, identifier=worker_id)


def build_worker_hashrate_key(
    worker_id: str, params: Optional[Mapping[str, Any]] = None
) -> str:
    return build_key(ResourceKind.WORKER_HASHRATE, identifier=worker_id, params=params)


def build_user_rewards_key(params: Optional[Mapping[str, Any]] = None) -> str:
    return build_key(ResourceKind.USER_REWARDS, params=params)


def build_pool_stats_key() -> str:
    return build_key(ResourceKind.POOL_STATS)


def build_network_stats_key() -> str:
    return build_key(ResourceKind.NETWORK_STATS)
