"""
Redis adapter - Page cache, presence and rate limiting.

Provides:
- Key-value caching with TTL (rendered feeds, sitemaps, link previews)
- Per-post presence hashes for the editor
- Fixed-window rate limiting

Redis is an optimisation here, never a source of truth: every failure is
logged and reported as a miss, so callers fall back to the database.
"""

import functools
import json
import logging
from typing import Any, Dict, Optional

import redis
from redis.exceptions import RedisError

from ...config.settings import settings

logger = logging.getLogger(__name__)


PAGE_PREFIX = "page:"
PRESENCE_PREFIX = "presence:"


class RedisAdapter:
    """
    Adapter for Redis operations.

    Handles:
    - Caching with TTL
    - Hash-backed presence sets
    - Rate limits
    """

    def __init__(self, url: Optional[str] = None):
        """
        Initialize Redis adapter.

        Args:
            url: Redis URL (redis://host:port/db)
        """
        self.url = url or settings.REDIS_URL
        self._client: Optional[redis.Redis] = None

    @property
    def client(self) -> redis.Redis:
        """Lazy-loaded Redis client."""
        if self._client is None:
            self._client = redis.from_url(
                self.url,
                decode_responses=True,
            )
        return self._client

    # ═══════════════════════════════════════════════════════════════════════════
    # KEY / VALUE
    # ═══════════════════════════════════════════════════════════════════════════

    def get(self, key: str) -> Optional[str]:
        try:
            return self.client.get(key)
        except RedisError as e:
            logger.warning("Redis get failed for %s: %s", key, e)
            return None

    def get_json(self, key: str) -> Optional[Any]:
        value = self.get(key)
        if value:
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                return None
        return None

    def set(
        self,
        key: str,
        value: str,
        ttl: Optional[int] = None,
    ) -> bool:
        """
        Set a value in cache.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time-to-live in seconds

        Returns:
            True if successful
        """
        try:
            if ttl:
                self.client.setex(key, ttl, value)
            else:
                self.client.set(key, value)
            return True
        except RedisError as e:
            logger.warning("Redis set failed for %s: %s", key, e)
            return False

    def set_json(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        return self.set(key, json.dumps(value, default=str), ttl)

    def delete(self, *keys: str) -> int:
        """
        Delete keys from cache.

        Returns:
            Number of keys removed (0 on error)
        """
        if not keys:
            return 0
        try:
            return int(self.client.delete(*keys))
        except RedisError as e:
            logger.warning("Redis delete failed for %s: %s", keys, e)
            return 0

    def incr(self, key: str, amount: int = 1) -> Optional[int]:
        try:
            return self.client.incrby(key, amount)
        except RedisError as e:
            logger.warning("Redis incr failed for %s: %s", key, e)
            return None

    def expire(self, key: str, ttl: int) -> bool:
        try:
            return bool(self.client.expire(key, ttl))
        except RedisError as e:
            logger.warning("Redis expire failed for %s: %s", key, e)
            return False

    # ═══════════════════════════════════════════════════════════════════════════
    # PAGE CACHE
    # ═══════════════════════════════════════════════════════════════════════════

    def get_page(self, path: str) -> Optional[str]:
        """Cached rendered document for a public path (e.g. "/feed.xml")."""
        return self.get(f"{PAGE_PREFIX}{path}")

    def set_page(self, path: str, body: str, ttl: Optional[int] = None) -> bool:
        return self.set(f"{PAGE_PREFIX}{path}", body, ttl or settings.PAGE_CACHE_TTL_SECONDS)

    def delete_pages(self, *paths: str) -> int:
        return self.delete(*(f"{PAGE_PREFIX}{p}" for p in paths))

    # ═══════════════════════════════════════════════════════════════════════════
    # HASHES (presence)
    # ═══════════════════════════════════════════════════════════════════════════

    def hset_json(self, key: str, field: str, value: Dict[str, Any], ttl: Optional[int] = None) -> bool:
        """Store a JSON value in a hash field, refreshing the hash TTL."""
        try:
            pipe = self.client.pipeline()
            pipe.hset(key, field, json.dumps(value, default=str))
            if ttl:
                pipe.expire(key, ttl)
            pipe.execute()
            return True
        except RedisError as e:
            logger.warning("Redis hset failed for %s: %s", key, e)
            return False

    def hgetall_json(self, key: str) -> Dict[str, Dict[str, Any]]:
        try:
            raw = self.client.hgetall(key)
        except RedisError as e:
            logger.warning("Redis hgetall failed for %s: %s", key, e)
            return {}

        values = {}
        for field, value in raw.items():
            try:
                values[field] = json.loads(value)
            except json.JSONDecodeError:
                continue
        return values

    def hdel(self, key: str, *fields: str) -> int:
        try:
            return int(self.client.hdel(key, *fields))
        except RedisError as e:
            logger.warning("Redis hdel failed for %s: %s", key, e)
            return 0

    # ═══════════════════════════════════════════════════════════════════════════
    # RATE LIMITING
    # ═══════════════════════════════════════════════════════════════════════════

    def check_rate_limit(
        self,
        key: str,
        limit: int,
        window_seconds: int,
    ) -> tuple[bool, int]:
        """
        Fixed-window counter.

        Args:
            key: Rate limit key (e.g., "rate:subscribe:203.0.113.7")
            limit: Maximum allowed requests
            window_seconds: Time window in seconds

        Returns:
            Tuple of (is_allowed, current_count). Allows when Redis is down.
        """
        current = self.incr(key)
        if current is None:
            return True, 0

        if current == 1:
            self.expire(key, window_seconds)

        return current <= limit, current

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except RedisError:
            return False


@functools.lru_cache(maxsize=1)
def get_redis_adapter() -> RedisAdapter:
    """Get or create Redis adapter singleton."""
    return RedisAdapter()
