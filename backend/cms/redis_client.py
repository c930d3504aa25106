"""Redis cache backend for self-hosted Redis (and Upstash over the redis protocol)."""

import redis
from redis.exceptions import RedisError

from cms.config import settings
from cms.logger import cache_logger


class RedisCacheBackend:
    """Redis client wrapper that degrades to a no-op cache when Redis is down."""

    def __init__(self, url: str | None = None):
        """Initialize Redis client for the configured URL."""
        self._url = url or settings.redis_url
        self._client = None
        self._connect()

    def _connect(self):
        """Connect to Redis."""
        try:
            # Both local (redis://) and TLS (rediss://) URLs are supported
            self._client = redis.from_url(
                self._url,
                decode_responses=True,  # Decode bytes to strings
                socket_connect_timeout=5,  # Connection timeout
                socket_timeout=5,  # Operation timeout
                retry_on_timeout=True,
                health_check_interval=30,  # Health check every 30s
            )

            # Test connection
            self._client.ping()
            cache_logger.info(f"Redis connected successfully ({settings.environment})")

        except RedisError as e:
            cache_logger.error(f"Redis connection failed: {e}")
            cache_logger.warning("Application will continue without caching")
            self._client = None

    @property
    def client(self):
        """Get Redis client instance."""
        return self._client

    def ping(self) -> bool:
        if not self._client:
            return False

        try:
            return bool(self._client.ping())
        except RedisError:
            return False

    def get(self, key: str) -> str | None:
        """Get value from Redis."""
        if not self._client:
            return None

        try:
            return self._client.get(key)
        except RedisError as e:
            cache_logger.debug(f"Redis GET error: {e}")
            return None

    def set(self, key: str, value: str, expire: int | None = None) -> bool:
        """
        Set value in Redis.

        Args:
            key: Cache key
            value: Value to cache
            expire: Expiration time in seconds (optional)

        Returns:
            True if successful, False otherwise
        """
        if not self._client:
            return False

        try:
            if expire:
                return bool(self._client.setex(key, expire, value))
            else:
                return bool(self._client.set(key, value))
        except RedisError as e:
            cache_logger.debug(f"Redis SET error: {e}")
            return False

    def delete(self, key: str) -> bool:
        """Delete key from Redis."""
        if not self._client:
            return False

        try:
            return self._client.delete(key) > 0
        except RedisError as e:
            cache_logger.debug(f"Redis DELETE error: {e}")
            return False

    def close(self):
        """Close Redis connection."""
        if self._client:
            self._client.close()
