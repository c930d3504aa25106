"""Redis REST cache backend for serverless deployments (Upstash)."""

import requests

from cms.config import settings
from cms.logger import cache_logger


class UpstashCacheBackend:
    """
    Cache backend using the Upstash REST API.

    Better for serverless environments as it doesn't maintain connections.
    Every failure is logged and reported as a cache miss.
    """

    def __init__(self, rest_url: str | None = None, rest_token: str | None = None):
        """Initialize REST client with Upstash credentials."""
        self._rest_url = (rest_url or settings.upstash_redis_rest_url).rstrip("/")
        self._rest_token = rest_token or settings.upstash_redis_rest_token
        self._available = bool(self._rest_url and self._rest_token)

        if self._available:
            cache_logger.info("Redis REST client initialized (Upstash)")
        else:
            cache_logger.warning("Upstash REST credentials not found, caching disabled")

    @property
    def is_available(self) -> bool:
        """Check if REST client is available."""
        return self._available

    def _request(self, *args) -> dict:
        """
        Execute a Redis command via the REST API.

        The command is posted as a JSON array so values never need URL escaping.

        Args:
            *args: Redis command and arguments

        Returns:
            Response dict with 'result' key
        """
        if not self._available:
            return {"result": None}

        headers = {"Authorization": f"Bearer {self._rest_token}"}

        try:
            response = requests.post(
                self._rest_url, json=[str(arg) for arg in args], headers=headers, timeout=5
            )
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            cache_logger.debug(f"Redis REST error: {e}")
            return {"result": None}

    def ping(self) -> bool:
        return self._request("ping").get("result") == "PONG"

    def get(self, key: str) -> str | None:
        """Get value from Redis."""
        result = self._request("get", key)
        return result.get("result")

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
        if expire:
            result = self._request("setex", key, expire, value)
        else:
            result = self._request("set", key, value)

        return result.get("result") == "OK"

    def delete(self, key: str) -> bool:
        """Delete key from Redis."""
        result = self._request("del", key)
        return (result.get("result") or 0) > 0

    def close(self):
        """Nothing to release; every call is a separate HTTP request."""
