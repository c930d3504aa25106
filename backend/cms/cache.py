"""Read-through cache for discovery listings."""

import hashlib
import json
import threading
import time
from functools import lru_cache
from typing import Any, Callable, Protocol

from cms.config import settings
from cms.logger import cache_logger


class CacheBackend(Protocol):
    """Key/value store with per-key expiry, holding JSON text."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str, expire: int | None = None) -> bool: ...

    def delete(self, key: str) -> bool: ...

    def ping(self) -> bool: ...

    def close(self) -> None: ...


class MemoryCacheBackend:
    """In-process cache backend for single-instance deployments and tests."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, tuple[float | None, str]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if expires_at is not None and self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: str, expire: int | None = None) -> bool:
        expires_at = self._clock() + expire if expire else None
        with self._lock:
            self._entries[key] = (expires_at, value)
        return True

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def ping(self) -> bool:
        return True

    def close(self) -> None:
        self.clear()


def make_cache_key(namespace: str, **params: Any) -> str:
    """
    Build a deterministic cache key from request parameters.

    Parameters are serialized as sorted JSON (UUIDs, dates and enums via str)
    and hashed, so equal parameter sets always produce the same key.
    """
    canonical = json.dumps(params, sort_keys=True, default=str, separators=(",", ":"))
    digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    return f"{namespace}:{digest}"


class ReadThroughCache:
    """
    Cache that computes and stores a value on miss.

    Values are stored as JSON text, so a hit returns exactly what the first
    computation produced until the entry expires. Nothing invalidates entries
    early; readers may see results up to one TTL old.
    """

    def __init__(self, backend: CacheBackend):
        self.backend = backend

    def get_or_compute(self, key: str, ttl: int, compute: Callable[[], Any]) -> Any:
        cached = self.backend.get(key)
        if cached is not None:
            cache_logger.debug(f"Cache hit for {key}")
            return json.loads(cached)

        cache_logger.debug(f"Cache miss for {key}")
        value = compute()
        payload = json.dumps(value, default=str)
        if not self.backend.set(key, payload, expire=ttl):
            cache_logger.debug(f"Could not store {key}; serving uncached value")
        return json.loads(payload)


def build_cache_backend(kind: str | None = None) -> CacheBackend:
    """Create the backend named by settings.cache_backend (memory, redis, upstash)."""
    kind = (kind or settings.cache_backend).lower()

    if kind == "redis":
        from cms.redis_client import RedisCacheBackend

        return RedisCacheBackend()
    if kind == "upstash":
        from cms.redis_rest_client import UpstashCacheBackend

        return UpstashCacheBackend()
    if kind != "memory":
        cache_logger.warning(f"Unknown cache backend '{kind}', using in-process cache")
    return MemoryCacheBackend()


@lru_cache
def get_cache() -> ReadThroughCache:
    """Dependency for getting the process-wide read-through cache."""
    return ReadThroughCache(build_cache_backend())
