#!/usr/bin/env python3
"""
In-Memory Cache Backend

Per-process dict store with lazy TTL expiry.

This is a per-instance cache, not shared across workers or processes.
For distributed caching, use RedisBackend.

Implementation Details:
- Plain dict keyed by cache key, values are (bytes, expires_at | None)
- Concurrency-safe via asyncio.Lock
- Expiry checked on access against the event-loop clock (no sweeper task)
- No eviction: entries live until they expire, are deleted, or clear_all()
"""

import asyncio
from collections.abc import Callable, Sequence
from datetime import timedelta

from cachekit.core.config.constants import Stage
from cachekit.core.logging.logger import get_logger, log_stage

logger = get_logger(__name__)


def _loop_time() -> float:
    return asyncio.get_running_loop().time()


class InMemoryBackend:
    """
    In-memory implementation of the CacheBackend protocol.

    Useful for tests, single-process services and local development.
    The lock serializes individual operations only; there are no
    multi-key transactions.
    """

    def __init__(self, clock: Callable[[], float] | None = None):
        """
        Initialize the store.

        Args:
            clock: Monotonic time source in seconds (defaults to the event-loop clock)
        """
        self._store: dict[str, tuple[bytes, float | None]] = {}
        self._lock = asyncio.Lock()
        self._clock = clock or _loop_time

    def _is_expired(self, expires_at: float | None) -> bool:
        return expires_at is not None and self._clock() >= expires_at

    def _read(self, key: str) -> bytes | None:
        # Caller must hold the lock
        entry = self._store.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._is_expired(expires_at):
            del self._store[key]
            return None
        return value

    async def get(self, key: str) -> bytes | None:
        async with self._lock:
            return self._read(key)

    async def set(self, key: str, value: bytes, ttl: timedelta | None = None) -> None:
        """
        Store a value, replacing any previous one (last write wins).

        Args:
            key: Cache key
            value: Envelope bytes
            ttl: Expiry duration, None for no expiry
        """
        expires_at = self._clock() + ttl.total_seconds() if ttl is not None else None
        async with self._lock:
            self._store[key] = (bytes(value), expires_at)

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._store.pop(key, None)

    async def exists(self, key: str) -> bool:
        async with self._lock:
            return self._read(key) is not None

    async def mget(self, keys: Sequence[str]) -> list[bytes | None]:
        """Get many values; results follow the input order."""
        async with self._lock:
            return [self._read(key) for key in keys]

    async def mdelete(self, keys: Sequence[str]) -> None:
        async with self._lock:
            for key in keys:
                self._store.pop(key, None)

    async def health_check(self) -> bool:
        return True

    async def clear_all(self) -> None:
        """Remove every entry. Destructive, logged at warning."""
        async with self._lock:
            count = len(self._store)
            self._store.clear()
        log_stage(
            logger, Stage.BACKEND, "In-memory cache cleared", level="warning",
            backend="memory", removed=count,
        )

    def __len__(self) -> int:
        """Number of stored entries, including expired ones not yet accessed."""
        return len(self._store)
