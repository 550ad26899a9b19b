"""
Cache Backend Protocol

This module defines the abstract protocol for cache backend implementations,
the only I/O seam of the strategy engine.

Architectural Decision: Protocol-based abstraction
- Enables multiple cache backend implementations (Redis, In-Memory, ...)
- Facilitates testing with mock implementations
- No inheritance required: any object with these coroutines conforms
- Type-safe interface with runtime checking

Author: System Architect
Date: 2026-10-19
"""

from collections.abc import Sequence
from datetime import timedelta
from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheBackend(Protocol):
    """
    Protocol defining the interface for cache backend implementations.

    Values are opaque envelopes (bytes); the backend never interprets them.
    Implementations give no transactional or locking guarantees: the
    strategy engine assumes "last write wins" at the key level.

    Implementations:
    - InMemoryBackend: Development/testing in-process store
    - RedisBackend: Production Redis-backed store

    Usage:
        async def warm(cache: CacheBackend, key: str, envelope: bytes) -> None:
            # Works with any CacheBackend implementation
            await cache.set(key, envelope, timedelta(minutes=5))
    """

    async def get(self, key: str) -> bytes | None:
        """
        Get value from cache.

        Returns:
            bytes | None: Stored envelope or None if absent/expired

        Raises:
            BackendError: If the operation fails
        """
        ...

    async def set(self, key: str, value: bytes, ttl: timedelta | None = None) -> None:
        """
        Store value in cache.

        Args:
            key: Cache key
            value: Envelope bytes
            ttl: Time-to-live; None means no expiry (backend semantics)

        Raises:
            BackendError: If the operation fails
        """
        ...

    async def delete(self, key: str) -> None:
        """
        Delete key from cache. Deleting an absent key is not an error.

        Raises:
            BackendError: If the operation fails
        """
        ...

    async def exists(self, key: str) -> bool:
        """Check whether a live entry exists for key."""
        ...

    async def mget(self, keys: Sequence[str]) -> list[bytes | None]:
        """
        Batch get.

        Returns:
            One entry per input key, in input order (None for misses)
        """
        ...

    async def mdelete(self, keys: Sequence[str]) -> None:
        """
        Batch delete, best effort.

        Individual key failures are swallowed (and logged), never surfaced.
        """
        ...

    async def health_check(self) -> bool:
        """
        Check if cache backend is healthy.

        Returns:
            bool: True if healthy, False otherwise
        """
        ...

    async def clear_all(self) -> None:
        """
        Remove every entry in the backend's namespace.

        Destructive: intended for tests and operational resets only.
        """
        ...
