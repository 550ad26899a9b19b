"""
Cache Backends

- **memory_backend.py**: InMemoryBackend (per-process dict store)
- **redis_backend.py**: RedisBackend (redis.asyncio with connection pooling)
- **factory.py**: Configuration-based backend selection
"""

from cachekit.infrastructure.cache.factory import CacheBackendFactory, create_backend
from cachekit.infrastructure.cache.memory_backend import InMemoryBackend
from cachekit.infrastructure.cache.redis_backend import RedisBackend

__all__ = ["CacheBackendFactory", "create_backend", "InMemoryBackend", "RedisBackend"]
