"""
Cache Backend Factory

Factory pattern for creating cache backends based on type.
Supports in-memory and Redis implementations.
"""

from cachekit.core.config.constants import BackendType
from cachekit.core.config.settings import Settings, get_settings
from cachekit.core.exceptions import ConfigurationError
from cachekit.core.interfaces.cache import CacheBackend
from cachekit.infrastructure.cache.memory_backend import InMemoryBackend
from cachekit.infrastructure.cache.redis_backend import RedisBackend


class CacheBackendFactory:
    """
    Factory for creating cache backend instances.

    Supports:
    - In-process dict store (InMemoryBackend)
    - Redis (RedisBackend)
    """

    def __init__(self):
        self._backend_types = {
            BackendType.MEMORY.value: InMemoryBackend,
            BackendType.REDIS.value: RedisBackend,
        }

    def get(self, backend_type: str, settings: Settings | None = None) -> CacheBackend:
        """
        Get a cache backend instance.

        Args:
            backend_type: Type of backend ("memory" or "redis")
            settings: Settings used by backends that need connection details

        Returns:
            CacheBackend: Instance of the requested backend type

        Raises:
            ConfigurationError: If backend_type is not supported
        """
        backend_type_lower = str(backend_type).lower()

        if backend_type_lower not in self._backend_types:
            raise ConfigurationError(
                f"Unknown cache backend: {backend_type}. "
                f"Available types: {', '.join(self._backend_types.keys())}",
                details={"backend_type": backend_type},
            )

        if backend_type_lower == BackendType.REDIS.value:
            return RedisBackend(settings=settings)
        return InMemoryBackend()

    def get_available(self) -> list[str]:
        """Get list of available backend types."""
        return list(self._backend_types.keys())


# ============================================================================
# Helper Function for Configuration-Based Selection
# ============================================================================

def create_backend(settings: Settings | None = None) -> CacheBackend:
    """
    Create the backend selected by CACHE_BACKEND.

    Usage:
        backend = create_backend()  # reads CACHE_BACKEND from environment
    """
    settings = settings or get_settings()
    return CacheBackendFactory().get(settings.cache.CACHE_BACKEND, settings=settings)
