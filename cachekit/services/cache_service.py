#!/usr/bin/env python3
"""
Cache Service

Shareable handle around one CacheExpander, wired from configuration.

Architecture:
    CacheService (Public API)
        ├── CacheExpander (strategy engine)
        ├── CacheBackend (memory or Redis, from CACHE_BACKEND)
        ├── CacheMetrics (from CACHE_METRICS)
        └── TtlPolicy (from CACHE_DEFAULT_TTL / CACHE_TTL_OVERRIDES)

Usage:
    service = await init_cache_service()
    feeder = GenericFeeder("user_001")
    await service.execute(feeder, user_repository)
    ...
    await close_cache_service()
"""

from typing import Any

from cachekit.core.config.constants import RETRY_BASE_DELAY, Stage
from cachekit.core.config.settings import Settings, get_settings
from cachekit.core.interfaces.cache import CacheBackend
from cachekit.core.interfaces.feed import CacheFeed
from cachekit.core.interfaces.metrics import CacheMetrics
from cachekit.core.interfaces.repository import DataRepository
from cachekit.core.logging.logger import get_logger, log_stage
from cachekit.core.strategy import CacheStrategy
from cachekit.core.ttl import TtlPolicy, ttl_policy_from_settings
from cachekit.infrastructure.cache.factory import create_backend
from cachekit.infrastructure.monitoring.metrics_collector import create_metrics
from cachekit.services.cache_expander import CacheExpander
from cachekit.services.operation_builder import CacheOperationBuilder

logger = get_logger(__name__)


class CacheService:
    """
    Facade over the strategy engine and its backend lifecycle.

    A single instance is safe to share between concurrent tasks.
    """

    def __init__(
        self,
        backend: CacheBackend,
        metrics: CacheMetrics | None = None,
        ttl_policy: TtlPolicy | None = None,
        retry_base_delay: float = RETRY_BASE_DELAY,
    ):
        self._expander = CacheExpander(backend, metrics=metrics, ttl_policy=ttl_policy)
        self._retry_base_delay = retry_base_delay

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "CacheService":
        """Build backend, metrics sink and TTL policy from configuration."""
        settings = settings or get_settings()
        return cls(
            create_backend(settings),
            metrics=create_metrics(settings),
            ttl_policy=ttl_policy_from_settings(settings.cache),
            retry_base_delay=settings.cache.CACHE_RETRY_BASE_DELAY,
        )

    @property
    def expander(self) -> CacheExpander:
        return self._expander

    @property
    def backend(self) -> CacheBackend:
        return self._expander.backend

    async def execute(
        self,
        feeder: CacheFeed,
        repository: DataRepository,
        strategy: CacheStrategy | str = CacheStrategy.REFRESH,
        *,
        ttl_policy: TtlPolicy | None = None,
    ) -> Any:
        """See CacheExpander.execute."""
        return await self._expander.execute(feeder, repository, strategy, ttl_policy=ttl_policy)

    def builder(self, **kwargs: Any) -> CacheOperationBuilder:
        """Start a fluent operation; retries back off from the configured base delay."""
        kwargs.setdefault("base_delay", self._retry_base_delay)
        return self._expander.builder(**kwargs)

    async def connect(self) -> None:
        """Open the backend connection, for backends that have one."""
        connect = getattr(self.backend, "connect", None)
        if connect is not None:
            await connect()
        log_stage(logger, Stage.SERVICE, "Cache service started", backend=type(self.backend).__name__)

    async def close(self) -> None:
        """Release the backend connection, for backends that have one."""
        disconnect = getattr(self.backend, "disconnect", None)
        if disconnect is not None:
            await disconnect()
        log_stage(logger, Stage.SERVICE, "Cache service stopped", backend=type(self.backend).__name__)

    async def health_check(self) -> dict[str, Any]:
        """
        Check backend health.

        Returns:
            Dict with status ("healthy" | "unhealthy"), backend name and flag
        """
        healthy = await self.backend.health_check()
        return {
            "status": "healthy" if healthy else "unhealthy",
            "backend": type(self.backend).__name__,
            "healthy": healthy,
        }


# ============================================================================
# Global Instance
# ============================================================================

_cache_service: CacheService | None = None


def get_cache_service() -> CacheService:
    """
    Get the global cache service instance (singleton).

    Returns:
        CacheService: Global cache service built from settings
    """
    global _cache_service

    if _cache_service is None:
        _cache_service = CacheService.from_settings()

    return _cache_service


async def init_cache_service() -> CacheService:
    """
    Initialize and connect the global cache service.

    Returns:
        CacheService: Connected cache service
    """
    service = get_cache_service()
    await service.connect()
    return service


async def close_cache_service() -> None:
    """Shutdown the global cache service."""
    global _cache_service

    if _cache_service:
        await _cache_service.close()
        _cache_service = None
