#!/usr/bin/env python3
"""
Cache Strategy Engine

Orchestrates one cache-aside operation: feeder validation, key construction,
strategy dispatch (cache read, invalidation, repository fallback,
write-through) and resolution (entity validation, hooks, feeding, metrics).

Operation Flow:
    1.0 FEEDER_VALIDATION   feeder.validate(); abort before any I/O
    2.0 KEY_CONSTRUCTION    "{prefix}:{entity_id}"
    3.0 STRATEGY_DISPATCH
        3.1 CACHE_READ          FRESH / REFRESH
        3.2 CACHE_INVALIDATION  INVALIDATE
        3.3 REPOSITORY_FETCH    miss path of REFRESH / INVALIDATE, and BYPASS
        3.4 WRITE_THROUGH       best effort, backend failures swallowed
    4.0 RESOLUTION          validate entity, hooks, feed, metrics

Error Semantics:
- Corrupted or stale-schema entries raise; they are never treated as misses
- Only backend write failures during write-through are swallowed
- Any failure after key construction is recorded with metrics.record_error
  and re-raised; the feeder is not fed

Concurrency:
The engine holds no locks. Concurrent operations on the same key race
independently against the backend (last write wins, no miss de-duplication).
"""

import inspect
import time
from typing import Any, Literal

from cachekit.core.config.constants import Stage
from cachekit.core.exceptions import (
    BackendError,
    CacheKitError,
    RepositoryError,
    ValidationError,
)
from cachekit.core.interfaces.cache import CacheBackend
from cachekit.core.interfaces.entity import validate_entity
from cachekit.core.interfaces.feed import CacheFeed
from cachekit.core.interfaces.metrics import CacheMetrics, NoOpMetrics
from cachekit.core.interfaces.repository import DataRepository
from cachekit.core.keys import CacheKeyBuilder
from cachekit.core.logging.logger import get_logger, get_operation_id, log_stage
from cachekit.core.serialization import deserialize_from_cache, serialize_for_cache
from cachekit.core.strategy import CacheStrategy
from cachekit.core.ttl import DefaultTtl, TtlPolicy
from cachekit.services.operation_builder import CacheOperationBuilder

logger = get_logger(__name__)

Source = Literal["cache", "repository", "none"]


async def _maybe_await(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


async def _call_hook(target: Any, name: str, *args: Any) -> None:
    """Invoke an optional hook; missing hooks are no-op successes."""
    hook = getattr(target, name, None)
    if hook is not None:
        await _maybe_await(hook(*args))


class CacheExpander:
    """
    Strategy engine for cache-aside operations.

    Usage:
        expander = CacheExpander(InMemoryBackend())
        feeder = GenericFeeder("emp_12345")
        await expander.execute(feeder, repository, CacheStrategy.REFRESH)
        employment = feeder.data

    Args:
        backend: Storage used for cached envelopes
        metrics: Metrics sink (defaults to NoOpMetrics)
        ttl_policy: TTL policy for write-through (defaults to no expiry)
    """

    def __init__(
        self,
        backend: CacheBackend,
        metrics: CacheMetrics | None = None,
        ttl_policy: TtlPolicy | None = None,
    ):
        self._backend = backend
        self._metrics = metrics or NoOpMetrics()
        self._ttl_policy = ttl_policy or DefaultTtl()

    @property
    def backend(self) -> CacheBackend:
        return self._backend

    @property
    def metrics(self) -> CacheMetrics:
        return self._metrics

    @property
    def ttl_policy(self) -> TtlPolicy:
        return self._ttl_policy

    def set_ttl_policy(self, ttl_policy: TtlPolicy) -> None:
        """Replace the policy used by subsequent operations."""
        self._ttl_policy = ttl_policy

    def builder(self, **kwargs: Any) -> CacheOperationBuilder:
        """Start a fluent operation (strategy, TTL override, retries)."""
        return CacheOperationBuilder(self, **kwargs)

    # =========================================================================
    # Public API
    # =========================================================================

    async def execute(
        self,
        feeder: CacheFeed,
        repository: DataRepository,
        strategy: CacheStrategy | str = CacheStrategy.REFRESH,
        *,
        ttl_policy: TtlPolicy | None = None,
    ) -> Any:
        """
        Run one cache operation and feed the result to the feeder.

        Args:
            feeder: Supplies the id and receives the entity (or None)
            repository: System of record consulted on miss / bypass
            strategy: FRESH, REFRESH (default), INVALIDATE or BYPASS
            ttl_policy: Policy for this call only; the instance policy is untouched

        Returns:
            The resolved entity, or None when it was found nowhere

        Raises:
            ValidationError: Feeder or entity validation failed
            InvalidCacheEntryError / VersionMismatchError / DeserializationError:
                The cached entry cannot be decoded
            SerializationError: The loaded entity cannot be encoded
            BackendError: Cache read or delete failed
            RepositoryError: The repository failed
        """
        strategy = CacheStrategy.parse(strategy)
        policy = ttl_policy or self._ttl_policy
        start = time.perf_counter()

        # STAGE 1.0: Feeder validation (no I/O on failure, no metrics)
        await self._validate_feeder(feeder)

        # STAGE 2.0: Key construction
        entity_type = repository.entity_type
        entity_id = str(feeder.entity_id())
        cache_key = CacheKeyBuilder.build_for(entity_type, entity_id)
        log_stage(
            logger, Stage.KEY_CONSTRUCTION, "Cache key built", level="debug",
            cache_key=cache_key, strategy=str(strategy),
        )

        try:
            # STAGE 3.0: Strategy dispatch
            entity, source = await self._dispatch(strategy, cache_key, entity_type, repository, policy)

            # STAGE 4.0: Resolution
            await self._resolve(feeder, cache_key, entity, source)

        except CacheKitError as e:
            self._metrics.record_error(cache_key, str(e))
            e.with_context(cache_key=cache_key, strategy=str(strategy))
            log_stage(
                logger, Stage.RESOLUTION, "Cache operation failed", level="debug", error=e.to_dict(),
            )
            raise
        except Exception as e:
            self._metrics.record_error(cache_key, str(e))
            log_stage(
                logger, Stage.RESOLUTION, "Cache operation failed", level="debug",
                cache_key=cache_key, strategy=str(strategy),
                error_type=type(e).__name__, error=str(e),
            )
            raise

        duration = time.perf_counter() - start
        if entity is not None:
            self._metrics.record_hit(cache_key, duration)
        else:
            self._metrics.record_miss(cache_key, duration)

        log_stage(
            logger, Stage.RESOLUTION, "Cache operation resolved", level="debug",
            cache_key=cache_key, strategy=str(strategy), source=source,
            duration_ms=round(duration * 1000, 3),
        )
        return entity

    # =========================================================================
    # Stage 1: Validation
    # =========================================================================

    async def _validate_feeder(self, feeder: CacheFeed) -> None:
        try:
            await _call_hook(feeder, "validate")
        except CacheKitError:
            raise
        except Exception as e:
            raise ValidationError.from_exception(
                e,
                message=f"Feeder validation failed: {e}",
                operation_id=get_operation_id(),
                feeder=type(feeder).__name__,
            ) from e

    # =========================================================================
    # Stage 3: Strategy dispatch
    # =========================================================================

    async def _dispatch(
        self,
        strategy: CacheStrategy,
        cache_key: str,
        entity_type: Any,
        repository: DataRepository,
        policy: TtlPolicy,
    ) -> tuple[Any, Source]:
        log_stage(
            logger, Stage.STRATEGY_DISPATCH, "Dispatching cache strategy", level="debug",
            cache_key=cache_key, strategy=str(strategy),
        )

        if strategy is CacheStrategy.FRESH:
            entity = await self._read_cache(cache_key, entity_type)
            return (entity, "cache") if entity is not None else (None, "none")

        if strategy is CacheStrategy.REFRESH:
            entity = await self._read_cache(cache_key, entity_type)
            if entity is not None:
                return entity, "cache"
            return await self._load_and_fill(cache_key, entity_type, repository, policy)

        if strategy is CacheStrategy.INVALIDATE:
            await self._invalidate(cache_key)
            return await self._load_and_fill(cache_key, entity_type, repository, policy)

        # BYPASS
        return await self._load_and_fill(cache_key, entity_type, repository, policy)

    async def _read_cache(self, cache_key: str, entity_type: Any) -> Any:
        """Read and decode an entry. Decoding failures propagate."""
        try:
            data = await self._backend.get(cache_key)
        except CacheKitError:
            raise
        except Exception as e:
            raise BackendError.from_exception(
                e, operation_id=get_operation_id(), key=cache_key, command="get"
            ) from e

        if data is None:
            log_stage(logger, Stage.CACHE_READ, "Cache miss", level="debug", cache_key=cache_key)
            return None

        log_stage(
            logger, Stage.CACHE_READ, "Cache hit", level="debug",
            cache_key=cache_key, size_bytes=len(data),
        )
        return deserialize_from_cache(data, entity_type)

    async def _invalidate(self, cache_key: str) -> None:
        """Delete an entry. Failures propagate."""
        try:
            await self._backend.delete(cache_key)
        except CacheKitError:
            raise
        except Exception as e:
            raise BackendError.from_exception(
                e, operation_id=get_operation_id(), key=cache_key, command="delete"
            ) from e
        log_stage(logger, Stage.CACHE_INVALIDATION, "Cache entry invalidated", level="debug", cache_key=cache_key)

    async def _load_and_fill(
        self,
        cache_key: str,
        entity_type: Any,
        repository: DataRepository,
        policy: TtlPolicy,
    ) -> tuple[Any, Source]:
        entity_id = CacheKeyBuilder.extract_id(cache_key)
        entity = await self._fetch(repository, entity_id, entity_type)
        if entity is None:
            return None, "none"

        ttl = policy.get_ttl(entity_type.cache_prefix())
        await self._write_through(cache_key, entity, ttl)
        return entity, "repository"

    async def _fetch(self, repository: DataRepository, entity_id: str, entity_type: Any) -> Any:
        try:
            entity = await repository.fetch_by_id(entity_id)
        except CacheKitError:
            raise
        except Exception as e:
            raise RepositoryError.from_exception(
                e,
                message=f"Repository fetch failed: {e}",
                operation_id=get_operation_id(),
                entity_id=entity_id,
                entity_type=getattr(entity_type, "__name__", str(entity_type)),
            ) from e

        log_stage(
            logger, Stage.REPOSITORY_FETCH, "Repository fetch completed", level="debug",
            entity_id=entity_id, found=entity is not None,
        )
        return entity

    async def _write_through(self, cache_key: str, entity: Any, ttl) -> None:
        """Store a loaded entity. Serialization errors propagate, backend errors do not."""
        data = serialize_for_cache(entity)
        try:
            await self._backend.set(cache_key, data, ttl)
        except Exception as e:
            log_stage(
                logger, Stage.WRITE_THROUGH, "Write-through failed, continuing", level="warning",
                cache_key=cache_key, error_type=type(e).__name__, error=str(e),
            )
            return

        log_stage(
            logger, Stage.WRITE_THROUGH, "Write-through completed", level="debug",
            cache_key=cache_key, ttl_seconds=ttl.total_seconds() if ttl is not None else None,
        )

    # =========================================================================
    # Stage 4: Resolution
    # =========================================================================

    async def _resolve(self, feeder: CacheFeed, cache_key: str, entity: Any, source: Source) -> None:
        """
        Run the resolution hooks and hand the result to the feeder.

        on_hit and on_loaded are exclusive: on_hit fires only for entities
        served from cache, on_loaded only for entities loaded from the
        repository. Earlier cache-aside libraries of this shape fired both for
        every resolved entity; feeders ported from them that count hits in
        on_hit must also count in on_loaded. record_hit still fires for both
        sources.
        """
        if entity is None:
            await _call_hook(feeder, "on_miss", cache_key)
            await _maybe_await(feeder.feed(None))
            return

        await validate_entity(entity)
        if source == "cache":
            await _call_hook(feeder, "on_hit", cache_key)
        else:
            await _call_hook(feeder, "on_loaded", entity)
        await _maybe_await(feeder.feed(entity))
