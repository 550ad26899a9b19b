"""
cachekit: backend-agnostic cache-aside orchestration.

Quick start:
    from cachekit import CacheExpander, CacheStrategy, GenericFeeder, InMemoryBackend

    expander = CacheExpander(InMemoryBackend())
    feeder = GenericFeeder("emp_12345")
    await expander.execute(feeder, repository, CacheStrategy.REFRESH)
    employment = feeder.data
"""

from cachekit.core.exceptions import (
    BackendConnectionError,
    BackendError,
    CacheKitError,
    CacheTimeoutError,
    ConfigurationError,
    DeserializationError,
    InvalidCacheEntryError,
    RepositoryError,
    SerializationError,
    ValidationError,
    VersionMismatchError,
)
from cachekit.core.interfaces import (
    CacheBackend,
    CacheEntity,
    CacheFeed,
    CacheMetrics,
    DataRepository,
    GenericFeeder,
    InMemoryRepository,
    NoOpMetrics,
)
from cachekit.core.keys import CacheKeyBuilder
from cachekit.core.serialization import (
    EnvelopeHeader,
    deserialize_from_cache,
    read_envelope_header,
    serialize_for_cache,
)
from cachekit.core.strategy import CacheStrategy
from cachekit.core.ttl import DefaultTtl, FixedTtl, PerTypeTtl, TtlPolicy, ttl_policy_from_settings
from cachekit.infrastructure.cache import InMemoryBackend, RedisBackend, create_backend
from cachekit.infrastructure.monitoring import LoggingMetrics, PrometheusMetrics, create_metrics
from cachekit.services import (
    CacheExpander,
    CacheOperationBuilder,
    CacheService,
    close_cache_service,
    get_cache_service,
    init_cache_service,
)

__version__ = "0.1.0"

__all__ = [
    # Engine
    "CacheExpander",
    "CacheOperationBuilder",
    "CacheService",
    "get_cache_service",
    "init_cache_service",
    "close_cache_service",
    "CacheStrategy",
    # Contracts
    "CacheBackend",
    "CacheEntity",
    "CacheFeed",
    "CacheMetrics",
    "DataRepository",
    "GenericFeeder",
    "InMemoryRepository",
    "NoOpMetrics",
    # Building blocks
    "CacheKeyBuilder",
    "EnvelopeHeader",
    "serialize_for_cache",
    "deserialize_from_cache",
    "read_envelope_header",
    "TtlPolicy",
    "DefaultTtl",
    "FixedTtl",
    "PerTypeTtl",
    "ttl_policy_from_settings",
    # Adapters
    "InMemoryBackend",
    "RedisBackend",
    "create_backend",
    "LoggingMetrics",
    "PrometheusMetrics",
    "create_metrics",
    # Errors
    "CacheKitError",
    "ConfigurationError",
    "ValidationError",
    "InvalidCacheEntryError",
    "VersionMismatchError",
    "SerializationError",
    "DeserializationError",
    "BackendError",
    "BackendConnectionError",
    "RepositoryError",
    "CacheTimeoutError",
]
