"""
Core Interfaces Module

Capability contracts of the cache-aside layer, following the Protocol
pattern (PEP 544) for structural subtyping:
- Runtime type checking with @runtime_checkable
- No inheritance required
- Easy mocking for tests

Components:
-----------
- **cache.py**: CacheBackend protocol (storage I/O seam)
- **entity.py**: CacheEntity protocol (key + prefix)
- **feed.py**: CacheFeed protocol + GenericFeeder
- **repository.py**: DataRepository protocol + InMemoryRepository
- **metrics.py**: CacheMetrics protocol + NoOpMetrics
"""

from cachekit.core.interfaces.cache import CacheBackend
from cachekit.core.interfaces.entity import CacheEntity, validate_entity
from cachekit.core.interfaces.feed import CacheFeed, GenericFeeder
from cachekit.core.interfaces.metrics import CacheMetrics, NoOpMetrics
from cachekit.core.interfaces.repository import DataRepository, InMemoryRepository

__all__ = [
    "CacheBackend",
    "CacheEntity",
    "validate_entity",
    "CacheFeed",
    "GenericFeeder",
    "CacheMetrics",
    "NoOpMetrics",
    "DataRepository",
    "InMemoryRepository",
]
