"""
Services Layer

- **cache_expander.py**: CacheExpander strategy engine
- **operation_builder.py**: Fluent builder with TTL override and retries
- **cache_service.py**: Configuration-wired facade and global instance
"""

from cachekit.services.cache_expander import CacheExpander
from cachekit.services.cache_service import (
    CacheService,
    close_cache_service,
    get_cache_service,
    init_cache_service,
)
from cachekit.services.operation_builder import CacheOperationBuilder

__all__ = [
    "CacheExpander",
    "CacheOperationBuilder",
    "CacheService",
    "get_cache_service",
    "init_cache_service",
    "close_cache_service",
]
