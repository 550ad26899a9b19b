"""
Configuration Module

Centralized, type-safe configuration for the cache-aside layer.

Components:
-----------
- **settings.py**: Pydantic-based configuration with environment variable loading
- **constants.py**: Envelope header constants, retry backoff base, stage identifiers

Usage:
------
```python
from cachekit.core.config import get_settings
from cachekit.core.config.constants import CURRENT_SCHEMA_VERSION, Stage

settings = get_settings()
backend = settings.cache.CACHE_BACKEND  # "memory" | "redis"
```

Environment Variables:
---------------------
```bash
CACHE_BACKEND=redis
CACHE_DEFAULT_TTL=1800
CACHE_TTL_OVERRIDES='{"user": 3600, "product": 600}'
CACHE_METRICS=prometheus
REDIS_HOST=localhost
LOG_LEVEL=DEBUG
```
"""

from cachekit.core.config.settings import Settings, get_settings, reload_settings

__all__ = ["Settings", "get_settings", "reload_settings"]
