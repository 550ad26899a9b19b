"""
Exception Module

Structured exception hierarchy for the cache-aside layer.
Exceptions are organized by theme:

- **base.py**: CacheKitError base class + ConfigurationError
- **cache.py**: Backend failures and timeouts
- **serialization.py**: Envelope header and payload failures
- **validation.py**: Feeder/entity precondition failures
- **repository.py**: System-of-record failures

Usage:
------
```python
from cachekit.core.exceptions import BackendError, VersionMismatchError

try:
    await expander.execute(feeder, repository, CacheStrategy.REFRESH)
except VersionMismatchError:
    ...  # schema bumped, entry written by an older deployment
```
"""

from cachekit.core.exceptions.base import CacheKitError, ConfigurationError
from cachekit.core.exceptions.cache import (
    BackendConnectionError,
    BackendError,
    CacheTimeoutError,
)
from cachekit.core.exceptions.repository import RepositoryError
from cachekit.core.exceptions.serialization import (
    DeserializationError,
    InvalidCacheEntryError,
    SerializationError,
    VersionMismatchError,
)
from cachekit.core.exceptions.validation import ValidationError

__all__ = [
    # Base
    "CacheKitError",
    "ConfigurationError",
    # Backend
    "BackendError",
    "BackendConnectionError",
    "CacheTimeoutError",
    # Serialization
    "SerializationError",
    "DeserializationError",
    "InvalidCacheEntryError",
    "VersionMismatchError",
    # Validation
    "ValidationError",
    # Repository
    "RepositoryError",
]
