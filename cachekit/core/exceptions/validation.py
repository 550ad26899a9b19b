"""
Validation Exceptions

Raised when a feeder or entity precondition fails, or when caller-supplied
identifiers cannot form a cache key.

Author: System Architect
Date: 2026-10-19
"""

from cachekit.core.exceptions.base import CacheKitError


class ValidationError(CacheKitError):
    """
    Raised when validation fails.

    Common causes:
    - feeder.validate() rejected the request before any I/O
    - entity.validate_for_cache() rejected a resolved entity
    - Empty cache prefix or prefix containing the key separator
    - Cache key without a separator
    """
    pass
