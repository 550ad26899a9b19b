"""
Repository Exceptions

System-of-record failures. Absence is NOT an error: repositories return
None for a confirmed miss and raise only for connectivity or query failures.
"""

from cachekit.core.exceptions.base import CacheKitError


class RepositoryError(CacheKitError):
    """
    Raised when the system of record fails.

    Common causes:
    - Database connection lost
    - Query error
    - Upstream service unavailable
    """
    pass
