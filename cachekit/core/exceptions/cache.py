"""
Cache Backend Exceptions

All exceptions raised by cache backends (Redis, in-memory, etc.)

Author: System Architect
Date: 2026-10-19
"""

from cachekit.core.exceptions.base import CacheKitError


class BackendError(CacheKitError):
    """
    Raised when the storage technology is unavailable or a protocol call fails.

    Common causes:
    - Redis server is down
    - Network connectivity issues
    - Command rejected by the server

    Write-through failures during miss-fill are logged and swallowed by the
    strategy engine; every other backend failure propagates.
    """
    pass


class BackendConnectionError(BackendError):
    """
    Raised when a backend cannot establish its connection.

    Common causes:
    - Incorrect host/port configuration
    - Authentication failure
    """
    pass


class CacheTimeoutError(CacheKitError):
    """
    Raised when an operation exceeds a deadline imposed by the caller or backend.

    The strategy engine imposes no deadlines of its own; backends translate
    their socket/command timeouts into this error.
    """
    pass
