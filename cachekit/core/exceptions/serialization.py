"""
Envelope and Payload Exceptions

All exceptions raised while (de)serializing cached values.
A corrupted or stale-schema entry is a hard error, never a cache miss.
"""

from cachekit.core.exceptions.base import CacheKitError


class SerializationError(CacheKitError):
    """Raised when an entity cannot be encoded into an envelope."""
    pass


class DeserializationError(CacheKitError):
    """Raised when an envelope payload is malformed or does not match the entity type."""
    pass


class InvalidCacheEntryError(CacheKitError):
    """
    Raised when a buffer is not an envelope at all.

    Common causes:
    - Buffer shorter than the 8-byte header
    - Magic bytes differ (value written by another producer)
    """
    pass


class VersionMismatchError(CacheKitError):
    """
    Raised when the envelope schema version differs from the running code's.

    There is no migration path: bumping CURRENT_SCHEMA_VERSION invalidates
    every entry written by the previous version.
    """

    def __init__(self, expected: int, found: int, **kwargs):
        details = {"expected_version": expected, "found_version": found, **kwargs.pop("details", {})}
        super().__init__(
            f"Cache schema version mismatch: expected {expected}, found {found}",
            details=details,
            **kwargs,
        )
        self.expected = expected
        self.found = found
