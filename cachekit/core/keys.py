"""
Cache Key Construction

Keys have the shape ``{prefix}:{id}``. The prefix namespaces an entity type
and never contains the separator; the id is rendered verbatim.

Known limitation: ``:`` inside ids is not escaped. Extraction splits on the
FIRST separator only, so such ids still round-trip, but two prefixes can never
be nested.
"""

from typing import Any

from cachekit.core.config.constants import CACHE_KEY_SEPARATOR
from cachekit.core.exceptions import ValidationError


class CacheKeyBuilder:
    """Pure helpers for building and parsing cache keys."""

    @staticmethod
    def validate_prefix(prefix: str) -> str:
        """
        Ensure a prefix is usable as a namespace.

        Raises:
            ValidationError: If the prefix is empty or contains the separator
        """
        if not prefix:
            raise ValidationError("Cache prefix must not be empty")
        if CACHE_KEY_SEPARATOR in prefix:
            raise ValidationError(
                f"Cache prefix must not contain '{CACHE_KEY_SEPARATOR}': {prefix!r}",
                details={"prefix": prefix},
            )
        return prefix

    @staticmethod
    def build(prefix: str, entity_id: Any) -> str:
        """
        Build a cache key.

        Example:
            >>> CacheKeyBuilder.build("employment", "emp_12345")
            'employment:emp_12345'
        """
        CacheKeyBuilder.validate_prefix(prefix)
        return f"{prefix}{CACHE_KEY_SEPARATOR}{entity_id}"

    @staticmethod
    def build_for(entity_type: Any, entity_id: Any) -> str:
        """Build a key using ``entity_type.cache_prefix()``."""
        return CacheKeyBuilder.build(entity_type.cache_prefix(), entity_id)

    @staticmethod
    def extract_id(cache_key: str) -> str:
        """
        Return everything after the first separator.

        Example:
            >>> CacheKeyBuilder.extract_id("session:2024:abc")
            '2024:abc'

        Raises:
            ValidationError: If the key has no separator
        """
        prefix, sep, entity_id = cache_key.partition(CACHE_KEY_SEPARATOR)
        if not sep:
            raise ValidationError(
                f"Invalid cache key (missing '{CACHE_KEY_SEPARATOR}'): {cache_key!r}",
                details={"cache_key": cache_key},
            )
        return entity_id
