"""
Cache Strategies

How the strategy engine treats the cache for one operation:

- FRESH: cache only; a miss returns None without touching the repository
- REFRESH: cache first, repository on miss, then write-through (default)
- INVALIDATE: delete the entry, then behave like a REFRESH miss
- BYPASS: skip the cache read, load from the repository, write-through
"""

from enum import Enum

from cachekit.core.exceptions import ValidationError


class CacheStrategy(str, Enum):
    FRESH = "fresh"
    REFRESH = "refresh"
    INVALIDATE = "invalidate"
    BYPASS = "bypass"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: "CacheStrategy | str") -> "CacheStrategy":
        """
        Resolve a strategy from its name, case-insensitively.

        Raises:
            ValidationError: If the name is unknown
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(
                f"Unknown cache strategy: {value!r}",
                details={"valid": [s.value for s in cls]},
            ) from None
