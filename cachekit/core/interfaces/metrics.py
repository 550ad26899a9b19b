"""
Cache Metrics Protocol

Optional hit/miss/error observation sink. Durations are in seconds.

The strategy engine defaults to NoOpMetrics; see
cachekit.infrastructure.monitoring for logging and Prometheus sinks.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheMetrics(Protocol):
    """Protocol for metrics sinks."""

    def record_hit(self, key: str, duration: float) -> None:
        """An operation resolved an entity (from cache or repository)."""
        ...

    def record_miss(self, key: str, duration: float) -> None:
        """An operation found the entity nowhere."""
        ...

    def record_error(self, key: str, message: str) -> None:
        """An operation failed."""
        ...


class NoOpMetrics:
    """Metrics sink that discards everything."""

    def record_hit(self, key: str, duration: float) -> None:
        pass

    def record_miss(self, key: str, duration: float) -> None:
        pass

    def record_error(self, key: str, message: str) -> None:
        pass
