"""
Cache Feeder Protocol

A feeder supplies the identifier to resolve and receives the final value.

Hooks (``validate``, ``on_hit``, ``on_miss``, ``on_loaded``) are optional:
classes that explicitly subclass CacheFeed inherit the no-op defaults below,
and the strategy engine tolerates structural feeders that omit them. Any hook
may raise to abort the operation; hooks may be plain functions or coroutines.
"""

from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class CacheFeed(Protocol[T]):
    """Protocol for the caller side of a cache operation."""

    def entity_id(self) -> Any:
        """Return the identifier to resolve (rendered with ``str()``)."""
        ...

    def feed(self, entity: T | None) -> None:
        """Receive the resolved entity, or None on confirmed absence."""
        ...

    def validate(self) -> None:
        """Pre-flight check run before any I/O. Raise ValidationError to abort."""
        return None

    def on_hit(self, cache_key: str) -> None:
        """Called when the entity was served from cache."""
        return None

    def on_miss(self, cache_key: str) -> None:
        """Called when the entity was found nowhere."""
        return None

    def on_loaded(self, entity: T) -> None:
        """Called when the entity was loaded from the system of record."""
        return None


class GenericFeeder(CacheFeed[T]):
    """
    Ready-made feeder that stores the fed value in ``data``.

    Usage:
        feeder = GenericFeeder("user_001")
        await expander.execute(feeder, repository, CacheStrategy.REFRESH)
        user = feeder.data
    """

    def __init__(self, entity_id: Any):
        self.id = entity_id
        self.data: T | None = None

    def entity_id(self) -> Any:
        return self.id

    def feed(self, entity: T | None) -> None:
        self.data = entity

    def __repr__(self) -> str:
        return f"GenericFeeder(id={self.id!r}, loaded={self.data is not None})"
