"""
Data Repository Protocol

The system of record consulted on cache miss (database, external service).

Contract:
- ``fetch_by_id`` returns None for confirmed absence. Absence is not an error.
- Repository-level failures (connectivity, query errors) raise RepositoryError.
  The strategy engine wraps any other exception escaping ``fetch_by_id``
  into RepositoryError.
- ``entity_type`` names the entity class the repository produces; the engine
  uses it for the cache prefix and for decoding cached envelopes.
"""

from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class DataRepository(Protocol[T]):
    """Protocol for system-of-record access."""

    entity_type: type[T]

    async def fetch_by_id(self, entity_id: str) -> T | None:
        """
        Load one entity.

        Args:
            entity_id: Identifier extracted from the cache key

        Returns:
            The entity, or None if it does not exist

        Raises:
            RepositoryError: If the system of record fails
        """
        ...


class InMemoryRepository(Generic[T]):
    """
    Dict-backed repository for tests, demos and cache warmers.

    Tracks ``fetch_count`` so callers can assert whether the system of
    record was consulted.
    """

    def __init__(self, entity_type: type[T], items: dict[str, T] | None = None):
        self.entity_type = entity_type
        self._items: dict[str, T] = {str(k): v for k, v in (items or {}).items()}
        self.fetch_count = 0

    async def fetch_by_id(self, entity_id: str) -> T | None:
        self.fetch_count += 1
        return self._items.get(str(entity_id))

    def insert(self, entity_id: Any, entity: T) -> None:
        self._items[str(entity_id)] = entity

    def remove(self, entity_id: Any) -> T | None:
        return self._items.pop(str(entity_id), None)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
