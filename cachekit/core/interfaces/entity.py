"""
Cacheable Entity Protocol

Defines how a value maps to a cache key and a namespace prefix.

An entity type needs no base class. It must:
- expose ``cache_key()`` returning its stable identity (rendered with ``str()``)
- expose a ``cache_prefix()`` classmethod returning a constant, non-empty
  namespace without ``:``
- be representable by ``pydantic.TypeAdapter`` (pydantic model, dataclass,
  TypedDict), which is what the envelope codec relies on

Example:
    class User(BaseModel):
        id: str
        name: str

        def cache_key(self) -> str:
            return self.id

        @classmethod
        def cache_prefix(cls) -> str:
            return "user"
"""

import inspect
from typing import Any, Protocol, runtime_checkable

from cachekit.core.exceptions import CacheKitError, ValidationError


@runtime_checkable
class CacheEntity(Protocol):
    """Protocol for values stored through the strategy engine."""

    def cache_key(self) -> Any:
        """Return the entity's identity (e.g. ``"emp_12345"``)."""
        ...

    @classmethod
    def cache_prefix(cls) -> str:
        """Return the namespace for this entity type (e.g. ``"employment"``)."""
        ...


async def validate_entity(entity: Any) -> None:
    """
    Run the entity's optional ``validate_for_cache()`` hook.

    The hook is named ``validate_for_cache`` rather than ``validate`` because
    pydantic models already define a ``validate`` classmethod.
    Entities without the hook are valid. Foreign exceptions raised by the
    hook are wrapped into ValidationError.
    """
    hook = getattr(entity, "validate_for_cache", None)
    if hook is None:
        return

    try:
        result = hook()
        if inspect.isawaitable(result):
            await result
    except CacheKitError:
        raise
    except Exception as e:
        raise ValidationError.from_exception(
            e,
            message=f"Entity validation failed: {e}",
            entity_type=type(entity).__name__,
        ) from e
