"""
TTL Policies

A TTL policy maps an entity prefix to an expiry duration, or None for
"no expiry". Policies are immutable and evaluated at write time.

Any object with a pure, total ``get_ttl(prefix)`` is a valid policy, so a
small class wrapping a function works as well as the dataclasses below.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Mapping, Protocol, runtime_checkable

from cachekit.core.exceptions import ValidationError


@runtime_checkable
class TtlPolicy(Protocol):
    """Protocol for TTL resolution."""

    def get_ttl(self, prefix: str) -> timedelta | None:
        ...


def to_timedelta(value: timedelta | int | float) -> timedelta:
    """
    Normalize a TTL given as seconds or timedelta.

    Raises:
        ValidationError: If the duration is not positive
    """
    ttl = value if isinstance(value, timedelta) else timedelta(seconds=value)
    if ttl <= timedelta(0):
        raise ValidationError(f"TTL must be positive, got {ttl}", details={"ttl": str(ttl)})
    return ttl


@dataclass(frozen=True)
class DefaultTtl:
    """No expiry for every prefix."""

    def get_ttl(self, prefix: str) -> timedelta | None:
        return None


@dataclass(frozen=True)
class FixedTtl:
    """Same duration for every prefix."""

    ttl: timedelta

    def get_ttl(self, prefix: str) -> timedelta | None:
        return self.ttl


@dataclass(frozen=True)
class PerTypeTtl:
    """
    Explicit prefix -> duration mapping with a fallback.

    Example:
        PerTypeTtl({"user": timedelta(hours=1)}, default=timedelta(minutes=5))
    """

    overrides: Mapping[str, timedelta] = field(default_factory=dict)
    default: timedelta | None = None

    def get_ttl(self, prefix: str) -> timedelta | None:
        return self.overrides.get(prefix, self.default)


def ttl_policy_from_settings(settings: Any) -> TtlPolicy:
    """
    Build a policy from CACHE_DEFAULT_TTL and CACHE_TTL_OVERRIDES.

    Args:
        settings: Settings (or its ``cache`` view)
    """
    default = settings.CACHE_DEFAULT_TTL
    default_ttl = to_timedelta(default) if default is not None else None
    overrides = settings.CACHE_TTL_OVERRIDES

    if overrides:
        return PerTypeTtl(
            overrides={prefix: to_timedelta(seconds) for prefix, seconds in overrides.items()},
            default=default_ttl,
        )
    if default_ttl is not None:
        return FixedTtl(default_ttl)
    return DefaultTtl()
