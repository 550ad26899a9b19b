"""
Test Fixtures Package

Shared test utilities and helpers for consistent testing across all modules.
"""

from .cache_factory import CacheTestFactory, FailingBackend, FakeClock, RecordingMetrics
from .entity_factory import (
    AsyncHookFeeder,
    Employment,
    EntityTestFactory,
    FlakyRepository,
    MinimalFeeder,
    RecordingFeeder,
    RecordingRepository,
    Session,
)

__all__ = [
    "CacheTestFactory",
    "FailingBackend",
    "FakeClock",
    "RecordingMetrics",
    "EntityTestFactory",
    "Employment",
    "Session",
    "RecordingFeeder",
    "MinimalFeeder",
    "AsyncHookFeeder",
    "FlakyRepository",
    "RecordingRepository",
]
