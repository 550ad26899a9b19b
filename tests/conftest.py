"""
Pytest Configuration and Shared Test Fixtures

This module provides pytest configuration and reusable fixtures for all tests.
All fixtures defined here are automatically available to all test files.
"""

import os
import sys
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add project root to sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from tests.test_fixtures import (  # noqa: E402
    CacheTestFactory,
    EntityTestFactory,
    RecordingMetrics,
)

# ============================================================================
# Pytest Configuration
# ============================================================================

# pytest-asyncio runs in auto mode (see pyproject.toml); tests still carry
# explicit @pytest.mark.asyncio markers.


# ============================================================================
# Mock Configuration Fixtures
# ============================================================================


@pytest.fixture
def mock_settings():
    """
    Mock application settings for testing.

    Returns a MagicMock with the cache, Redis and logging sections populated.
    """
    from cachekit.core.config.settings import Settings

    settings = MagicMock(spec=Settings)

    # Cache settings
    settings.cache.CACHE_BACKEND = "memory"
    settings.cache.CACHE_DEFAULT_TTL = None
    settings.cache.CACHE_TTL_OVERRIDES = {}
    settings.cache.CACHE_METRICS = "none"
    settings.cache.CACHE_RETRY_BASE_DELAY = 0.1

    # Redis settings
    settings.redis.REDIS_HOST = "localhost"
    settings.redis.REDIS_PORT = 6379
    settings.redis.REDIS_DB = 0
    settings.redis.REDIS_PASSWORD = None
    settings.redis.REDIS_MAX_CONNECTIONS = 10
    settings.redis.REDIS_SOCKET_TIMEOUT = 5
    settings.redis.REDIS_SOCKET_CONNECT_TIMEOUT = 5
    settings.redis.REDIS_HEALTH_CHECK_INTERVAL = 30

    # Logging settings
    settings.logging.LOG_LEVEL = "DEBUG"
    settings.logging.LOG_FORMAT = "console"

    return settings


@pytest.fixture
def clean_env(monkeypatch):
    """Remove cachekit environment variables so Settings sees defaults."""
    for name in list(os.environ):
        if name.startswith(("CACHE_", "REDIS_", "LOG_")):
            monkeypatch.delenv(name, raising=False)
    return monkeypatch


# ============================================================================
# Environment-Based Integration Toggles
# ============================================================================


@pytest.fixture(scope="session")
def use_real_redis():
    """Check if real Redis should be used for integration tests."""
    return os.getenv("USE_REAL_REDIS", "0").lower() in ("1", "true", "yes")


# ============================================================================
# Cache Fixtures
# ============================================================================


@pytest.fixture
def backend():
    """Fresh in-memory backend."""
    return CacheTestFactory.memory_backend()


@pytest.fixture
def metrics():
    """Metrics sink that records every observation."""
    return RecordingMetrics()


@pytest.fixture
def employment():
    """Sample employment entity."""
    return EntityTestFactory.employment()


@pytest.fixture
def repository(employment):
    """Repository holding the sample employment entity."""
    return EntityTestFactory.employment_repository(employment)


@pytest.fixture
def expander(backend, metrics):
    """Strategy engine over the in-memory backend with recording metrics."""
    from cachekit.services.cache_expander import CacheExpander

    return CacheExpander(backend, metrics=metrics)


@pytest.fixture
def no_sleep():
    """Sleep replacement for retry tests; records requested delays."""
    return AsyncMock(return_value=None)


@pytest.fixture
def redis_client():
    """Dict-backed redis.asyncio client mock."""
    return CacheTestFactory.redis_client_mock()
