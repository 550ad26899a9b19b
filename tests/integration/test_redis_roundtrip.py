"""
Integration Tests for RedisBackend

Runs the strategy engine against a real Redis server.
Enable with USE_REAL_REDIS=1 (connection settings come from REDIS_* variables).
"""

import uuid
from datetime import timedelta

import pytest

from cachekit.core.config.settings import get_settings
from cachekit.core.interfaces.feed import GenericFeeder
from cachekit.core.strategy import CacheStrategy
from cachekit.infrastructure.cache.redis_backend import RedisBackend
from cachekit.services.cache_expander import CacheExpander
from tests.test_fixtures import EntityTestFactory


@pytest.fixture
async def redis_backend(use_real_redis):
    if not use_real_redis:
        pytest.skip("USE_REAL_REDIS not enabled")
    backend = RedisBackend(settings=get_settings())
    await backend.connect()
    yield backend
    await backend.disconnect()


@pytest.mark.integration
class TestRedisRoundTrip:
    """End-to-end cache-aside against Redis."""

    @pytest.mark.asyncio
    async def test_refresh_populates_redis(self, redis_backend):
        entity_id = f"emp_{uuid.uuid4().hex}"
        employment = EntityTestFactory.employment(entity_id)
        repository = EntityTestFactory.employment_repository(employment)
        expander = CacheExpander(redis_backend)
        key = f"employment:{entity_id}"

        try:
            await expander.execute(GenericFeeder(entity_id), repository, CacheStrategy.REFRESH)
            feeder = GenericFeeder(entity_id)
            await expander.execute(feeder, repository, CacheStrategy.FRESH)

            assert feeder.data == employment
            assert repository.fetch_count == 1
        finally:
            await redis_backend.delete(key)

    @pytest.mark.asyncio
    async def test_ttl_applied(self, redis_backend):
        key = f"employment:{uuid.uuid4().hex}"

        await redis_backend.set(key, b"value", ttl=timedelta(seconds=30))
        try:
            assert await redis_backend.exists(key)
            assert await redis_backend.mget([key, key + ":missing"]) == [b"value", None]
        finally:
            await redis_backend.mdelete([key])

        assert not await redis_backend.exists(key)
