"""
Unit Tests for Core Interfaces

Tests protocol conformance of the shipped implementations, the generic
feeder, the in-memory repository and entity validation.
"""

import pytest

from cachekit.core.exceptions import ValidationError
from cachekit.core.interfaces import (
    CacheBackend,
    CacheEntity,
    CacheFeed,
    CacheMetrics,
    DataRepository,
    GenericFeeder,
    InMemoryRepository,
    NoOpMetrics,
    validate_entity,
)
from cachekit.infrastructure.cache.memory_backend import InMemoryBackend
from tests.test_fixtures import Employment, EntityTestFactory, MinimalFeeder, Session


@pytest.mark.unit
class TestProtocolConformance:
    """Test structural typing of shipped implementations."""

    def test_in_memory_backend_is_cache_backend(self):
        assert isinstance(InMemoryBackend(), CacheBackend)

    def test_entities_are_cache_entities(self):
        """Test that pydantic and dataclass entities satisfy CacheEntity without a base class."""
        assert isinstance(EntityTestFactory.employment(), CacheEntity)
        assert isinstance(EntityTestFactory.session(), CacheEntity)

    def test_generic_feeder_is_cache_feed(self):
        assert isinstance(GenericFeeder("x"), CacheFeed)

    def test_in_memory_repository_is_data_repository(self):
        assert isinstance(InMemoryRepository(Employment), DataRepository)

    def test_noop_metrics_is_cache_metrics(self):
        assert isinstance(NoOpMetrics(), CacheMetrics)

    def test_feeder_without_hooks_is_not_a_full_cache_feed(self):
        """Test that hookless feeders are partial; the engine accepts them structurally."""
        assert not isinstance(MinimalFeeder("x"), CacheFeed)


@pytest.mark.unit
class TestGenericFeeder:
    """Test suite for GenericFeeder."""

    def test_entity_id(self):
        assert GenericFeeder("emp_1").entity_id() == "emp_1"

    def test_starts_empty(self):
        assert GenericFeeder("emp_1").data is None

    def test_feed_stores_value(self, employment):
        """Test that fed values are stored in data."""
        feeder = GenericFeeder("emp_1")

        feeder.feed(employment)

        assert feeder.data == employment

    def test_default_hooks_are_noops(self):
        """Test that inherited hooks succeed and return nothing."""
        feeder = GenericFeeder("emp_1")

        assert feeder.validate() is None
        assert feeder.on_hit("employment:emp_1") is None
        assert feeder.on_miss("employment:emp_1") is None
        assert feeder.on_loaded(object()) is None


@pytest.mark.unit
class TestInMemoryRepository:
    """Test suite for InMemoryRepository."""

    @pytest.mark.asyncio
    async def test_fetch_existing(self, employment):
        """Test that inserted entities are returned."""
        repository = InMemoryRepository(Employment)
        repository.insert(employment.id, employment)

        assert await repository.fetch_by_id(employment.id) == employment

    @pytest.mark.asyncio
    async def test_fetch_missing_returns_none(self):
        """Test that absence is None, not an error."""
        repository = InMemoryRepository(Employment)

        assert await repository.fetch_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_fetch_count(self, employment):
        """Test that every fetch is counted, found or not."""
        repository = EntityTestFactory.employment_repository(employment)

        await repository.fetch_by_id(employment.id)
        await repository.fetch_by_id("missing")

        assert repository.fetch_count == 2

    @pytest.mark.asyncio
    async def test_ids_normalized_to_strings(self):
        """Test that integer ids match their string form."""
        session = EntityTestFactory.session(token="1")
        repository = InMemoryRepository(Session, {1: session})

        assert await repository.fetch_by_id("1") == session

    def test_remove_and_clear(self, employment):
        """Test removal helpers."""
        repository = EntityTestFactory.employment_repository(employment)

        assert repository.remove(employment.id) == employment
        assert repository.remove(employment.id) is None

        repository.insert("a", employment)
        repository.clear()
        assert len(repository) == 0


@pytest.mark.unit
class TestValidateEntity:
    """Test the entity validation hook runner."""

    @pytest.mark.asyncio
    async def test_entity_without_hook_is_valid(self):
        """Test that entities without validate_for_cache pass."""
        await validate_entity(EntityTestFactory.session())

    @pytest.mark.asyncio
    async def test_valid_entity_passes(self):
        await validate_entity(EntityTestFactory.employment(salary=1))

    @pytest.mark.asyncio
    async def test_validation_error_propagates_unchanged(self):
        """Test that ValidationError raised by the hook is not re-wrapped."""
        with pytest.raises(ValidationError, match="Salary must not be negative"):
            await validate_entity(EntityTestFactory.employment(salary=-1))

    @pytest.mark.asyncio
    async def test_foreign_error_wrapped(self):
        """Test that other exceptions from the hook become ValidationError."""

        class Broken:
            def validate_for_cache(self):
                raise ValueError("checksum mismatch")

        with pytest.raises(ValidationError) as exc_info:
            await validate_entity(Broken())

        assert exc_info.value.details["original_error"] == "ValueError"
        assert exc_info.value.details["entity_type"] == "Broken"
        assert isinstance(exc_info.value.__cause__, ValueError)

    @pytest.mark.asyncio
    async def test_async_hook_awaited(self):
        """Test that coroutine hooks are awaited."""

        class AsyncChecked:
            def __init__(self):
                self.checked = False

            async def validate_for_cache(self):
                self.checked = True

        entity = AsyncChecked()
        await validate_entity(entity)

        assert entity.checked is True
