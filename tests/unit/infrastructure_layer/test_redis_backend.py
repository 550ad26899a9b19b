"""
Unit Tests for RedisBackend

Tests command mapping, TTL precision, batch operations and error translation
against a mocked redis.asyncio client.
"""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from redis.exceptions import ConnectionError, ResponseError, TimeoutError

from cachekit.core.exceptions import BackendConnectionError, BackendError, CacheTimeoutError
from cachekit.infrastructure.cache import redis_backend
from cachekit.infrastructure.cache.redis_backend import ConnectionManager, RedisBackend


@pytest.fixture
def redis_cache(mock_settings, redis_client):
    """RedisBackend over the dict-backed client mock."""
    return RedisBackend(settings=mock_settings, client=redis_client)


@pytest.mark.unit
class TestRedisBackendCommands:
    """Test command mapping."""

    @pytest.mark.asyncio
    async def test_get(self, redis_cache, redis_client):
        redis_client.data["user:1"] = b"envelope"

        assert await redis_cache.get("user:1") == b"envelope"
        redis_client.get.assert_awaited_once_with("user:1")

    @pytest.mark.asyncio
    async def test_set_with_ttl_uses_milliseconds(self, redis_cache, redis_client):
        """Test that TTLs are sent as PX milliseconds."""
        await redis_cache.set("user:1", b"envelope", ttl=timedelta(minutes=5))

        redis_client.set.assert_awaited_once_with("user:1", b"envelope", px=300000)

    @pytest.mark.asyncio
    async def test_set_sub_millisecond_ttl_rounds_up(self, redis_cache, redis_client):
        """Test that tiny TTLs never become zero (which Redis rejects)."""
        await redis_cache.set("user:1", b"envelope", ttl=timedelta(microseconds=10))

        redis_client.set.assert_awaited_once_with("user:1", b"envelope", px=1)

    @pytest.mark.asyncio
    async def test_set_without_ttl(self, redis_cache, redis_client):
        await redis_cache.set("user:1", b"envelope")

        redis_client.set.assert_awaited_once_with("user:1", b"envelope")

    @pytest.mark.asyncio
    async def test_delete(self, redis_cache, redis_client):
        redis_client.data["user:1"] = b"envelope"

        await redis_cache.delete("user:1")

        assert "user:1" not in redis_client.data

    @pytest.mark.asyncio
    async def test_exists(self, redis_cache, redis_client):
        redis_client.data["user:1"] = b"envelope"

        assert await redis_cache.exists("user:1") is True
        assert await redis_cache.exists("user:2") is False

    @pytest.mark.asyncio
    async def test_clear_all_flushes_db(self, redis_cache, redis_client):
        redis_client.data["user:1"] = b"envelope"

        await redis_cache.clear_all()

        redis_client.flushdb.assert_awaited_once()
        assert redis_client.data == {}


@pytest.mark.unit
class TestRedisBackendBatch:
    """Test MGET and pipelined deletes."""

    @pytest.mark.asyncio
    async def test_mget_preserves_order(self, redis_cache, redis_client):
        redis_client.data.update({"a": b"1", "c": b"3"})

        assert await redis_cache.mget(["c", "b", "a"]) == [b"3", None, b"1"]
        redis_client.mget.assert_awaited_once_with(["c", "b", "a"])

    @pytest.mark.asyncio
    async def test_mget_empty_skips_round_trip(self, redis_cache, redis_client):
        """Test that an empty MGET is not sent (Redis rejects it)."""
        assert await redis_cache.mget([]) == []
        redis_client.mget.assert_not_called()

    @pytest.mark.asyncio
    async def test_mdelete_uses_pipeline(self, redis_cache, redis_client):
        """Test that deletes are queued on one non-transactional pipeline."""
        redis_client.pipe.execute.return_value = [1, 1]

        await redis_cache.mdelete(["a", "b"])

        redis_client.pipeline.assert_called_once_with(transaction=False)
        assert redis_client.pipe.delete.call_count == 2
        redis_client.pipe.execute.assert_awaited_once_with(raise_on_error=False)

    @pytest.mark.asyncio
    async def test_mdelete_swallows_per_key_failures(self, redis_cache, redis_client):
        """Test that failed deletes inside the batch do not raise."""
        redis_client.pipe.execute.return_value = [1, ResponseError("WRONGTYPE")]

        await redis_cache.mdelete(["a", "b"])

    @pytest.mark.asyncio
    async def test_mdelete_swallows_pipeline_failure(self, redis_cache, redis_client):
        """Test that a failed pipeline does not raise."""
        redis_client.pipe.execute.side_effect = ConnectionError("connection lost")

        await redis_cache.mdelete(["a", "b"])

    @pytest.mark.asyncio
    async def test_mdelete_swallows_connect_failure(self, mock_settings):
        """Test that a failed lazy connect is logged and swallowed like other batch failures."""
        client = MagicMock()
        client.ping = AsyncMock(side_effect=ConnectionError("refused"))
        pool = MagicMock()
        pool.disconnect = AsyncMock()

        with patch.object(redis_backend, "ConnectionPool", return_value=pool), \
                patch.object(redis_backend.redis, "Redis", return_value=client):
            backend = RedisBackend(settings=mock_settings)
            await backend.mdelete(["a", "b"])

        client.pipeline.assert_not_called()

    @pytest.mark.asyncio
    async def test_mdelete_empty(self, redis_cache, redis_client):
        await redis_cache.mdelete([])

        redis_client.pipeline.assert_not_called()


@pytest.mark.unit
class TestRedisBackendErrors:
    """Test error translation."""

    @pytest.mark.asyncio
    async def test_timeout_maps_to_cache_timeout(self, redis_cache, redis_client):
        redis_client.get.side_effect = TimeoutError("read timed out")

        with pytest.raises(CacheTimeoutError):
            await redis_cache.get("user:1")

    @pytest.mark.asyncio
    async def test_connection_error_maps_to_backend_connection_error(self, redis_cache, redis_client):
        redis_client.set.side_effect = ConnectionError("refused")

        with pytest.raises(BackendConnectionError):
            await redis_cache.set("user:1", b"x")

    @pytest.mark.asyncio
    async def test_redis_error_maps_to_backend_error(self, redis_cache, redis_client):
        """Test that other Redis errors become BackendError with the key in details."""
        redis_client.delete.side_effect = ResponseError("READONLY")

        with pytest.raises(BackendError) as exc_info:
            await redis_cache.delete("user:1")

        assert exc_info.value.details == {"key": "user:1", "command": "DEL"}
        assert isinstance(exc_info.value.__cause__, ResponseError)

    @pytest.mark.asyncio
    async def test_health_check_healthy(self, redis_cache):
        assert await redis_cache.health_check() is True

    @pytest.mark.asyncio
    async def test_health_check_unhealthy(self, redis_cache, redis_client):
        """Test that health_check reports False instead of raising."""
        redis_client.ping.side_effect = ConnectionError("down")

        assert await redis_cache.health_check() is False


@pytest.mark.unit
class TestConnectionManager:
    """Test connection lifecycle."""

    @pytest.mark.asyncio
    async def test_connect_builds_binary_pool(self, mock_settings):
        """Test that the pool is configured from settings with binary responses."""
        client = MagicMock()
        client.ping = AsyncMock(return_value=True)

        with patch.object(redis_backend, "ConnectionPool") as pool_class, \
                patch.object(redis_backend.redis, "Redis", return_value=client):
            manager = ConnectionManager(mock_settings)
            result = await manager.connect()

        assert result is client
        assert manager.is_connected()
        kwargs = pool_class.call_args.kwargs
        assert kwargs["host"] == "localhost"
        assert kwargs["max_connections"] == 10
        assert kwargs["decode_responses"] is False

    @pytest.mark.asyncio
    async def test_connect_failure_raises_backend_connection_error(self, mock_settings):
        """Test that a failed ping surfaces as BackendConnectionError with a suggestion."""
        client = MagicMock()
        client.ping = AsyncMock(side_effect=ConnectionError("refused"))
        pool = MagicMock()
        pool.disconnect = AsyncMock()

        with patch.object(redis_backend, "ConnectionPool", return_value=pool), \
                patch.object(redis_backend.redis, "Redis", return_value=client):
            manager = ConnectionManager(mock_settings)
            with pytest.raises(BackendConnectionError) as exc_info:
                await manager.connect()

        assert exc_info.value.details["host"] == "localhost"
        assert exc_info.value.details["port"] == 6379
        assert "REDIS_HOST" in exc_info.value.details["suggestion"]
        assert not manager.is_connected()

    @pytest.mark.asyncio
    async def test_connect_failure_releases_pool(self, mock_settings):
        """Test that the pool built for a failed connect is disconnected and dropped."""
        client = MagicMock()
        client.ping = AsyncMock(side_effect=TimeoutError("timed out"))
        pool = MagicMock()
        pool.disconnect = AsyncMock()

        with patch.object(redis_backend, "ConnectionPool", return_value=pool), \
                patch.object(redis_backend.redis, "Redis", return_value=client):
            manager = ConnectionManager(mock_settings)
            with pytest.raises(BackendConnectionError):
                await manager.connect()

        pool.disconnect.assert_awaited_once()
        assert manager._pool is None
        assert manager._client is None

    @pytest.mark.asyncio
    async def test_backend_connects_lazily_and_disconnects(self, mock_settings):
        """Test that the first command connects and disconnect releases client and pool."""
        client = MagicMock()
        client.ping = AsyncMock(return_value=True)
        client.get = AsyncMock(return_value=None)
        client.aclose = AsyncMock()
        pool = MagicMock()
        pool.disconnect = AsyncMock()

        with patch.object(redis_backend, "ConnectionPool", return_value=pool), \
                patch.object(redis_backend.redis, "Redis", return_value=client):
            backend = RedisBackend(settings=mock_settings)
            assert await backend.get("user:1") is None
            await backend.disconnect()

        client.ping.assert_awaited_once()
        client.aclose.assert_awaited_once()
        pool.disconnect.assert_awaited_once()
