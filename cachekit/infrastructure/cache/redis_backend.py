"""
Redis Cache Backend with Connection Pooling

Architecture:
    RedisBackend (CacheBackend implementation)
        ├── ConnectionManager (Connection lifecycle and pooling)
        └── _redis_errors (Redis exception -> cache exception mapping)

Values are stored as raw envelope bytes (decode_responses=False) and TTLs
are applied with millisecond precision (SET ... PX).

Error Mapping:
    redis TimeoutError    -> CacheTimeoutError
    redis ConnectionError -> BackendConnectionError
    any other RedisError  -> BackendError
"""

from collections.abc import Sequence
from contextlib import asynccontextmanager
from datetime import timedelta

import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool
from redis.exceptions import ConnectionError, RedisError, TimeoutError

from cachekit.core.config.constants import Stage
from cachekit.core.config.settings import get_settings
from cachekit.core.exceptions import (
    BackendConnectionError,
    BackendError,
    CacheTimeoutError,
)
from cachekit.core.logging.logger import get_logger, log_stage

logger = get_logger(__name__)


# =============================================================================
# CONNECTION MANAGEMENT
# =============================================================================


class ConnectionManager:
    """
    Manages Redis connection lifecycle and pooling.

    Pool Configuration (from RedisSettings):
    - Max connections: REDIS_MAX_CONNECTIONS
    - Socket timeout: REDIS_SOCKET_TIMEOUT
    - Health check interval: REDIS_HEALTH_CHECK_INTERVAL
    - Binary responses: envelopes are bytes, never decoded
    """

    def __init__(self, settings):
        self._settings = settings
        self._pool: ConnectionPool | None = None
        self._client: redis.Redis | None = None
        self._is_connected = False

    async def connect(self) -> redis.Redis:
        """
        Establish connection to Redis with connection pooling.

        Returns:
            redis.Redis: Connected Redis client

        Raises:
            BackendConnectionError: If connection fails
        """
        if self._is_connected and self._client:
            return self._client

        redis_settings = self._settings.redis
        try:
            self._pool = ConnectionPool(
                host=redis_settings.REDIS_HOST,
                port=redis_settings.REDIS_PORT,
                db=redis_settings.REDIS_DB,
                password=redis_settings.REDIS_PASSWORD,
                max_connections=redis_settings.REDIS_MAX_CONNECTIONS,
                socket_connect_timeout=redis_settings.REDIS_SOCKET_CONNECT_TIMEOUT,
                socket_timeout=redis_settings.REDIS_SOCKET_TIMEOUT,
                health_check_interval=redis_settings.REDIS_HEALTH_CHECK_INTERVAL,
                decode_responses=False,
            )
            self._client = redis.Redis(connection_pool=self._pool)

            # Verify the connection is actually working
            await self._client.ping()
            self._is_connected = True

            log_stage(
                logger, Stage.BACKEND, "Redis connected successfully",
                host=redis_settings.REDIS_HOST,
                port=redis_settings.REDIS_PORT,
                max_connections=redis_settings.REDIS_MAX_CONNECTIONS,
            )
            return self._client

        except (ConnectionError, TimeoutError) as e:
            logger.error("Failed to connect to Redis", stage=str(Stage.BACKEND), error=str(e))
            if self._pool is not None:
                await self._pool.disconnect()
            self._client = None
            self._pool = None
            raise BackendConnectionError(
                message=f"Failed to connect to Redis: {e}",
                details={"host": redis_settings.REDIS_HOST, "port": redis_settings.REDIS_PORT},
            ).with_suggestion("Check REDIS_HOST and REDIS_PORT and that the server is reachable") from e

    async def disconnect(self) -> None:
        """Close the client and its pool."""
        if self._client:
            await self._client.aclose()

        if self._pool:
            await self._pool.disconnect()

        self._client = None
        self._pool = None
        self._is_connected = False

        log_stage(logger, Stage.BACKEND, "Redis disconnected")

    def is_connected(self) -> bool:
        return self._is_connected


# =============================================================================
# ERROR MAPPING
# =============================================================================


@asynccontextmanager
async def _redis_errors(command: str, key: str | None = None):
    """Translate Redis exceptions raised inside the block into cache exceptions."""
    try:
        yield
    except TimeoutError as e:
        logger.error(f"Redis {command} timed out", stage=str(Stage.BACKEND), key=key, error=str(e))
        raise CacheTimeoutError(
            message=f"Redis {command} timed out: {e}", details={"key": key, "command": command}
        ) from e
    except ConnectionError as e:
        logger.error(f"Redis {command} failed", stage=str(Stage.BACKEND), key=key, error=str(e))
        raise BackendConnectionError(
            message=f"Redis {command} failed: {e}", details={"key": key, "command": command}
        ) from e
    except RedisError as e:
        logger.error(f"Redis {command} failed", stage=str(Stage.BACKEND), key=key, error=str(e))
        raise BackendError(
            message=f"Redis {command} failed: {e}", details={"key": key, "command": command}
        ) from e


# =============================================================================
# BACKEND
# =============================================================================


class RedisBackend:
    """
    Redis implementation of the CacheBackend protocol.

    The backend connects lazily on first use; call ``connect()`` up front to
    fail fast on misconfiguration. A pre-built client can be injected, in
    which case the backend does not own a pool.

    Usage:
        backend = RedisBackend()
        await backend.connect()
        await backend.set("user:42", envelope, ttl=timedelta(minutes=5))
        await backend.disconnect()
    """

    def __init__(self, settings=None, client: redis.Redis | None = None):
        self._settings = settings or get_settings()
        self._connection = ConnectionManager(self._settings)
        self._client = client

    async def connect(self) -> None:
        if self._client is None:
            self._client = await self._connection.connect()

    async def disconnect(self) -> None:
        if self._connection.is_connected():
            await self._connection.disconnect()
        self._client = None

    async def _redis(self) -> redis.Redis:
        if self._client is None:
            await self.connect()
        return self._client

    # -------------------------------------------------------------------------
    # Single-key operations
    # -------------------------------------------------------------------------

    async def get(self, key: str) -> bytes | None:
        client = await self._redis()
        async with _redis_errors("GET", key):
            return await client.get(key)

    async def set(self, key: str, value: bytes, ttl: timedelta | None = None) -> None:
        """
        Store a value, with an optional TTL in milliseconds (SET PX).

        Args:
            key: Cache key
            value: Envelope bytes
            ttl: Expiry duration, None for no expiry
        """
        client = await self._redis()
        async with _redis_errors("SET", key):
            if ttl is not None:
                await client.set(key, value, px=max(1, int(ttl.total_seconds() * 1000)))
            else:
                await client.set(key, value)

    async def delete(self, key: str) -> None:
        client = await self._redis()
        async with _redis_errors("DEL", key):
            await client.delete(key)

    async def exists(self, key: str) -> bool:
        client = await self._redis()
        async with _redis_errors("EXISTS", key):
            return bool(await client.exists(key))

    # -------------------------------------------------------------------------
    # Batch operations
    # -------------------------------------------------------------------------

    async def mget(self, keys: Sequence[str]) -> list[bytes | None]:
        """Get many values in one round-trip; results follow the input order."""
        if not keys:
            return []
        client = await self._redis()
        async with _redis_errors("MGET"):
            return list(await client.mget(list(keys)))

    async def mdelete(self, keys: Sequence[str]) -> None:
        """
        Delete many keys in one pipeline, best effort.

        Per-key failures are logged and swallowed, as are a failed lazy
        connect and a failure of the pipeline as a whole.
        """
        if not keys:
            return
        try:
            client = await self._redis()
            pipe = client.pipeline(transaction=False)
            for key in keys:
                pipe.delete(key)
            results = await pipe.execute(raise_on_error=False)
        except (RedisError, BackendError) as e:
            log_stage(
                logger, Stage.BACKEND, "Redis batch delete failed", level="warning",
                keys=len(keys), error=str(e),
            )
            return

        for key, result in zip(keys, results):
            if isinstance(result, Exception):
                log_stage(
                    logger, Stage.BACKEND, "Redis delete failed in batch", level="warning",
                    key=key, error=str(result),
                )

    # -------------------------------------------------------------------------
    # Maintenance
    # -------------------------------------------------------------------------

    async def health_check(self) -> bool:
        """Ping Redis. Never raises."""
        try:
            client = await self._redis()
            return bool(await client.ping())
        except (RedisError, BackendError) as e:
            log_stage(logger, Stage.BACKEND, "Redis health check failed", level="warning", error=str(e))
            return False

    async def clear_all(self) -> None:
        """Flush the configured Redis database. Destructive, logged at warning."""
        client = await self._redis()
        async with _redis_errors("FLUSHDB"):
            await client.flushdb()
        log_stage(
            logger, Stage.BACKEND, "Redis database flushed", level="warning",
            backend="redis", db=self._settings.redis.REDIS_DB,
        )
