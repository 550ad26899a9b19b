#!/usr/bin/env python3
"""
Centralized Configuration Module using Pydantic Settings

This module provides type-safe, environment-based configuration for the
cache-aside layer. Backend selection, TTL policy, metrics sink and logging
are all resolved from here so that wiring code never reads os.environ.

Architectural Decision: Pydantic Settings for type safety and validation
- Environment variable loading with .env support
- Type validation at startup (fail fast on misconfiguration)
- Easy testing with override mechanisms (reload_settings)

Author: System Architect
Date: 2026-10-19
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cachekit.core.config.constants import RETRY_BASE_DELAY


class RedisSettings(BaseSettings):
    """
    Redis configuration for the Redis cache backend.

    Architectural Decision: Connection pooling for performance
    - Max connections: 50 (the pool is owned by the backend, not the engine)
    - Health checks: Every 30s
    """

    REDIS_HOST: str = Field(default="localhost", description="Redis server host")
    REDIS_PORT: int = Field(default=6379, description="Redis server port")
    REDIS_DB: int = Field(default=0, description="Redis database number")
    REDIS_PASSWORD: str | None = Field(default=None, description="Redis password (if required)")
    REDIS_MAX_CONNECTIONS: int = Field(default=50, description="Maximum total connections")
    REDIS_SOCKET_TIMEOUT: int = Field(default=5, description="Socket timeout in seconds")
    REDIS_SOCKET_CONNECT_TIMEOUT: int = Field(default=5, description="Connection timeout in seconds")
    REDIS_HEALTH_CHECK_INTERVAL: int = Field(default=30, description="Health check interval in seconds")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class CacheSettings(BaseSettings):
    """
    Cache orchestration configuration.

    TTL precedence (highest first):
    1. Per-operation override (CacheOperationBuilder.with_ttl)
    2. CACHE_TTL_OVERRIDES entry for the entity prefix
    3. CACHE_DEFAULT_TTL (None = no expiry)
    """

    CACHE_BACKEND: Literal["memory", "redis"] = Field(default="memory", description="Cache backend")
    CACHE_DEFAULT_TTL: int | None = Field(default=None, description="Default TTL in seconds (unset = no expiry)")
    CACHE_TTL_OVERRIDES: dict[str, int] = Field(
        default_factory=dict,
        description="Per-prefix TTL in seconds, JSON encoded in the environment",
    )
    CACHE_METRICS: Literal["none", "logging", "prometheus"] = Field(default="none", description="Metrics sink")
    CACHE_RETRY_BASE_DELAY: float = Field(default=RETRY_BASE_DELAY, description="Retry backoff base delay (seconds)")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class LoggingSettings(BaseSettings):
    """
    Logging configuration for structured logging.

    Architectural Decision: structlog for production-grade logging
    """

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class Settings(BaseSettings):
    """
    Main settings class that aggregates all configuration sections.

    Usage:
        from cachekit.core.config.settings import get_settings

        settings = get_settings()
        backend = settings.cache.CACHE_BACKEND
        redis_host = settings.redis.REDIS_HOST
    """

    # Cache settings
    CACHE_BACKEND: Literal["memory", "redis"] = Field(default="memory", description="Cache backend")
    CACHE_DEFAULT_TTL: int | None = Field(default=None, description="Default TTL in seconds (unset = no expiry)")
    CACHE_TTL_OVERRIDES: dict[str, int] = Field(
        default_factory=dict,
        description="Per-prefix TTL in seconds, JSON encoded in the environment",
    )
    CACHE_METRICS: Literal["none", "logging", "prometheus"] = Field(default="none", description="Metrics sink")
    CACHE_RETRY_BASE_DELAY: float = Field(default=RETRY_BASE_DELAY, description="Retry backoff base delay (seconds)")

    # Redis settings
    REDIS_HOST: str = Field(default="localhost", description="Redis server host")
    REDIS_PORT: int = Field(default=6379, description="Redis server port")
    REDIS_DB: int = Field(default=0, description="Redis database number")
    REDIS_PASSWORD: str | None = Field(default=None, description="Redis password (if required)")
    REDIS_MAX_CONNECTIONS: int = Field(default=50, description="Maximum total connections")
    REDIS_SOCKET_TIMEOUT: int = Field(default=5, description="Socket timeout in seconds")
    REDIS_SOCKET_CONNECT_TIMEOUT: int = Field(default=5, description="Connection timeout in seconds")
    REDIS_HEALTH_CHECK_INTERVAL: int = Field(default=30, description="Health check interval in seconds")

    # Logging settings
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    @field_validator("CACHE_DEFAULT_TTL")
    @classmethod
    def validate_default_ttl(cls, v):
        """A TTL of zero or less would expire entries on write."""
        if v is not None and v <= 0:
            raise ValueError("CACHE_DEFAULT_TTL must be a positive number of seconds")
        return v

    @field_validator("CACHE_RETRY_BASE_DELAY")
    @classmethod
    def validate_retry_base_delay(cls, v):
        """Backoff delays scale from this value; negative sleeps are invalid."""
        if v < 0:
            raise ValueError("CACHE_RETRY_BASE_DELAY must not be negative")
        return v

    @field_validator("CACHE_TTL_OVERRIDES")
    @classmethod
    def validate_ttl_overrides(cls, v):
        """Validate per-prefix TTL overrides."""
        for prefix, seconds in v.items():
            if not prefix or ":" in prefix:
                raise ValueError(f"Invalid cache prefix in CACHE_TTL_OVERRIDES: {prefix!r}")
            if seconds <= 0:
                raise ValueError(f"TTL for prefix {prefix!r} must be positive, got {seconds}")
        return v

    # Nested configuration views
    @property
    def cache(self) -> 'CacheSettings':
        """Get cache settings."""
        return CacheSettings(
            CACHE_BACKEND=self.CACHE_BACKEND,
            CACHE_DEFAULT_TTL=self.CACHE_DEFAULT_TTL,
            CACHE_TTL_OVERRIDES=self.CACHE_TTL_OVERRIDES,
            CACHE_METRICS=self.CACHE_METRICS,
            CACHE_RETRY_BASE_DELAY=self.CACHE_RETRY_BASE_DELAY,
        )

    @property
    def redis(self) -> 'RedisSettings':
        """Get Redis settings."""
        return RedisSettings(
            REDIS_HOST=self.REDIS_HOST,
            REDIS_PORT=self.REDIS_PORT,
            REDIS_DB=self.REDIS_DB,
            REDIS_PASSWORD=self.REDIS_PASSWORD,
            REDIS_MAX_CONNECTIONS=self.REDIS_MAX_CONNECTIONS,
            REDIS_SOCKET_TIMEOUT=self.REDIS_SOCKET_TIMEOUT,
            REDIS_SOCKET_CONNECT_TIMEOUT=self.REDIS_SOCKET_CONNECT_TIMEOUT,
            REDIS_HEALTH_CHECK_INTERVAL=self.REDIS_HEALTH_CHECK_INTERVAL,
        )

    @property
    def logging(self) -> 'LoggingSettings':
        """Get logging settings."""
        return LoggingSettings(
            LOG_LEVEL=self.LOG_LEVEL,
            LOG_FORMAT=self.LOG_FORMAT,
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"  # Ignore extra environment variables
    )


# Global settings instance (singleton pattern)
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance (singleton).

    Returns:
        Settings: Global settings instance
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reload_settings() -> Settings:
    """
    Reload settings (useful for testing).

    Returns:
        Settings: New settings instance
    """
    global _settings
    _settings = Settings()
    return _settings
