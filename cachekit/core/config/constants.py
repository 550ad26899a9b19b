"""
System Constants and Enumerations

This module defines system-wide constants and enumerations used across
the cache-aside orchestration layer.

Architectural Decision: Centralized constants for maintainability
- Single source of truth for magic numbers (envelope header, backoff base)
- Type-safe enums for stage identifiers used in structured logging
- Easy to update and track changes (a schema bump lives in ONE place)

Author: System Architect
Date: 2026-10-19
"""

from enum import Enum

# ============================================================================
# Stage Identifiers (for structured logging)
# ============================================================================


class Stage(str, Enum):
    """
    Cache operation stages for structured logging.

    Format: {SEQUENCE}_{DESCRIPTIVE_NAME}
    - SEQUENCE: Numeric order (1.0, 2.0, 3.1) or alphabetic prefix (R, B)
    - DESCRIPTIVE_NAME: Clear, uppercase description with underscores

    Examples:
        log_stage(logger, Stage.CACHE_READ, "Cache hit", cache_key="user:42")
        # -> {"event": "Cache hit", "stage": "3.1_CACHE_READ", ...}
    """

    # Main operation lifecycle (sequential)
    FEEDER_VALIDATION = "1.0_FEEDER_VALIDATION"
    KEY_CONSTRUCTION = "2.0_KEY_CONSTRUCTION"
    STRATEGY_DISPATCH = "3.0_STRATEGY_DISPATCH"
    CACHE_READ = "3.1_CACHE_READ"
    CACHE_INVALIDATION = "3.2_CACHE_INVALIDATION"
    REPOSITORY_FETCH = "3.3_REPOSITORY_FETCH"
    WRITE_THROUGH = "3.4_WRITE_THROUGH"
    RESOLUTION = "4.0_RESOLUTION"

    # Cross-cutting concerns (alphabetic prefixes)
    RETRY = "R_RETRY_LOGIC"
    BACKEND = "B_BACKEND_OPERATIONS"
    SERVICE = "S_SERVICE_LIFECYCLE"

    def __str__(self) -> str:
        return self.value


class BackendType(str, Enum):
    """Storage technologies a backend can be built for."""

    MEMORY = "memory"
    REDIS = "redis"


class MetricsType(str, Enum):
    """Metrics sinks selectable from configuration."""

    NONE = "none"
    LOGGING = "logging"
    PROMETHEUS = "prometheus"


# ============================================================================
# Envelope Format
# ============================================================================

# [MAGIC: 4 bytes][VERSION: 4 bytes, big-endian unsigned][MSGPACK PAYLOAD]
ENVELOPE_MAGIC = b"CKIT"
CURRENT_SCHEMA_VERSION = 1
ENVELOPE_HEADER_SIZE = 8

# ============================================================================
# Cache Keys
# ============================================================================

CACHE_KEY_SEPARATOR = ":"

# ============================================================================
# Retry Settings
# ============================================================================

# Delay before retry k (counted from 1) is RETRY_BASE_DELAY * 2 ** (k - 1)
RETRY_BASE_DELAY = 0.1  # 100ms
RETRY_BACKOFF_BASE = 2
