#!/usr/bin/env python3
"""
Cache Metrics Sinks

Implementations of the CacheMetrics protocol:
- LoggingMetrics: one structured log event per observation
- PrometheusMetrics: prometheus-client counters and a latency histogram

Metrics are labeled by cache prefix (the part of the key before the first
':') so that label cardinality stays bounded by the number of entity types.

Architectural Decision: prometheus-client for industry-standard metrics
- Compatible with Grafana dashboards
- Histogram buckets for latency percentiles
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    Counter,
    Histogram,
    generate_latest,
)

from cachekit.core.config.constants import CACHE_KEY_SEPARATOR, MetricsType
from cachekit.core.config.settings import Settings, get_settings
from cachekit.core.exceptions import ConfigurationError
from cachekit.core.interfaces.metrics import CacheMetrics, NoOpMetrics
from cachekit.core.logging.logger import get_logger

logger = get_logger(__name__)


# ============================================================================
# Metric Definitions
# ============================================================================

CACHE_HITS = Counter(
    'cachekit_hits_total',
    'Operations that resolved an entity',
    ['prefix']
)

CACHE_MISSES = Counter(
    'cachekit_misses_total',
    'Operations that found the entity nowhere',
    ['prefix']
)

CACHE_ERRORS = Counter(
    'cachekit_errors_total',
    'Operations that failed',
    ['prefix']
)

OPERATION_DURATION = Histogram(
    'cachekit_operation_duration_seconds',
    'Cache operation duration in seconds',
    ['prefix', 'outcome'],  # hit, miss
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0)
)


def key_prefix(key: str) -> str:
    """Return the namespace part of a cache key."""
    return key.split(CACHE_KEY_SEPARATOR, 1)[0]


# ============================================================================
# Sinks
# ============================================================================


class LoggingMetrics:
    """Metrics sink that emits structured log events."""

    def __init__(self, level: str = "debug"):
        self._log = getattr(logger, level.lower())

    def record_hit(self, key: str, duration: float) -> None:
        self._log("Cache metrics: hit", metric="hit", cache_key=key, duration_ms=round(duration * 1000, 3))

    def record_miss(self, key: str, duration: float) -> None:
        self._log("Cache metrics: miss", metric="miss", cache_key=key, duration_ms=round(duration * 1000, 3))

    def record_error(self, key: str, message: str) -> None:
        self._log("Cache metrics: error", metric="error", cache_key=key, error=message)


class PrometheusMetrics:
    """
    Metrics sink backed by prometheus-client.

    Metrics are registered once at module import on the default registry,
    so any number of sinks can be created without duplicate registration.

    Usage:
        metrics = PrometheusMetrics()
        expander = CacheExpander(backend, metrics=metrics)
        ...
        body = metrics.get_prometheus_metrics()
    """

    def record_hit(self, key: str, duration: float) -> None:
        prefix = key_prefix(key)
        CACHE_HITS.labels(prefix=prefix).inc()
        OPERATION_DURATION.labels(prefix=prefix, outcome="hit").observe(duration)

    def record_miss(self, key: str, duration: float) -> None:
        prefix = key_prefix(key)
        CACHE_MISSES.labels(prefix=prefix).inc()
        OPERATION_DURATION.labels(prefix=prefix, outcome="miss").observe(duration)

    def record_error(self, key: str, message: str) -> None:
        CACHE_ERRORS.labels(prefix=key_prefix(key)).inc()

    def get_prometheus_metrics(self) -> bytes:
        """Get metrics in Prometheus exposition format."""
        return generate_latest(REGISTRY)

    def get_content_type(self) -> str:
        """Get the Prometheus content type for an exposition endpoint."""
        return CONTENT_TYPE_LATEST


def create_metrics(settings: Settings | None = None) -> CacheMetrics:
    """
    Create the metrics sink selected by CACHE_METRICS.

    Raises:
        ConfigurationError: If the sink type is not supported
    """
    settings = settings or get_settings()
    metrics_type = settings.cache.CACHE_METRICS

    if metrics_type == MetricsType.PROMETHEUS.value:
        return PrometheusMetrics()
    if metrics_type == MetricsType.LOGGING.value:
        return LoggingMetrics()
    if metrics_type == MetricsType.NONE.value:
        return NoOpMetrics()

    raise ConfigurationError(
        f"Unknown metrics sink: {metrics_type}",
        details={"available": [m.value for m in MetricsType]},
    )
