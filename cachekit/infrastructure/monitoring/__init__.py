"""
Monitoring

Metrics sinks for the strategy engine (logging, Prometheus).
"""

from cachekit.infrastructure.monitoring.metrics_collector import (
    LoggingMetrics,
    PrometheusMetrics,
    create_metrics,
)

__all__ = ["LoggingMetrics", "PrometheusMetrics", "create_metrics"]
