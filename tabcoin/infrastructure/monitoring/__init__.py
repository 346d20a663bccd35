"""Prometheus metrics collection for the vote economy."""

from tabcoin.infrastructure.monitoring.metrics import (
    METRICS_CONTENT_TYPE,
    VOTE_OUTCOMES,
    MetricsCollector,
    generate_metrics,
    get_metrics_collector,
    reset_metrics_collector,
)

__all__ = [
    "METRICS_CONTENT_TYPE",
    "VOTE_OUTCOMES",
    "MetricsCollector",
    "generate_metrics",
    "get_metrics_collector",
    "reset_metrics_collector",
]
