"""Prometheus metrics for the vote economy.

Only operational counters live here: vote outcomes, serializer admission
wait and admission rejections. Balances themselves are never exported as
metrics; the ledger is their only source of truth.

Labels: service, environment on every metric.
"""

import os
import threading

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

METRICS_CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"

_collector_lock = threading.Lock()

# Admission wait buckets (1ms to 10s)
ADMISSION_WAIT_BUCKETS = (0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)

VOTE_OUTCOMES = (
    "committed",
    "insufficient_funds",
    "throttled",
    "too_many_concurrent",
    "storage_failure",
)


class MetricsCollector:
    """Collects and manages vote economy Prometheus metrics.

    Attributes:
        votes_total: Counter of vote attempts by type and terminal outcome.
        vote_admission_wait_seconds: Histogram of time spent waiting for
            the voter's exclusive section.
        vote_admission_rejections_total: Counter of admission rejections
            by reason (timeout, queue_full).
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics collector.

        Args:
            registry: Optional custom registry for testing isolation.
        """
        self._registry = registry or CollectorRegistry()
        self._environment = os.environ.get("ENVIRONMENT", "development")
        self._service_name = os.environ.get("SERVICE_NAME", "tabcoin-ledger")

        self.votes_total = Counter(
            name="tabcoin_votes_total",
            documentation="Total TabCoin vote attempts by terminal outcome",
            labelnames=["service", "environment", "transaction_type", "outcome"],
            registry=self._registry,
        )

        self.vote_admission_wait_seconds = Histogram(
            name="tabcoin_vote_admission_wait_seconds",
            documentation="Seconds spent waiting for the voter's exclusive section",
            labelnames=["service", "environment"],
            buckets=ADMISSION_WAIT_BUCKETS,
            registry=self._registry,
        )

        self.vote_admission_rejections_total = Counter(
            name="tabcoin_vote_admission_rejections_total",
            documentation="Total votes rejected before entering the exclusive section",
            labelnames=["service", "environment", "reason"],
            registry=self._registry,
        )

    def increment_votes(self, transaction_type: str, outcome: str) -> None:
        """Record the terminal outcome of one vote attempt.

        Args:
            transaction_type: "credit" or "debit".
            outcome: One of VOTE_OUTCOMES.
        """
        self.votes_total.labels(
            service=self._service_name,
            environment=self._environment,
            transaction_type=transaction_type,
            outcome=outcome,
        ).inc()

    def observe_admission_wait(self, seconds: float) -> None:
        self.vote_admission_wait_seconds.labels(
            service=self._service_name,
            environment=self._environment,
        ).observe(seconds)

    def increment_admission_rejections(self, reason: str) -> None:
        """Record an admission rejection (reason: timeout or queue_full)."""
        self.vote_admission_rejections_total.labels(
            service=self._service_name,
            environment=self._environment,
            reason=reason,
        ).inc()

    def get_registry(self) -> CollectorRegistry:
        return self._registry


_metrics_collector: MetricsCollector | None = None


def get_metrics_collector() -> MetricsCollector:
    """Get the singleton MetricsCollector instance (thread-safe)."""
    global _metrics_collector
    if _metrics_collector is None:
        with _collector_lock:
            if _metrics_collector is None:
                _metrics_collector = MetricsCollector()
    return _metrics_collector


def generate_metrics() -> bytes:
    """Generate Prometheus metrics in exposition format."""
    return generate_latest(get_metrics_collector().get_registry())


def reset_metrics_collector() -> None:
    """Reset the singleton collector (for testing only)."""
    global _metrics_collector
    with _collector_lock:
        _metrics_collector = None
