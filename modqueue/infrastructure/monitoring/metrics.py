"""Prometheus metrics for the moderation queue.

Operational counters for moderation actions, bulk runs and audit writes,
plus a gauge mirroring the degraded-persistence banner.

Labels: service, environment on every metric.
"""

import os
import threading

from prometheus_client import CollectorRegistry, Counter, Gauge, generate_latest

# Content type for Prometheus metrics endpoint
METRICS_CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"

# Thread lock for singleton initialization
_collector_lock = threading.Lock()


class ModerationMetricsCollector:
    """Collects and manages moderation Prometheus metrics.

    Attributes:
        moderation_actions_total: Dispatched actions by kind/action/outcome.
        moderation_bulk_runs_total: Bulk runs by mode.
        audit_writes_total: Audit writes by tier and outcome.
        audit_persistence_degraded: 1 while the session is degraded.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics collector.

        Args:
            registry: Optional custom registry for testing isolation.
        """
        self._registry = registry or CollectorRegistry()
        self._environment = os.environ.get("ENVIRONMENT", "development")
        self._service_name = os.environ.get("SERVICE_NAME", "modqueue-api")

        self.moderation_actions_total = Counter(
            name="moderation_actions_total",
            documentation="Moderation actions dispatched",
            labelnames=["service", "environment", "kind", "action", "outcome"],
            registry=self._registry,
        )

        self.moderation_bulk_runs_total = Counter(
            name="moderation_bulk_runs_total",
            documentation="Bulk moderation runs",
            labelnames=["service", "environment", "mode"],
            registry=self._registry,
        )

        self.audit_writes_total = Counter(
            name="audit_writes_total",
            documentation="Decision log writes by storage tier",
            labelnames=["service", "environment", "tier", "outcome"],
            registry=self._registry,
        )

        self.audit_persistence_degraded = Gauge(
            name="audit_persistence_degraded",
            documentation="1 while audit writes go to the local fallback cache",
            labelnames=["service", "environment"],
            registry=self._registry,
        )

    def _labels(self) -> dict[str, str]:
        return {"service": self._service_name, "environment": self._environment}

    def record_action(self, kind: str, action: str, outcome: str) -> None:
        """Count one dispatched action.

        Args:
            kind: Queue item kind.
            action: Action name.
            outcome: "applied", "failed", "busy" or "ineligible".
        """
        self.moderation_actions_total.labels(
            **self._labels(), kind=kind, action=action, outcome=outcome
        ).inc()

    def record_bulk_run(self, mode: str) -> None:
        self.moderation_bulk_runs_total.labels(**self._labels(), mode=mode).inc()

    def record_audit_write(self, tier: str, outcome: str) -> None:
        self.audit_writes_total.labels(
            **self._labels(), tier=tier, outcome=outcome
        ).inc()

    def set_persistence_degraded(self, degraded: bool) -> None:
        self.audit_persistence_degraded.labels(**self._labels()).set(
            1 if degraded else 0
        )

    def generate_latest(self) -> bytes:
        """Render all metrics in Prometheus exposition format."""
        return generate_latest(self._registry)


_metrics_collector: ModerationMetricsCollector | None = None


def get_metrics_collector() -> ModerationMetricsCollector:
    """Get the process-wide metrics collector, creating it on first use."""
    global _metrics_collector
    if _metrics_collector is None:
        with _collector_lock:
            if _metrics_collector is None:
                _metrics_collector = ModerationMetricsCollector()
    return _metrics_collector


def reset_metrics_collector() -> None:
    """Drop the singleton (for testing)."""
    global _metrics_collector
    with _collector_lock:
        _metrics_collector = None
