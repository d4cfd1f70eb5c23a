"""Prometheus metrics for tracker builds and refresh cycles.

Collectors are registered on an explicit ``CollectorRegistry`` so several
bundles (one per processor, one per test) can coexist without tripping the
duplicate-timeseries check of the global registry.
"""
from __future__ import annotations

import logging

from prometheus_client import CollectorRegistry, Counter, Gauge

logger = logging.getLogger(__name__)


class TrackerMetrics:
    """Counters/gauges describing tracker activity."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()
        self.builds_total = Counter(
            'tasktracker_builds_total',
            'Tracker build attempts by outcome',
            ['outcome'],
            registry=self.registry,
        )
        self.refresh_total = Counter(
            'tasktracker_refresh_total',
            'Document change notifications handled by outcome',
            ['outcome'],
            registry=self.registry,
        )
        self.progress_percent = Gauge(
            'tasktracker_progress_percent',
            'Last computed completion percentage per tracked document',
            ['document'],
            registry=self.registry,
        )
        self.errors_total = Counter(
            'tasktracker_errors_total',
            'Errors routed through the error registry',
            ['code'],
            registry=self.registry,
        )

    def observe_build(self, outcome: str) -> None:
        self.builds_total.labels(outcome=outcome).inc()

    def observe_refresh(self, outcome: str) -> None:
        self.refresh_total.labels(outcome=outcome).inc()

    def set_progress(self, document: str, percentage: int) -> None:
        self.progress_percent.labels(document=document).set(percentage)

    def sample(self, name: str, labels: dict[str, str] | None = None) -> float | None:
        """Return the current value of a sample (tests and diagnostics)."""
        return self.registry.get_sample_value(name, labels or {})


__all__ = ["TrackerMetrics"]
