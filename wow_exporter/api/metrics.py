"""Prometheus exposition registry and the exporter's own instrumentation."""
from __future__ import annotations

from dataclasses import dataclass

from prometheus_client import CollectorRegistry, Counter, Histogram

from wow_exporter.metric_store.exposition import RegistryCollector
from wow_exporter.metric_store.registry import MetricRegistry


@dataclass(frozen=True)
class ExporterInstruments:
    group_duration: Histogram
    group_failures: Counter


def create_instruments(registry: CollectorRegistry) -> ExporterInstruments:
    return ExporterInstruments(
        # ── Histograms ───────────────────────────────────────────────────────
        group_duration=Histogram(
            "wow_exporter_group_duration_seconds",
            "Duration of one metric group collection",
            ["group"],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
            registry=registry,
        ),
        # ── Counters ─────────────────────────────────────────────────────────
        group_failures=Counter(
            "wow_exporter_group_failures_total",
            "Metric group collections that failed and were skipped",
            ["group"],
            registry=registry,
        ),
    )


def build_exposition_registry(
    metric_registry: MetricRegistry,
) -> tuple[CollectorRegistry, ExporterInstruments]:
    """
    A dedicated CollectorRegistry (not the process-wide default) serving
    the game metrics plus the exporter's own instruments.

    Raises ValueError when two collectors export the same metric name.
    """
    registry = CollectorRegistry(auto_describe=True)
    registry.register(RegistryCollector(metric_registry))
    instruments = create_instruments(registry)
    return registry, instruments
