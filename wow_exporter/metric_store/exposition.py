"""Bridges MetricRegistry snapshots to prometheus_client's text exposition."""
from __future__ import annotations

from collections.abc import Iterator

from prometheus_client.core import GaugeMetricFamily
from prometheus_client.registry import Collector

from wow_exporter.metric_store.registry import MetricRegistry


class RegistryCollector(Collector):
    """Custom collector that renders one consistent registry snapshot per scrape."""

    def __init__(self, registry: MetricRegistry):
        self._registry = registry

    def describe(self) -> Iterator[GaugeMetricFamily]:
        for definition in self._registry.definitions():
            yield GaugeMetricFamily(
                definition.name,
                definition.documentation,
                labels=list(definition.labelnames),
            )

    def collect(self) -> Iterator[GaugeMetricFamily]:
        samples = self._registry.snapshot()
        by_name: dict[str, list] = {}
        for sample in samples:
            by_name.setdefault(sample.name, []).append(sample)

        for definition in self._registry.definitions():
            if definition.is_vector:
                family = GaugeMetricFamily(
                    definition.name,
                    definition.documentation,
                    labels=list(definition.labelnames),
                )
                for sample in by_name.get(definition.name, ()):
                    family.add_metric(list(sample.labelvalues), sample.value)
            else:
                family = GaugeMetricFamily(definition.name, definition.documentation)
                for sample in by_name.get(definition.name, ()):
                    family.add_metric([], sample.value)
            yield family
