"""
Metric registry.

Holds every gauge definition and its current label-instance values.

Writers never mutate the published state incrementally: a collection cycle
records ``reset`` / ``set`` / ``add`` operations in a ``MetricBatch`` and
hands the batch to ``MetricRegistry.commit``, which replays it on a copy of
the current values and swaps the copy in under the lock. Readers therefore
always see the state at the end of some commit, never a vector that was
reset but not yet repopulated.
"""
from __future__ import annotations

import threading
from collections.abc import Iterable
from typing import NamedTuple

from wow_exporter.models.metrics import MetricDefinition

LabelValues = tuple[str, ...]

_RESET = "reset"
_SET = "set"
_ADD = "add"


class RegistryError(ValueError):
    """Invalid registration or a write that does not match a registered definition."""


class Sample(NamedTuple):
    name: str
    labelvalues: LabelValues
    value: float


class _Operation(NamedTuple):
    kind: str
    definition: MetricDefinition
    labelvalues: LabelValues
    value: float


class MetricBatch:
    """Operations staged for one atomic commit."""

    def __init__(self, registry: "MetricRegistry"):
        self._registry = registry
        self._operations: list[_Operation] = []

    def __len__(self) -> int:
        return len(self._operations)

    def reset(self, definition: MetricDefinition) -> None:
        # clears every label instance, so no label values to validate
        self._registry.registered(definition)
        if definition.is_vector:
            self._operations.append(_Operation(_RESET, definition, (), 0.0))

    def set(self, definition: MetricDefinition, *labelvalues: object, value: float) -> None:
        labels = self._registry.check(definition, labelvalues)
        self._operations.append(_Operation(_SET, definition, labels, float(value)))

    def add(self, definition: MetricDefinition, *labelvalues: object, value: float) -> None:
        labels = self._registry.check(definition, labelvalues)
        self._operations.append(_Operation(_ADD, definition, labels, float(value)))

    def extend(self, other: "MetricBatch") -> None:
        if other._registry is not self._registry:
            raise RegistryError("cannot merge batches from different registries")
        self._operations.extend(other._operations)

    def operations(self) -> tuple[_Operation, ...]:
        return tuple(self._operations)


class MetricRegistry:
    """Thread-safe store of gauge definitions and their current values."""

    def __init__(self, definitions: Iterable[MetricDefinition] = ()):
        self._lock = threading.Lock()
        self._definitions: dict[str, MetricDefinition] = {}
        self._values: dict[str, dict[LabelValues, float]] = {}
        for definition in definitions:
            self.register(definition)

    # ── Definitions ──────────────────────────────────────────────────────────

    def register(self, definition: MetricDefinition) -> None:
        """Idempotent for an identical definition; conflicting label names are fatal."""
        with self._lock:
            existing = self._definitions.get(definition.name)
            if existing is not None:
                if existing.labelnames != definition.labelnames:
                    raise RegistryError(
                        f"metric {definition.name!r} already registered with labels "
                        f"{existing.labelnames}, got {definition.labelnames}"
                    )
                return
            self._definitions[definition.name] = definition
            # scalars start at zero, vectors start empty
            self._values[definition.name] = {} if definition.is_vector else {(): 0.0}

    def definitions(self) -> tuple[MetricDefinition, ...]:
        with self._lock:
            return tuple(self._definitions.values())

    def registered(self, definition: MetricDefinition) -> MetricDefinition:
        """The registered definition under ``definition.name``."""
        registered = self._definitions.get(definition.name)
        if registered is None:
            raise RegistryError(f"metric {definition.name!r} is not registered")
        return registered

    def check(self, definition: MetricDefinition, labelvalues: tuple = ()) -> LabelValues:
        """Validate a write and return the label values as strings."""
        registered = self.registered(definition)
        if len(labelvalues) != len(registered.labelnames):
            raise RegistryError(
                f"metric {definition.name!r} expects {len(registered.labelnames)} label values "
                f"{registered.labelnames}, got {len(labelvalues)}"
            )
        return tuple(str(v) for v in labelvalues)

    # ── Writes ───────────────────────────────────────────────────────────────

    def batch(self) -> MetricBatch:
        return MetricBatch(self)

    def commit(self, batch: MetricBatch) -> None:
        operations = batch.operations()
        if not operations:
            return
        with self._lock:
            values = dict(self._values)
            copied: set[str] = set()
            for op in operations:
                name = op.definition.name
                if name not in copied:
                    values[name] = dict(values[name])
                    copied.add(name)
                series = values[name]
                if op.kind == _RESET:
                    series.clear()
                elif op.kind == _SET:
                    series[op.labelvalues] = op.value
                else:
                    series[op.labelvalues] = series.get(op.labelvalues, 0.0) + op.value
            self._values = values

    def reset(self, definition: MetricDefinition) -> None:
        batch = self.batch()
        batch.reset(definition)
        self.commit(batch)

    def set(self, definition: MetricDefinition, *labelvalues: object, value: float) -> None:
        batch = self.batch()
        batch.set(definition, *labelvalues, value=value)
        self.commit(batch)

    def add(self, definition: MetricDefinition, *labelvalues: object, value: float) -> None:
        batch = self.batch()
        batch.add(definition, *labelvalues, value=value)
        self.commit(batch)

    # ── Reads ────────────────────────────────────────────────────────────────

    def snapshot(self) -> tuple[Sample, ...]:
        """Every current instance, in registration order then label order."""
        with self._lock:
            values = self._values
            definitions = tuple(self._definitions.values())
        samples: list[Sample] = []
        for definition in definitions:
            series = values[definition.name]
            for labels in sorted(series):
                samples.append(Sample(definition.name, labels, series[labels]))
        return tuple(samples)

    def get(self, definition: MetricDefinition, *labelvalues: object) -> float | None:
        labels = self.check(definition, labelvalues)
        with self._lock:
            return self._values[definition.name].get(labels)
