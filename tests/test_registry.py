"""
tests/test_registry.py

Registry contract: registration, reset-before-repopulate, set vs add,
atomic batch commits and consistent snapshots under concurrent writers.
"""
from __future__ import annotations

import threading

import pytest

from wow_exporter.metric_store.registry import MetricRegistry, RegistryError
from wow_exporter.models import metrics as metrics_module
from wow_exporter.models.metrics import (
    ALL_DEFINITIONS,
    MAIL_TOTAL,
    MetricDefinition,
    PLAYERS_BY_LEVEL,
    PLAYERS_ONLINE,
)


class TestRegistration:

    def test_all_definitions_have_wow_prefix_and_unique_names(self):
        names = [d.name for d in ALL_DEFINITIONS]
        assert len(names) == len(set(names))
        assert all(name.startswith("wow_") for name in names)

    def test_every_module_definition_is_listed(self):
        declared = {v.name for v in vars(metrics_module).values() if isinstance(v, MetricDefinition)}
        assert declared == {d.name for d in ALL_DEFINITIONS}

    def test_register_is_idempotent(self):
        registry = MetricRegistry()
        registry.register(PLAYERS_ONLINE)
        registry.register(PLAYERS_ONLINE)
        assert registry.definitions() == (PLAYERS_ONLINE,)

    def test_conflicting_labels_are_rejected(self):
        registry = MetricRegistry([PLAYERS_ONLINE])
        clash = MetricDefinition("wow_players_online", "other", ("faction", "realm"))
        with pytest.raises(RegistryError):
            registry.register(clash)

    def test_scalars_start_at_zero_and_vectors_empty(self, registry):
        assert registry.get(MAIL_TOTAL) == 0.0
        assert [s for s in registry.snapshot() if s.name == "wow_players_online"] == []


class TestWrites:

    def test_set_replaces_and_add_accumulates(self, registry):
        registry.set(PLAYERS_ONLINE, "Alliance", value=3)
        registry.set(PLAYERS_ONLINE, "Alliance", value=5)
        registry.add(PLAYERS_ONLINE, "Horde", value=2)
        registry.add(PLAYERS_ONLINE, "Horde", value=4)

        assert registry.get(PLAYERS_ONLINE, "Alliance") == 5.0
        assert registry.get(PLAYERS_ONLINE, "Horde") == 6.0

    def test_reset_clears_vector_instances(self, registry):
        registry.set(PLAYERS_ONLINE, "Alliance", value=3)
        registry.reset(PLAYERS_ONLINE)
        assert registry.get(PLAYERS_ONLINE, "Alliance") is None

    def test_batch_reset_of_labelled_metric(self, registry):
        registry.set(PLAYERS_BY_LEVEL, "80", "Horde", value=2)
        batch = registry.batch()
        batch.reset(PLAYERS_BY_LEVEL)
        assert len(batch) == 1
        registry.commit(batch)
        assert registry.get(PLAYERS_BY_LEVEL, "80", "Horde") is None

    def test_reset_of_unregistered_metric_is_rejected(self):
        registry = MetricRegistry([MAIL_TOTAL])
        with pytest.raises(RegistryError):
            registry.batch().reset(PLAYERS_ONLINE)

    def test_reset_is_noop_for_scalars(self, registry):
        registry.set(MAIL_TOTAL, value=12)
        registry.reset(MAIL_TOTAL)
        assert registry.get(MAIL_TOTAL) == 12.0

    def test_add_after_reset_is_seeded_from_zero(self, registry):
        registry.set(PLAYERS_ONLINE, "Alliance", value=100)
        batch = registry.batch()
        batch.reset(PLAYERS_ONLINE)
        batch.add(PLAYERS_ONLINE, "Alliance", value=2)
        batch.add(PLAYERS_ONLINE, "Alliance", value=1)
        registry.commit(batch)
        assert registry.get(PLAYERS_ONLINE, "Alliance") == 3.0

    def test_label_values_are_stringified(self, registry):
        registry.set(PLAYERS_BY_LEVEL, 80, "Horde", value=7)
        assert registry.get(PLAYERS_BY_LEVEL, "80", "Horde") == 7.0

    def test_wrong_label_arity_is_rejected(self, registry):
        batch = registry.batch()
        with pytest.raises(RegistryError):
            batch.set(PLAYERS_BY_LEVEL, "80", value=1)
        with pytest.raises(RegistryError):
            batch.set(MAIL_TOTAL, "extra", value=1)

    def test_unregistered_definition_is_rejected(self):
        registry = MetricRegistry([MAIL_TOTAL])
        with pytest.raises(RegistryError):
            registry.batch().set(PLAYERS_ONLINE, "Alliance", value=1)


class TestBatches:

    def test_batch_is_invisible_until_commit(self, registry):
        registry.set(PLAYERS_ONLINE, "Alliance", value=4)
        batch = registry.batch()
        batch.reset(PLAYERS_ONLINE)
        batch.set(PLAYERS_ONLINE, "Horde", value=1)

        assert registry.get(PLAYERS_ONLINE, "Alliance") == 4.0
        assert registry.get(PLAYERS_ONLINE, "Horde") is None

        registry.commit(batch)
        assert registry.get(PLAYERS_ONLINE, "Alliance") is None
        assert registry.get(PLAYERS_ONLINE, "Horde") == 1.0

    def test_extend_merges_operations_in_order(self, registry):
        first = registry.batch()
        first.set(MAIL_TOTAL, value=1)
        second = registry.batch()
        second.set(MAIL_TOTAL, value=2)
        first.extend(second)
        registry.commit(first)
        assert registry.get(MAIL_TOTAL) == 2.0

    def test_extend_refuses_foreign_batches(self, registry):
        other = MetricRegistry(ALL_DEFINITIONS)
        with pytest.raises(RegistryError):
            registry.batch().extend(other.batch())

    def test_snapshot_order_is_stable(self, registry):
        registry.set(PLAYERS_ONLINE, "Horde", value=1)
        registry.set(PLAYERS_ONLINE, "Alliance", value=2)
        online = [s for s in registry.snapshot() if s.name == "wow_players_online"]
        assert [s.labelvalues for s in online] == [("Alliance",), ("Horde",)]
        assert registry.snapshot() == registry.snapshot()


class TestConcurrency:

    def test_readers_never_see_torn_state(self, registry):
        """Every writer commits a full {Alliance, Horde} pair; readers must see pairs only."""
        errors: list[str] = []
        stop = threading.Event()

        def writer(seed: int) -> None:
            for i in range(300):
                batch = registry.batch()
                batch.reset(PLAYERS_ONLINE)
                batch.set(PLAYERS_ONLINE, "Alliance", value=seed * 1000 + i)
                batch.set(PLAYERS_ONLINE, "Horde", value=seed * 1000 + i)
                registry.commit(batch)

        def reader() -> None:
            while not stop.is_set():
                online = [s for s in registry.snapshot() if s.name == "wow_players_online"]
                labels = [s.labelvalues for s in online]
                if len(labels) != len(set(labels)):
                    errors.append(f"duplicate labels: {labels}")
                if online and (len(online) != 2 or online[0].value != online[1].value):
                    errors.append(f"torn snapshot: {online}")

        readers = [threading.Thread(target=reader) for _ in range(3)]
        writers = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        for t in readers + writers:
            t.start()
        for t in writers:
            t.join()
        stop.set()
        for t in readers:
            t.join()

        assert errors == []
