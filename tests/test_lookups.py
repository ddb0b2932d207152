"""tests/test_lookups.py"""
from __future__ import annotations

import pytest

from wow_exporter.models.lookups import (
    CLASS_NAMES,
    DIFFICULTY_NAMES,
    RACE_TO_FACTION,
    faction_for_race,
    label_for,
)


class TestLookups:

    def test_known_codes_resolve(self):
        assert label_for(CLASS_NAMES, 6) == "Death Knight"
        assert label_for(DIFFICULTY_NAMES, 3) == "25_Player"

    def test_unknown_codes_get_placeholder(self):
        assert label_for(CLASS_NAMES, 42) == "Unknown_42"
        assert label_for(DIFFICULTY_NAMES, -1) == "Unknown_-1"

    def test_unknown_race_has_no_faction(self):
        assert faction_for_race(1) == "Alliance"
        assert faction_for_race(2) == "Horde"
        assert faction_for_race(99) is None

    def test_only_two_factions(self):
        assert set(RACE_TO_FACTION.values()) == {"Alliance", "Horde"}

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            RACE_TO_FACTION[99] = "Horde"  # type: ignore[index]
