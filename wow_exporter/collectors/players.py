"""Player population metrics (characters database)."""
from __future__ import annotations

from sqlalchemy import text

from wow_exporter.collectors.base import CollectionContext, MetricGroup, real_character_filter
from wow_exporter.config import CHARACTERS
from wow_exporter.models.lookups import CLASS_NAMES, faction_for_race, label_for
from wow_exporter.models.metrics import (
    MAX_LEVEL_CHAR_COUNT,
    ONLINE_PLAYERS_BY_LEVEL,
    PLAYERS_BY_CLASS,
    PLAYERS_BY_LEVEL,
    PLAYERS_ONLINE,
    PLAYERS_TOTAL,
)

# AzerothCore (WotLK) level cap
MAX_LEVEL = 80

ONLINE_BY_RACE = text(f"""
    SELECT race, COUNT(*) AS count
    FROM characters
    WHERE online = 1
      AND {real_character_filter()}
    GROUP BY race
""")

TOTAL_BY_RACE = text(f"""
    SELECT race, COUNT(*) AS count
    FROM characters
    WHERE {real_character_filter()}
    GROUP BY race
""")

# characters that never logged in are not counted per level
BY_LEVEL_AND_RACE = text(f"""
    SELECT level, race, COUNT(*) AS count
    FROM characters
    WHERE logout_time > 0
      AND {real_character_filter()}
    GROUP BY level, race
""")

BY_CLASS_AND_RACE = text(f"""
    SELECT class, race, COUNT(*) AS count
    FROM characters
    WHERE {real_character_filter()}
    GROUP BY class, race
""")

ONLINE_ROSTER = text("""
    SELECT c.name, c.level, c.account
    FROM characters c
    WHERE c.online = 1
      AND (c.deleteDate IS NULL OR c.deleteDate = 0)
    ORDER BY c.level, c.name
""")

MAX_LEVEL_BY_RACE = text(f"""
    SELECT race, COUNT(*) AS count
    FROM characters
    WHERE level = :max_level
      AND {real_character_filter()}
    GROUP BY race
""")


class PlayerDemographicsGroup(MetricGroup):
    name = "player"
    metrics = (
        PLAYERS_ONLINE,
        PLAYERS_TOTAL,
        PLAYERS_BY_LEVEL,
        PLAYERS_BY_CLASS,
        ONLINE_PLAYERS_BY_LEVEL,
    )

    async def collect(self, ctx: CollectionContext) -> None:
        # Several races share a faction: accumulate.
        for race, count in await ctx.source.fetch_all(CHARACTERS, ONLINE_BY_RACE):
            faction = faction_for_race(race)
            if faction is not None:
                ctx.batch.add(PLAYERS_ONLINE, faction, value=count)

        for race, count in await ctx.source.fetch_all(CHARACTERS, TOTAL_BY_RACE):
            faction = faction_for_race(race)
            if faction is not None:
                ctx.batch.add(PLAYERS_TOTAL, faction, value=count)

        for level, race, count in await ctx.source.fetch_all(CHARACTERS, BY_LEVEL_AND_RACE):
            faction = faction_for_race(race)
            if faction is not None:
                ctx.batch.add(PLAYERS_BY_LEVEL, level, faction, value=count)

        for class_id, race, count in await ctx.source.fetch_all(CHARACTERS, BY_CLASS_AND_RACE):
            faction = faction_for_race(race)
            if faction is not None:
                ctx.batch.add(PLAYERS_BY_CLASS, label_for(CLASS_NAMES, class_id), faction, value=count)

        for character, level, account_id in await ctx.source.fetch_all(CHARACTERS, ONLINE_ROSTER):
            account = await ctx.accounts.username(account_id)
            ctx.batch.set(ONLINE_PLAYERS_BY_LEVEL, character, account, value=level)


class MaxLevelCharacterGroup(MetricGroup):
    name = "max_level"
    metrics = (MAX_LEVEL_CHAR_COUNT,)

    async def collect(self, ctx: CollectionContext) -> None:
        rows = await ctx.source.fetch_all(CHARACTERS, MAX_LEVEL_BY_RACE, {"max_level": MAX_LEVEL})
        for race, count in rows:
            faction = faction_for_race(race)
            if faction is not None:
                ctx.batch.add(MAX_LEVEL_CHAR_COUNT, faction, value=count)
