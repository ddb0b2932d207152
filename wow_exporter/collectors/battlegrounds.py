"""Battleground, deserter and PvP statistics metrics."""
from __future__ import annotations

from sqlalchemy import text

from wow_exporter.collectors.base import CollectionContext, MetricGroup
from wow_exporter.config import CHARACTERS, WORLD
from wow_exporter.models.lookups import (
    BATTLEGROUND_TYPE_NAMES,
    DESERTION_TYPE_NAMES,
    WINNER_FACTION_NAMES,
    label_for,
)
from wow_exporter.models.metrics import (
    BATTLEGROUND_DESERTERS,
    BATTLEGROUND_DESERTERS_BY_TYPE,
    BATTLEGROUND_PLAYER_STATS,
    BATTLEGROUND_STATS,
    BATTLEGROUND_TEMPLATE_DETAILS,
    BATTLEGROUND_TEMPLATES,
    BATTLEGROUND_WINS_BY_FACTION,
    BATTLEGROUNDS_BY_BRACKET,
    BATTLEGROUNDS_BY_TYPE,
    RANDOM_BATTLEGROUND_QUEUE,
    RECENT_BATTLEGROUNDS,
)

DESERTERS = text("SELECT COUNT(*) FROM battleground_deserters")
DESERTERS_BY_TYPE = text("SELECT type, COUNT(*) AS count FROM battleground_deserters GROUP BY type")
RANDOM_QUEUE = text("SELECT COUNT(*) FROM character_battleground_random")

TOTALS = text("""
    SELECT
        COUNT(DISTINCT id) AS total_battlegrounds,
        COUNT(DISTINCT character_guid) AS total_players
    FROM pvpstats_battlegrounds bg
    LEFT JOIN pvpstats_players bp ON bg.id = bp.battleground_id
""")

BY_TYPE = text("SELECT type, COUNT(*) AS count FROM pvpstats_battlegrounds GROUP BY type")
BY_BRACKET = text("SELECT bracket_id, COUNT(*) AS count FROM pvpstats_battlegrounds GROUP BY bracket_id")
WINS_BY_FACTION = text("""
    SELECT winner_faction, COUNT(*) AS count
    FROM pvpstats_battlegrounds
    WHERE winner_faction IN (0, 1)
    GROUP BY winner_faction
""")

PLAYER_STATS = text("""
    SELECT
        COUNT(*) AS total_participants,
        SUM(CASE WHEN winner = 1 THEN 1 ELSE 0 END) AS total_winners,
        AVG(score_killing_blows) AS avg_killing_blows,
        AVG(score_deaths) AS avg_deaths,
        AVG(score_honorable_kills) AS avg_honorable_kills,
        AVG(score_bonus_honor) AS avg_bonus_honor,
        AVG(score_damage_done) AS avg_damage_done,
        AVG(score_healing_done) AS avg_healing_done
    FROM pvpstats_players
""")

PLAYER_STAT_LABELS = (
    "total_participants",
    "total_winners",
    "avg_killing_blows",
    "avg_deaths",
    "avg_honorable_kills",
    "avg_bonus_honor",
    "avg_damage_done",
    "avg_healing_done",
)

TEMPLATES = text("""
    SELECT ID, ScriptName, Comment, MinPlayersPerTeam, MaxPlayersPerTeam, MinLvl, MaxLvl, Weight
    FROM battleground_template
""")

RECENT_ACTIVITY = text("""
    SELECT
        SUM(CASE WHEN date >= DATE_SUB(NOW(), INTERVAL 24 HOUR) THEN 1 ELSE 0 END) AS last_24h,
        SUM(CASE WHEN date >= DATE_SUB(NOW(), INTERVAL 7 DAY) THEN 1 ELSE 0 END) AS last_7d,
        SUM(CASE WHEN date >= DATE_SUB(NOW(), INTERVAL 30 DAY) THEN 1 ELSE 0 END) AS last_30d
    FROM pvpstats_battlegrounds
""")

RECENT_PERIODS = ("last_24h", "last_7d", "last_30d")


def template_label(template_id: int, script_name: str | None, comment: str | None) -> str:
    """ScriptName, else Comment, else ``BG_<id>``."""
    return script_name or comment or f"BG_{template_id}"


class BattlegroundGroup(MetricGroup):
    name = "battleground"
    metrics = (
        BATTLEGROUND_DESERTERS,
        BATTLEGROUND_DESERTERS_BY_TYPE,
        RANDOM_BATTLEGROUND_QUEUE,
        BATTLEGROUND_STATS,
        BATTLEGROUNDS_BY_TYPE,
        BATTLEGROUNDS_BY_BRACKET,
        BATTLEGROUND_WINS_BY_FACTION,
        BATTLEGROUND_PLAYER_STATS,
        BATTLEGROUND_TEMPLATES,
        BATTLEGROUND_TEMPLATE_DETAILS,
        RECENT_BATTLEGROUNDS,
    )

    async def collect(self, ctx: CollectionContext) -> None:
        source = ctx.source
        batch = ctx.batch

        batch.set(BATTLEGROUND_DESERTERS, value=await ctx.count(CHARACTERS, DESERTERS))
        for desertion_type, count in await source.fetch_all(CHARACTERS, DESERTERS_BY_TYPE):
            batch.set(BATTLEGROUND_DESERTERS_BY_TYPE, label_for(DESERTION_TYPE_NAMES, desertion_type), value=count)

        batch.set(RANDOM_BATTLEGROUND_QUEUE, value=await ctx.count(CHARACTERS, RANDOM_QUEUE))

        row = await source.fetch_one(CHARACTERS, TOTALS)
        if row is not None:
            total_battlegrounds, total_players = row
            batch.set(BATTLEGROUND_STATS, "total_battlegrounds", value=total_battlegrounds or 0)
            batch.set(BATTLEGROUND_STATS, "total_players", value=total_players or 0)

        for bg_type, count in await source.fetch_all(CHARACTERS, BY_TYPE):
            batch.set(BATTLEGROUNDS_BY_TYPE, label_for(BATTLEGROUND_TYPE_NAMES, bg_type), value=count)

        for bracket, count in await source.fetch_all(CHARACTERS, BY_BRACKET):
            batch.set(BATTLEGROUNDS_BY_BRACKET, f"bracket_{bracket}", value=count)

        for faction, count in await source.fetch_all(CHARACTERS, WINS_BY_FACTION):
            batch.set(BATTLEGROUND_WINS_BY_FACTION, label_for(WINNER_FACTION_NAMES, faction), value=count)

        row = await source.fetch_one(CHARACTERS, PLAYER_STATS)
        if row is not None:
            for stat, value in zip(PLAYER_STAT_LABELS, row):
                if value is not None:
                    batch.set(BATTLEGROUND_PLAYER_STATS, stat, value=value)

        for template in await source.fetch_all(WORLD, TEMPLATES):
            template_id, script_name, comment, min_players, max_players, min_level, max_level, weight = template
            label = template_label(template_id, script_name, comment)
            batch.set(BATTLEGROUND_TEMPLATES, template_id, label, value=weight)
            batch.set(
                BATTLEGROUND_TEMPLATE_DETAILS,
                template_id,
                label,
                min_level,
                max_level,
                min_players,
                max_players,
                value=weight,
            )

        row = await source.fetch_one(CHARACTERS, RECENT_ACTIVITY)
        if row is not None:
            for period, value in zip(RECENT_PERIODS, row):
                if value is not None:
                    batch.set(RECENT_BATTLEGROUNDS, period, value=value)
