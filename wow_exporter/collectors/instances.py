"""Instance, raid lockout and LFG metrics (characters database)."""
from __future__ import annotations

from sqlalchemy import text

from wow_exporter.collectors.base import CollectionContext, MetricGroup
from wow_exporter.config import CHARACTERS
from wow_exporter.models.lookups import DIFFICULTY_NAMES, LFG_STATE_NAMES, label_for
from wow_exporter.models.metrics import (
    ACTIVE_INSTANCE_COUNT,
    CHARACTERS_IN_INSTANCES,
    COMPLETED_ENCOUNTERS,
    INSTANCE_RESETS,
    INSTANCE_SAVES_COUNT,
    INSTANCES_BY_DIFFICULTY,
    LAG_REPORTS_COUNT,
    LFG_DATA_COUNT,
)

ACTIVE_INSTANCES = text("SELECT COUNT(*) FROM instance WHERE resettime > UNIX_TIMESTAMP()")
INSTANCES_PER_DIFFICULTY = text("SELECT difficulty, COUNT(*) FROM instance GROUP BY difficulty")
COMPLETED_ENCOUNTER_MASKS = text(
    "SELECT id, completedEncounters FROM instance WHERE completedEncounters > 0"
)
RESET_TIMES = text("SELECT mapid, difficulty, resettime FROM instance_reset")
CHARACTERS_BOUND = text("SELECT COUNT(DISTINCT guid) FROM character_instance")
LFG_BY_STATE = text("SELECT state, COUNT(*) FROM lfg_data GROUP BY state")
LAG_REPORTS = text("SELECT COUNT(*) FROM lag_reports")
INSTANCE_SAVES = text("SELECT COUNT(*) FROM instance_saved_go_state_data")


class InstanceGroup(MetricGroup):
    name = "instance"
    metrics = (
        ACTIVE_INSTANCE_COUNT,
        INSTANCES_BY_DIFFICULTY,
        COMPLETED_ENCOUNTERS,
        INSTANCE_RESETS,
        CHARACTERS_IN_INSTANCES,
        LFG_DATA_COUNT,
        LAG_REPORTS_COUNT,
        INSTANCE_SAVES_COUNT,
    )

    async def collect(self, ctx: CollectionContext) -> None:
        source = ctx.source
        ctx.batch.set(ACTIVE_INSTANCE_COUNT, value=await ctx.count(CHARACTERS, ACTIVE_INSTANCES))

        for difficulty, count in await source.fetch_all(CHARACTERS, INSTANCES_PER_DIFFICULTY):
            ctx.batch.set(INSTANCES_BY_DIFFICULTY, label_for(DIFFICULTY_NAMES, difficulty), value=count)

        # completedEncounters is a bitmask, exported as stored
        for instance_id, encounters in await source.fetch_all(CHARACTERS, COMPLETED_ENCOUNTER_MASKS):
            ctx.batch.set(COMPLETED_ENCOUNTERS, instance_id, value=encounters)

        for map_id, difficulty, reset_time in await source.fetch_all(CHARACTERS, RESET_TIMES):
            ctx.batch.set(INSTANCE_RESETS, map_id, label_for(DIFFICULTY_NAMES, difficulty), value=reset_time)

        ctx.batch.set(CHARACTERS_IN_INSTANCES, value=await ctx.count(CHARACTERS, CHARACTERS_BOUND))

        for state, count in await source.fetch_all(CHARACTERS, LFG_BY_STATE):
            ctx.batch.set(LFG_DATA_COUNT, label_for(LFG_STATE_NAMES, state), value=count)

        ctx.batch.set(LAG_REPORTS_COUNT, value=await ctx.count(CHARACTERS, LAG_REPORTS))
        ctx.batch.set(INSTANCE_SAVES_COUNT, value=await ctx.count(CHARACTERS, INSTANCE_SAVES))
