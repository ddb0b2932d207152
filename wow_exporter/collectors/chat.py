"""Chat channel and server log counters."""
from __future__ import annotations

from sqlalchemy import text

from wow_exporter.collectors.base import CollectionContext, MetricGroup
from wow_exporter.config import AUTH, CHARACTERS
from wow_exporter.models.metrics import (
    ARENA_LOG_COUNT,
    CHANNEL_BANS,
    CHANNEL_COUNT,
    ENCOUNTER_LOG_COUNT,
    GUILD_EVENT_COUNT,
    IP_ACTION_LOG_COUNT,
    LOG_COUNT_BY_TYPE,
    MONEY_LOG_COUNT,
)

CHANNELS = text("SELECT COUNT(*) FROM channels")
CHANNEL_BAN_COUNT = text("SELECT COUNT(*) FROM channels_bans")
LOGS_BY_TYPE = text("SELECT type, COUNT(*) FROM logs GROUP BY type")
GUILD_EVENTS = text("SELECT COUNT(*) FROM guild_eventlog")
MONEY_LOGS = text("SELECT COUNT(*) FROM log_money")
ENCOUNTER_LOGS = text("SELECT COUNT(*) FROM log_encounter")
ARENA_LOGS = text("SELECT COUNT(*) FROM log_arena_fights")
IP_ACTION_LOGS = text("SELECT COUNT(*) FROM logs_ip_actions")

# (gauge, database, statement) for the plain row counts
_COUNTERS = (
    (CHANNEL_COUNT, CHARACTERS, CHANNELS),
    (CHANNEL_BANS, CHARACTERS, CHANNEL_BAN_COUNT),
    (GUILD_EVENT_COUNT, CHARACTERS, GUILD_EVENTS),
    (MONEY_LOG_COUNT, CHARACTERS, MONEY_LOGS),
    (ENCOUNTER_LOG_COUNT, CHARACTERS, ENCOUNTER_LOGS),
    (ARENA_LOG_COUNT, CHARACTERS, ARENA_LOGS),
    (IP_ACTION_LOG_COUNT, AUTH, IP_ACTION_LOGS),
)


class ChatLogGroup(MetricGroup):
    name = "chat"
    metrics = (
        CHANNEL_COUNT,
        CHANNEL_BANS,
        LOG_COUNT_BY_TYPE,
        GUILD_EVENT_COUNT,
        MONEY_LOG_COUNT,
        ENCOUNTER_LOG_COUNT,
        ARENA_LOG_COUNT,
        IP_ACTION_LOG_COUNT,
    )

    async def collect(self, ctx: CollectionContext) -> None:
        for gauge, database, statement in _COUNTERS:
            ctx.batch.set(gauge, value=await ctx.count(database, statement))

        # logs.type is free text, used as-is
        for log_type, count in await ctx.source.fetch_all(AUTH, LOGS_BY_TYPE):
            ctx.batch.set(LOG_COUNT_BY_TYPE, log_type, value=count)
