"""Latency, IP ban and network activity metrics."""
from __future__ import annotations

from sqlalchemy import text

from wow_exporter.collectors.base import CollectionContext, MetricGroup, real_character_filter
from wow_exporter.config import AUTH, CHARACTERS
from wow_exporter.models.lookups import IP_ACTION_TYPE_NAMES, LAG_TYPE_NAMES, label_for
from wow_exporter.models.metrics import (
    AVERAGE_LATENCY,
    HIGH_LATENCY_PLAYERS,
    IP_ACTION_LOGS_BY_TYPE,
    IP_BANNED_COUNT,
    LAG_REPORTS_BY_TYPE,
    NETWORK_ACTIVITY_BY_IP,
    PLAYER_LATENCY_STATS,
)

HIGH_LATENCY_MS = 200
TOP_IPS = 10

AVERAGE_ONLINE_LATENCY = text(f"""
    SELECT AVG(latency)
    FROM characters
    WHERE online = 1
      AND latency > 0
      AND {real_character_filter()}
""")

HIGH_LATENCY_COUNT = text(f"""
    SELECT COUNT(*)
    FROM characters
    WHERE online = 1
      AND latency > :threshold
      AND {real_character_filter()}
""")

LATENCY_RANGE = text(f"""
    SELECT MIN(latency), MAX(latency)
    FROM characters
    WHERE online = 1
      AND latency > 0
      AND {real_character_filter()}
""")

BANNED_IPS = text("SELECT COUNT(*) FROM ip_banned")
IP_ACTIONS_BY_TYPE = text("SELECT type, COUNT(*) FROM logs_ip_actions GROUP BY type")
LAG_REPORTS_PER_TYPE = text("SELECT lagType, COUNT(*) FROM lag_reports GROUP BY lagType")
MOST_ACTIVE_IPS = text("""
    SELECT ip, COUNT(*) AS activity
    FROM logs_ip_actions
    GROUP BY ip
    ORDER BY activity DESC
    LIMIT :limit
""")


class NetworkGroup(MetricGroup):
    """
    AVG/MIN/MAX over online characters are NULL when nobody is online;
    those stats are then left unpublished rather than reported as zero.
    """

    name = "network"
    metrics = (
        PLAYER_LATENCY_STATS,
        AVERAGE_LATENCY,
        HIGH_LATENCY_PLAYERS,
        IP_BANNED_COUNT,
        IP_ACTION_LOGS_BY_TYPE,
        LAG_REPORTS_BY_TYPE,
        NETWORK_ACTIVITY_BY_IP,
    )

    async def collect(self, ctx: CollectionContext) -> None:
        source = ctx.source

        row = await source.fetch_one(CHARACTERS, AVERAGE_ONLINE_LATENCY)
        if row is not None and row[0] is not None:
            ctx.batch.set(PLAYER_LATENCY_STATS, "average", value=row[0])
            ctx.batch.set(AVERAGE_LATENCY, value=row[0])

        high = await ctx.count(CHARACTERS, HIGH_LATENCY_COUNT, {"threshold": HIGH_LATENCY_MS})
        ctx.batch.set(HIGH_LATENCY_PLAYERS, value=high)
        ctx.batch.set(PLAYER_LATENCY_STATS, "high_latency", value=high)

        row = await source.fetch_one(CHARACTERS, LATENCY_RANGE)
        if row is not None:
            low, peak = row
            if low is not None:
                ctx.batch.set(PLAYER_LATENCY_STATS, "min", value=low)
            if peak is not None:
                ctx.batch.set(PLAYER_LATENCY_STATS, "max", value=peak)

        ctx.batch.set(IP_BANNED_COUNT, value=await ctx.count(AUTH, BANNED_IPS))

        for action_type, count in await source.fetch_all(AUTH, IP_ACTIONS_BY_TYPE):
            ctx.batch.set(IP_ACTION_LOGS_BY_TYPE, label_for(IP_ACTION_TYPE_NAMES, action_type), value=count)

        for lag_type, count in await source.fetch_all(CHARACTERS, LAG_REPORTS_PER_TYPE):
            ctx.batch.set(LAG_REPORTS_BY_TYPE, label_for(LAG_TYPE_NAMES, lag_type), value=count)

        for ip, activity in await source.fetch_all(AUTH, MOST_ACTIVE_IPS, {"limit": TOP_IPS}):
            ctx.batch.set(NETWORK_ACTIVITY_BY_IP, ip, value=activity)
