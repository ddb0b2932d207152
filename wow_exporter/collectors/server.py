"""Server uptime and restart metrics (auth database, ``uptime`` table)."""
from __future__ import annotations

from sqlalchemy import text

from wow_exporter.collectors.base import CollectionContext, MetricGroup
from wow_exporter.config import AUTH
from wow_exporter.models.metrics import LAST_SERVER_RESTART, SERVER_MAX_PLAYERS, SERVER_UPTIME

LATEST_UPTIME = text("""
    SELECT uptime, maxplayers
    FROM uptime
    WHERE realmid = :realm_id
    ORDER BY starttime DESC
    LIMIT 1
""")

LATEST_START_TIME = text("""
    SELECT starttime
    FROM uptime
    WHERE realmid = :realm_id
    ORDER BY starttime DESC
    LIMIT 1
""")


class ServerUptimeGroup(MetricGroup):
    """An empty uptime table is not an error; the gauges keep their value."""

    name = "server"
    metrics = (SERVER_UPTIME, SERVER_MAX_PLAYERS)

    async def collect(self, ctx: CollectionContext) -> None:
        row = await ctx.source.fetch_one(AUTH, LATEST_UPTIME, {"realm_id": ctx.realm_id})
        if row is None:
            return
        uptime, max_players = row
        if uptime is not None:
            ctx.batch.set(SERVER_UPTIME, value=uptime)
        if max_players is not None:
            ctx.batch.set(SERVER_MAX_PLAYERS, value=max_players)


class LastRestartGroup(MetricGroup):
    name = "last_restart"
    metrics = (LAST_SERVER_RESTART,)

    async def collect(self, ctx: CollectionContext) -> None:
        row = await ctx.source.fetch_one(AUTH, LATEST_START_TIME, {"realm_id": ctx.realm_id})
        if row is not None and row[0] is not None:
            ctx.batch.set(LAST_SERVER_RESTART, value=row[0])
