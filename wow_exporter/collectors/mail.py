"""Mail metrics (characters database)."""
from __future__ import annotations

from sqlalchemy import text

from wow_exporter.collectors.base import CollectionContext, MetricGroup, real_character_filter
from wow_exporter.config import CHARACTERS
from wow_exporter.models.lookups import faction_for_race
from wow_exporter.models.metrics import MAIL_BY_FACTION, MAIL_TOTAL, MAIL_WITH_ITEMS, UNREAD_MAIL_COUNT

MAIL_COUNT = text("SELECT COUNT(*) FROM mail")
MAIL_WITH_ITEMS_COUNT = text("SELECT COUNT(*) FROM mail WHERE has_items = 1")
UNREAD_MAIL = text("SELECT COUNT(*) FROM mail WHERE checked = 0")

# faction of the sender
MAIL_BY_SENDER_RACE = text(f"""
    SELECT c.race, COUNT(*) AS count
    FROM mail m
    JOIN characters c ON m.sender = c.guid
    WHERE {real_character_filter("c")}
    GROUP BY c.race
""")


class MailGroup(MetricGroup):
    name = "mail"
    metrics = (MAIL_TOTAL, MAIL_WITH_ITEMS, MAIL_BY_FACTION)

    async def collect(self, ctx: CollectionContext) -> None:
        ctx.batch.set(MAIL_TOTAL, value=await ctx.count(CHARACTERS, MAIL_COUNT))
        ctx.batch.set(MAIL_WITH_ITEMS, value=await ctx.count(CHARACTERS, MAIL_WITH_ITEMS_COUNT))

        for race, count in await ctx.source.fetch_all(CHARACTERS, MAIL_BY_SENDER_RACE):
            faction = faction_for_race(race)
            if faction is not None:
                ctx.batch.add(MAIL_BY_FACTION, faction, value=count)


class UnreadMailGroup(MetricGroup):
    name = "unread_mail"
    metrics = (UNREAD_MAIL_COUNT,)

    async def collect(self, ctx: CollectionContext) -> None:
        ctx.batch.set(UNREAD_MAIL_COUNT, value=await ctx.count(CHARACTERS, UNREAD_MAIL))
