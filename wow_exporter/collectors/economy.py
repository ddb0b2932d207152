"""Auction house and guild metrics (characters database)."""
from __future__ import annotations

from sqlalchemy import text

from wow_exporter.collectors.base import CollectionContext, MetricGroup
from wow_exporter.config import CHARACTERS
from wow_exporter.models.lookups import AUCTION_HOUSE_NAMES, label_for
from wow_exporter.models.metrics import AUCTION_COUNT, GUILD_COUNT

AUCTIONS_BY_HOUSE = text("SELECT houseid, COUNT(*) FROM auctionhouse GROUP BY houseid")
GUILDS = text("SELECT COUNT(*) FROM guild")


class AuctionGroup(MetricGroup):
    name = "auction"
    metrics = (AUCTION_COUNT,)

    async def collect(self, ctx: CollectionContext) -> None:
        for house_id, count in await ctx.source.fetch_all(CHARACTERS, AUCTIONS_BY_HOUSE):
            ctx.batch.set(AUCTION_COUNT, label_for(AUCTION_HOUSE_NAMES, house_id), value=count)


class GuildGroup(MetricGroup):
    name = "guild"
    metrics = (GUILD_COUNT,)

    async def collect(self, ctx: CollectionContext) -> None:
        ctx.batch.set(GUILD_COUNT, value=await ctx.count(CHARACTERS, GUILDS))
