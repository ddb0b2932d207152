"""Account, GM and ban metrics. Raw administrative counts, no population filter."""
from __future__ import annotations

from sqlalchemy import text

from wow_exporter.collectors.base import CollectionContext, MetricGroup
from wow_exporter.config import AUTH, CHARACTERS
from wow_exporter.models.metrics import (
    ACCOUNTS_BANNED,
    ACCOUNTS_ONLINE,
    ACCOUNTS_TOTAL,
    BANNED_CHAR_COUNT,
    GM_ACCOUNT_COUNT,
)

ACCOUNT_COUNT = text("SELECT COUNT(*) FROM account")
ONLINE_ACCOUNT_COUNT = text("SELECT COUNT(*) FROM account WHERE online = 1")
BANNED_ACCOUNT_COUNT = text("SELECT COUNT(*) FROM account_banned WHERE active = 1")

# RealmID -1 grants access on every realm
GM_ACCOUNTS = text("""
    SELECT COUNT(DISTINCT id)
    FROM account_access
    WHERE gmlevel > 0 AND RealmID IN (-1, :realm_id)
""")

BANNED_CHARACTERS = text("SELECT COUNT(DISTINCT guid) FROM character_banned WHERE active = 1")


class AccountGroup(MetricGroup):
    name = "account"
    metrics = (ACCOUNTS_TOTAL, ACCOUNTS_ONLINE, ACCOUNTS_BANNED)

    async def collect(self, ctx: CollectionContext) -> None:
        ctx.batch.set(ACCOUNTS_TOTAL, value=await ctx.count(AUTH, ACCOUNT_COUNT))
        ctx.batch.set(ACCOUNTS_ONLINE, value=await ctx.count(AUTH, ONLINE_ACCOUNT_COUNT))
        ctx.batch.set(ACCOUNTS_BANNED, value=await ctx.count(AUTH, BANNED_ACCOUNT_COUNT))


class GMAccountGroup(MetricGroup):
    name = "gm_account"
    metrics = (GM_ACCOUNT_COUNT,)

    async def collect(self, ctx: CollectionContext) -> None:
        count = await ctx.count(AUTH, GM_ACCOUNTS, {"realm_id": ctx.realm_id})
        ctx.batch.set(GM_ACCOUNT_COUNT, value=count)


class BannedCharacterGroup(MetricGroup):
    name = "banned_character"
    metrics = (BANNED_CHAR_COUNT,)

    async def collect(self, ctx: CollectionContext) -> None:
        ctx.batch.set(BANNED_CHAR_COUNT, value=await ctx.count(CHARACTERS, BANNED_CHARACTERS))
