"""
Base class and shared helpers for metric groups.

A metric group owns a fixed set of gauges and fills them from one or more
queries. Groups are read-only against the databases and write only into
the ``MetricBatch`` they are handed; the orchestrator decides whether that
batch is published.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.elements import TextClause

from wow_exporter.config import AUTH
from wow_exporter.db.session import DataSource
from wow_exporter.metric_store.registry import MetricBatch
from wow_exporter.models.metrics import MetricDefinition

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Exclusion filter for "real" player population
# ─────────────────────────────────────────────────────────────────────────────

EXCLUDED_NAME_PATTERNS = ("test", "admin", "gm", "dev", "temp", "demo", "example")
RECENT_CREATION_HOURS = 24


def real_character_filter(alias: str = "") -> str:
    """
    SQL predicate dropping deleted characters, characters created in the
    last day and names that look like test / staff characters.
    """
    p = f"{alias}." if alias else ""
    clauses = [
        f"({p}deleteDate IS NULL OR {p}deleteDate = 0)",
        f"({p}creation_date IS NULL OR {p}creation_date < DATE_SUB(NOW(), INTERVAL {RECENT_CREATION_HOURS} HOUR))",
    ]
    clauses += [f"{p}name NOT LIKE '%{pattern}%'" for pattern in EXCLUDED_NAME_PATTERNS]
    return "\n          AND ".join(clauses)


# ─────────────────────────────────────────────────────────────────────────────
# Per-cycle account name cache
# ─────────────────────────────────────────────────────────────────────────────

ACCOUNT_USERNAME = text("SELECT username FROM account WHERE id = :account_id")


class AccountNameCache:
    """account id → username, built fresh for every collection cycle."""

    def __init__(self, source: DataSource):
        self._source = source
        self._names: dict[int, str] = {}
        self.lookups = 0

    async def username(self, account_id: int) -> str:
        name = self._names.get(account_id)
        if name is not None:
            return name

        self.lookups += 1
        try:
            row = await self._source.fetch_one(AUTH, ACCOUNT_USERNAME, {"account_id": account_id})
        except (SQLAlchemyError, OSError) as exc:
            logger.debug("Username lookup failed for account %d: %s", account_id, exc)
            row = None

        if row is not None and row[0]:
            name = str(row[0])
        else:
            name = f"account_{account_id}"
        self._names[account_id] = name
        return name


# ─────────────────────────────────────────────────────────────────────────────
# Group contract
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class CollectionContext:
    """What a group gets for one run: data source, its own batch, the cycle cache."""

    source: DataSource
    batch: MetricBatch
    accounts: AccountNameCache
    realm_id: int = 1

    async def count(
        self,
        database: str,
        statement: TextClause,
        params: dict[str, Any] | None = None,
    ) -> int:
        """First column of a single-row COUNT query."""
        row = await self.source.fetch_one(database, statement, params)
        if row is None or row[0] is None:
            return 0
        return int(row[0])


class MetricGroup(ABC):
    """
    One independently collected set of gauges.

    The orchestrator resets every vector listed in ``metrics`` before
    ``collect`` runs, so ``collect`` only writes what it discovers.
    """

    name: str = ""
    metrics: tuple[MetricDefinition, ...] = ()

    @abstractmethod
    async def collect(self, ctx: CollectionContext) -> None:
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
