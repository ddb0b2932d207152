"""Async SQLAlchemy engines for the three AzerothCore databases."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Row
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.sql.elements import TextClause

from wow_exporter.config import DATABASES, Settings

logger = logging.getLogger(__name__)


class DataSourceUnavailable(RuntimeError):
    """A configured database could not be reached."""

    def __init__(self, database: str, cause: BaseException):
        super().__init__(f"database {database!r} is unreachable: {cause}")
        self.database = database


def create_engines(settings: Settings) -> dict[str, AsyncEngine]:
    return {
        name: create_async_engine(
            settings.database_url(name),
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_pool_size,
            pool_pre_ping=True,
            pool_recycle=3600,
            echo=settings.log_level.upper() == "DEBUG",
        )
        for name in DATABASES
    }


class DataSource:
    """
    Named, independently queryable read-only connections.

    Each name owns its own connection pool; the pools are shared by every
    concurrent collection cycle and provide their own task safety.
    """

    def __init__(self, engines: Mapping[str, AsyncEngine]):
        self._engines = dict(engines)

    @classmethod
    def from_settings(cls, settings: Settings) -> "DataSource":
        return cls(create_engines(settings))

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._engines)

    def _engine(self, database: str) -> AsyncEngine:
        try:
            return self._engines[database]
        except KeyError:
            raise ValueError(f"unknown database {database!r}") from None

    async def fetch_all(
        self,
        database: str,
        statement: TextClause | str,
        params: dict[str, Any] | None = None,
    ) -> list[Row]:
        if isinstance(statement, str):
            statement = text(statement)
        async with self._engine(database).connect() as conn:
            result = await conn.execute(statement, params or {})
            return list(result.fetchall())

    async def fetch_one(
        self,
        database: str,
        statement: TextClause | str,
        params: dict[str, Any] | None = None,
    ) -> Row | None:
        """First row of the result, or None when the query matched nothing."""
        if isinstance(statement, str):
            statement = text(statement)
        async with self._engine(database).connect() as conn:
            result = await conn.execute(statement, params or {})
            return result.first()

    async def ping(self) -> None:
        """Raise DataSourceUnavailable for the first database that does not answer."""
        for name, engine in self._engines.items():
            try:
                async with engine.connect() as conn:
                    await conn.execute(text("SELECT 1"))
            except (SQLAlchemyError, OSError) as exc:
                raise DataSourceUnavailable(name, exc) from exc
            logger.info("Connected to %s database (%s)", name, engine.url.database)

    async def dispose(self) -> None:
        for engine in self._engines.values():
            await engine.dispose()
