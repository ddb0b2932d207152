"""
shared pytest fixtures for the exporter test suite.

FakeDataSource answers queries from a table keyed by the statement objects
the metric groups define, so no database is needed.
"""
from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from wow_exporter.collectors.base import AccountNameCache, CollectionContext
from wow_exporter.db.session import DataSourceUnavailable
from wow_exporter.metric_store.registry import MetricRegistry
from wow_exporter.models.metrics import ALL_DEFINITIONS

Response = list[tuple] | BaseException | Callable[[dict[str, Any]], list[tuple]]


class FakeDataSource:
    """
    Stand-in for DataSource.

    ``responses`` maps a statement to its rows, to an exception to raise, or
    to a callable receiving the bound params. Unknown statements return no
    rows, which makes COUNT helpers read 0.
    """

    def __init__(
        self,
        responses: dict[Any, Response] | None = None,
        *,
        unreachable: str | None = None,
        delay: float = 0.0,
    ):
        self.responses: dict[Any, Response] = responses if responses is not None else {}
        self.unreachable = unreachable
        self.delay = delay
        self.calls: list[tuple[str, Any, dict[str, Any]]] = []
        self.disposed = False

    async def _rows(self, database: str, statement: Any, params: dict[str, Any] | None) -> list[tuple]:
        params = params or {}
        self.calls.append((database, statement, params))
        # yield to the event loop so concurrent cycles interleave
        await asyncio.sleep(self.delay)
        response = self.responses.get(statement, [])
        if isinstance(response, BaseException):
            raise response
        if callable(response):
            response = response(params)
        return list(response)

    async def fetch_all(self, database: str, statement: Any, params: dict[str, Any] | None = None) -> list[tuple]:
        return await self._rows(database, statement, params)

    async def fetch_one(self, database: str, statement: Any, params: dict[str, Any] | None = None) -> tuple | None:
        rows = await self._rows(database, statement, params)
        return rows[0] if rows else None

    async def ping(self) -> None:
        if self.unreachable is not None:
            raise DataSourceUnavailable(self.unreachable, ConnectionRefusedError("connection refused"))

    async def dispose(self) -> None:
        self.disposed = True

    def calls_for(self, statement: Any) -> list[dict[str, Any]]:
        return [params for _, stmt, params in self.calls if stmt is statement]


@pytest.fixture
def registry() -> MetricRegistry:
    return MetricRegistry(ALL_DEFINITIONS)


@pytest.fixture
def fake_source() -> FakeDataSource:
    return FakeDataSource()


@pytest.fixture
def make_context(registry):
    """Builds a CollectionContext writing into a fresh batch of ``registry``."""

    def _make(source: FakeDataSource, realm_id: int = 1) -> CollectionContext:
        return CollectionContext(
            source=source,
            batch=registry.batch(),
            accounts=AccountNameCache(source),
            realm_id=realm_id,
        )

    return _make
