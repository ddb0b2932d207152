"""tests/test_session.py: DataSource behaviour over mocked async engines."""
from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from wow_exporter.config import AUTH, CHARACTERS, WORLD
from wow_exporter.db.session import DataSource, DataSourceUnavailable


def _engine(result=None, error: BaseException | None = None) -> MagicMock:
    engine = MagicMock()
    engine.url.database = "acore_test"
    engine.dispose = AsyncMock()
    if error is not None:
        engine.connect.side_effect = error
        return engine

    conn = AsyncMock()
    conn.execute.return_value = result or MagicMock()
    cm = MagicMock()
    cm.__aenter__.return_value = conn
    cm.__aexit__.return_value = False
    engine.connect.return_value = cm
    return engine


class TestDataSource:

    @pytest.mark.asyncio
    async def test_ping_reports_the_unreachable_database(self):
        error = OperationalError("SELECT 1", {}, ConnectionRefusedError("refused"))
        source = DataSource({
            CHARACTERS: _engine(),
            AUTH: _engine(error=error),
            WORLD: _engine(),
        })

        with pytest.raises(DataSourceUnavailable) as exc_info:
            await source.ping()

        assert exc_info.value.database == AUTH
        assert "unreachable" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_fetch_one_returns_first_row(self):
        result = MagicMock()
        result.first.return_value = (42,)
        source = DataSource({CHARACTERS: _engine(result)})

        row = await source.fetch_one(CHARACTERS, text("SELECT COUNT(*) FROM guild"))

        assert row == (42,)

    @pytest.mark.asyncio
    async def test_fetch_all_binds_params(self):
        result = MagicMock()
        result.fetchall.return_value = [(1, 3), (2, 4)]
        engine = _engine(result)
        source = DataSource({CHARACTERS: engine})
        statement = text("SELECT race, COUNT(*) FROM characters WHERE level = :max_level GROUP BY race")

        rows = await source.fetch_all(CHARACTERS, statement, {"max_level": 80})

        assert rows == [(1, 3), (2, 4)]
        conn = engine.connect.return_value.__aenter__.return_value
        conn.execute.assert_awaited_once_with(statement, {"max_level": 80})

    @pytest.mark.asyncio
    async def test_unknown_database_is_rejected(self):
        source = DataSource({CHARACTERS: _engine()})
        with pytest.raises(ValueError):
            await source.fetch_all("logs", text("SELECT 1"))

    @pytest.mark.asyncio
    async def test_dispose_releases_every_pool(self):
        engines = {name: _engine() for name in (CHARACTERS, AUTH, WORLD)}
        await DataSource(engines).dispose()

        for engine in engines.values():
            engine.dispose.assert_awaited_once()
