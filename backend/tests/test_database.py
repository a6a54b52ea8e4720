"""
Notes Service: Database Resource Tests
=======================================

What:  Schema bootstrap, readiness ping and pool configuration of the
       Database resource object.
"""

import pytest
from sqlalchemy import inspect
from sqlalchemy.pool import QueuePool

from notes_service.config import Settings
from notes_service.database import Database
from notes_service.models.note import Note


async def _table_names(database: Database):
    async with database.engine.connect() as conn:
        return await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())


class TestInitSchema:

    @pytest.mark.asyncio
    async def test_creates_notes_table(self, sqlite_url):
        database = Database.from_url(sqlite_url)
        try:
            await database.init_schema()
            assert "notes" in await _table_names(database)
        finally:
            await database.dispose()

    @pytest.mark.asyncio
    async def test_running_twice_is_harmless(self, database):
        """The fixture already initialized the schema once."""
        async with database.session() as session:
            session.add(Note(text="survives"))
            await session.commit()

        await database.init_schema()

        assert (await _table_names(database)).count("notes") == 1
        async with database.session() as session:
            notes = (await session.execute(Note.__table__.select())).all()
        assert [row.text for row in notes] == ["survives"]

    @pytest.mark.asyncio
    async def test_columns(self, database):
        async with database.engine.connect() as conn:
            columns = await conn.run_sync(
                lambda sync_conn: {c["name"]: c for c in inspect(sync_conn).get_columns("notes")}
            )

        assert set(columns) == {"id", "text", "created_at"}
        assert columns["text"]["nullable"] is False
        assert columns["text"]["type"].length == 255
        assert columns["created_at"]["default"] is not None

    @pytest.mark.asyncio
    async def test_unreachable_database_raises(self, unreachable_url):
        database = Database.from_url(unreachable_url)
        try:
            with pytest.raises(Exception):
                await database.init_schema()
        finally:
            await database.dispose()


class TestPing:

    @pytest.mark.asyncio
    async def test_ping_succeeds(self, database):
        await database.ping()

    @pytest.mark.asyncio
    async def test_ping_unreachable_raises(self, unreachable_url):
        database = Database.from_url(unreachable_url)
        try:
            with pytest.raises(Exception):
                await database.ping()
        finally:
            await database.dispose()


class TestPoolConfiguration:

    def test_mysql_pool_is_bounded_without_wait_timeout(self):
        database = Database.from_settings(Settings(_env_file=None, database_url=None))
        pool = database.engine.pool

        assert isinstance(pool, QueuePool)
        assert pool.size() == 10
        assert pool._max_overflow == 0
        assert pool._timeout is None
        assert database.engine.url.drivername == "mysql+aiomysql"

    def test_pool_size_follows_settings(self):
        database = Database.from_settings(
            Settings(_env_file=None, database_url=None, db_pool_size=4)
        )

        assert database.engine.pool.size() == 4
