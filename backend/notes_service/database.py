"""
Notes Service: Database Resource
=================================

What:  The `Database` resource object (async engine, session factory,
       schema bootstrap, readiness probe) and the FastAPI dependencies that
       hand it to route handlers.
How:   One `Database` is constructed at startup from `Settings`, stored on
       `app.state.database`, and disposed on shutdown. Tests build their own
       against a temporary SQLite file, or substitute a mock.

Connection Pooling Strategy:
    pool_size=10:       at most 10 connections are checked out at once
    max_overflow=0:     no burst connections beyond pool_size
    pool_timeout=None:  callers wait for a free connection indefinitely
    pool_pre_ping:      stale connections are replaced before use
    pool_recycle=3600:  connections are recycled hourly (MySQL wait_timeout)

    SQLite URLs keep the dialect's default pool; they are only used in tests.
"""

import logging
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from notes_service.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models; owns the shared metadata."""
    pass


class Database:
    """
    Explicitly constructed database resource shared by all requests.

    Attributes:
        engine:           the async engine that owns the connection pool
        session_factory:  builds one `AsyncSession` per request
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        # expire_on_commit=False: attributes stay readable after commit
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_url(
        cls,
        url: str,
        pool_size: int = 10,
        echo: bool = False,
    ) -> "Database":
        """Build a Database for `url` with the bounded pool described above."""
        engine_kwargs = {"echo": echo}
        if make_url(url).get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=0,
                pool_timeout=None,
                pool_pre_ping=True,
                pool_recycle=3600,
            )
        return cls(create_async_engine(url, **engine_kwargs))

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls.from_url(
            settings.sqlalchemy_url,
            pool_size=settings.db_pool_size,
            echo=settings.log_level == "DEBUG",
        )

    async def init_schema(self) -> None:
        """
        Create the notes table if it does not exist yet.

        Idempotent: `create_all` checks for existing tables first, so running
        it against an initialized database is a no-op. Errors propagate; the
        caller treats them as fatal.
        """
        # Registers Note with Base.metadata
        from notes_service.models.note import Note  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured (notes table)")

    async def ping(self) -> None:
        """Run `SELECT 1` through the pool. Raises on any failure."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    def session(self) -> AsyncSession:
        return self.session_factory()

    async def dispose(self) -> None:
        """Close every pooled connection (application shutdown)."""
        await self.engine.dispose()


# ── FastAPI Dependencies ──────────────────────────────────────────────────

def get_database(request: Request) -> Database:
    """Returns the Database attached to the running application."""
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database has not been initialized for this application")
    return database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Provides one database session per request.

    Services commit their own writes; on error the session is rolled back,
    and it is always closed so the connection returns to the pool.

    Example usage in a route:
        @router.get("/notes")
        async def list_notes(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database = get_database(request)
    async with database.session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
