"""
Notes Service: Test Configuration (conftest.py)
================================================

Shared pytest fixtures.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock standing in for an AsyncSession
    ├── sqlite_url:      URL of a fresh SQLite file in tmp_path
    ├── database:        Database on that file with the schema created
    ├── test_settings:   Settings pointing at the same file
    └── test_client:     HTTPX AsyncClient bound to an app using `database`
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Override settings BEFORE any app imports so nothing points at a real MySQL
_scratch_dir = tempfile.mkdtemp(prefix="notes_service_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_scratch_dir}/import.db"
os.environ["LOG_LEVEL"] = "WARNING"
for _var in ("PORT", "DB_PORT", "DB_POOL_SIZE"):
    os.environ.pop(_var, None)

from notes_service.config import Settings  # noqa: E402
from notes_service.database import Database  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_list(mock_db_session):
            mock_db_session.execute.return_value = result
            notes = await note_service.list_notes(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sqlite_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}"


@pytest.fixture
def unreachable_url(tmp_path):
    """A database URL whose file cannot be opened (parent directory missing)."""
    return f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'nested' / 'notes.db'}"


@pytest_asyncio.fixture
async def database(sqlite_url):
    db = Database.from_url(sqlite_url)
    await db.init_schema()
    yield db
    await db.dispose()


@pytest.fixture
def test_settings(sqlite_url):
    return Settings(database_url=sqlite_url, log_level="WARNING", _env_file=None)


@pytest_asyncio.fixture
async def test_client(test_settings, database):
    """
    HTTPX AsyncClient talking to the app in-process.

    ASGITransport does not run the lifespan, so the already-initialized
    `database` fixture is injected instead.
    """
    from notes_service.main import create_app

    app = create_app(test_settings, database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
