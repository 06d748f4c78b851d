import os
import tempfile
from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from catalog.db.session import Base, enable_sqlite_pragmas, get_db
from catalog.dependencies import get_file_store
from catalog.main import app
from catalog.storage import FileStore

# Fixtures outside conftest.py are only visible once registered here.
pytest_plugins = ["tests.seeds"]

# Point TEST_DATABASE_URL at a Postgres database to run the suite against it,
# e.g. postgresql+asyncpg://catalog@localhost:5432/catalog_test
TEST_DATABASE_URL = os.environ.get(
    "TEST_DATABASE_URL",
    f"sqlite+aiosqlite:///{Path(tempfile.gettempdir()) / 'catalog_test.db'}",
)

engine = create_async_engine(TEST_DATABASE_URL, poolclass=NullPool)
enable_sqlite_pragmas(engine)
async_session = async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db() -> AsyncIterator[AsyncSession]:
    """Create tables and yield a session, then drop tables after test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def files(tmp_path: Path) -> FileStore:
    return FileStore(tmp_path / "uploads", max_bytes=1024)


@pytest_asyncio.fixture
async def client(db: AsyncSession, files: FileStore) -> AsyncIterator[AsyncClient]:
    """HTTP client that uses the test database session and a temporary upload dir."""

    async def override_get_db() -> AsyncIterator[AsyncSession]:
        try:
            yield db
        except Exception:
            await db.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_store] = lambda: files

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
