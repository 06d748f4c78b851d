from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import MetaData, event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from catalog.config import settings

# Naming conventions for database constraints, so constraint names stay
# predictable across databases.
NAMING_CONVENTION: dict[str, str] = {
    "ix": "ix_%(column_0_label)s",  # Index
    "uq": "uq_%(table_name)s_%(column_0_name)s",  # Unique constraint
    "ck": "ck_%(table_name)s_%(constraint_name)s",  # Check constraint
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",  # Foreign key
    "pk": "pk_%(table_name)s",  # Primary key
}


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models.

    SQLAlchemy uses Base.metadata to track all registered models and their
    table schemas; ``create_all`` in tests relies on it.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def engine_options(url: str) -> dict[str, Any]:
    """Build create_async_engine keyword arguments for the given URL.

    Pool sizing and asyncpg's command_timeout only make sense for a server
    database; SQLite gets the driver defaults.
    """
    if is_sqlite(url):
        return {"echo": settings.db_echo}
    return {
        "pool_size": settings.db_pool_size,  # Persistent connections
        "max_overflow": settings.db_max_overflow,  # Extra connections under load
        "pool_timeout": settings.db_pool_timeout,  # Wait time for available connection
        "pool_recycle": settings.db_pool_recycle,  # Max connection age
        "pool_pre_ping": settings.db_pool_pre_ping,  # Test connection before checkout
        "echo": settings.db_echo,  # SQL logging
        "connect_args": {"command_timeout": settings.db_statement_timeout},  # Kill slow queries
    }


def enable_sqlite_pragmas(engine: AsyncEngine) -> None:
    """Turn on foreign key enforcement and case-sensitive LIKE for SQLite.

    SQLite ships with both off, which would silently skip cascade/restrict
    rules and make name searches case-insensitive.
    """
    if not is_sqlite(str(engine.url)):
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_pragmas(dbapi_connection: Any, _record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA case_sensitive_like=ON")
        cursor.close()


engine = create_async_engine(settings.database_url, **engine_options(settings.database_url))
enable_sqlite_pragmas(engine)

# expire_on_commit=False keeps objects usable after commit without re-querying.
# Accessing expired attributes in async code would trigger implicit I/O.
async_session = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that provides a database session per request.

    Repositories commit their own writes; this dependency commits whatever is
    still pending on success and rolls back on exception, which also clears a
    session left in a failed state by a storage error.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def shutdown() -> None:
    """Close all pooled database connections."""
    await engine.dispose()
