"""Database engine construction and async session management."""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from .config import settings


# Create declarative base for models
Base = declarative_base()


def _enable_sqlite_savepoints(engine: AsyncEngine) -> None:
    """
    Let SQLAlchemy own BEGIN on SQLite connections.

    The sqlite3 driver defers BEGIN until the first DML statement, which breaks
    SAVEPOINT handling; disabling that and emitting BEGIN ourselves gives
    SQLite the same transactional behaviour as the production store.
    Foreign keys are enforced as well, since SQLite ignores them by default.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")


def build_engine(database_url: str | None = None, echo: bool | None = None) -> AsyncEngine:
    """
    Create the async engine and its bounded connection pool.

    Args:
        database_url: Database URL, defaults to the configured one
        echo: Whether to log SQL statements, defaults to debug mode

    Returns:
        AsyncEngine: Configured engine
    """
    url = database_url or settings.database_url
    options: dict = {
        "echo": settings.debug if echo is None else echo,
        "pool_pre_ping": True,
        # Bound values carry customer contact details; keep them out of error text
        "hide_parameters": True,
    }

    if url.startswith("sqlite"):
        # Use StaticPool for SQLite so in-memory databases survive across sessions
        options["poolclass"] = StaticPool
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_size"] = settings.db_pool_size
        options["max_overflow"] = settings.db_max_overflow

    engine = create_async_engine(url, **options)

    if url.startswith("sqlite"):
        _enable_sqlite_savepoints(engine)

    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory bound to an engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function that yields one database session per request.

    The session is rolled back when the handler raises and is always closed,
    which returns its connection to the pool.

    Yields:
        AsyncSession: Database session
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db(engine: AsyncEngine) -> None:
    """Initialize the database by creating all tables."""
    from .. import models  # noqa: F401 - register models on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def ping_db(engine: AsyncEngine) -> bool:
    """Return True if the store answers a trivial query."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    return True


async def close_db(engine: AsyncEngine) -> None:
    """Close database connections."""
    await engine.dispose()
