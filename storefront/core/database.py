"""
Database engine and session management
Async SQLAlchemy over asyncpg (PostgreSQL) or aiosqlite (SQLite)
"""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from typing import AsyncGenerator, Optional
import logging

from .config import settings

logger = logging.getLogger(__name__)

def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE rules unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()

def build_engine(url: Optional[str] = None, echo: Optional[bool] = None) -> AsyncEngine:
    """
    Create an async engine for the given URL

    SQLite gets no connection pool and per-connection foreign key
    enforcement. Other databases get the configured pool.

    Args:
        url: Async database URL, defaults to the configured one
        echo: Log SQL statements, defaults to DATABASE_ECHO
    """
    url = url or settings.database_url_async
    echo = settings.DATABASE_ECHO if echo is None else echo

    if url.startswith("sqlite"):
        engine = create_async_engine(url, echo=echo, poolclass=NullPool)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        url,
        echo=echo,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_timeout=settings.DATABASE_POOL_TIMEOUT,
        pool_pre_ping=True,
    )

def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    # Services commit explicitly and keep using loaded rows afterwards
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

engine = build_engine()
AsyncSessionLocal = build_session_factory(engine)

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped session dependency
    Commits when the request succeeds, rolls back when it raises
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise

async def init_db(bind: Optional[AsyncEngine] = None) -> None:
    """Create any missing tables"""
    from storefront.models import Base

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Database tables ready: {', '.join(sorted(Base.metadata.tables))}")

async def close_db() -> None:
    await engine.dispose()
    logger.info("Database connections closed")
