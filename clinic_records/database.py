"""Database configuration and connection management."""

from collections.abc import AsyncGenerator
from typing import Any

import structlog
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from clinic_records.config import settings
from clinic_records.models import metadata

logger = structlog.get_logger(__name__)

_ASYNC_DRIVERS = {
    "postgresql://": "postgresql+asyncpg://",
    "sqlite://": "sqlite+aiosqlite://",
}


def to_async_url(url: str) -> str:
    """Convert a plain database URL to its async driver form."""
    for plain, async_prefix in _ASYNC_DRIVERS.items():
        if url.startswith(plain):
            return async_prefix + url[len(plain) :]
    return url


def to_sync_url(url: str) -> str:
    """Convert an async driver URL back to its plain form (used by Alembic)."""
    for plain, async_prefix in _ASYNC_DRIVERS.items():
        if url.startswith(async_prefix):
            return plain + url[len(async_prefix) :]
    return url


def enable_sqlite_foreign_keys(dbapi_conn: Any, connection_record: Any) -> None:
    """Turn on foreign key enforcement for a new SQLite connection.

    SQLite ignores ON DELETE / ON UPDATE actions unless this pragma is set on
    every connection.
    """
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_for(url: str, **kwargs: Any) -> AsyncEngine:
    """
    Create an async engine for the given database URL.

    Args:
        url: Plain or async database URL
        **kwargs: Extra keyword arguments passed to ``create_async_engine``

    Returns:
        Configured async engine
    """
    async_url = to_async_url(url)
    options: dict[str, Any] = {"echo": settings.debug, "pool_pre_ping": True}

    if async_url.startswith("postgresql+asyncpg://") and "poolclass" not in kwargs:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=settings.db_pool_recycle,
            connect_args={
                "server_settings": {
                    "application_name": settings.app_name,
                },
            },
        )
    options.update(kwargs)

    new_engine = create_async_engine(async_url, **options)

    if new_engine.dialect.name == "sqlite":
        event.listen(new_engine.sync_engine, "connect", enable_sqlite_foreign_keys)

    return new_engine


# Application engine and session factory
engine: AsyncEngine = create_engine_for(settings.database_url)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session, rolling back on error."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def create_schema(target: AsyncEngine | None = None) -> None:
    """Create every clinic table that does not exist yet."""
    target = target or engine
    async with target.begin() as conn:
        await conn.run_sync(metadata.create_all)
    logger.info("schema_created", tables=len(metadata.tables))


async def drop_schema(target: AsyncEngine | None = None) -> None:
    """Drop every clinic table."""
    target = target or engine
    async with target.begin() as conn:
        await conn.run_sync(metadata.drop_all)
    logger.info("schema_dropped", tables=len(metadata.tables))


async def check_database_connection(target: AsyncEngine | None = None) -> bool:
    """Check if database connection is healthy."""
    target = target or engine
    try:
        async with target.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error("database_connection_failed", error=str(e))
        return False
