"""Database engine and session management."""

from typing import Any, AsyncGenerator

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from core.config import settings
from infrastructure.database.models import Base

logger = structlog.get_logger()


def _engine_options(url: str) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": settings.debug}
    if url.startswith("sqlite"):
        return options

    options["pool_pre_ping"] = True
    if settings.database_behind_pooler:
        # asyncpg's prepared statement cache breaks under transaction-mode pooling
        options["connect_args"] = {"statement_cache_size": 0}
    return options


engine = create_async_engine(
    settings.async_database_url,
    **_engine_options(settings.async_database_url),
)

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def create_tables() -> None:
    """Create the users, profiles and posts tables if they are missing."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("database_tables_ready", tables=sorted(Base.metadata.tables))


async def dispose_engine() -> None:
    """Close every pooled connection."""
    await engine.dispose()


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database sessions."""
    async with async_session_factory() as session:
        yield session
