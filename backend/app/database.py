"""
StrayLink Backend — Database Access
=====================================

What:  The async engine, the session factory and the per-request session
       dependency used by every route.

Hosted database:
    Pets, reports and knowledge articles live in a hosted PostgreSQL
    instance whose tables are managed by the hosting platform. We connect to
    it like any other PostgreSQL server (asyncpg driver). Row-level security
    still applies to the role in DATABASE_URL.

Pool settings:
    pool_size / max_overflow:  DB_POOL_SIZE / DB_MAX_OVERFLOW
    pool_pre_ping:             hosted databases drop idle connections
    pool_recycle=1800:         never hold a connection longer than 30 minutes
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import settings

POOL_RECYCLE_SECONDS = 1800

engine = create_async_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_pre_ping=settings.db_pool_pre_ping,
    pool_recycle=POOL_RECYCLE_SECONDS,
    echo=settings.log_level == "DEBUG",
)

# Loaded rows stay readable after commit; responses are built after the
# dependency has committed.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Declarative base; Alembic reads Base.metadata."""


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    One session per request.

    Commits when the handler returns (the view counter is the only write),
    rolls back and re-raises when it fails.

        @router.get("/articles/{slug_or_id}")
        async def get_article(slug_or_id: str, db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def dispose_engine() -> None:
    """Close pooled connections; called from the lifespan on shutdown."""
    await engine.dispose()
