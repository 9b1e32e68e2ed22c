"""PostgreSQL engine and request-scoped sessions.

Postgres always holds achievement status rows. Users, alumni and employment
live here too when ``STORAGE_BACKEND`` is ``postgres``.
"""

import logging
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from alumni_api.config import settings

logger = logging.getLogger(__name__)

engine = create_async_engine(
    settings.POSTGRES_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
    pool_size=settings.POSTGRES_POOL_SIZE,
    max_overflow=settings.POSTGRES_MAX_OVERFLOW,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


async def init_postgres() -> None:
    """Create any missing tables."""
    from alumni_api.models.sql import achievement, alumni, employment, user  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("PostgreSQL ready, tables: %s", ", ".join(sorted(Base.metadata.tables)))


async def close_postgres() -> None:
    await engine.dispose()


async def ping_postgres() -> bool:
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    return True


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request, committed when the handler returns cleanly.

    Any exception rolls the whole request back, including achievement rows
    written before a failing MongoDB call.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
