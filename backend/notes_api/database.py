"""
Notes API — Store Plumbing
===========================

One async engine per process and a session per request. The session is the
store handle: services receive it as an argument and never open their own,
so a request's reads and writes share one transaction that commits when
the route returns and rolls back if it raises.

SQLite (the default) runs on the dialect's own pool; server databases get
a sized, pre-pinged pool that recycles connections hourly.
"""

import logging
from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from notes_api.config import settings

logger = logging.getLogger(__name__)


def _engine_options() -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


engine = create_async_engine(settings.database_url, **_engine_options())

# Notes stay readable after commit so responses can be built from them
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Declarative base; its metadata feeds init_models() and Alembic."""


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding the request's session.

    Commits after the route returns, rolls back and re-raises if anything
    below it raised.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_models() -> None:
    """Create missing tables from the ORM metadata; existing ones are untouched."""
    from notes_api.models.note import Note  # noqa: F401  (registers the table)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready")


async def dispose_engine() -> None:
    await engine.dispose()
