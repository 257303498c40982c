"""
Alembic environment for the notes schema.

The URL comes from notes_api settings rather than alembic.ini, so
`alembic upgrade head` migrates whatever DATABASE_URL points at. SQLite
migrations run in batch mode because it cannot ALTER columns in place.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine
from alembic import context

from notes_api.config import settings
from notes_api.database import Base
from notes_api.models.note import Note  # noqa: F401  (autogenerate needs the table)

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=Base.metadata,
        render_as_batch=settings.is_sqlite,
        compare_type=True,
        **kwargs,
    )


def _migrate(connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def _migrate_online() -> None:
    engine = create_async_engine(settings.database_url, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    # SQL script to stdout, no connection
    _configure(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()
else:
    asyncio.run(_migrate_online())
