"""Alembic environment — migrations for the condo schema on the async engine.

Invariants:
    - Target metadata is condo.db.base.Base with every condo.models table registered
    - Database URL comes from condo.config.Settings, the same source the API uses

Design Decisions:
    - Settings over a second copy of the URL logic: DATABASE_URL, .env and the
      postgresql:// rewrite behave exactly as at runtime
    - NullPool: a migration run opens one connection and exits
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context

from condo.config import get_settings
from condo.db.base import Base
import condo.models  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata
database_url = get_settings().database_url


def _configure_and_run(**configure_kwargs) -> None:
    context.configure(target_metadata=target_metadata, **configure_kwargs)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of executing it."""
    _configure_and_run(
        url=database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )


def _run_on_connection(connection: Connection) -> None:
    _configure_and_run(connection=connection)


async def run_migrations_online() -> None:
    engine = create_async_engine(database_url, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_run_on_connection)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
