"""
Alembic Migration Environment
===============================

What:  Runs the contacts-table migrations against DATABASE_URL.
How:   Offline mode renders SQL with literal binds. Online mode opens one
       unpooled async connection and applies pending revisions through
       connection.run_sync().
Who:   Called by `alembic` CLI commands (upgrade, downgrade, revision).
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from portfolio_api.config import settings
from portfolio_api.database import Base

# Registers the contacts table on Base.metadata
from portfolio_api.models.submission import Submission  # noqa: F401

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)


def _migrate(**configure_kwargs) -> None:
    context.configure(target_metadata=Base.metadata, **configure_kwargs)
    with context.begin_transaction():
        context.run_migrations()


async def _migrate_online() -> None:
    engine = create_async_engine(settings.database_url, poolclass=NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(lambda sync_conn: _migrate(connection=sync_conn))
    finally:
        await engine.dispose()


if context.is_offline_mode():
    _migrate(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    asyncio.run(_migrate_online())
