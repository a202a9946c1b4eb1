"""Alembic environment for the authbase user store.

The database URL comes from ``sqlalchemy.url`` in alembic.ini when set, and
from ``AUTHBASE_DATABASE_URL`` otherwise. Online migrations run over the
async driver through ``run_sync``.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from authbase.core.config import get_settings
from authbase.infrastructure.persistence import models  # noqa: F401
from authbase.infrastructure.persistence.database import Base

alembic_config = context.config
if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name)

if not alembic_config.get_main_option("sqlalchemy.url"):
    alembic_config.set_main_option("sqlalchemy.url", get_settings().database_url)

database_url = alembic_config.get_main_option("sqlalchemy.url") or ""
migration_options = {
    "target_metadata": Base.metadata,
    # SQLite can't ALTER most columns in place
    "render_as_batch": database_url.startswith("sqlite"),
}


def run_offline() -> None:
    """Emit the migration SQL to stdout without connecting."""
    context.configure(
        url=database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **migration_options,
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    context.configure(connection=connection, **migration_options)
    with context.begin_transaction():
        context.run_migrations()


async def run_online() -> None:
    engine = async_engine_from_config(
        alembic_config.get_section(alembic_config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    asyncio.run(run_online())
