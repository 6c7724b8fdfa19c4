"""Alembic environment for the backoffice schema (async engine).

DATABASE_URL wins over alembic.ini so migrations hit the same database as the
app. Only the URL helper is taken from config: migrations must not require
SESSION_SECRET or the rest of Settings.
"""

import asyncio
import os
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

import backoffice.models  # noqa: F401
from backoffice.config import async_database_url
from backoffice.db.base import Base

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

database_url = os.environ.get("DATABASE_URL")
if database_url:
    # configparser interpolation: escape % in passwords
    config.set_main_option(
        "sqlalchemy.url", async_database_url(database_url).replace("%", "%%"),
    )


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=Base.metadata, compare_type=True, **kwargs,
    )
    with context.begin_transaction():
        context.run_migrations()


async def _migrate_online() -> None:
    engine = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    async with engine.connect() as connection:
        await connection.run_sync(
            lambda sync_conn: _configure(connection=sync_conn),
        )
    await engine.dispose()


if context.is_offline_mode():
    _configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    asyncio.run(_migrate_online())
