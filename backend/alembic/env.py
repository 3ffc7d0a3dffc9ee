"""
Alembic Migration Environment
===============================

What:  Runs the versioned HealthTracker migrations against a SQLite file.
How:   Uses the async aiosqlite engine, the same driver as the API.
Who:   `alembic -c backend/alembic.ini upgrade head`, or alembic.command
       with a programmatic Config (tests).

URL resolution:
    1. sqlalchemy.url on the Alembic Config, if set
    2. Settings().database_url (HEALTH_TRACKER_DB_PATH → .env → default)

The API does not need these migrations: it creates missing tables itself at
startup. They exist for operators who manage the schema out of band, and
revision 001 produces the same tables as Database.initialize().
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config
from alembic import context

from healthtracker.config import Settings
from healthtracker.database import Base

# Registers WeighIn and Run with Base.metadata for --autogenerate
from healthtracker import models  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata

if not config.get_main_option("sqlalchemy.url"):
    config.set_main_option("sqlalchemy.url", Settings().database_url)


def run_migrations_offline() -> None:
    """Emit SQL to stdout without connecting (alembic upgrade --sql)."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    # SQLite cannot ALTER most constraints in place; batch mode recreates tables
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
