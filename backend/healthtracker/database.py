"""
HealthTracker — Database Engine, Sessions and Schema Initialization
=====================================================================

What:  Async SQLAlchemy engine over SQLite (aiosqlite driver), a session
       context manager, and the idempotent table creation run at startup.
How:   One Database object per process, built from Settings by create_app()
       and stored on app.state. Sessions are acquired per operation and
       always released, including on error paths.
Who:   The record store (sessions), the lifespan handler (initialize/dispose).

Connection notes:
    SQLite only opens the file on first use, so constructing Database never
    fails. The first session (or initialize()) is where a bad path surfaces,
    as StoreUnavailableError.
    connect_args["timeout"] is sqlite3's busy timeout; it bounds how long an
    open waits on a locked file.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import inspect
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from healthtracker.config import Settings
from healthtracker.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for the ORM models.

    Alembic (backend/alembic/env.py) and Database.initialize() both read
    Base.metadata, so every model module must be imported before either runs.
    """
    pass


class Database:
    """
    Owns the engine and session factory for one SQLite file.

    Usage:
        database = Database(settings)
        await database.initialize()
        async with database.session() as session:
            await session.execute(...)
        await database.dispose()
    """

    def __init__(self, settings: Settings):
        self.url = settings.database_url
        self.engine = create_async_engine(
            settings.database_url,
            connect_args={"timeout": settings.db_connect_timeout},
            echo=settings.log_level == "DEBUG",
        )
        # expire_on_commit=False: rows are read after commit to build responses
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def initialize(self) -> None:
        """
        Create the weighins and runs tables if they do not exist yet.

        Equivalent to CREATE TABLE IF NOT EXISTS for each table: existing
        tables are left untouched (no ALTER), so calling this repeatedly is a
        no-op after the first success.

        Raises:
            StoreUnavailableError: the file cannot be opened or created.
        """
        # Registers WeighIn and Run on Base.metadata
        from healthtracker import models  # noqa: F401

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all, checkfirst=True)
        except DBAPIError as e:
            logger.error("Database initialization failed: %s", e.orig)
            raise StoreUnavailableError(
                context={"operation": "initialize", "driver_error": str(e.orig)},
            ) from e

        logger.info("Database schema ready (tables: %s)", ", ".join(Base.metadata.tables))

    async def table_columns(self) -> dict:
        """Map each existing table name to its column names. Used for diagnostics and tests."""
        def _inspect(sync_conn):
            inspector = inspect(sync_conn)
            return {
                table: [column["name"] for column in inspector.get_columns(table)]
                for table in inspector.get_table_names()
            }

        async with self.engine.connect() as conn:
            return await conn.run_sync(_inspect)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Acquire a session, commit on success, roll back on error, always close.

        Exceptions from the body are re-raised unchanged; translating them
        into application errors is the record store's job.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                try:
                    await session.rollback()
                except SQLAlchemyError as rollback_error:
                    logger.warning("Rollback failed: %s", rollback_error)
                raise

    async def dispose(self) -> None:
        """Close every pooled connection. Called from the lifespan shutdown."""
        await self.engine.dispose()
