"""
HealthTracker — SQLite Record Store
=====================================

What:  RecordStore implementation on async SQLAlchemy + aiosqlite.
How:   Every operation runs inside open(), which acquires a session from
       Database, forces the connection, and translates driver errors:

           sqlalchemy.exc.IntegrityError    → ValidationError
           sqlalchemy.exc.OperationalError  → StoreUnavailableError
           any other SQLAlchemyError        → DatabaseError

       Nothing above this module sees a SQLAlchemy or sqlite3 exception.

Query plans:
    Last N / last date:  ORDER BY date DESC, id DESC LIMIT :n
                         (idx_<table>_date; id breaks same-day ties so the
                         most recently logged row comes first)
    Counts:              SELECT count(*) FROM <table>
"""

import datetime
import logging
import re
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, Type

from pydantic import BaseModel
from sqlalchemy import func, select, text
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from healthtracker.database import Base, Database
from healthtracker.exceptions import (
    DatabaseError,
    HealthTrackerError,
    StoreUnavailableError,
    ValidationError,
)
from healthtracker.models import run as run_model
from healthtracker.models import weigh_in as weigh_in_model
from healthtracker.models.run import Run
from healthtracker.models.weigh_in import WeighIn
from healthtracker.schemas.run import RunCreate, RunRead
from healthtracker.schemas.weigh_in import WeighInCreate, WeighInRead
from healthtracker.services.store_base import RecordStore

logger = logging.getLogger(__name__)

_CHECK_CONSTRAINTS = {
    **weigh_in_model.CHECK_CONSTRAINTS,
    **run_model.CHECK_CONSTRAINTS,
}

_NOT_NULL = re.compile(r"NOT NULL constraint failed: \w+\.(\w+)")

# Largest value SQLite can bind as INTEGER; bigger limits overflow the driver
SQLITE_MAX_INTEGER = 2**63 - 1


def _constraint_violation(error: IntegrityError) -> ValidationError:
    """Build a field-level ValidationError from SQLite's constraint message."""
    detail = str(error.orig)
    for name, (field, message) in _CHECK_CONSTRAINTS.items():
        if name in detail:
            return ValidationError(message=message, field=field, context={"constraint": name})

    match = _NOT_NULL.search(detail)
    if match:
        field = match.group(1)
        return ValidationError(message=f"{field} is required", field=field)

    return ValidationError(
        message="The record violates a data constraint",
        context={"driver_error": detail},
    )


class SQLiteRecordStore(RecordStore):
    """
    Stateless apart from the shared Database; safe to use from concurrent
    requests. SQLite serializes the writers.
    """

    def __init__(self, database: Database):
        self.database = database

    @asynccontextmanager
    async def open(self) -> AsyncIterator[AsyncSession]:
        try:
            async with self.database.session() as session:
                # Connect now so an unreachable file fails here, not mid-query
                await session.connection()
                yield session
        except HealthTrackerError:
            raise
        except IntegrityError as e:
            violation = _constraint_violation(e)
            logger.info("Rejected record: %s", violation.message)
            raise violation from e
        except OperationalError as e:
            logger.warning("Store unavailable: %s", e.orig)
            raise StoreUnavailableError(context={"driver_error": str(e.orig)}) from e
        except SQLAlchemyError as e:
            logger.error("Unexpected database error: %s", e, exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__}) from e

    async def ping(self) -> None:
        async with self.open() as session:
            await session.execute(text("SELECT 1"))

    # ── Inserts ───────────────────────────────────────────────────────────

    async def insert_weigh_in(self, record: WeighInCreate) -> WeighInRead:
        row = WeighIn(
            date=record.date.isoformat(),
            weight=record.weight,
            bmi=record.bmi,
            fat=record.fat,
            muscle=record.muscle,
            resting_metab=record.resting_metab,
            visceral_fat=record.visceral_fat,
        )
        async with self.open() as session:
            session.add(row)
            await session.flush()  # assigns id; commit happens on exit

        logger.info("Weigh-in %d stored for %s", row.id, row.date)
        return WeighInRead.model_validate(row)

    async def insert_run(self, record: RunCreate) -> RunRead:
        row = Run(
            date=record.date.isoformat(),
            distance=record.distance,
            distance_unit=record.distance_unit,
            time=record.time,
        )
        async with self.open() as session:
            session.add(row)
            await session.flush()

        logger.info("Run %d stored for %s", row.id, row.date)
        return RunRead.model_validate(row)

    # ── Aggregates ────────────────────────────────────────────────────────

    async def count_weigh_ins(self) -> int:
        return await self._count(WeighIn)

    async def count_runs(self) -> int:
        return await self._count(Run)

    async def last_weigh_in_date(self) -> Optional[datetime.date]:
        return await self._last_date(WeighIn)

    async def last_run_date(self) -> Optional[datetime.date]:
        return await self._last_date(Run)

    async def list_recent_weigh_ins(self, count: int) -> List[WeighInRead]:
        return await self._list_recent(WeighIn, WeighInRead, count)

    async def list_recent_runs(self, count: int) -> List[RunRead]:
        return await self._list_recent(Run, RunRead, count)

    async def _count(self, model: Type[Base]) -> int:
        async with self.open() as session:
            result = await session.execute(select(func.count()).select_from(model))
            return result.scalar_one()

    async def _last_date(self, model) -> Optional[datetime.date]:
        async with self.open() as session:
            result = await session.execute(
                select(model.date).order_by(model.date.desc()).limit(1)
            )
            value = result.scalar_one_or_none()
        if not value:
            return None
        try:
            return datetime.date.fromisoformat(value)
        except ValueError as e:
            # Rows written out of band (e.g. full timestamps) are not ISO dates
            logger.error("Unreadable date %r in %s", value, model.__tablename__)
            raise DatabaseError(
                context={"table": model.__tablename__, "stored_date": value},
            ) from e

    async def _list_recent(self, model, schema: Type[BaseModel], count: int) -> list:
        # SQLite treats a negative LIMIT as "no limit"
        if count <= 0:
            return []
        async with self.open() as session:
            result = await session.execute(
                select(model)
                .order_by(model.date.desc(), model.id.desc())
                .limit(min(count, SQLITE_MAX_INTEGER))
            )
            rows = result.scalars().all()
        return [schema.model_validate(row) for row in rows]
