"""
HealthTracker — Abstract Record Store Interface
=================================================

What:  The data-access contract for weigh-ins and runs.
How:   SQLiteRecordStore is the production implementation; tests substitute
       an in-memory double. The chosen implementation is wired in once by
       create_app() and reached through healthtracker.dependencies.

Contract (every implementation):
    - Returns/accepts Pydantic schemas, never ORM rows or driver objects
    - Store unreachable          → StoreUnavailableError
    - Range/constraint violation → ValidationError (with the field name)
    - Empty tables are not errors: 0, None or [] as appropriate
"""

import datetime
from abc import ABC, abstractmethod
from typing import AsyncContextManager, List, Optional

from healthtracker.schemas.run import RunCreate, RunRead
from healthtracker.schemas.weigh_in import WeighInCreate, WeighInRead


class RecordStore(ABC):
    """Persistence for the two immutable record types plus their aggregates."""

    @abstractmethod
    def open(self) -> AsyncContextManager:
        """
        Acquire a live connection handle for the duration of an async with block.

        The handle is released on every exit path. Raises
        StoreUnavailableError if the store cannot be reached.
        """
        ...

    @abstractmethod
    async def ping(self) -> None:
        """Round-trip a trivial query. Raises StoreUnavailableError on failure."""
        ...

    @abstractmethod
    async def insert_weigh_in(self, record: WeighInCreate) -> WeighInRead:
        """Persist a weigh-in and return it with its assigned id."""
        ...

    @abstractmethod
    async def insert_run(self, record: RunCreate) -> RunRead:
        """Persist a run and return it with its assigned id."""
        ...

    @abstractmethod
    async def count_weigh_ins(self) -> int:
        ...

    @abstractmethod
    async def count_runs(self) -> int:
        ...

    @abstractmethod
    async def last_weigh_in_date(self) -> Optional[datetime.date]:
        """Most recent weigh-in date, or None when there are no weigh-ins."""
        ...

    @abstractmethod
    async def last_run_date(self) -> Optional[datetime.date]:
        """Most recent run date, or None when there are no runs."""
        ...

    @abstractmethod
    async def list_recent_weigh_ins(self, count: int) -> List[WeighInRead]:
        """Up to `count` weigh-ins, newest first."""
        ...

    @abstractmethod
    async def list_recent_runs(self, count: int) -> List[RunRead]:
        """Up to `count` runs, newest first."""
        ...
