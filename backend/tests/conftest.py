"""
HealthTracker — Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own SQLite file under pytest's tmp_path, so tests
       never share rows and never touch a real healthtracker.db.

Fixture Hierarchy:
    test_settings / unreachable_settings   Settings pointing at a temp file
    ├── database                           initialized Database
    │   └── store                          SQLiteRecordStore over it
    ├── app                                create_app(test_settings), schema ready
    │   └── test_client                    HTTPX AsyncClient (ASGITransport)
    fake_store                             in-memory RecordStore double
    weigh_in_payload / run_payload         valid request bodies

ASGITransport does not run the lifespan, so the app fixture initializes the
schema itself.
"""

import datetime
import os
from contextlib import asynccontextmanager
from typing import List, Optional, Set

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Before any healthtracker import: the module-level app reads Settings()
os.environ.setdefault("HEALTH_TRACKER_LOG_LEVEL", "WARNING")

from healthtracker.config import Settings  # noqa: E402
from healthtracker.database import Database  # noqa: E402
from healthtracker.exceptions import StoreUnavailableError  # noqa: E402
from healthtracker.main import create_app  # noqa: E402
from healthtracker.schemas.run import RunCreate, RunRead  # noqa: E402
from healthtracker.schemas.weigh_in import WeighInCreate, WeighInRead  # noqa: E402
from healthtracker.services.sqlite_store import SQLiteRecordStore  # noqa: E402
from healthtracker.services.store_base import RecordStore  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# In-Memory Store Double
# ══════════════════════════════════════════════════════════════════════════

class FakeRecordStore(RecordStore):
    """
    RecordStore kept in two lists.

    Set `unavailable = True` to make every call raise StoreUnavailableError,
    or add method names to `failing` to break only those calls.
    """

    def __init__(self):
        self.weigh_ins: List[WeighInRead] = []
        self.runs: List[RunRead] = []
        self.unavailable = False
        self.failing: Set[str] = set()

    def _check(self, operation: str) -> None:
        if self.unavailable or operation in self.failing:
            raise StoreUnavailableError(context={"operation": operation})

    @asynccontextmanager
    async def open(self):
        self._check("open")
        yield self

    async def ping(self) -> None:
        self._check("ping")

    async def insert_weigh_in(self, record: WeighInCreate) -> WeighInRead:
        self._check("insert_weigh_in")
        stored = WeighInRead(id=len(self.weigh_ins) + 1, **record.model_dump())
        self.weigh_ins.append(stored)
        return stored

    async def insert_run(self, record: RunCreate) -> RunRead:
        self._check("insert_run")
        stored = RunRead(id=len(self.runs) + 1, **record.model_dump())
        self.runs.append(stored)
        return stored

    async def count_weigh_ins(self) -> int:
        self._check("count_weigh_ins")
        return len(self.weigh_ins)

    async def count_runs(self) -> int:
        self._check("count_runs")
        return len(self.runs)

    async def last_weigh_in_date(self) -> Optional[datetime.date]:
        self._check("last_weigh_in_date")
        return max((w.date for w in self.weigh_ins), default=None)

    async def last_run_date(self) -> Optional[datetime.date]:
        self._check("last_run_date")
        return max((r.date for r in self.runs), default=None)

    async def list_recent_weigh_ins(self, count: int) -> List[WeighInRead]:
        self._check("list_recent_weigh_ins")
        newest = sorted(self.weigh_ins, key=lambda w: (w.date, w.id), reverse=True)
        return newest[:max(count, 0)]

    async def list_recent_runs(self, count: int) -> List[RunRead]:
        self._check("list_recent_runs")
        newest = sorted(self.runs, key=lambda r: (r.date, r.id), reverse=True)
        return newest[:max(count, 0)]


# ══════════════════════════════════════════════════════════════════════════
# Settings & Storage
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings for a fresh database file; ignores any .env in the working directory."""
    return Settings(
        _env_file=None,
        db_path=str(tmp_path / "health.db"),
        log_level="WARNING",
    )


@pytest.fixture
def unreachable_settings(tmp_path) -> Settings:
    """Settings whose database lives in a directory that does not exist."""
    return Settings(
        _env_file=None,
        db_path=str(tmp_path / "missing" / "health.db"),
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def database(test_settings):
    db = Database(test_settings)
    await db.initialize()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def store(database) -> SQLiteRecordStore:
    return SQLiteRecordStore(database)


@pytest.fixture
def fake_store() -> FakeRecordStore:
    return FakeRecordStore()


# ══════════════════════════════════════════════════════════════════════════
# Application & HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def app(test_settings):
    application = create_app(test_settings)
    await application.state.database.initialize()
    yield application
    await application.state.database.dispose()


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Sample Data
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def weigh_in_payload() -> dict:
    return {"date": "2025-06-01", "weight": 180.5, "bmi": 24.5}


@pytest.fixture
def run_payload() -> dict:
    return {"date": "2025-06-02", "distance": 3.1, "distanceUnit": "mi", "time": 1800}
