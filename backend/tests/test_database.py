"""
HealthTracker — Database Initialization Tests
===============================================

What:  Schema creation against real SQLite files in tmp_path.

What we test:
    ✅ initialize() creates weighins and runs with the documented columns
    ✅ A second initialize() changes nothing and keeps existing rows
    ✅ An unopenable path raises StoreUnavailableError
"""

import datetime

import pytest

from healthtracker.database import Database
from healthtracker.exceptions import StoreUnavailableError
from healthtracker.schemas.weigh_in import WeighInCreate
from healthtracker.services.sqlite_store import SQLiteRecordStore

WEIGHINS_COLUMNS = [
    "id", "date", "weight", "bmi", "fat", "muscle", "restingMetab", "visceralFat",
]
RUNS_COLUMNS = ["id", "date", "distance", "distanceUnit", "time"]


class TestInitialize:

    @pytest.mark.asyncio
    async def test_creates_both_tables(self, database):
        columns = await database.table_columns()

        assert set(columns) == {"weighins", "runs"}
        assert columns["weighins"] == WEIGHINS_COLUMNS
        assert columns["runs"] == RUNS_COLUMNS

    @pytest.mark.asyncio
    async def test_second_call_is_a_noop(self, database):
        store = SQLiteRecordStore(database)
        await store.insert_weigh_in(
            WeighInCreate(date=datetime.date(2025, 6, 1), weight=180.0, bmi=24.0)
        )
        before = await database.table_columns()

        await database.initialize()

        assert await database.table_columns() == before
        assert await store.count_weigh_ins() == 1

    @pytest.mark.asyncio
    async def test_reopening_existing_file_keeps_rows(self, test_settings):
        first = Database(test_settings)
        await first.initialize()
        await SQLiteRecordStore(first).insert_weigh_in(
            WeighInCreate(date=datetime.date(2025, 6, 1), weight=180.0, bmi=24.0)
        )
        await first.dispose()

        second = Database(test_settings)
        try:
            await second.initialize()
            assert await SQLiteRecordStore(second).count_weigh_ins() == 1
        finally:
            await second.dispose()

    @pytest.mark.asyncio
    async def test_unreachable_path_raises(self, unreachable_settings):
        db = Database(unreachable_settings)
        try:
            with pytest.raises(StoreUnavailableError) as exc_info:
                await db.initialize()
        finally:
            await db.dispose()

        assert exc_info.value.context["operation"] == "initialize"

    def test_constructing_does_not_touch_the_file(self, unreachable_settings):
        db = Database(unreachable_settings)
        assert db.url.startswith("sqlite+aiosqlite:///")
