"""
HealthTracker — Alembic Migration Tests
=========================================

What:  Revision 001 against a fresh SQLite file.
How:   alembic.command with a programmatic Config. env.py calls
       asyncio.run(), so upgrade/downgrade run in a worker thread.

What we test:
    ✅ upgrade head creates the same tables/columns as Database.initialize()
    ✅ initialize() on a migrated file is a no-op and inserts still work
    ✅ The migrated CHECK constraints reject the same values
    ✅ downgrade base removes both tables
"""

import asyncio
import datetime
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config

from healthtracker.database import Database
from healthtracker.exceptions import ValidationError
from healthtracker.schemas.weigh_in import WeighInCreate
from healthtracker.services.sqlite_store import SQLiteRecordStore

ALEMBIC_DIR = Path(__file__).resolve().parents[1] / "alembic"


def alembic_config(settings) -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", str(ALEMBIC_DIR))
    cfg.set_main_option("sqlalchemy.url", settings.database_url)
    return cfg


class TestMigrations:

    @pytest.mark.asyncio
    async def test_upgrade_matches_initialize(self, tmp_path, test_settings):
        await asyncio.to_thread(command.upgrade, alembic_config(test_settings), "head")

        migrated = Database(test_settings)
        reference = Database(
            test_settings.model_copy(update={"db_path": str(tmp_path / "reference.db")})
        )
        try:
            await reference.initialize()
            migrated_columns = await migrated.table_columns()
            reference_columns = await reference.table_columns()
        finally:
            await migrated.dispose()
            await reference.dispose()

        assert "alembic_version" in migrated_columns
        for table in ("weighins", "runs"):
            assert migrated_columns[table] == reference_columns[table]

    @pytest.mark.asyncio
    async def test_initialize_after_upgrade(self, test_settings):
        await asyncio.to_thread(command.upgrade, alembic_config(test_settings), "head")

        db = Database(test_settings)
        store = SQLiteRecordStore(db)
        try:
            await db.initialize()
            stored = await store.insert_weigh_in(
                WeighInCreate(date=datetime.date(2025, 6, 1), weight=180.0, bmi=24.0)
            )
            with pytest.raises(ValidationError) as exc_info:
                await store.insert_weigh_in(
                    WeighInCreate(date=datetime.date(2025, 6, 1), weight=180.0, bmi=24.0, visceral_fat=40)
                )
        finally:
            await db.dispose()

        assert stored.id > 0
        assert exc_info.value.field == "visceralFat"

    @pytest.mark.asyncio
    async def test_downgrade_removes_tables(self, test_settings):
        cfg = alembic_config(test_settings)
        await asyncio.to_thread(command.upgrade, cfg, "head")
        await asyncio.to_thread(command.downgrade, cfg, "base")

        db = Database(test_settings)
        try:
            columns = await db.table_columns()
        finally:
            await db.dispose()

        assert "weighins" not in columns
        assert "runs" not in columns
