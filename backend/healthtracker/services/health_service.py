"""
HealthTracker — Health & About Service
========================================

What:  Liveness probe and aggregate status built on a RecordStore.
Who:   Called by routes/health.py for GET /health and GET /about.

Degradation rules for get_about_info():
    Each of the four aggregates is read on its own. A failing read falls
    back to its zero value (0 or None) and the others are still reported.
    If all four fail the response is all zeros with status 200, the same as
    an empty store; the log is the only place that tells them apart.
"""

import logging
from typing import Awaitable, Callable, List, TypeVar

from healthtracker import __version__
from healthtracker.exceptions import HealthTrackerError
from healthtracker.schemas.status import AboutInfo
from healthtracker.services.status_base import StatusService
from healthtracker.services.store_base import RecordStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class HealthService(StatusService):
    """Store-backed StatusService. Holds no state besides its collaborators."""

    def __init__(self, store: RecordStore, api_version: str = __version__):
        self.store = store
        self.api_version = api_version

    async def is_healthy(self) -> bool:
        try:
            await self.store.ping()
        except Exception as e:
            logger.warning("Health check: store unreachable: %s", e)
            return False
        return True

    async def get_about_info(self) -> AboutInfo:
        """
        Assemble AboutInfo from four sequential store round trips.

        No caching: the answer always reflects the store at request time.
        """
        failed: List[str] = []
        weigh_ins_count = await self._read_or_default(
            self.store.count_weigh_ins, 0, "weigh-in count", failed
        )
        runs_count = await self._read_or_default(
            self.store.count_runs, 0, "run count", failed
        )
        last_weigh_in = await self._read_or_default(
            self.store.last_weigh_in_date, None, "last weigh-in date", failed
        )
        last_run = await self._read_or_default(
            self.store.last_run_date, None, "last run date", failed
        )

        if len(failed) == 4:
            logger.error("About: store unreachable for every aggregate; reporting zero values")

        return AboutInfo(
            api_version=self.api_version,
            weigh_ins_count=weigh_ins_count,
            runs_count=runs_count,
            last_weigh_in_date=last_weigh_in,
            last_run_date=last_run,
        )

    async def _read_or_default(
        self,
        read: Callable[[], Awaitable[T]],
        default: T,
        label: str,
        failed: List[str],
    ) -> T:
        try:
            return await read()
        except Exception as e:
            failed.append(label)
            reason = e.message if isinstance(e, HealthTrackerError) else repr(e)
            logger.warning("About: could not read %s (%s); using %r", label, reason, default)
            return default
