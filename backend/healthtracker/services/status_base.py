"""
HealthTracker — Abstract Status Service Interface
===================================================

What:  Contract behind GET /health and GET /about.
How:   HealthService is the store-backed implementation; endpoint tests
       override the dependency with a stub.

Neither method raises for store problems: is_healthy() answers False and
get_about_info() answers with zero-valued fields. Callers can build a
liveness probe or a status screen without exception handling.
"""

from abc import ABC, abstractmethod

from healthtracker.schemas.status import AboutInfo


class StatusService(ABC):

    @abstractmethod
    async def is_healthy(self) -> bool:
        """True if a trivial query round-trips through the store."""
        ...

    @abstractmethod
    async def get_about_info(self) -> AboutInfo:
        """Version, record counts and most recent dates, computed fresh."""
        ...
