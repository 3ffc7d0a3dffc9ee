"""
HealthTracker — Run Request/Response Schemas
==============================================

What:  Body of POST /run and items of GET /run/last/{count}.
"""

import datetime

from pydantic import Field

from healthtracker.schemas.common import CamelModel, IsoDate


class RunCreate(CamelModel):
    date: IsoDate = Field(description="Calendar date of the run (YYYY-MM-DD)")
    distance: float = Field(description="Distance covered, must be > 0")
    distance_unit: str = Field(description='Unit label for distance, e.g. "mi" or "km"')
    time: int = Field(description="Duration in whole seconds")


class RunRead(CamelModel):
    id: int = Field(description="Server-assigned identifier")
    date: datetime.date
    distance: float
    distance_unit: str
    time: int
