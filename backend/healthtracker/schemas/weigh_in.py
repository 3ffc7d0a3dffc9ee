"""
HealthTracker — WeighIn Request/Response Schemas
==================================================

What:  Body of POST /weight and items of GET /weight/last/{count}.
How:   The request model checks shape only (types, required fields, ISO
       date). Value ranges are enforced by the store's CHECK constraints.
"""

import datetime
from typing import Optional

from pydantic import Field

from healthtracker.schemas.common import CamelModel, IsoDate


class WeighInCreate(CamelModel):
    """Fields a client sends to log a weigh-in."""
    date: IsoDate = Field(description="Calendar date of the weigh-in (YYYY-MM-DD)")
    weight: float = Field(description="Body weight in pounds (100-300)")
    bmi: float = Field(description="Body-mass index, stored as given")
    fat: Optional[float] = Field(default=None, description="Body fat percentage (0-100)")
    muscle: Optional[float] = Field(default=None, description="Muscle percentage (0-100)")
    resting_metab: Optional[int] = Field(
        default=None, description="Resting metabolic rate in kcal (> 1000)"
    )
    visceral_fat: Optional[int] = Field(
        default=None, description="Visceral fat level (10-30)"
    )


class WeighInRead(CamelModel):
    """A stored weigh-in, including its server-assigned id."""
    id: int = Field(description="Server-assigned identifier")
    date: datetime.date
    weight: float
    bmi: float
    fat: Optional[float] = None
    muscle: Optional[float] = None
    resting_metab: Optional[int] = None
    visceral_fat: Optional[int] = None
