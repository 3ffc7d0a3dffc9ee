"""
HealthTracker — Weigh-in Route Handlers
=========================================

What:  POST /weight and GET /weight/last/{count}.
How:   Delegates straight to the RecordStore. A rejected record surfaces as
       ValidationError, which main.py maps to 400.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status

from healthtracker.dependencies import get_store
from healthtracker.schemas.common import ErrorResponse
from healthtracker.schemas.weigh_in import WeighInCreate, WeighInRead
from healthtracker.services.store_base import RecordStore

router = APIRouter(prefix="/weight", tags=["Weigh-ins"])


@router.post(
    "",
    response_model=WeighInRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing, malformed or out-of-range field", "model": ErrorResponse},
        503: {"description": "Data store unavailable", "model": ErrorResponse},
    },
    summary="Log a weigh-in",
)
async def create_weigh_in(
    payload: WeighInCreate,
    store: RecordStore = Depends(get_store),
) -> WeighInRead:
    """
    Store a weigh-in and return it with its assigned id.

    Range rules (enforced by the store):
        weight 100-300 lb, fat/muscle 0-100 %, restingMetab > 1000,
        visceralFat 10-30. bmi is stored as given.
    """
    return await store.insert_weigh_in(payload)


@router.get(
    "/last/{count}",
    response_model=List[WeighInRead],
    responses={400: {"description": "count is not a non-negative integer", "model": ErrorResponse}},
    summary="Most recent weigh-ins, newest first",
)
async def list_last_weigh_ins(
    count: int = Path(ge=0, description="Maximum number of weigh-ins to return"),
    store: RecordStore = Depends(get_store),
) -> List[WeighInRead]:
    """Returns fewer than `count` items when fewer exist; [] for an empty store."""
    return await store.list_recent_weigh_ins(count)
