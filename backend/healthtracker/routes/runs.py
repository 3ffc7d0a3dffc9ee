"""
HealthTracker — Run Route Handlers
====================================

What:  POST /run and GET /run/last/{count}.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status

from healthtracker.dependencies import get_store
from healthtracker.schemas.common import ErrorResponse
from healthtracker.schemas.run import RunCreate, RunRead
from healthtracker.services.store_base import RecordStore

router = APIRouter(prefix="/run", tags=["Runs"])


@router.post(
    "",
    response_model=RunRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing, malformed or out-of-range field", "model": ErrorResponse},
        503: {"description": "Data store unavailable", "model": ErrorResponse},
    },
    summary="Log a run",
)
async def create_run(
    payload: RunCreate,
    store: RecordStore = Depends(get_store),
) -> RunRead:
    return await store.insert_run(payload)


@router.get(
    "/last/{count}",
    response_model=List[RunRead],
    responses={400: {"description": "count is not a non-negative integer", "model": ErrorResponse}},
    summary="Most recent runs, newest first",
)
async def list_last_runs(
    count: int = Path(ge=0, description="Maximum number of runs to return"),
    store: RecordStore = Depends(get_store),
) -> List[RunRead]:
    return await store.list_recent_runs(count)
