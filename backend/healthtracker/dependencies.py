"""
HealthTracker — FastAPI Dependencies
======================================

What:  Hands the process-wide store and status service to route handlers.
How:   create_app() builds them once and stores them on app.state; these
       providers read them back per request. Tests swap implementations
       with app.dependency_overrides[get_store] = lambda: fake_store.
"""

from fastapi import Request

from healthtracker.services.status_base import StatusService
from healthtracker.services.store_base import RecordStore


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_status_service(request: Request) -> StatusService:
    return request.app.state.status_service
