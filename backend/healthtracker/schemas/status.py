"""
HealthTracker — Status Schemas
================================

What:  Payloads of GET /about and GET /health.
Who:   Produced by HealthService; AboutInfo is also parsed by the CLI client,
       so this module is the shared contract between the two processes.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from healthtracker.schemas.common import CamelModel


class AboutInfo(CamelModel):
    """
    Aggregate status computed fresh on every request (never cached).

    Counts are 0 and dates are null both for an empty store and for an
    aggregate that could not be read (see HealthService.get_about_info).
    """
    api_version: str = Field(description="Version of the running API")
    weigh_ins_count: int = Field(default=0, ge=0)
    runs_count: int = Field(default=0, ge=0)
    last_weigh_in_date: Optional[date] = None
    last_run_date: Optional[date] = None


class HealthStatus(BaseModel):
    """Liveness probe payload: status is "Healthy" (200) or "Unhealthy" (503)."""
    status: str = Field(description="Healthy or Unhealthy")
    message: str = Field(description="Short human-readable explanation")
