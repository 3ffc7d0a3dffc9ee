"""
HealthTracker — Shared Schema Pieces
======================================

What:  Base model config and the ISO date type used by request bodies, plus
       the error envelope returned by every failing endpoint.
"""

import re
from datetime import date
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


def _require_iso_date(value: Any) -> Any:
    """
    Accept only YYYY-MM-DD strings (or date objects).

    Pydantic alone would also take unix timestamps and full datetimes; those
    would break the "text order == calendar order" rule of the date column.
    """
    if isinstance(value, date):
        return value
    if isinstance(value, str) and _ISO_DATE.fullmatch(value):
        return value
    raise ValueError("date must be an ISO-8601 calendar date (YYYY-MM-DD)")


IsoDate = Annotated[date, BeforeValidator(_require_iso_date)]


class CamelModel(BaseModel):
    """
    Base for API models: camelCase on the wire, snake_case in Python.

    Floats must be finite. JSON like 1e999 or NaN would otherwise be stored
    as inf/nan and serialized back as null.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        allow_inf_nan=False,
    )


class ErrorResponse(BaseModel):
    """
    Error envelope for all 4xx/5xx responses.

    Example:
        {
            "error": "validation_error",
            "message": "distance must be greater than 0",
            "details": {"field": "distance"},
            "request_id": "3f2a9c1e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Field-level context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
