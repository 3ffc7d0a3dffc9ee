"""
HealthTracker — Exception Hierarchy
=====================================

What:  Application errors raised by the store and services, mapped to HTTP
       responses by the handlers registered in main.py.
How:   Each exception carries a client-safe message plus a context dict.
       The context is logged server-side and never returned to the client.

Exception Hierarchy:
    HealthTrackerError (base)
    ├── ValidationError          → 400 Bad Request
    ├── StoreUnavailableError    → 503 Service Unavailable
    ├── DatabaseError            → 500 Internal Server Error
    └── RequestTimeoutError      → 504 Gateway Timeout

    SQLAlchemy and sqlite3 exceptions are translated into these types inside
    the record store and never travel further up.
"""

from typing import Any, Dict, Optional


class HealthTrackerError(Exception):
    """
    Base exception for all HealthTracker errors.

    Attributes:
        message:  Error description that is safe to return in an API response
        context:  Debug details (paths, driver messages); logged only
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(HealthTrackerError):
    """
    A record was rejected because a field is missing, malformed or out of range.

    Raised by the record store when SQLite reports a CHECK constraint
    violation, and built by the HTTP layer from request-shape errors.
    Never retried.

    Example response:
        {
            "error": "validation_error",
            "message": "weight must be between 100 and 300 pounds",
            "details": {"field": "weight"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class StoreUnavailableError(HealthTrackerError):
    """
    The SQLite file could not be opened or queried.

    Typical causes: missing parent directory, permission denied, a lock held
    past db_connect_timeout. Health and about endpoints turn this into an
    "unhealthy" signal instead of an error response.
    """

    def __init__(
        self,
        message: str = "The data store is currently unavailable. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(HealthTrackerError):
    """Unexpected store failure that is neither a constraint nor a connection problem."""

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RequestTimeoutError(HealthTrackerError):
    """
    A request ran longer than the configured request_timeout.

    A timed-out create may or may not have committed. Clients should re-query
    (e.g. GET /weight/last/1) before sending the same record again.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"The request did not complete within {timeout:g} seconds. "
            "It may or may not have been applied; check before retrying."
        )
        ctx = context or {}
        ctx["timeout"] = timeout
        super().__init__(message=message, context=ctx)
        self.timeout = timeout
