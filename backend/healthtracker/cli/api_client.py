"""
HealthTracker — API Client
============================

What:  The CLI's view of the HTTP API.
How:   HttpApiClient issues exactly one GET per call through httpx. Any
       network failure, non-2xx status or malformed payload is reported as
       None ("unreachable") instead of an exception, so command code has a
       single failure path to handle. No automatic retries.

Usage:
    with HttpApiClient("http://localhost:8000", timeout=5.0) as client:
        about = client.get_about_info()
        if about is None:
            ...  # API unreachable
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from healthtracker.schemas.status import AboutInfo

logger = logging.getLogger(__name__)


class ApiClient(ABC):
    """Contract consumed by the CLI commands; swap in a fake for tests."""

    @abstractmethod
    def get_about_info(self) -> Optional[AboutInfo]:
        """AboutInfo from GET /about, or None when the API cannot be used."""
        ...


class HttpApiClient(ApiClient):
    """
    ApiClient backed by httpx.Client.

    Args:
        base_url:  Root of a running API, e.g. "http://localhost:8000"
        timeout:   Seconds for connect + read of each request
        transport: Optional httpx transport (tests pass httpx.MockTransport)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._http = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def get_about_info(self) -> Optional[AboutInfo]:
        try:
            response = self._http.get("/about")
            response.raise_for_status()
            return AboutInfo.model_validate(response.json())
        except httpx.HTTPError as e:
            logger.debug("GET /about failed: %s", e)
            return None
        except (ValueError, PydanticValidationError) as e:
            logger.debug("GET /about returned an unexpected payload: %s", e)
            return None

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "HttpApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
