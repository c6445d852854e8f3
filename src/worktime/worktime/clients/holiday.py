from __future__ import annotations

import logging
from typing import Optional, Protocol

import requests

from ..core.constants import HOLIDAY_API_URL, HTTP_TIMEOUT_SECONDS
from ..core.exceptions import HolidayProviderError

logger = logging.getLogger(__name__)

HOLIDAY_STATUS_WORK = "工作"
HOLIDAY_STATUS_REST = "休息"


class HolidayProvider(Protocol):
    def is_holiday(self) -> bool:
        raise NotImplementedError


class HolidayAPIClient(HolidayProvider):
    """Asks the public holiday calendar whether today is a rest day."""

    def __init__(
        self,
        *,
        api_url: str = HOLIDAY_API_URL,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self._api_url = api_url
        self._timeout = timeout
        self._http = session or requests.Session()

    def is_holiday(self) -> bool:
        logger.debug("Checking holiday status: %s", self._api_url)
        try:
            resp = self._http.get(self._api_url, timeout=self._timeout)
        except requests.RequestException as e:
            raise HolidayProviderError(f"holiday API request failed: {e}") from e

        try:
            payload = resp.json()
        except ValueError as e:
            raise HolidayProviderError(f"failed to parse response: {e}") from e

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise HolidayProviderError(f"unexpected response body: {payload!r}")

        status = data.get("status", "")
        holiday = status == HOLIDAY_STATUS_REST
        logger.info("Holiday status: %s (is holiday: %s)", status, holiday)
        return holiday
