from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Protocol, Tuple

import requests

from ..common.datetime_utils import parse_iso_date
from ..core.constants import HTTP_TIMEOUT_SECONDS
from ..core.exceptions import AttendanceProviderError
from ..workconfig.model import WorkConfig

logger = logging.getLogger(__name__)

AttendanceStatus = Tuple[Optional[datetime], Optional[datetime]]


class AttendanceProvider(Protocol):
    def fetch_attendance_status(self, config: WorkConfig, date: str) -> AttendanceStatus:
        """Return (first clock-in, last clock-out) for ``date``; either may be None.

        Raises AttendanceProviderError when the source cannot answer.
        """

        raise NotImplementedError


def build_api_url(base_url: str, date: str) -> str:
    """Append ``monthly=YYYY-MM`` unless the URL already pins a month."""
    if "monthly=" in base_url:
        return base_url
    separator = "&" if "?" in base_url else "?"
    return f"{base_url}{separator}monthly={date[:7]}"


class HRAttendanceClient(AttendanceProvider):
    """Reads clock-in/clock-out records from the HR attendance API."""

    def __init__(self, *, timeout: float = HTTP_TIMEOUT_SECONDS, session: Optional[requests.Session] = None):
        self._timeout = timeout
        self._http = session or requests.Session()

    def _headers(self, config: WorkConfig) -> dict:
        return {
            "Accept": "application/json, text/plain, */*",
            "Accept-Language": "en-CN,en;q=0.9,zh-CN;q=0.8,zh;q=0.7",
            "Lang-Code": "en",
            "P-Auth": config.p_auth,
            "P-Rtoken": config.p_rtoken,
        }

    def fetch_attendance_status(self, config: WorkConfig, date: str) -> AttendanceStatus:
        if not config.has_api_config:
            raise AttendanceProviderError("HR API not properly configured")

        url = build_api_url(config.check_in_api_url, date)
        logger.info("Fetching HR attendance for %s", date)
        try:
            resp = self._http.get(url, headers=self._headers(config), timeout=self._timeout)
        except requests.RequestException as e:
            raise AttendanceProviderError(f"HTTP request failed: {e}") from e

        logger.debug("HR API response %s: %s", resp.status_code, resp.text)
        if resp.status_code != 200:
            raise AttendanceProviderError(f"API returned status {resp.status_code}: {resp.text}")

        try:
            payload = resp.json()
        except ValueError as e:
            raise AttendanceProviderError(f"failed to decode response: {e}") from e

        if not isinstance(payload, dict):
            raise AttendanceProviderError(f"unexpected response body: {payload!r}")

        if str(payload.get("code")) != "200" or not payload.get("success"):
            raise AttendanceProviderError(
                f"API error (code {payload.get('code')}): {payload.get('message', '')}"
            )

        records = payload.get("data") or []
        if not isinstance(records, list):
            raise AttendanceProviderError(f"unexpected attendance data: {records!r}")

        for record in records:
            if not isinstance(record, dict):
                raise AttendanceProviderError(f"unexpected attendance record: {record!r}")
            if record.get("attendanceDate") != date:
                continue
            check_in = _combine(date, record.get("firstClockInTime"))
            check_out = _combine(date, record.get("lastClockOutTime"))
            logger.info(
                "HR attendance for %s: checked_in=%s checked_out=%s",
                date,
                check_in is not None,
                check_out is not None,
            )
            return check_in, check_out

        logger.info("No HR attendance record found for %s", date)
        return None, None


def _combine(date: str, clock: Optional[str]) -> Optional[datetime]:
    # The HR API reports wall-clock "HH:MM" values; keep them naive like stored sessions.
    if not clock:
        return None
    if not isinstance(clock, str):
        raise AttendanceProviderError(f"unexpected clock value: {clock!r}")
    try:
        parsed = datetime.strptime(clock.strip()[:5], "%H:%M").time()
    except ValueError as e:
        raise AttendanceProviderError(f"failed to parse time {clock!r}: {e}") from e
    return datetime.combine(parse_iso_date(date), parsed)
