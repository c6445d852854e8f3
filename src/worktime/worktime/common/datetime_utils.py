from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.constants import DATE_FORMAT, YEAR_MONTH_FORMAT

logger = logging.getLogger(__name__)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 instant into a naive server-local datetime.

    Offset-aware inputs (e.g. ``2025-10-01T09:00:00+08:00``) are converted to
    local time first so they compare with the naive values we store.
    """
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def format_date(value: date | datetime) -> str:
    return value.strftime(DATE_FORMAT)


def format_year_month(value: date | datetime) -> str:
    return value.strftime(YEAR_MONTH_FORMAT)


def previous_year_month(value: date | datetime) -> str:
    first_of_month = date(value.year, value.month, 1)
    return format_year_month(first_of_month - timedelta(days=1))


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def load_timezone(name: str) -> Optional[tzinfo]:
    """Resolve an IANA zone; ``None`` means host-local time."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.warning("Failed to load %s timezone, using local time: %s", name, e)
        return None


def now_in(tz: Optional[tzinfo]) -> datetime:
    if tz is None:
        return datetime.now().astimezone()
    return datetime.now(tz)
