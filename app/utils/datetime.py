"""Calendar helpers for local business-day arithmetic."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = "America/Argentina/Buenos_Aires"
WEEKEND_DAYS = {5, 6}


def utc_now() -> datetime:
    """Return the current UTC datetime."""

    return datetime.now(UTC)


def local_today(timezone: str = DEFAULT_TIMEZONE) -> date:
    """Return today's calendar date in ``timezone`` with the time truncated."""

    return datetime.now(ZoneInfo(timezone)).date()


def yesterday(today: date) -> date:
    return subtract_days(today, 1)


def is_weekend(value: date) -> bool:
    """Return True for Saturdays and Sundays."""

    return value.weekday() in WEEKEND_DAYS


def subtract_days(value: date, days: int) -> date:
    return value - timedelta(days=days)


def format_iso(value: date) -> str:
    """Format ``value`` as ``YYYY-MM-DD``."""

    return value.strftime("%Y-%m-%d")


def format_path(value: date) -> str:
    """Format ``value`` as the ``YYYY/MM/DD`` path suffix used by quotation endpoints."""

    return value.strftime("%Y/%m/%d")


def parse_iso_date(value: str | date) -> date:
    """Parse an ISO ``YYYY-MM-DD`` string into a :class:`date`."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()


def business_days_back(start: date, count: int, min_date: date) -> list[date]:
    """Walk backwards from ``start`` collecting up to ``count`` weekdays.

    Weekend dates are skipped and do not count towards ``count``. The walk
    stops early once it would go below ``min_date``. Dates are returned most
    recent first.
    """

    if count < 0:
        raise ValueError("count cannot be negative")

    days: list[date] = []
    current = start
    while len(days) < count and current >= min_date:
        if not is_weekend(current):
            days.append(current)
        current = subtract_days(current, 1)
    return days
