"""
Timestamp formatting for rows written to the workbook.
Signup, parishioner, admin, and follow-up rows all carry a short local date (`M/d/yy`)
and a 12-hour clock time (`h:mm a`) rendered in the parish timezone.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

Clock = Callable[[], datetime]


def utc_clock() -> datetime:
    return datetime.now(tz=UTC)


def local_now(timezone_name: str, clock: Clock | None = None) -> datetime:
    """Return the current time converted to `timezone_name`."""

    current = (clock or utc_clock)()
    if current.tzinfo is None:
        current = current.replace(tzinfo=UTC)
    return current.astimezone(ZoneInfo(timezone_name))


def format_sheet_date(value: datetime) -> str:
    """Format as `M/d/yy`, e.g. `1/15/26`."""

    return f"{value.month}/{value.day}/{value.year % 100:02d}"


def format_sheet_time(value: datetime) -> str:
    """Format as `h:mm a`, e.g. `9:05 AM`."""

    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {meridiem}"


def sheet_timestamp(timezone_name: str, clock: Clock | None = None) -> tuple[str, str]:
    """Return the (date, time) pair written at the front of audit rows."""

    current = local_now(timezone_name, clock)
    return format_sheet_date(current), format_sheet_time(current)
