"""
utils/time_utils.py

Purpose: Time helpers

- "Now" and "today" in the configured timezone
- Month/day matching for recurring occasions
- UTC timestamps
"""

from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo


def local_now(tz_name: Optional[str] = None) -> datetime:
    """
    Returns the current time as an aware datetime.

    Uses the named IANA timezone when given, otherwise the server's local zone.
    """
    if tz_name:
        return datetime.now(ZoneInfo(tz_name))
    return datetime.now().astimezone()


def local_today(tz_name: Optional[str] = None) -> date:
    """Returns today's calendar date in the configured timezone."""
    return local_now(tz_name).date()


def utc_now() -> datetime:
    """Current UTC time (aware)."""
    return datetime.now(timezone.utc)


def is_same_month_day(month: int, day: int, today: date) -> bool:
    """
    Checks if a recurring month/day falls on `today`. The year is ignored.
    """
    return month == today.month and day == today.day

