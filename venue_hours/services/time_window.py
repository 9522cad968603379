"""Open/closed determination for a weekly schedule.

All functions are pure: given a schedule and a point in time they decide
whether the venue is open and how its hours read. Days use 0=Sunday to
6=Saturday throughout.
"""
import math
from datetime import datetime

import pytz

from venue_hours.models import Schedule

DAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def local_now(tz_name: str = "") -> datetime:
    """Current local time.

    Args:
        tz_name: pytz zone name. Empty uses the host's local clock.
    """
    if not tz_name:
        return datetime.now()
    return datetime.now(pytz.timezone(tz_name))


def weekday_index(now: datetime) -> int:
    """Sunday-based day of week (0=Sunday ... 6=Saturday).

    Python's weekday() is Monday-based (0=Monday), so shift by one.
    """
    return (now.weekday() + 1) % 7


def hour_of_day(now: datetime) -> float:
    """Fractional hour of day at minute precision (23:30 -> 23.5)."""
    return now.hour + now.minute / 60


def is_open(schedule: Schedule, now: datetime) -> bool:
    """Decide whether a venue is open at ``now``.

    The override wins over everything. Otherwise today must be one of the
    schedule's days and the current hour must fall in the window. When
    start >= end the window crosses midnight, so start == end means open
    all day.
    """
    if schedule.closed_today:
        return False

    if weekday_index(now) not in schedule.days_of_week:
        return False

    current_hour = hour_of_day(now)
    start, end = schedule.start_hour, schedule.end_hour

    if start < end:
        return start <= current_hour < end
    return current_hour >= start or current_hour < end


def format_hour(value: float) -> str:
    """Format a fractional hour as zero-padded HH:MM (22.5 -> "22:30")."""
    hours = math.floor(value)
    # Halves round up, not to even
    minutes = math.floor((value - hours) * 60 + 0.5)
    return f"{hours:02d}:{minutes:02d}"


def describe_schedule(schedule: Schedule) -> str:
    """Human-readable hours, e.g. "Open 22:00 - 01:00 | Sun, Mon, Tue"."""
    days = ", ".join(DAY_NAMES[d] for d in schedule.days_of_week)
    return (
        f"Open {format_hour(schedule.start_hour)} - "
        f"{format_hour(schedule.end_hour)} | {days}"
    )
