"""
Calendar-day arithmetic used by the forecasting engine.

All day keys are ``YYYY-MM-DD`` strings, so lexicographic comparison of two
keys matches chronological order.
"""

from datetime import date, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DAY_KEY_FORMAT = "%Y-%m-%d"
WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


def format_day(value: date | datetime) -> str:
    """Format a date (or the date part of a datetime) as a day key."""
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime(DAY_KEY_FORMAT)


def parse_day(day_key: str) -> date:
    return datetime.strptime(day_key, DAY_KEY_FORMAT).date()


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def subtract_days(value: date, days: int) -> date:
    return add_days(value, -days)


def duration_hours(start: datetime, end: datetime) -> float:
    """Hours between two instants, floored at zero for inverted ranges."""
    seconds = (end - start).total_seconds()
    return max(0.0, seconds / 3600)


def resolve_timezone(name: str) -> ZoneInfo:
    """
    Look up an IANA timezone.

    Raises:
        ValueError: If the name is not a known timezone
    """
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {name}") from e


def day_key_for(instant: datetime, tz: tzinfo | None = None) -> str:
    """
    Calendar day an instant falls on.

    Aware instants are converted into ``tz`` first; naive instants are taken
    at face value.
    """
    if tz is not None and instant.tzinfo is not None:
        instant = instant.astimezone(tz)
    return format_day(instant)


def current_day(tz: tzinfo | None = None) -> date:
    """Today's date in the given timezone (local time when None)."""
    return datetime.now(tz).date()


def weekday_name(day_key: str) -> str:
    return WEEKDAY_NAMES[parse_day(day_key).weekday()]
