"""Timezone utilities for the preprint recommender.

Date windows are expressed in the caller's local time zone, while feeds
report timestamps in UTC or as bare calendar dates.
"""

from datetime import date, datetime, time


def now_local() -> datetime:
    """Get the current naive wall-clock datetime in local time."""
    return datetime.now()


def local_midnight(day: date) -> datetime:
    """Return the aware local datetime at the start of ``day``."""
    return datetime.combine(day, time.min).astimezone()


def ensure_aware(dt: datetime) -> datetime:
    """Attach the local zone to naive datetimes, leave aware ones untouched.

    Args:
        dt: Datetime object (timezone-aware or naive).

    Returns:
        Aware datetime. Naive input is taken as local time.
    """
    if dt.tzinfo is None:
        return dt.astimezone()
    return dt
