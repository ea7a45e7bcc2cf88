"""Date window calculator.

Computes the calendar-day range of preprints to consider, relative to the
moment of invocation.
"""

from datetime import datetime, time, timedelta

from preprint_recommender.domain.value_objects import DateWindow
from preprint_recommender.shared.utils.timezone import now_local

END_OF_DAY = time(23, 59, 59, 999000)


def compute_date_window(
    look_back_days: int,
    offset_days: int,
    now: datetime | None = None,
) -> DateWindow:
    """Return the inclusive window of days to fetch preprints for.

    The start is (today - offset_days - look_back_days) at 00:00:00.000 and
    the end is (today - offset_days - 1) at 23:59:59.999, so
    ``compute_date_window(1, 0)`` covers all of yesterday whatever the time
    of day.

    Args:
        look_back_days: Number of days in the window (>= 1)
        offset_days: Number of most recent days to skip (>= 0)
        now: Reference moment. Defaults to the current wall clock; a naive
            value is local time, an aware value pins the bounds to its zone.

    Returns:
        DateWindow with aware bounds.

    Raises:
        ValueError: If either parameter is out of range
    """
    if look_back_days < 1:
        raise ValueError(f"look_back_days must be >= 1, got {look_back_days}")
    if offset_days < 0:
        raise ValueError(f"offset_days must be >= 0, got {offset_days}")

    reference = now if now is not None else now_local()
    today = reference.date()

    first_day = today - timedelta(days=offset_days + look_back_days)
    last_day = today - timedelta(days=offset_days + 1)
    start = datetime.combine(first_day, time.min)
    end = datetime.combine(last_day, END_OF_DAY)

    if reference.tzinfo is None:
        return DateWindow(start=start.astimezone(), end=end.astimezone())
    return DateWindow(
        start=start.replace(tzinfo=reference.tzinfo),
        end=end.replace(tzinfo=reference.tzinfo),
    )
