"""Date conversion helpers shared by the chart engine and widgets.

The chart works in POSIX seconds on the X axis (as pyqtgraph's DateAxisItem
expects) while the data model uses ``date`` and ``datetime`` values.
"""

from datetime import date, datetime, time

import pandas as pd


def as_datetime(value: date | datetime) -> datetime:
    """Promote a date to midnight of that day; datetimes pass through."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time())


def to_epoch(value: date | datetime) -> float:
    """Convert a date or naive datetime to POSIX seconds (local time)."""
    return as_datetime(value).timestamp()


def from_epoch(seconds: float) -> datetime:
    """Convert POSIX seconds back to a naive local datetime."""
    return datetime.fromtimestamp(seconds)


def span_days(start: date | datetime, end: date | datetime) -> float:
    """Return the length of [start, end] in fractional days."""
    return (as_datetime(end) - as_datetime(start)).total_seconds() / 86400.0


def years_before(day: date, years: int) -> date:
    """Return the same calendar day ``years`` earlier.

    29 February falls back to 28 February in non-leap years.
    """
    return (pd.Timestamp(day) - pd.DateOffset(years=years)).date()


def to_date(value: object) -> date:
    """Coerce a timestamp-like value (str, date, datetime, pd.Timestamp) to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return pd.Timestamp(value).date()
