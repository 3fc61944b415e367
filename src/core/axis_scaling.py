"""Axis scaling for the portfolio chart.

Pure functions that derive Y-axis bounds, X-axis granularity and X-axis tick
positions from the loaded dataset and the current visible window. They hold
no state and never touch Qt, so the zoom controller and renderer can call
them on every view change.
"""

from __future__ import annotations

import math
from datetime import date, datetime

import pandas as pd

from src.core import config
from src.core.date_utils import as_datetime, span_days, to_epoch
from src.core.models import Granularity, TimeSeriesDataset, VisibleWindow

DEFAULT_Y_BOUNDS = (0.0, 1.0)
TICK_LABEL_FORMAT = "%m/%d/%Y"


def _visible_values(dataset: TimeSeriesDataset, window: VisibleWindow) -> list[float]:
    """Collect non-null values of both series inside the visible X range."""
    values: list[float] = []
    x_min = window.x_min
    x_max = window.x_max
    for point in dataset.points:
        if x_min is not None or x_max is not None:
            moment = as_datetime(point.timestamp)
            if x_min is not None and moment < x_min:
                continue
            if x_max is not None and moment > x_max:
                continue
        if point.composite is not None:
            values.append(point.composite)
        if point.moving_average is not None:
            values.append(point.moving_average)
    return values


def compute_y_bounds(
    dataset: TimeSeriesDataset, window: VisibleWindow | None = None
) -> tuple[float, float]:
    """Compute Y-axis bounds for what is currently visible.

    An explicit Y range on the window (from a drag that covered the Y axis)
    is returned unchanged. Otherwise the bounds enclose every composite and
    moving-average value inside the visible X range, rounded outward to the
    nearest 0.1.

    Args:
        dataset: Loaded series.
        window: Current visible window; None is treated as fully automatic.

    Returns:
        Tuple of (y_min, y_max). (0.0, 1.0) when nothing is visible.
    """
    window = window or VisibleWindow()
    if window.has_y_range:
        return (window.y_min, window.y_max)

    values = _visible_values(dataset, window)
    if not values:
        return DEFAULT_Y_BOUNDS

    y_min = math.floor(min(values) * 10) / 10
    y_max = math.ceil(max(values) * 10) / 10
    if y_max <= y_min:
        y_max = y_min + config.Y_AXIS_STEP
    # Strip float noise so both bounds are exact tenths
    return (round(y_min, 1), round(y_max, 1))


def visible_x_range(
    window: VisibleWindow | None, dataset: TimeSeriesDataset | None = None
) -> tuple[datetime, datetime] | None:
    """Return the X range on screen: the zoomed range, else the dataset range."""
    if window is not None and window.has_x_range:
        return (window.x_min, window.x_max)
    if dataset is None or dataset.is_empty():
        return None
    return (as_datetime(dataset.start), as_datetime(dataset.end))


def compute_granularity(
    window: VisibleWindow | None, dataset: TimeSeriesDataset | None = None
) -> Granularity:
    """Pick the X-axis tick interval for the visible span.

    Spans of ``config.WEEKLY_THRESHOLD_DAYS`` days or less get weekly ticks,
    anything longer gets monthly ticks. Granularity never filters points.

    Args:
        window: Current visible window.
        dataset: Loaded series, used for the span when X is automatic.

    Returns:
        Granularity.WEEKLY or Granularity.MONTHLY.
    """
    x_range = visible_x_range(window, dataset)
    if x_range is None:
        return Granularity.MONTHLY
    if span_days(*x_range) <= config.WEEKLY_THRESHOLD_DAYS:
        return Granularity.WEEKLY
    return Granularity.MONTHLY


def compute_x_ticks(
    start: date | datetime, end: date | datetime, granularity: Granularity
) -> list[tuple[float, str]]:
    """Generate X-axis ticks between start and end.

    Monthly ticks fall on the first day of each month, weekly ticks on each
    Monday.

    Returns:
        List of (epoch seconds, "MM/DD/YYYY" label) pairs.
    """
    start_dt = as_datetime(start)
    end_dt = as_datetime(end)
    if end_dt < start_dt:
        start_dt, end_dt = end_dt, start_dt

    freq = "W-MON" if granularity is Granularity.WEEKLY else "MS"
    stamps = pd.date_range(start=start_dt, end=end_dt, freq=freq, normalize=True)
    return [
        (to_epoch(stamp.to_pydatetime()), stamp.strftime(TICK_LABEL_FORMAT))
        for stamp in stamps
    ]
