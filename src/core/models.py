"""Data models for Portfolio Monitor."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any

import pandas as pd

from src.core.date_utils import to_date

logger = logging.getLogger(__name__)

# Column names produced by the portfolio view
DATE_COLUMN = "Closing"
COMPOSITE_COLUMN = "CompositePercent"
MOVING_AVERAGE_COLUMN = "MovingAverage_2Week_Percent"


class Granularity(Enum):
    """X-axis tick interval, derived from the visible time span."""

    MONTHLY = "monthly"
    WEEKLY = "weekly"


class LineStyle(Enum):
    """Stroke style for horizontal guide lines."""

    DASHED = "dashed"
    SOLID = "solid"


class ZoomState(Enum):
    """States of the zoom controller."""

    IDLE = "idle"
    ZOOMED = "zoomed"


def _optional_float(value: Any) -> float | None:
    """Return value as float, or None for NULL/NaN."""
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    result = float(value)
    return None if math.isnan(result) else result


@dataclass(frozen=True)
class TimeSeriesPoint:
    """One row of the portfolio series.

    Attributes:
        timestamp: Closing date.
        composite: Composite value as a fraction (percent / 100), or None.
        moving_average: 2-week moving average as a fraction, or None.
    """

    timestamp: date
    composite: float | None
    moving_average: float | None


@dataclass(frozen=True)
class TimeSeriesDataset:
    """Immutable, ordered view of the rows returned for one filter selection.

    Rows are kept in the order delivered by the data source. Ties are kept;
    out-of-order rows are logged but never re-sorted.
    """

    points: tuple[TimeSeriesPoint, ...] = ()

    @classmethod
    def build(cls, rows: Iterable[Any]) -> TimeSeriesDataset:
        """Build a dataset from raw rows.

        Args:
            rows: Sequence of ``TimeSeriesPoint``, mappings keyed by the view's
                column names (``Closing``, ``CompositePercent``,
                ``MovingAverage_2Week_Percent``), or ``(timestamp, composite,
                moving_average)`` tuples.

        Returns:
            A new TimeSeriesDataset.
        """
        points = tuple(cls._to_point(row) for row in rows)
        for previous, current in zip(points, points[1:]):
            if current.timestamp < previous.timestamp:
                logger.debug(
                    "Rows out of order: %s follows %s", current.timestamp, previous.timestamp
                )
        return cls(points)

    @classmethod
    def from_frame(cls, df: pd.DataFrame | None) -> TimeSeriesDataset:
        """Build a dataset from a query result DataFrame."""
        if df is None or df.empty:
            return cls()
        columns = [DATE_COLUMN, COMPOSITE_COLUMN, MOVING_AVERAGE_COLUMN]
        return cls.build(df[columns].itertuples(index=False, name=None))

    @staticmethod
    def _to_point(row: Any) -> TimeSeriesPoint:
        if isinstance(row, TimeSeriesPoint):
            return row
        if isinstance(row, Mapping):
            return TimeSeriesPoint(
                timestamp=to_date(row[DATE_COLUMN]),
                composite=_optional_float(row.get(COMPOSITE_COLUMN)),
                moving_average=_optional_float(row.get(MOVING_AVERAGE_COLUMN)),
            )
        timestamp, composite, moving_average = row
        return TimeSeriesPoint(
            timestamp=to_date(timestamp),
            composite=_optional_float(composite),
            moving_average=_optional_float(moving_average),
        )

    def __len__(self) -> int:
        return len(self.points)

    def is_empty(self) -> bool:
        """Check whether the dataset has no rows."""
        return not self.points

    @property
    def start(self) -> date | None:
        """Earliest timestamp, or None when empty."""
        if not self.points:
            return None
        return min(point.timestamp for point in self.points)

    @property
    def end(self) -> date | None:
        """Latest timestamp, or None when empty."""
        if not self.points:
            return None
        return max(point.timestamp for point in self.points)

    @property
    def latest_composite(self) -> float | None:
        """Composite value of the last row (None if empty or null)."""
        return self.points[-1].composite if self.points else None

    @property
    def latest_moving_average(self) -> float | None:
        """Moving average of the last row (None if empty or null)."""
        return self.points[-1].moving_average if self.points else None


@dataclass(frozen=True)
class VisibleWindow:
    """Currently zoomed region. None on an axis means auto/full range."""

    x_min: datetime | None = None
    x_max: datetime | None = None
    y_min: float | None = None
    y_max: float | None = None

    @property
    def has_x_range(self) -> bool:
        return self.x_min is not None and self.x_max is not None

    @property
    def has_y_range(self) -> bool:
        return self.y_min is not None and self.y_max is not None

    @property
    def is_auto(self) -> bool:
        """True when no axis is zoomed."""
        return not self.has_x_range and not self.has_y_range


@dataclass(frozen=True)
class FilterSelection:
    """Category and date range the chart is loaded for.

    Attributes:
        category: Tax type (e.g. "Tax Free", "Tax Deferred", "Taxable").
        start: First closing date to include.
        end: Last closing date to include.
    """

    category: str
    start: date
    end: date


@dataclass(frozen=True)
class ThresholdLine:
    """Fixed horizontal guide at a policy-significant level."""

    level: float
    style: LineStyle


DEFAULT_THRESHOLDS: tuple[ThresholdLine, ...] = (
    ThresholdLine(0.9, LineStyle.DASHED),
    ThresholdLine(0.8, LineStyle.SOLID),
)


@dataclass(frozen=True)
class SeriesData:
    """One drawable line series with its tooltips."""

    name: str
    timestamps: tuple[date, ...]
    values: tuple[float, ...]
    tooltips: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class ChartScene:
    """Everything the presentation layer needs to draw one chart state.

    Attributes:
        composite: Composite % series.
        moving_average: 2-week moving average % series.
        thresholds: Horizontal guide lines.
        y_bounds: (y_min, y_max) for the Y axis.
        granularity: X-axis tick interval in effect.
        x_ticks: (epoch seconds, label) pairs for the X axis.
        x_range: (start, end) of the visible X range in epoch seconds, or None
            when there is nothing to show.
        footer: Strategy and latest-value text.
        title: Chart title (the selected category).
    """

    composite: SeriesData
    moving_average: SeriesData
    thresholds: tuple[ThresholdLine, ...]
    y_bounds: tuple[float, float]
    granularity: Granularity
    x_ticks: tuple[tuple[float, str], ...] = field(default_factory=tuple)
    x_range: tuple[float, float] | None = None
    footer: str = ""
    title: str = ""


@dataclass(frozen=True)
class LoadResult:
    """Outcome of a successful reload, committed by the series loader."""

    selection: FilterSelection
    dataset: TimeSeriesDataset
    strategy_name: str
