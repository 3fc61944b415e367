"""Builds the drawable chart scene from the dataset and view state."""

from __future__ import annotations

import logging
from datetime import date

from src.core import config
from src.core.axis_scaling import compute_x_ticks, compute_y_bounds, visible_x_range
from src.core.date_utils import to_epoch
from src.core.models import (
    DEFAULT_THRESHOLDS,
    ChartScene,
    Granularity,
    SeriesData,
    ThresholdLine,
    TimeSeriesDataset,
    VisibleWindow,
)

logger = logging.getLogger(__name__)

COMPOSITE_SERIES_NAME = "Composite %"
MOVING_AVERAGE_SERIES_NAME = "2-Week Moving Average %"


def format_percent(value: float | None) -> str:
    """Format a fraction as a two-decimal percentage ("N/A" when missing)."""
    if value is None:
        return config.MISSING_VALUE_TEXT
    return f"{value:.2%}"


def format_footer(dataset: TimeSeriesDataset, strategy_name: str) -> str:
    """Build the footer with the strategy name and latest values."""
    return (
        f"Withdrawal Strategy: {strategy_name}\n"
        f"Latest Composite: {format_percent(dataset.latest_composite)}  "
        f"Latest Moving Average: {format_percent(dataset.latest_moving_average)}"
    )


def format_tooltip(day: date, value: float) -> str:
    """Tooltip text for one plotted point."""
    return f"date: {day.isoformat()}, value: {value:.2%}"


class ChartRenderer:
    """Composes dataset, axis state and thresholds into a ChartScene.

    Series are built from the whole dataset; the plot surface clips to the
    visible window, so zooming only changes bounds and ticks.
    """

    def render(
        self,
        dataset: TimeSeriesDataset,
        window: VisibleWindow,
        granularity: Granularity,
        thresholds: tuple[ThresholdLine, ...] = DEFAULT_THRESHOLDS,
        strategy_name: str = config.STRATEGY_PLACEHOLDER,
        title: str = "",
    ) -> ChartScene:
        """Render a scene for the current state.

        Args:
            dataset: Loaded series.
            window: Current visible window.
            granularity: X-axis granularity for the window.
            thresholds: Horizontal guide lines to draw.
            strategy_name: Withdrawal strategy label for the footer.
            title: Chart title.

        Returns:
            The ChartScene to draw.
        """
        composite = self._build_series(dataset, COMPOSITE_SERIES_NAME, "composite")
        moving_average = self._build_series(
            dataset, MOVING_AVERAGE_SERIES_NAME, "moving_average"
        )

        x_range = visible_x_range(window, dataset)
        x_ticks: tuple[tuple[float, str], ...] = ()
        epoch_range = None
        if x_range is not None:
            x_ticks = tuple(compute_x_ticks(*x_range, granularity))
            epoch_range = (to_epoch(x_range[0]), to_epoch(x_range[1]))

        scene = ChartScene(
            composite=composite,
            moving_average=moving_average,
            thresholds=tuple(thresholds),
            y_bounds=compute_y_bounds(dataset, window),
            granularity=granularity,
            x_ticks=x_ticks,
            x_range=epoch_range,
            footer=format_footer(dataset, strategy_name),
            title=title,
        )
        logger.debug(
            "Rendered scene: %d composite / %d average points, y=%s, %s ticks",
            len(composite),
            len(moving_average),
            scene.y_bounds,
            granularity.value,
        )
        return scene

    @staticmethod
    def _build_series(dataset: TimeSeriesDataset, name: str, attribute: str) -> SeriesData:
        timestamps = []
        values = []
        tooltips = []
        for point in dataset.points:
            value = getattr(point, attribute)
            if value is None:
                continue
            timestamps.append(point.timestamp)
            values.append(value)
            tooltips.append(format_tooltip(point.timestamp, value))
        return SeriesData(
            name=name,
            timestamps=tuple(timestamps),
            values=tuple(values),
            tooltips=tuple(tooltips),
        )
