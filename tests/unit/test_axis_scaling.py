"""Tests for axis scaling functions."""

from datetime import date, datetime

import pytest

from src.core.axis_scaling import (
    DEFAULT_Y_BOUNDS,
    compute_granularity,
    compute_x_ticks,
    compute_y_bounds,
    visible_x_range,
)
from src.core.date_utils import to_epoch
from src.core.models import Granularity, TimeSeriesDataset, VisibleWindow


class TestComputeYBounds:
    """Tests for compute_y_bounds."""

    def test_example_dataset(self, example_dataset: TimeSeriesDataset) -> None:
        """Values 0.78..0.95 round outward to (0.7, 1.0)."""
        assert compute_y_bounds(example_dataset, VisibleWindow()) == (0.7, 1.0)

    def test_empty_dataset(self) -> None:
        """Nothing visible gives the default bounds."""
        assert compute_y_bounds(TimeSeriesDataset(), VisibleWindow()) == (0.0, 1.0)
        assert DEFAULT_Y_BOUNDS == (0.0, 1.0)

    def test_all_null_values(self) -> None:
        """Rows with only nulls count as empty."""
        dataset = TimeSeriesDataset.build([(date(2024, 1, 1), None, None)])
        assert compute_y_bounds(dataset) == (0.0, 1.0)

    def test_empty_visible_subset(self, example_dataset: TimeSeriesDataset) -> None:
        """An X window containing no points gives the default bounds."""
        window = VisibleWindow(x_min=datetime(2030, 1, 1), x_max=datetime(2030, 2, 1))
        assert compute_y_bounds(example_dataset, window) == (0.0, 1.0)

    @pytest.mark.parametrize(
        "values",
        [
            [0.95, 0.78, 0.85, 0.93],
            [0.801, 0.799],
            [1.23, 0.41, 0.66],
            [-0.15, 0.05],
            [0.5],
        ],
    )
    def test_bounds_enclose_values_on_tenths(self, values: list[float]) -> None:
        """Bounds enclose all values, sit on tenths and y_max > y_min."""
        dataset = TimeSeriesDataset.build(
            [(date(2024, 1, i + 1), value, None) for i, value in enumerate(values)]
        )
        y_min, y_max = compute_y_bounds(dataset)
        assert y_min <= min(values)
        assert y_max >= max(values)
        assert y_max > y_min
        assert round(y_min * 10) == pytest.approx(y_min * 10)
        assert round(y_max * 10) == pytest.approx(y_max * 10)

    def test_degenerate_on_tenth(self) -> None:
        """A single value on an exact tenth still gives a non-empty range."""
        dataset = TimeSeriesDataset.build([(date(2024, 1, 1), 0.8, 0.8)])
        assert compute_y_bounds(dataset) == (0.8, 0.9)

    def test_uses_visible_x_window(self, example_dataset: TimeSeriesDataset) -> None:
        """Only points inside the X window are considered."""
        window = VisibleWindow(x_min=datetime(2024, 1, 5), x_max=datetime(2024, 1, 10))
        assert compute_y_bounds(example_dataset, window) == (0.7, 0.9)

    def test_explicit_y_range_is_kept(self, example_dataset: TimeSeriesDataset) -> None:
        """A zoomed Y range is returned unchanged."""
        window = VisibleWindow(y_min=0.82, y_max=0.91)
        assert compute_y_bounds(example_dataset, window) == (0.82, 0.91)


class TestComputeGranularity:
    """Tests for compute_granularity."""

    def test_ten_days_is_weekly(self) -> None:
        """A 10-day window uses weekly ticks."""
        window = VisibleWindow(x_min=datetime(2024, 1, 1), x_max=datetime(2024, 1, 11))
        assert compute_granularity(window) is Granularity.WEEKLY

    def test_three_years_is_monthly(self) -> None:
        """A 3-year window uses monthly ticks."""
        window = VisibleWindow(x_min=datetime(2021, 1, 1), x_max=datetime(2024, 1, 1))
        assert compute_granularity(window) is Granularity.MONTHLY

    def test_threshold_is_inclusive(self) -> None:
        """Exactly 120 days is still weekly, 121 is monthly."""
        start = datetime(2024, 1, 1)
        weekly = VisibleWindow(x_min=start, x_max=datetime(2024, 4, 30))
        monthly = VisibleWindow(x_min=start, x_max=datetime(2024, 5, 1))
        assert compute_granularity(weekly) is Granularity.WEEKLY
        assert compute_granularity(monthly) is Granularity.MONTHLY

    def test_auto_window_uses_dataset_span(
        self, example_dataset: TimeSeriesDataset, long_dataset: TimeSeriesDataset
    ) -> None:
        """With no X zoom the dataset span decides."""
        assert compute_granularity(VisibleWindow(), example_dataset) is Granularity.WEEKLY
        assert compute_granularity(VisibleWindow(), long_dataset) is Granularity.MONTHLY

    def test_empty_is_monthly(self) -> None:
        """No data and no zoom defaults to monthly."""
        assert compute_granularity(VisibleWindow(), TimeSeriesDataset()) is Granularity.MONTHLY


class TestComputeXTicks:
    """Tests for compute_x_ticks."""

    def test_monthly_ticks_on_first_of_month(self) -> None:
        """Monthly ticks fall on the 1st."""
        ticks = compute_x_ticks(date(2024, 1, 15), date(2024, 4, 15), Granularity.MONTHLY)
        assert [label for _, label in ticks] == ["02/01/2024", "03/01/2024", "04/01/2024"]
        assert ticks[0][0] == to_epoch(datetime(2024, 2, 1))

    def test_weekly_ticks_on_mondays(self) -> None:
        """Weekly ticks fall on Mondays."""
        ticks = compute_x_ticks(date(2024, 1, 1), date(2024, 1, 21), Granularity.WEEKLY)
        assert [label for _, label in ticks] == ["01/01/2024", "01/08/2024", "01/15/2024"]

    def test_reversed_range(self) -> None:
        """Start and end may be given in either order."""
        forward = compute_x_ticks(date(2024, 1, 1), date(2024, 3, 1), Granularity.MONTHLY)
        backward = compute_x_ticks(date(2024, 3, 1), date(2024, 1, 1), Granularity.MONTHLY)
        assert forward == backward


class TestVisibleXRange:
    """Tests for visible_x_range."""

    def test_zoomed_range_wins(self, example_dataset: TimeSeriesDataset) -> None:
        """An X zoom is returned as-is."""
        window = VisibleWindow(x_min=datetime(2024, 1, 2), x_max=datetime(2024, 1, 5))
        assert visible_x_range(window, example_dataset) == (
            datetime(2024, 1, 2),
            datetime(2024, 1, 5),
        )

    def test_auto_uses_dataset(self, example_dataset: TimeSeriesDataset) -> None:
        """Without zoom the dataset's extent is used."""
        assert visible_x_range(VisibleWindow(), example_dataset) == (
            datetime(2024, 1, 1),
            datetime(2024, 1, 8),
        )

    def test_empty_is_none(self) -> None:
        """No data and no zoom gives None."""
        assert visible_x_range(VisibleWindow(), TimeSeriesDataset()) is None
