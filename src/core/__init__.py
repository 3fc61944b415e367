"""Core chart logic and data access."""

from .axis_scaling import compute_granularity, compute_x_ticks, compute_y_bounds
from .chart_renderer import ChartRenderer
from .crosshair import CrosshairTracker
from .data_service import PortfolioDataService, create_data_service
from .filter_session import FilterSession
from .models import (
    ChartScene,
    FilterSelection,
    Granularity,
    ThresholdLine,
    TimeSeriesDataset,
    TimeSeriesPoint,
    VisibleWindow,
)
from .series_loader import SeriesLoader
from .zoom_controller import ZoomPanController

__all__ = [
    "compute_granularity",
    "compute_x_ticks",
    "compute_y_bounds",
    "ChartRenderer",
    "ChartScene",
    "CrosshairTracker",
    "create_data_service",
    "FilterSelection",
    "FilterSession",
    "Granularity",
    "PortfolioDataService",
    "SeriesLoader",
    "ThresholdLine",
    "TimeSeriesDataset",
    "TimeSeriesPoint",
    "VisibleWindow",
    "ZoomPanController",
]
