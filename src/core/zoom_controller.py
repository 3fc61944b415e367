"""Zoom state for the portfolio chart."""

from __future__ import annotations

import logging
from datetime import datetime

from PyQt6.QtCore import QObject, pyqtSignal

from src.core.axis_scaling import compute_granularity, compute_y_bounds
from src.core.exceptions import DegenerateSelectionError
from src.core.models import Granularity, TimeSeriesDataset, VisibleWindow, ZoomState

logger = logging.getLogger(__name__)


class ZoomPanController(QObject):
    """Owns the visible window and re-derives axis state on every change.

    The controller has two states. IDLE shows the full dataset; ZOOMED shows
    the sub-range picked by a drag selection. Every transition recomputes the
    Y bounds and X granularity and emits ``view_changed`` so the chart can be
    redrawn.

    Signals:
        view_changed: Emitted after every transition with the new VisibleWindow.
        granularity_changed: Emitted only when the granularity value changes.
    """

    view_changed = pyqtSignal(object)  # VisibleWindow
    granularity_changed = pyqtSignal(object)  # Granularity

    def __init__(self, parent: QObject | None = None) -> None:
        """Initialize in the IDLE state with an empty dataset."""
        super().__init__(parent)
        self._dataset = TimeSeriesDataset()
        self._window = VisibleWindow()
        self._state = ZoomState.IDLE
        self._y_bounds: tuple[float, float] = compute_y_bounds(self._dataset, self._window)
        self._granularity: Granularity = compute_granularity(self._window, self._dataset)

    @property
    def state(self) -> ZoomState:
        return self._state

    @property
    def window(self) -> VisibleWindow:
        return self._window

    @property
    def dataset(self) -> TimeSeriesDataset:
        return self._dataset

    @property
    def y_bounds(self) -> tuple[float, float]:
        """Y-axis bounds for the current window."""
        return self._y_bounds

    @property
    def granularity(self) -> Granularity:
        """X-axis granularity for the current window."""
        return self._granularity

    def set_dataset(self, dataset: TimeSeriesDataset, reset_zoom: bool = False) -> None:
        """Install a freshly loaded dataset and recompute the axes.

        Args:
            dataset: The dataset to display.
            reset_zoom: Return to the full view in the same transition.
        """
        self._dataset = dataset
        if reset_zoom:
            self._window = VisibleWindow()
            self._state = ZoomState.IDLE
        self._refresh()

    def apply_selection(
        self,
        x_range: tuple[datetime, datetime] | None,
        y_range: tuple[float, float] | None,
    ) -> bool:
        """Zoom to a drag selection.

        An axis passed as None was not covered by the drag and stays
        automatic. Selections with zero width or height are ignored.

        Args:
            x_range: (start, end) on the time axis, or None.
            y_range: (low, high) on the value axis, or None.

        Returns:
            True if the view changed, False if the selection was ignored.
        """
        try:
            window = self._window_for(x_range, y_range)
        except DegenerateSelectionError as e:
            logger.debug("Ignoring zoom selection: %s", e)
            return False

        self._window = window
        self._state = ZoomState.ZOOMED
        logger.debug("Zoomed to %s", window)
        self._refresh()
        return True

    def reset(self) -> None:
        """Return to the full view."""
        self._window = VisibleWindow()
        self._state = ZoomState.IDLE
        self._refresh()

    def _window_for(
        self,
        x_range: tuple[datetime, datetime] | None,
        y_range: tuple[float, float] | None,
    ) -> VisibleWindow:
        """Validate a selection and convert it into a VisibleWindow.

        Raises:
            DegenerateSelectionError: If no axis is covered or a covered
                axis has zero extent.
        """
        if x_range is None and y_range is None:
            raise DegenerateSelectionError("selection covers no axis")

        x_min = x_max = None
        if x_range is not None:
            x_min, x_max = sorted(x_range)
            if x_min == x_max:
                raise DegenerateSelectionError("zero-width selection")

        y_min = y_max = None
        if y_range is not None:
            y_min, y_max = sorted(y_range)
            if y_min == y_max:
                raise DegenerateSelectionError("zero-height selection")

        return VisibleWindow(x_min=x_min, x_max=x_max, y_min=y_min, y_max=y_max)

    def _refresh(self) -> None:
        """Recompute axis state and notify listeners."""
        previous = self._granularity
        self._y_bounds = compute_y_bounds(self._dataset, self._window)
        self._granularity = compute_granularity(self._window, self._dataset)

        if self._granularity is not previous:
            logger.debug("Granularity changed to %s", self._granularity.value)
            self.granularity_changed.emit(self._granularity)
        self.view_changed.emit(self._window)
