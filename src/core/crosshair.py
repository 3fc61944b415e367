"""Crosshair tracking for pointer movement over the chart."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from src.core.date_utils import from_epoch
from src.core.exceptions import CoordinateMappingError

logger = logging.getLogger(__name__)

# Maps a pixel position to (epoch seconds, value). Raises CoordinateMappingError
# when the position is outside the plotted area.
PixelTransform = Callable[[float, float], tuple[float, float]]


class CrosshairGuides(Protocol):
    """Drawable crosshair owned by the presentation layer."""

    def show_crosshair(self, x: float, y: float, label: str) -> None: ...

    def hide_crosshair(self) -> None: ...


def format_crosshair_label(x: float, y: float) -> str:
    """Format a data-space position for the crosshair label.

    Args:
        x: Epoch seconds on the time axis.
        y: Value as a fraction.

    Returns:
        Label like "Date: 01/08/2024, Value: 78.00%".
    """
    try:
        date_text = from_epoch(x).strftime("%m/%d/%Y")
    except (OverflowError, OSError, ValueError):
        date_text = f"{x:.0f}"
    return f"Date: {date_text}, Value: {y:.2%}"


class CrosshairTracker:
    """Moves the crosshair to the data position under the pointer.

    Holds no state of its own. The transform reads the chart's current axis
    range, so positions stay correct during and after a zoom.
    """

    def __init__(self, transform: PixelTransform, guides: CrosshairGuides) -> None:
        """Initialize the tracker.

        Args:
            transform: Pixel-to-data mapping supplied by the chart widget.
            guides: Crosshair lines to move or hide.
        """
        self._transform = transform
        self._guides = guides

    def on_pointer_move(self, pixel_x: float, pixel_y: float) -> None:
        """Update the crosshair for a pointer position.

        Positions that cannot be mapped (outside the plot area) hide the
        crosshair.

        Args:
            pixel_x: Pointer X in scene pixels.
            pixel_y: Pointer Y in scene pixels.
        """
        try:
            x, y = self._transform(pixel_x, pixel_y)
        except CoordinateMappingError:
            self._guides.hide_crosshair()
            return
        self._guides.show_crosshair(x, y, format_crosshair_label(x, y))
