"""Portfolio line chart with threshold guides, drag zoom and crosshair.

Draws a ChartScene produced by the chart renderer. The widget keeps no view
state of its own: drag selections, right-clicks and double-clicks are turned
into signals, and the owner answers with a new scene.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
import pyqtgraph as pg  # type: ignore[import-untyped]
from pyqtgraph import DateAxisItem
from PyQt6.QtCore import QPointF, Qt, pyqtSignal
from PyQt6.QtWidgets import QVBoxLayout, QWidget

from src.core.crosshair import CrosshairTracker
from src.core.date_utils import from_epoch, to_epoch
from src.core.exceptions import CoordinateMappingError
from src.core.models import ChartScene, LineStyle, SeriesData
from src.ui.constants import Colors, LineWidths

logger = logging.getLogger(__name__)

pg.setConfigOptions(antialias=True)


class PercentAxisItem(pg.AxisItem):
    """Value axis that labels fractions as whole percentages (0.9 -> "90%")."""

    def tickStrings(
        self, values: Sequence[float], scale: float, spacing: float
    ) -> list[str]:
        return [f"{v:.0%}" for v in values]


class SelectionViewBox(pg.ViewBox):
    """ViewBox that reports drag selections instead of panning.

    Left-drag in the plot area selects a rectangle; left-drag along an axis
    selects a range on that axis only. Right-click and double-click are
    reported as signals.

    Signals:
        sigSelectionFinished: (x_range or None, y_range or None) in view coordinates.
        sigResetRequested: Right button clicked.
        sigDoubleClicked: Left button double-clicked.
    """

    sigSelectionFinished = pyqtSignal(object, object)
    sigResetRequested = pyqtSignal()
    sigDoubleClicked = pyqtSignal()

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._zoom_rect: pg.RectROI | None = None
        self._zoom_start: QPointF | None = None
        self.setMenuEnabled(False)
        self.setMouseEnabled(x=False, y=False)

    def mouseDragEvent(self, ev, axis=None) -> None:
        if ev.button() != Qt.MouseButton.LeftButton:
            ev.ignore()
            return
        ev.accept()

        current = self.mapSceneToView(ev.scenePos())
        if ev.isStart():
            self._zoom_start = self.mapSceneToView(ev.buttonDownScenePos())
            self._zoom_rect = pg.RectROI(
                [self._zoom_start.x(), self._zoom_start.y()],
                [0, 0],
                pen=pg.mkPen(color=Colors.ZOOM_RECT, width=1),
                movable=False,
                resizable=False,
            )
            for handle in self._zoom_rect.getHandles():
                handle.hide()
            self.addItem(self._zoom_rect, ignoreBounds=True)

        if self._zoom_start is None:
            return

        if not ev.isFinish():
            if self._zoom_rect is not None:
                self._zoom_rect.setSize([
                    current.x() - self._zoom_start.x(),
                    current.y() - self._zoom_start.y(),
                ])
            return

        start = self._zoom_start
        if self._zoom_rect is not None:
            self.removeItem(self._zoom_rect)
        self._zoom_rect = None
        self._zoom_start = None

        x_range = (start.x(), current.x()) if axis in (None, 0) else None
        y_range = (start.y(), current.y()) if axis in (None, 1) else None
        self.sigSelectionFinished.emit(x_range, y_range)

    def mouseClickEvent(self, ev) -> None:
        if ev.button() == Qt.MouseButton.RightButton:
            ev.accept()
            self.sigResetRequested.emit()
        elif ev.button() == Qt.MouseButton.LeftButton and ev.double():
            ev.accept()
            self.sigDoubleClicked.emit()
        else:
            super().mouseClickEvent(ev)


class PortfolioChart(QWidget):
    """Line chart for the composite value and its moving average.

    Signals:
        selection_made: Drag selection as (x_range, y_range); x_range holds
            datetimes, y_range fractions, either may be None.
        reset_requested: Right-click on the chart.
        filter_requested: Double-click on the chart.
        render_failed: Emitted when drawing a scene fails.

    Attributes:
        _plot_widget: The underlying PyQtGraph PlotWidget.
        _composite_curve: PlotDataItem for the composite series.
        _average_curve: PlotDataItem for the moving average series.
        _threshold_lines: InfiniteLines for the threshold guides.
    """

    selection_made = pyqtSignal(object, object)
    reset_requested = pyqtSignal()
    filter_requested = pyqtSignal()
    render_failed = pyqtSignal(str)

    def __init__(self, parent: QWidget | None = None) -> None:
        """Initialize the PortfolioChart.

        Args:
            parent: Optional parent widget.
        """
        super().__init__(parent)
        self._scene: ChartScene | None = None
        self._threshold_lines: list[pg.InfiniteLine] = []
        self._setup_ui()
        self._setup_pyqtgraph()
        self._setup_curves()
        self._setup_crosshair()
        self._setup_interactions()

    def _setup_ui(self) -> None:
        """Set up the widget layout."""
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setSpacing(0)

    def _setup_pyqtgraph(self) -> None:
        """Create the plot with a date axis and a percentage axis."""
        self._viewbox = SelectionViewBox()
        self._date_axis = DateAxisItem(orientation="bottom")
        self._percent_axis = PercentAxisItem(orientation="left")

        self._plot_widget = pg.PlotWidget(
            viewBox=self._viewbox,
            axisItems={"bottom": self._date_axis, "left": self._percent_axis},
        )
        self._plot_widget.setBackground(Colors.BG_BASE)
        self._viewbox.setBackgroundColor(Colors.BG_PLOT)
        self._plot_widget.showGrid(x=True, y=True, alpha=0.3)
        # Auto-range button would change the view behind the zoom controller
        self._plot_widget.hideButtons()

        axis_pen = pg.mkPen(color=Colors.BG_BORDER)
        for axis in (self._date_axis, self._percent_axis):
            axis.setPen(axis_pen)
            axis.setTextPen(pg.mkPen(color=Colors.TEXT_PRIMARY))
        self._percent_axis.setTickSpacing(major=0.1, minor=0.1)

        self._layout.addWidget(self._plot_widget)

    def _setup_curves(self) -> None:
        """Set up the two line series and their hover targets."""
        self._composite_curve = pg.PlotDataItem(
            pen=pg.mkPen(color=Colors.SERIES_COMPOSITE, width=LineWidths.SERIES),
        )
        self._average_curve = pg.PlotDataItem(
            pen=pg.mkPen(color=Colors.SERIES_MOVING_AVERAGE, width=LineWidths.SERIES),
        )
        self._plot_widget.addItem(self._composite_curve)
        self._plot_widget.addItem(self._average_curve)

        # Invisible markers that carry the per-point tooltip text
        self._composite_points = self._make_hover_points(Colors.SERIES_COMPOSITE)
        self._average_points = self._make_hover_points(Colors.SERIES_MOVING_AVERAGE)

        self._legend = self._plot_widget.addLegend(
            offset=(-10, -10),
            brush=pg.mkBrush(Colors.BG_LEGEND),
            pen=pg.mkPen(Colors.TEXT_PRIMARY),
            labelTextColor=Colors.TEXT_PRIMARY,
        )
        self._legend.addItem(self._composite_curve, "Composite %")
        self._legend.addItem(self._average_curve, "2-Week Moving Average %")

    def _make_hover_points(self, color: str) -> pg.ScatterPlotItem:
        points = pg.ScatterPlotItem(
            size=6,
            pen=None,
            brush=pg.mkBrush(0, 0, 0, 0),
            hoverable=True,
            hoverBrush=pg.mkBrush(color=color),
            tip=lambda x, y, data: data,
        )
        self._plot_widget.addItem(points)
        return points

    def _setup_crosshair(self) -> None:
        """Set up crosshair lines, label and the tracker that moves them."""
        pen = pg.mkPen(
            color=Colors.CROSSHAIR, style=Qt.PenStyle.DashLine, width=LineWidths.CROSSHAIR
        )
        self._crosshair_v = pg.InfiniteLine(angle=90, movable=False, pen=pen)
        self._crosshair_h = pg.InfiniteLine(angle=0, movable=False, pen=pen)
        self._crosshair_v.setVisible(False)
        self._crosshair_h.setVisible(False)
        self._plot_widget.addItem(self._crosshair_v, ignoreBounds=True)
        self._plot_widget.addItem(self._crosshair_h, ignoreBounds=True)

        self._coord_label = pg.TextItem(text="", color=Colors.CROSSHAIR, anchor=(0, 1))
        self._coord_label.setVisible(False)
        self._plot_widget.addItem(self._coord_label, ignoreBounds=True)

        self._crosshair = CrosshairTracker(self.map_scene_to_data, self)
        self._plot_widget.scene().sigMouseMoved.connect(self._on_mouse_moved)

    def _setup_interactions(self) -> None:
        """Forward ViewBox gestures as chart signals."""
        self._viewbox.sigSelectionFinished.connect(self._on_selection_finished)
        self._viewbox.sigResetRequested.connect(self.reset_requested)
        self._viewbox.sigDoubleClicked.connect(self.filter_requested)

    def _on_selection_finished(
        self,
        x_range: tuple[float, float] | None,
        y_range: tuple[float, float] | None,
    ) -> None:
        """Convert a view-space selection into data-space ranges."""
        x_dates = None
        if x_range is not None:
            x_dates = (from_epoch(x_range[0]), from_epoch(x_range[1]))
        self.selection_made.emit(x_dates, y_range)

    def _on_mouse_moved(self, pos: QPointF) -> None:
        self._crosshair.on_pointer_move(pos.x(), pos.y())

    def map_scene_to_data(self, pixel_x: float, pixel_y: float) -> tuple[float, float]:
        """Map a scene pixel position to (epoch seconds, value).

        Raises:
            CoordinateMappingError: If the position is outside the plot area.
        """
        pos = QPointF(pixel_x, pixel_y)
        if not self._viewbox.sceneBoundingRect().contains(pos):
            raise CoordinateMappingError(f"({pixel_x}, {pixel_y}) is outside the plot area")
        point = self._viewbox.mapSceneToView(pos)
        return point.x(), point.y()

    def show_crosshair(self, x: float, y: float, label: str) -> None:
        """Move the crosshair to a data position and show it."""
        self._crosshair_v.setPos(x)
        self._crosshair_h.setPos(y)
        self._coord_label.setText(label)

        # Keep the label inside the plot near the edges
        (x_min, x_max), (y_min, y_max) = self._plot_widget.viewRange()
        anchor_x = 0 if x < (x_min + x_max) / 2 else 1
        anchor_y = 1 if y < (y_min + y_max) / 2 else 0
        self._coord_label.setAnchor((anchor_x, anchor_y))
        self._coord_label.setPos(x, y)

        self._crosshair_v.setVisible(True)
        self._crosshair_h.setVisible(True)
        self._coord_label.setVisible(True)

    def hide_crosshair(self) -> None:
        """Hide the crosshair."""
        self._crosshair_v.setVisible(False)
        self._crosshair_h.setVisible(False)
        self._coord_label.setVisible(False)

    @property
    def crosshair_visible(self) -> bool:
        return self._crosshair_v.isVisible()

    @property
    def scene_data(self) -> ChartScene | None:
        """Scene currently drawn, None before the first render."""
        return self._scene

    def set_scene(self, scene: ChartScene) -> None:
        """Draw a scene.

        Args:
            scene: Output of the chart renderer.
        """
        try:
            self._set_series(self._composite_curve, self._composite_points, scene.composite)
            self._set_series(self._average_curve, self._average_points, scene.moving_average)
            self._set_thresholds(scene)

            self._date_axis.setTicks([list(scene.x_ticks)] if scene.x_ticks else None)

            y_min, y_max = scene.y_bounds
            if scene.x_range is not None:
                self._plot_widget.setRange(
                    xRange=scene.x_range, yRange=(y_min, y_max), padding=0
                )
            else:
                self._plot_widget.setYRange(y_min, y_max, padding=0)

            self._scene = scene
            logger.debug("Chart drawn with %s ticks", scene.granularity.value)
        except Exception as e:
            error_msg = f"Failed to render chart: {e}"
            logger.error(error_msg)
            self.render_failed.emit(error_msg)

    def _set_series(
        self, curve: pg.PlotDataItem, points: pg.ScatterPlotItem, series: SeriesData
    ) -> None:
        x = np.array([to_epoch(ts) for ts in series.timestamps], dtype=float)
        y = np.array(series.values, dtype=float)
        curve.setData(x=x, y=y)
        points.setData(x=x, y=y, data=list(series.tooltips))

    def _set_thresholds(self, scene: ChartScene) -> None:
        for line in self._threshold_lines:
            self._plot_widget.removeItem(line)
        self._threshold_lines = []

        for threshold in scene.thresholds:
            style = (
                Qt.PenStyle.DashLine
                if threshold.style is LineStyle.DASHED
                else Qt.PenStyle.SolidLine
            )
            line = pg.InfiniteLine(
                pos=threshold.level,
                angle=0,
                movable=False,
                pen=pg.mkPen(color=Colors.THRESHOLD, width=LineWidths.THRESHOLD, style=style),
            )
            self._plot_widget.addItem(line, ignoreBounds=True)
            self._threshold_lines.append(line)

