"""Main application window for Portfolio Monitor.

Wires the filter session, series loader, zoom controller and chart renderer
to the chart widget.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from src.core import config
from src.core.chart_renderer import ChartRenderer
from src.core.data_service import PortfolioDataService
from src.core.fetch_worker import FetchWorker
from src.core.filter_session import DialogRunner, FilterSession
from src.core.models import FilterSelection, LoadResult, TimeSeriesDataset
from src.core.series_loader import SeriesLoader
from src.core.zoom_controller import ZoomPanController
from src.ui.components.portfolio_chart import PortfolioChart
from src.ui.components.status_banner import StatusBanner
from src.ui.constants import Colors, Fonts, FontSizes, Limits, Spacing
from src.ui.dialogs.filter_dialog import run_filter_dialog

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Single-chart window: title, Reset Zoom button, chart, footer, banner."""

    def __init__(
        self,
        service: PortfolioDataService,
        run_dialog: DialogRunner | None = None,
        executor: Callable[[FetchWorker], None] | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        """Initialize the main window.

        Args:
            service: Data service for series, strategy and tax types.
            run_dialog: Shows the filter dialog; defaults to FilterDialog.
            executor: Starts fetch workers; defaults to the global thread pool.
            today: Clock used for the default date range.
        """
        super().__init__()
        self.setWindowTitle(config.WINDOW_TITLE)
        self.setMinimumSize(Limits.MIN_WINDOW_WIDTH, Limits.MIN_WINDOW_HEIGHT)

        self._service = service
        self._renderer = ChartRenderer()
        self._controller = ZoomPanController(self)
        self._loader = SeriesLoader(service, executor=executor, parent=self)
        self._session = FilterSession(
            run_dialog or self._run_filter_dialog, today=today, parent=self
        )
        self._strategy_name = config.STRATEGY_PLACEHOLDER
        self._title = ""

        self._setup_ui()
        self._connect_signals()

        logger.debug("MainWindow initialized")

    def _setup_ui(self) -> None:
        """Set up the title row, chart, banner and footer."""
        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(Spacing.LG, Spacing.MD, Spacing.LG, Spacing.MD)
        layout.setSpacing(Spacing.SM)

        header = QHBoxLayout()
        self._title_label = QLabel()
        self._title_label.setObjectName("chart_title")
        self._title_label.setFont(QFont(Fonts.TITLE, FontSizes.TITLE, QFont.Weight.Bold))
        self._title_label.setStyleSheet(f"color: {Colors.TEXT_TITLE};")
        self._title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        header.addWidget(self._title_label, stretch=1)

        self._reset_btn = QPushButton("Reset Zoom")
        self._reset_btn.setObjectName("reset_zoom")
        header.addWidget(self._reset_btn)
        layout.addLayout(header)

        self._banner = StatusBanner()
        layout.addWidget(self._banner)

        self._chart = PortfolioChart()
        layout.addWidget(self._chart, stretch=1)

        self._footer_label = QLabel()
        self._footer_label.setObjectName("chart_footer")
        self._footer_label.setFont(QFont(Fonts.TITLE, FontSizes.FOOTER, QFont.Weight.Bold))
        self._footer_label.setStyleSheet(f"color: {Colors.TEXT_FOOTER};")
        self._footer_label.setAlignment(
            Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter
        )
        layout.addWidget(self._footer_label)

        self.setCentralWidget(central)

    def _connect_signals(self) -> None:
        self._session.selection_accepted.connect(self._on_selection_accepted)
        self._loader.loaded.connect(self._on_loaded)
        self._loader.failed.connect(self._on_load_failed)
        self._controller.view_changed.connect(self._on_view_changed)

        self._chart.selection_made.connect(self._controller.apply_selection)
        self._chart.reset_requested.connect(self._controller.reset)
        self._chart.filter_requested.connect(self.open_filter_dialog)
        self._chart.render_failed.connect(self._banner.show_error)
        self._reset_btn.clicked.connect(self._controller.reset)

    def _run_filter_dialog(self, initial: FilterSelection) -> FilterSelection | None:
        return run_filter_dialog(self._service, initial, self)

    @property
    def session(self) -> FilterSession:
        return self._session

    @property
    def loader(self) -> SeriesLoader:
        return self._loader

    @property
    def controller(self) -> ZoomPanController:
        return self._controller

    @property
    def chart(self) -> PortfolioChart:
        return self._chart

    @property
    def banner(self) -> StatusBanner:
        return self._banner

    @property
    def title_text(self) -> str:
        return self._title_label.text()

    @property
    def footer_text(self) -> str:
        return self._footer_label.text()

    def open_filter_dialog(self) -> FilterSelection | None:
        """Show the filter dialog; an accepted selection starts a reload."""
        return self._session.open()

    def _on_selection_accepted(self, selection: FilterSelection) -> None:
        self._loader.request(selection)

    def _on_loaded(self, result: LoadResult) -> None:
        """Commit a finished load: new dataset, zoom reset, redraw."""
        self._banner.dismiss()
        self._strategy_name = result.strategy_name
        self._title = result.selection.category
        self._controller.set_dataset(result.dataset, reset_zoom=True)

    def _on_load_failed(self, message: str) -> None:
        """Surface a failed load; the current chart stays as it is."""
        self._banner.show_error(message)

    def _on_view_changed(self, _window: object) -> None:
        dataset: TimeSeriesDataset = self._controller.dataset
        scene = self._renderer.render(
            dataset,
            self._controller.window,
            self._controller.granularity,
            strategy_name=self._strategy_name,
            title=self._title,
        )
        self._title_label.setText(scene.title)
        self._footer_label.setText(scene.footer)
        self._chart.set_scene(scene)
