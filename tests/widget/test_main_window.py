"""Widget tests for MainWindow wiring."""

from datetime import date, datetime

import pandas as pd

from src.core.exceptions import DataFetchError
from src.core.fetch_worker import FetchWorker
from src.core.models import FilterSelection, ZoomState
from src.ui.main_window import MainWindow


class CollectingExecutor:
    """Holds workers so tests decide when they run."""

    def __init__(self) -> None:
        self.workers: list[FetchWorker] = []

    def __call__(self, worker: FetchWorker) -> None:
        self.workers.append(worker)

    def run_all(self) -> None:
        workers, self.workers = self.workers, []
        for worker in workers:
            worker.run()


class ScriptedDialog:
    """Dialog stand-in returning queued answers."""

    def __init__(self, *answers: FilterSelection | None) -> None:
        self.answers = list(answers)

    def __call__(self, initial: FilterSelection) -> FilterSelection | None:
        return self.answers.pop(0)


def _make_window(qtbot, service, *answers):
    executor = CollectingExecutor()
    window = MainWindow(
        service,
        run_dialog=ScriptedDialog(*answers),
        executor=executor,
        today=lambda: date(2024, 1, 31),
    )
    qtbot.addWidget(window)
    return window, executor


class TestMainWindowSetup:
    """Tests for window structure."""

    def test_title_and_widgets(self, qtbot, fake_service) -> None:
        """Window has the application title and a Reset Zoom button."""
        window, _ = _make_window(qtbot, fake_service)

        assert window.windowTitle() == "Portfolio Monitor - Guyton-Klinger"
        assert window._reset_btn.text() == "Reset Zoom"
        assert window.banner.isHidden()


class TestMainWindowLoading:
    """Tests for the filter and load workflow."""

    def test_accepted_selection_loads_chart(
        self, qtbot, fake_service, tax_free_selection: FilterSelection
    ) -> None:
        """Accepting the dialog loads and draws the data."""
        window, executor = _make_window(qtbot, fake_service, tax_free_selection)

        window.open_filter_dialog()
        assert window.loader.is_pending
        executor.run_all()

        assert window.title_text == "Tax Free"
        assert window.footer_text == (
            "Withdrawal Strategy: Guardrails\n"
            "Latest Composite: 78.00%  Latest Moving Average: 85.00%"
        )
        assert window.controller.y_bounds == (0.7, 1.0)
        assert window.chart.scene_data is not None
        assert len(window.chart.scene_data.composite) == 2

    def test_cancelled_dialog_changes_nothing(
        self, qtbot, fake_service, tax_free_selection: FilterSelection
    ) -> None:
        """Cancelling after a load leaves selection and dataset as they were."""
        window, executor = _make_window(qtbot, fake_service, tax_free_selection, None)
        window.open_filter_dialog()
        executor.run_all()
        dataset = window.controller.dataset
        scene = window.chart.scene_data

        assert window.open_filter_dialog() is None

        assert executor.workers == []
        assert window.session.selection == tax_free_selection
        assert window.controller.dataset is dataset
        assert window.chart.scene_data is scene

    def test_failed_load_keeps_chart(
        self, qtbot, fake_service, tax_free_selection: FilterSelection
    ) -> None:
        """A failed reload shows a banner and keeps the previous chart."""
        taxable = FilterSelection("Taxable", date(2024, 1, 1), date(2024, 1, 31))
        window, executor = _make_window(qtbot, fake_service, tax_free_selection, taxable)
        window.open_filter_dialog()
        executor.run_all()
        scene = window.chart.scene_data

        window.open_filter_dialog()
        executor.run_all()

        assert window.banner.message == "No data found."
        assert not window.banner.isHidden()
        assert window.chart.scene_data is scene
        assert window.title_text == "Tax Free"

    def test_database_error_is_shown(
        self, qtbot, fake_service, tax_free_selection: FilterSelection
    ) -> None:
        """A database failure is shown in the banner."""
        fake_service.series_error = DataFetchError("Error connecting to database:\noffline")
        window, executor = _make_window(qtbot, fake_service, tax_free_selection)

        window.open_filter_dialog()
        executor.run_all()

        assert window.banner.message == "Error connecting to database:\noffline"
        assert window.chart.scene_data is None

    def test_superseded_load_is_not_shown(
        self, qtbot, fake_service, tax_free_selection: FilterSelection
    ) -> None:
        """Only the latest accepted selection is displayed."""
        fake_service.frames["Taxable"] = pd.DataFrame(
            {
                "Closing": pd.to_datetime(["2024-01-02"]),
                "CompositePercent": [1.01],
                "MovingAverage_2Week_Percent": [0.99],
            }
        )
        taxable = FilterSelection("Taxable", date(2024, 1, 1), date(2024, 1, 31))
        window, executor = _make_window(qtbot, fake_service, tax_free_selection, taxable)

        window.open_filter_dialog()
        window.open_filter_dialog()
        worker_a, worker_b = executor.workers
        worker_b.run()
        worker_a.run()

        assert window.title_text == "Taxable"
        assert window.controller.dataset.latest_composite == 1.01


class TestMainWindowZoom:
    """Tests for zoom wiring."""

    def test_selection_zooms_and_reset_button_restores(
        self, qtbot, fake_service, tax_free_selection: FilterSelection
    ) -> None:
        """A chart selection zooms; Reset Zoom returns to the full view."""
        window, executor = _make_window(qtbot, fake_service, tax_free_selection)
        window.open_filter_dialog()
        executor.run_all()

        window.chart.selection_made.emit(
            (datetime(2024, 1, 5), datetime(2024, 1, 10)), None
        )
        assert window.controller.state is ZoomState.ZOOMED
        assert window.chart.scene_data.y_bounds == (0.7, 0.9)

        window._reset_btn.click()
        assert window.controller.state is ZoomState.IDLE
        assert window.chart.scene_data.y_bounds == (0.7, 1.0)

    def test_right_click_resets(
        self, qtbot, fake_service, tax_free_selection: FilterSelection
    ) -> None:
        """reset_requested from the chart resets the zoom."""
        window, executor = _make_window(qtbot, fake_service, tax_free_selection)
        window.open_filter_dialog()
        executor.run_all()
        window.chart.selection_made.emit(None, (0.8, 0.9))

        window.chart.reset_requested.emit()

        assert window.controller.window.is_auto

    def test_degenerate_selection_leaves_scene(
        self, qtbot, fake_service, tax_free_selection: FilterSelection
    ) -> None:
        """A zero-size drag does not redraw."""
        window, executor = _make_window(qtbot, fake_service, tax_free_selection)
        window.open_filter_dialog()
        executor.run_all()
        scene = window.chart.scene_data

        point = datetime(2024, 1, 3)
        window.chart.selection_made.emit((point, point), None)

        assert window.chart.scene_data is scene

    def test_new_load_resets_zoom(
        self, qtbot, fake_service, tax_free_selection: FilterSelection
    ) -> None:
        """Loading a new selection returns to the full view."""
        window, executor = _make_window(
            qtbot, fake_service, tax_free_selection, tax_free_selection
        )
        window.open_filter_dialog()
        executor.run_all()
        window.chart.selection_made.emit(None, (0.8, 0.9))

        window.open_filter_dialog()
        assert window.controller.state is ZoomState.ZOOMED
        executor.run_all()

        assert window.controller.state is ZoomState.IDLE

    def test_double_click_opens_filter(
        self, qtbot, fake_service, tax_free_selection: FilterSelection
    ) -> None:
        """filter_requested from the chart opens the dialog."""
        window, executor = _make_window(qtbot, fake_service, tax_free_selection)

        window.chart.filter_requested.emit()

        assert window.session.selection == tax_free_selection
        assert len(executor.workers) == 1
