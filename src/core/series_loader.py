"""Asynchronous reload of the portfolio series.

Each request runs on the thread pool and is tagged with a sequence number.
Only the most recent request may commit its result; anything that arrives
for an older request is dropped, so the chart always reflects the last
selection the user accepted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from PyQt6.QtCore import QObject, QThreadPool, pyqtSignal

from src.core import config
from src.core.data_service import PortfolioDataService
from src.core.exceptions import DataFetchError, EmptyResultError
from src.core.fetch_worker import FetchWorker
from src.core.models import FilterSelection, LoadResult, TimeSeriesDataset

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No data found."


def load_selection(service: PortfolioDataService, selection: FilterSelection) -> LoadResult:
    """Fetch everything needed to display one selection.

    A failing strategy lookup degrades to the placeholder label instead of
    failing the load.

    Raises:
        DataFetchError: If the series query fails.
        EmptyResultError: If the query returns no rows.
    """
    try:
        strategy_name = service.fetch_strategy_label()
    except DataFetchError as e:
        logger.warning("Withdrawal strategy unavailable: %s", e)
        strategy_name = config.STRATEGY_PLACEHOLDER

    df = service.fetch_series(selection.category, selection.start, selection.end)
    dataset = TimeSeriesDataset.from_frame(df)
    if dataset.is_empty():
        raise EmptyResultError(NO_DATA_MESSAGE)
    return LoadResult(selection=selection, dataset=dataset, strategy_name=strategy_name)


class SeriesLoader(QObject):
    """Issues reload requests and commits only the latest one.

    Signals:
        loading_started: Emitted with the FilterSelection when a request is issued.
        loaded: Emitted with a LoadResult for the latest request.
        failed: Emitted with a user-facing message for the latest request.
    """

    loading_started = pyqtSignal(object)  # FilterSelection
    loaded = pyqtSignal(object)  # LoadResult
    failed = pyqtSignal(str)

    def __init__(
        self,
        service: PortfolioDataService,
        executor: Callable[[FetchWorker], None] | None = None,
        parent: QObject | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            service: Data service used by the workers.
            executor: Starts a worker; defaults to the global thread pool.
            parent: Parent QObject.
        """
        super().__init__(parent)
        self._service = service
        self._executor = executor or QThreadPool.globalInstance().start
        self._sequence = 0
        self._pending = False
        # Workers are kept alive until they report back
        self._workers: dict[int, FetchWorker] = {}

    @property
    def latest_sequence(self) -> int:
        """Sequence number of the most recently issued request."""
        return self._sequence

    @property
    def is_pending(self) -> bool:
        """True while the latest request has not resolved."""
        return self._pending

    def request(self, selection: FilterSelection) -> int:
        """Start loading a selection in the background.

        Args:
            selection: Category and date range to load.

        Returns:
            The sequence number assigned to the request.
        """
        self._sequence += 1
        sequence = self._sequence
        self._pending = True

        worker = FetchWorker(sequence, self._fetch, selection)
        worker.signals.finished.connect(self._on_worker_finished)
        worker.signals.error.connect(self._on_worker_error)
        self._workers[sequence] = worker

        logger.info("Loading %s (request %d)", selection.category, sequence)
        self.loading_started.emit(selection)
        self._executor(worker)
        return sequence

    def _fetch(self, selection: FilterSelection) -> LoadResult:
        return load_selection(self._service, selection)

    def _is_current(self, sequence: int) -> bool:
        self._workers.pop(sequence, None)
        if sequence != self._sequence:
            logger.debug("Discarding result of superseded request %d", sequence)
            return False
        self._pending = False
        return True

    def _on_worker_finished(self, sequence: int, result: LoadResult) -> None:
        if not self._is_current(sequence):
            return
        logger.info(
            "Loaded %d rows for %s (request %d)",
            len(result.dataset),
            result.selection.category,
            sequence,
        )
        self.loaded.emit(result)

    def _on_worker_error(self, sequence: int, message: str) -> None:
        if not self._is_current(sequence):
            return
        if message == NO_DATA_MESSAGE:
            logger.info("No rows for request %d", sequence)
        else:
            logger.error("Request %d failed: %s", sequence, message)
        self.failed.emit(message)
