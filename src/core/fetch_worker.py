"""Background worker for fetching portfolio data off the UI thread."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from PyQt6.QtCore import QObject, QRunnable, pyqtSignal

from src.core.exceptions import PortfolioMonitorError


class FetchWorkerSignals(QObject):
    """Signals for FetchWorker communication.

    Each signal carries the request sequence number first so the receiver can
    drop results from superseded requests.
    """

    finished = pyqtSignal(int, object)  # sequence, result
    error = pyqtSignal(int, str)  # sequence, error message


class FetchWorker(QRunnable):
    """Runs a fetch function on a background thread.

    Usage:
        worker = FetchWorker(seq, fetch_fn, selection)
        worker.signals.finished.connect(self._on_finished)
        QThreadPool.globalInstance().start(worker)
    """

    def __init__(self, sequence: int, fetch_fn: Callable[[Any], Any], request: Any) -> None:
        """Initialize worker.

        Args:
            sequence: Request sequence number, echoed in every signal.
            fetch_fn: Function to execute. Receives request as argument.
            request: Request passed to fetch_fn.
        """
        super().__init__()
        self.sequence = sequence
        self._fetch_fn = fetch_fn
        self._request = request
        self.signals = FetchWorkerSignals()

    def run(self) -> None:
        """Execute the fetch function."""
        try:
            result = self._fetch_fn(self._request)
        except PortfolioMonitorError as e:
            self.signals.error.emit(self.sequence, str(e))
            return
        except Exception as e:
            self.signals.error.emit(self.sequence, f"Unexpected error: {e}")
            return
        self.signals.finished.emit(self.sequence, result)
