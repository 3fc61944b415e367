"""Filter selection held across dialog openings."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from PyQt6.QtCore import QObject, pyqtSignal

from src.core import config
from src.core.date_utils import years_before
from src.core.models import FilterSelection

logger = logging.getLogger(__name__)

# Shows the filter dialog pre-populated with the given selection and returns
# the accepted selection, or None if the user cancelled.
DialogRunner = Callable[[FilterSelection], "FilterSelection | None"]


class FilterSession(QObject):
    """Holds the active (category, start, end) selection.

    The selection is passed by value into the dialog and only replaced when
    the dialog is accepted, so a cancelled dialog leaves everything as it was
    and re-opening shows the previous values.

    Signals:
        selection_accepted: Emitted with the new FilterSelection on accept.
    """

    selection_accepted = pyqtSignal(object)  # FilterSelection

    def __init__(
        self,
        run_dialog: DialogRunner,
        today: Callable[[], date] = date.today,
        parent: QObject | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            run_dialog: Callable that shows the dialog.
            today: Clock used for the default date range.
            parent: Parent QObject.
        """
        super().__init__(parent)
        self._run_dialog = run_dialog
        self._today = today
        self._selection: FilterSelection | None = None

    @property
    def selection(self) -> FilterSelection | None:
        """Last accepted selection, None before the first accept."""
        return self._selection

    def default_selection(self) -> FilterSelection:
        """Selection shown on first launch: the last two years up to today."""
        today = self._today()
        return FilterSelection(
            category=config.DEFAULT_CATEGORY,
            start=years_before(today, config.DEFAULT_LOOKBACK_YEARS),
            end=today,
        )

    def open(self) -> FilterSelection | None:
        """Show the dialog and apply the result.

        Returns:
            The accepted selection, or None if the dialog was cancelled.
        """
        initial = self._selection or self.default_selection()
        result = self._run_dialog(initial)
        if result is None:
            logger.debug("Filter dialog cancelled, keeping %s", self._selection)
            return None

        if result.end < result.start:
            result = FilterSelection(result.category, result.start, result.start)

        self._selection = result
        logger.info(
            "Filter selection: %s from %s to %s", result.category, result.start, result.end
        )
        self.selection_accepted.emit(result)
        return result
