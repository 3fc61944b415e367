"""Chart parameter dialog: tax type and closing date range."""

from __future__ import annotations

import logging
from datetime import date

from PyQt6.QtCore import QDate
from PyQt6.QtWidgets import (
    QComboBox,
    QDateEdit,
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from src.core import config
from src.core.data_service import PortfolioDataService
from src.core.exceptions import DataFetchError
from src.core.models import FilterSelection
from src.ui.constants import Colors, Limits, Spacing

logger = logging.getLogger(__name__)

DATE_DISPLAY_FORMAT = "MM/dd/yyyy"


def _to_qdate(value: date) -> QDate:
    return QDate(value.year, value.month, value.day)


def _from_qdate(value: QDate) -> date:
    return date(value.year(), value.month(), value.day())


class FilterDialog(QDialog):
    """Modal dialog for choosing the tax type and date range to chart.

    The combo box is populated from the data service. If the categories
    cannot be loaded the error is shown inside the dialog and the list is
    left empty, so Load Chart stays disabled.
    """

    def __init__(
        self,
        initial: FilterSelection,
        categories: list[str] | None = None,
        error_message: str = "",
        parent: QWidget | None = None,
    ) -> None:
        """Initialize FilterDialog.

        Args:
            initial: Selection to pre-populate the fields with.
            categories: Tax types offered in the combo box.
            error_message: Message shown when categories failed to load.
            parent: Parent widget.
        """
        super().__init__(parent)
        self._initial = initial
        self._categories = list(categories or [])
        self._setup_ui(error_message)
        self._apply_style()
        self._connect_signals()
        self._populate()

    def _setup_ui(self, error_message: str) -> None:
        """Set up dialog UI."""
        self.setWindowTitle("Select Chart Parameters")
        self.setMinimumWidth(Limits.DIALOG_WIDTH)
        self.setModal(True)

        layout = QVBoxLayout(self)
        layout.setSpacing(Spacing.MD)
        layout.setContentsMargins(Spacing.LG, Spacing.LG, Spacing.LG, Spacing.LG)

        form = QFormLayout()
        form.setSpacing(Spacing.SM)

        self._category_combo = QComboBox()
        form.addRow("Tax Type:", self._category_combo)

        self._start_date = QDateEdit()
        self._start_date.setCalendarPopup(True)
        self._start_date.setDisplayFormat(DATE_DISPLAY_FORMAT)
        form.addRow("Start Date:", self._start_date)

        self._end_date = QDateEdit()
        self._end_date.setCalendarPopup(True)
        self._end_date.setDisplayFormat(DATE_DISPLAY_FORMAT)
        form.addRow("End Date:", self._end_date)

        layout.addLayout(form)

        self._error_label = QLabel(error_message)
        self._error_label.setObjectName("filter_error")
        self._error_label.setWordWrap(True)
        self._error_label.setVisible(bool(error_message))
        layout.addWidget(self._error_label)

        btn_layout = QHBoxLayout()
        btn_layout.addStretch()

        self._load_btn = QPushButton("Load Chart")
        self._load_btn.setDefault(True)
        self._load_btn.clicked.connect(self.accept)
        btn_layout.addWidget(self._load_btn)

        self._cancel_btn = QPushButton("Cancel")
        self._cancel_btn.clicked.connect(self.reject)
        btn_layout.addWidget(self._cancel_btn)

        layout.addLayout(btn_layout)

    def _apply_style(self) -> None:
        self._error_label.setStyleSheet(f"color: {Colors.SIGNAL_ERROR};")
        self._load_btn.setStyleSheet(f"""
            QPushButton {{
                background-color: {Colors.SIGNAL_INFO};
                color: {Colors.BG_BASE};
                border: none;
                padding: {Spacing.SM}px {Spacing.LG}px;
                font-weight: bold;
            }}
            QPushButton:disabled {{
                background-color: {Colors.BG_BORDER};
                color: {Colors.TEXT_SECONDARY};
            }}
        """)

    def _connect_signals(self) -> None:
        self._start_date.dateChanged.connect(self._on_start_changed)

    def _populate(self) -> None:
        """Fill the fields from the initial selection."""
        self._category_combo.addItems(self._categories)
        if self._initial.category in self._categories:
            self._category_combo.setCurrentText(self._initial.category)
        elif config.DEFAULT_CATEGORY in self._categories:
            self._category_combo.setCurrentText(config.DEFAULT_CATEGORY)
        elif self._categories:
            self._category_combo.setCurrentIndex(0)

        self._start_date.setDate(_to_qdate(self._initial.start))
        self._end_date.setDate(_to_qdate(max(self._initial.end, self._initial.start)))
        self._load_btn.setEnabled(bool(self._categories))

    def _on_start_changed(self, start: QDate) -> None:
        """Keep the end date on or after the start date."""
        if self._end_date.date() < start:
            self._end_date.setDate(start)

    def categories(self) -> list[str]:
        return list(self._categories)

    def get_selection(self) -> FilterSelection:
        """Get the selection currently entered in the dialog.

        Returns:
            FilterSelection with the end date clamped to the start date.
        """
        start = _from_qdate(self._start_date.date())
        end = _from_qdate(self._end_date.date())
        return FilterSelection(
            category=self._category_combo.currentText(),
            start=start,
            end=max(end, start),
        )


def load_categories(service: PortfolioDataService) -> tuple[list[str], str]:
    """Fetch the tax types for the dialog.

    Returns:
        Tuple of (categories, error message). On failure the list is empty
        and the message describes the error.
    """
    try:
        return service.list_categories(), ""
    except DataFetchError as e:
        logger.error("Failed to load tax types: %s", e)
        return [], str(e)


def run_filter_dialog(
    service: PortfolioDataService,
    initial: FilterSelection,
    parent: QWidget | None = None,
) -> FilterSelection | None:
    """Show the dialog modally.

    Args:
        service: Source of the tax type list.
        initial: Selection to pre-populate the dialog with.
        parent: Parent widget.

    Returns:
        The accepted selection, or None if the dialog was cancelled.
    """
    categories, error_message = load_categories(service)
    dialog = FilterDialog(initial, categories, error_message, parent)
    if dialog.exec() != QDialog.DialogCode.Accepted:
        return None
    return dialog.get_selection()
