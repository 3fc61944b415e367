"""Inline notification banner for Portfolio Monitor.

Shows load failures and other transient messages above the chart without
blocking the window.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QTimer
from PyQt6.QtWidgets import QFrame, QHBoxLayout, QLabel, QPushButton, QWidget

from src.ui.constants import Colors, Spacing, Timing

logger = logging.getLogger(__name__)


class StatusBanner(QFrame):
    """Dismissible message strip that hides itself after a delay.

    Attributes:
        VARIANTS: Mapping of variant names to (color, icon) tuples.
    """

    VARIANTS: dict[str, tuple[str, str]] = {
        "error": (Colors.SIGNAL_ERROR, "✗"),
        "info": (Colors.SIGNAL_INFO, "ℹ"),
    }

    def __init__(self, parent: QWidget | None = None) -> None:
        """Initialize the StatusBanner.

        Args:
            parent: Optional parent widget.
        """
        super().__init__(parent)
        self._variant = "info"
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self.dismiss)
        self._setup_ui()
        self.setVisible(False)

    def _setup_ui(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(Spacing.MD, Spacing.SM, Spacing.MD, Spacing.SM)

        self._icon_label = QLabel()
        layout.addWidget(self._icon_label)

        self._message_label = QLabel()
        self._message_label.setObjectName("banner_message")
        self._message_label.setWordWrap(True)
        self._message_label.setStyleSheet(f"color: {Colors.TEXT_PRIMARY};")
        layout.addWidget(self._message_label, stretch=1)

        self._close_button = QPushButton("✕")
        self._close_button.setObjectName("banner_close")
        self._close_button.setFlat(True)
        self._close_button.clicked.connect(self.dismiss)
        layout.addWidget(self._close_button)

        self._apply_variant()

    def _apply_variant(self) -> None:
        color, icon = self.VARIANTS.get(self._variant, self.VARIANTS["info"])
        self.setStyleSheet(f"""
            StatusBanner {{
                background-color: {Colors.BG_ELEVATED};
                border: 1px solid {color};
                border-radius: 4px;
            }}
        """)
        self._icon_label.setText(icon)
        self._icon_label.setStyleSheet(f"color: {color};")

    @property
    def variant(self) -> str:
        return self._variant

    @property
    def message(self) -> str:
        return self._message_label.text()

    def show_message(
        self,
        message: str,
        variant: str = "info",
        duration: int = Timing.BANNER_DURATION,
    ) -> None:
        """Display a message, replacing any message already shown.

        Args:
            message: Text to display.
            variant: "error" or "info".
            duration: Auto-dismiss delay in ms (0 = stays until closed).
        """
        self._variant = variant if variant in self.VARIANTS else "info"
        self._message_label.setText(message)
        self._apply_variant()
        self.setVisible(True)

        self._timer.stop()
        if duration > 0:
            self._timer.start(duration)

    def show_error(self, message: str) -> None:
        """Display an error message."""
        logger.debug("Banner error: %s", message)
        self.show_message(message, "error")

    def dismiss(self) -> None:
        """Hide the banner."""
        self._timer.stop()
        self.setVisible(False)

    @property
    def is_timer_active(self) -> bool:
        return self._timer.isActive()
