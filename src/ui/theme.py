"""Theme management for Portfolio Monitor.

Provides QSS stylesheet generation for the dark chart theme.
"""

import logging

from PyQt6.QtWidgets import QApplication

from src.ui.constants import Colors, Fonts, FontSizes, Spacing

logger = logging.getLogger(__name__)


def get_stylesheet() -> str:
    """Generate the complete QSS stylesheet for the application.

    Returns:
        A string containing the complete QSS stylesheet.
    """
    return f"""
/* Main Window */
QMainWindow {{
    background-color: {Colors.BG_BASE};
}}

/* Dialogs */
QDialog {{
    background-color: {Colors.BG_BASE};
}}

/* General Widget Styling */
QWidget {{
    color: {Colors.TEXT_PRIMARY};
    font-family: "{Fonts.UI}";
    font-size: {FontSizes.BODY}pt;
}}

/* Labels */
QLabel {{
    color: {Colors.TEXT_PRIMARY};
    background-color: transparent;
}}

/* Buttons */
QPushButton {{
    background-color: {Colors.BG_ELEVATED};
    color: {Colors.TEXT_PRIMARY};
    border: 1px solid {Colors.BG_BORDER};
    padding: {Spacing.SM}px {Spacing.LG}px;
}}

QPushButton:hover {{
    border-color: {Colors.CROSSHAIR};
}}

QPushButton:pressed {{
    background-color: {Colors.BG_BASE};
}}

/* Combo Boxes */
QComboBox {{
    background-color: {Colors.BG_ELEVATED};
    color: {Colors.TEXT_PRIMARY};
    border: 1px solid {Colors.BG_BORDER};
    padding: {Spacing.XS}px {Spacing.SM}px;
}}

QComboBox QAbstractItemView {{
    background-color: {Colors.BG_ELEVATED};
    color: {Colors.TEXT_PRIMARY};
    selection-background-color: {Colors.BG_BORDER};
}}

/* Date Pickers */
QDateEdit {{
    background-color: {Colors.BG_ELEVATED};
    color: {Colors.TEXT_PRIMARY};
    border: 1px solid {Colors.BG_BORDER};
    padding: {Spacing.XS}px {Spacing.SM}px;
}}

QDateEdit:focus {{
    border-color: {Colors.CROSSHAIR};
}}

/* Tool Tips */
QToolTip {{
    background-color: {Colors.BG_ELEVATED};
    color: {Colors.TEXT_PRIMARY};
    border: 1px solid {Colors.BG_BORDER};
    padding: {Spacing.XS}px;
}}
"""


def apply_theme(app: QApplication) -> None:
    """Apply the stylesheet to the application.

    Args:
        app: The QApplication instance to apply the theme to.
    """
    app.setStyleSheet(get_stylesheet())
    logger.info("Theme applied")
