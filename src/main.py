"""Portfolio Monitor - composite portfolio chart."""

import logging
import sys

from PyQt6.QtWidgets import QApplication, QMessageBox

from src.__version__ import __version__
from src.core import config
from src.core.data_service import create_data_service
from src.core.exceptions import DataFetchError
from src.ui import theme
from src.ui.main_window import MainWindow

logger = logging.getLogger(__name__)


def main() -> int:
    """Application entry point."""
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    logger.info("Starting %s %s", config.APP_NAME, __version__)

    app = QApplication(sys.argv)
    app.setApplicationName(config.APP_NAME)
    theme.apply_theme(app)

    try:
        service = create_data_service()
    except DataFetchError as e:
        logger.error("Database unavailable: %s", e)
        QMessageBox.critical(None, config.APP_NAME, str(e))
        return 1

    window = MainWindow(service)

    # The parameter dialog comes first; cancelling it on launch exits
    if window.open_filter_dialog() is None:
        logger.info("No chart parameters selected, exiting")
        return 0

    window.showMaximized()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
