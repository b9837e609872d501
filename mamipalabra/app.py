"""Application entry point and setup for MamiPalabra."""

import logging
import sys

from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication

from mamipalabra.core.stats import PreferencesStore, StatsStore
from mamipalabra.core.storage import LocalStorage
from mamipalabra.core.words import WordRepository
from mamipalabra.ui.main_window import MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Initialize the application, load the word lists, and start the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("MamiPalabra")
    app.setApplicationDisplayName("MamiPalabra")

    words = WordRepository()
    storage = LocalStorage()
    logging.info("Storing stats in %s", storage.directory)

    window = MainWindow(
        words=words,
        stats_store=StatsStore(storage),
        preferences=PreferencesStore(storage),
    )
    screen = QGuiApplication.primaryScreen()
    if screen is not None:
        geometry = screen.availableGeometry()
        window.resize(min(720, geometry.width()), min(960, geometry.height()))
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
