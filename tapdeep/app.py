"""Application entry point and setup for TapDeep."""

import logging
import sys

from PySide6.QtWidgets import QApplication

from tapdeep.core.awards import AwardCatalog
from tapdeep.core.particles import ParticleSimulator
from tapdeep.core.session import TapSession
from tapdeep.core.store import CounterStore
from tapdeep.ui.main_window import MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Load the award catalog and stored depth, then start the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("TapDeep")
    app.setApplicationDisplayName("TapDeep")

    catalog = AwardCatalog()
    store = CounterStore()
    session = TapSession(catalog, store)
    logging.info("Loaded %d awards, resuming at depth %d", len(catalog), session.count)

    window = MainWindow(session=session, simulator=ParticleSimulator(), store=store)
    window.resize(420, 720)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
