"""Application entry point and setup for the Vazhi roadmap viewer."""

import logging
import sys
from pathlib import Path

from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QApplication

from vazhi.core.roadmap import RoadmapRepository
from vazhi.ui.main_window import MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def load_window_icon(app: QApplication) -> None:
    icon_path = Path(__file__).parent / "assets" / "logo.svg"
    if not icon_path.exists():
        logging.warning(f"Icon file not found: {icon_path}")
        return
    app.setWindowIcon(QIcon(str(icon_path)))


def run() -> None:
    """Load the roadmaps and show the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Vazhi")
    app.setApplicationDisplayName("Vazhi")

    load_window_icon(app)

    roadmaps = RoadmapRepository()
    logging.info(f"Loaded {len(roadmaps.all())} roadmaps from {roadmaps.base_dir}")

    window = MainWindow(roadmaps=roadmaps)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
