from __future__ import annotations

import logging
import sys

from PyQt6.QtWidgets import QApplication, QMessageBox

from ..bootstrap import configure_logging
from ..config import AppPalette, get_settings
from ..core import MessageChannel, SessionController
from ..services import ServiceContext
from .main_window import MainWindow
from .styles.theme import apply_palette


def run_gui() -> None:
    configure_logging()
    app = QApplication.instance() or QApplication(sys.argv)
    settings = get_settings()
    apply_palette(app, AppPalette())

    if not settings.google.is_configured:
        missing = ", ".join(settings.google.missing_env_vars)
        logging.getLogger(__name__).error("Google OAuth client missing: %s", missing)
        QMessageBox.critical(None, settings.ui.app_name, f"Google OAuth client is not configured. Set {missing}.")
        return

    controller = SessionController(MessageChannel(), ServiceContext(settings))
    window = MainWindow(controller=controller, settings=settings)
    window.show()
    sys.exit(app.exec())
