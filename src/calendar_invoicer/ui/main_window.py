from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QTimer
from PyQt6.QtGui import QCloseEvent
from PyQt6.QtWidgets import QFileDialog, QMainWindow, QMessageBox, QVBoxLayout, QWidget

from ..config import AppSettings
from ..core import SessionController
from ..domain import Month
from ..services import invoice_filename, write_invoice_csv
from .components.invoice_table import InvoiceTable
from .components.session_bar import SessionBar

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, *, controller: SessionController, settings: AppSettings) -> None:
        super().__init__()
        self.controller = controller
        self.settings = settings

        self.setWindowTitle(settings.ui.app_name)
        self.resize(800, 600)

        self.session_bar = SessionBar()
        self.invoice_table = InvoiceTable()

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.session_bar)
        layout.addWidget(self.invoice_table, stretch=1)
        self.setCentralWidget(central)

        self.session_bar.period_changed.connect(self.select_period)
        self.session_bar.load_requested.connect(self.load_events)
        self.session_bar.export_requested.connect(self.export_csv)

        self.timer = QTimer(self)
        self.timer.setInterval(settings.ui.tick_interval_ms)
        self.timer.timeout.connect(self.tick)

        self.controller.start()
        self.timer.start()
        self.refresh()

    # ------------------------------------------------------------------ session loop

    def tick(self) -> None:
        message = self.controller.tick()
        if message is not None:
            self.refresh()

    def refresh(self) -> None:
        state = self.controller.state
        self.session_bar.render(
            state,
            status=self.controller.status_text(),
            can_fetch=self.controller.can_fetch,
        )
        self.invoice_table.populate(state.invoice_lines if state.loaded_events else [])

    # ------------------------------------------------------------------ actions

    def select_period(self, year: int, month: Month) -> None:
        self.controller.select_month(year, month)
        self.refresh()

    def load_events(self) -> None:
        if self.controller.request_fetch():
            self.refresh()

    def export_csv(self) -> None:
        state = self.controller.state
        if not state.loaded_events or state.loaded_period is None:
            return
        year, month = state.loaded_period
        suggested = self.settings.export.output_dir / invoice_filename(year, month)
        target, _filter = QFileDialog.getSaveFileName(self, "Export invoice", str(suggested), "CSV files (*.csv)")
        if not target:
            return
        try:
            path = write_invoice_csv(state.invoice_lines, Path(target))
        except OSError as exc:
            logger.exception("Export failed")
            QMessageBox.critical(self, "Export failed", str(exc))
            return
        self.statusBar().showMessage(f"Saved {path}", 5000)

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        self.timer.stop()
        self.controller.shutdown()
        super().closeEvent(event)
