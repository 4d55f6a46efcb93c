from __future__ import annotations

import html
from datetime import date
from typing import Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QComboBox, QHBoxLayout, QLabel, QPushButton, QSpinBox, QWidget

from ...core import SessionState
from ...domain import Month


class SessionBar(QWidget):
    period_changed = pyqtSignal(int, object)
    load_requested = pyqtSignal()
    export_requested = pyqtSignal()

    def __init__(self) -> None:
        super().__init__()
        layout = QHBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 12)
        layout.setSpacing(10)

        self.status_label = QLabel("")
        self.status_label.setObjectName("statusLabel")
        layout.addWidget(self.status_label)

        self.auth_link = QLabel("")
        self.auth_link.setObjectName("authLink")
        self.auth_link.setOpenExternalLinks(True)
        self.auth_link.hide()
        layout.addWidget(self.auth_link, stretch=1)

        self.year_input = QSpinBox()
        self.year_input.setRange(1970, 2100)
        self.year_input.setValue(date.today().year)
        self.year_input.valueChanged.connect(self._emit_period)
        layout.addWidget(self.year_input)

        self.month_input = QComboBox()
        self.month_input.addItem("Select Month", None)
        for month in Month:
            self.month_input.addItem(month.label, month)
        self.month_input.currentIndexChanged.connect(self._emit_period)
        layout.addWidget(self.month_input)

        self.load_button = QPushButton("Load Events")
        self.load_button.clicked.connect(self.load_requested)
        layout.addWidget(self.load_button)

        self.export_button = QPushButton("Export CSV")
        self.export_button.setObjectName("secondaryButton")
        self.export_button.clicked.connect(self.export_requested)
        layout.addWidget(self.export_button)

    def selected_month(self) -> Optional[Month]:
        return self.month_input.currentData()

    def render(self, state: SessionState, *, status: str, can_fetch: bool) -> None:
        self.status_label.setText(status)
        self.status_label.setProperty("error", bool(state.last_error))
        self.status_label.style().polish(self.status_label)

        show_link = bool(state.oauth_url) and not state.auth_key and not state.auth_failed
        if show_link:
            url = html.escape(state.oauth_url, quote=True)
            self.auth_link.setText(f'<a href="{url}">Sign in with Google</a>')
        self.auth_link.setVisible(show_link)

        signed_in = bool(state.auth_key)
        self.year_input.setEnabled(signed_in)
        self.month_input.setEnabled(signed_in)
        self.load_button.setEnabled(can_fetch)
        self.export_button.setEnabled(state.loaded_events and not state.waiting_for_events)

    def _emit_period(self) -> None:
        month = self.selected_month()
        if month is not None:
            self.period_changed.emit(self.year_input.value(), month)
