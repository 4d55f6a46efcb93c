from __future__ import annotations

from typing import Iterable

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QAbstractItemView, QHeaderView, QTableWidget, QTableWidgetItem

from ...domain import InvoiceLine
from ...services.export import CSV_HEADER

_NUMERIC_COLUMNS = {3, 5, 6}


class InvoiceTable(QTableWidget):
    def __init__(self) -> None:
        super().__init__(0, len(CSV_HEADER))
        self.setHorizontalHeaderLabels(CSV_HEADER)
        self.setAlternatingRowColors(True)
        self.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.verticalHeader().setVisible(False)
        self.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)

    def populate(self, lines: Iterable[InvoiceLine]) -> None:
        rows = [line.to_row() for line in lines]
        self.setRowCount(len(rows))
        for row_index, row in enumerate(rows):
            for column, value in enumerate(row):
                item = QTableWidgetItem(value)
                if column in _NUMERIC_COLUMNS:
                    item.setTextAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
                self.setItem(row_index, column, item)
