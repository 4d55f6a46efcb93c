from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AppPalette:
    background_primary: str = "#0b1120"
    background_secondary: str = "#111a2e"
    surface: str = "#16213b"
    accent_primary: str = "#7dd3fc"
    accent_secondary: str = "#fbbf24"
    accent_error: str = "#fb7185"
    text_primary: str = "#f8fafc"
    text_secondary: str = "#cbd5e1"
    border_subtle: str = "#1e293b"
    border_strong: str = "#2b3d63"

    def as_stylesheet(self) -> str:
        """Global stylesheet for the invoicer window."""

        return f"""
        QWidget {{
            background-color: {self.background_primary};
            color: {self.text_primary};
            font-family: 'Helvetica Neue', 'Segoe UI', Arial, sans-serif;
            font-size: 14px;
        }}
        QPushButton {{
            background-color: {self.accent_primary};
            color: #031525;
            border: none;
            padding: 8px 14px;
            border-radius: 8px;
            font-weight: 600;
        }}
        QPushButton:disabled {{
            background-color: {self.border_subtle};
            color: {self.text_secondary};
        }}
        QPushButton#secondaryButton {{
            background-color: transparent;
            color: {self.accent_primary};
            border: 1px solid {self.accent_primary};
        }}
        QComboBox, QSpinBox {{
            background-color: {self.background_secondary};
            color: {self.text_primary};
            border: 1px solid {self.border_strong};
            border-radius: 6px;
            padding: 6px 10px;
        }}
        QTableView {{
            background-color: {self.background_secondary};
            alternate-background-color: {self.surface};
            border: 1px solid {self.border_strong};
            gridline-color: {self.border_subtle};
        }}
        QHeaderView::section {{
            background-color: {self.surface};
            color: {self.text_secondary};
            border: none;
            padding: 6px;
        }}
        QLabel#statusLabel {{
            color: {self.text_secondary};
        }}
        QLabel#statusLabel[error="true"] {{
            color: {self.accent_error};
        }}
        QLabel#authLink {{
            color: {self.accent_secondary};
        }}
        """
