"""Configuration models and helpers."""

from __future__ import annotations

from .settings import (
    APP_AUTHOR,
    APP_NAME,
    AppSettings,
    ConfigurationError,
    ExportSettings,
    GoogleSettings,
    SessionSettings,
    UiSettings,
    get_settings,
    load_settings,
)
from .theme import AppPalette

__all__ = [
    "APP_AUTHOR",
    "APP_NAME",
    "AppPalette",
    "AppSettings",
    "ConfigurationError",
    "ExportSettings",
    "GoogleSettings",
    "SessionSettings",
    "UiSettings",
    "get_settings",
    "load_settings",
]
