"""Background workers and collaborators around the session pipeline."""

from __future__ import annotations

from .auth import AuthSessionWorker, AuthState, OAuthCallbackListener
from .calendar import EventFetchWorker, build_calendar_service
from .context import ServiceContext
from .export import CSV_HEADER, export_invoice, invoice_filename, write_invoice_csv

__all__ = [
    "CSV_HEADER",
    "AuthSessionWorker",
    "AuthState",
    "EventFetchWorker",
    "OAuthCallbackListener",
    "ServiceContext",
    "build_calendar_service",
    "export_invoice",
    "invoice_filename",
    "write_invoice_csv",
]
