"""Domain models for calendar events and invoice lines."""

from __future__ import annotations

from .enums import Month
from .models import DateRange, InvoiceLine, RawEvent, format_decimal

__all__ = ["DateRange", "InvoiceLine", "Month", "RawEvent", "format_decimal"]
