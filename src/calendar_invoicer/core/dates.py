"""Month boundaries at a fixed UTC offset."""

from __future__ import annotations

from datetime import datetime
from typing import Union

from ..domain import DateRange, Month

DEFAULT_UTC_OFFSET = "-05:00"


class DateParseError(ValueError):
    """Raised when a timestamp string is not a valid offset-qualified RFC3339 value."""


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC3339 timestamp; a trailing ``Z`` is accepted, a missing offset is not."""

    if not isinstance(value, str) or not value:
        raise DateParseError(f"Unsupported timestamp value: {value!r}")
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise DateParseError(f"Invalid timestamp: {value!r}") from exc
    if parsed.tzinfo is None:
        raise DateParseError(f"Timestamp has no UTC offset: {value!r}")
    return parsed


def start_of_range(year: int, month: Union[Month, int, str], *, utc_offset: str = DEFAULT_UTC_OFFSET) -> datetime:
    month = Month.from_value(month)
    return parse_timestamp(f"{year:04d}-{month.code}-01T00:00:00{utc_offset}")


def end_of_range(year: int, month: Union[Month, int, str], *, utc_offset: str = DEFAULT_UTC_OFFSET) -> datetime:
    """Midnight at the start of the month's last day, not the end of that day."""

    month = Month.from_value(month)
    return parse_timestamp(f"{year:04d}-{month.code}-{month.last_day(year):02d}T00:00:00{utc_offset}")


def resolve(year: int, month: Union[Month, int, str], *, utc_offset: str = DEFAULT_UTC_OFFSET) -> DateRange:
    return DateRange(
        start=start_of_range(year, month, utc_offset=utc_offset),
        end=end_of_range(year, month, utc_offset=utc_offset),
    )
