"""Turn colour-tagged calendar events into invoice lines."""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..domain import InvoiceLine, RawEvent
from .dates import DateParseError, parse_timestamp

RATE_TABLE = {"1": 50.0, "2": 40.0, "3": 36.0}
DEFAULT_RATE = 50.0
SUMMARY_DELIMITER = "-"


def rate_for(color_id: Optional[str]) -> float:
    return RATE_TABLE.get(color_id or "", DEFAULT_RATE)


def duration_hours(start: Optional[str], end: Optional[str]) -> float:
    """Whole minutes between ``start`` and ``end`` as hours; 0 if either is unparsable."""

    try:
        started = parse_timestamp(start)
        ended = parse_timestamp(end)
    except DateParseError:
        return 0.0
    minutes = int((ended - started).total_seconds() / 60)
    return minutes / 60


def split_summary(summary: Optional[str]) -> tuple[str, str]:
    parts = (summary or "").split(SUMMARY_DELIMITER)
    client = parts[0]
    sub_client = parts[1] if len(parts) > 1 else ""
    return client, sub_client


def event_date(start: Optional[str]) -> str:
    try:
        return parse_timestamp(start).date().isoformat()
    except DateParseError:
        return ""


def classify(event: RawEvent) -> Optional[InvoiceLine]:
    if not event.color_id:
        return None
    client, sub_client = split_summary(event.summary)
    hours = duration_hours(event.start, event.end)
    rate = rate_for(event.color_id)
    return InvoiceLine(
        client=client,
        sub_client=sub_client,
        description=event.description or "",
        date=event_date(event.start),
        hours=hours,
        rate=rate,
        total=hours * rate,
    )


def classify_all(events: Iterable[RawEvent]) -> List[InvoiceLine]:
    lines = []
    for event in events:
        line = classify(event)
        if line is not None:
            lines.append(line)
    return lines
