from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional


def format_decimal(value: float) -> str:
    """Render a number the way invoice rows show it: ``8.0 -> "8"``, ``7.5 -> "7.5"``."""

    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def _event_time(node: Any) -> Optional[str]:
    if not isinstance(node, Mapping):
        return None
    return node.get("dateTime")


@dataclass(frozen=True, slots=True)
class DateRange:
    start: datetime
    end: datetime


@dataclass(frozen=True, slots=True)
class RawEvent:
    summary: Optional[str] = None
    description: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None
    color_id: Optional[str] = None

    @classmethod
    def from_api(cls, record: Mapping[str, Any]) -> "RawEvent":
        """Build from a Google Calendar v3 event resource."""

        return cls(
            summary=record.get("summary"),
            description=record.get("description"),
            start=_event_time(record.get("start")),
            end=_event_time(record.get("end")),
            color_id=record.get("colorId"),
        )


@dataclass(frozen=True, slots=True)
class InvoiceLine:
    client: str
    sub_client: str
    description: str
    date: str
    hours: float
    rate: float
    total: float

    def to_record(self) -> Dict[str, str]:
        return {
            "client": self.client,
            "sub_client": self.sub_client,
            "description": self.description,
            "date": self.date,
            "hours": format_decimal(self.hours),
            "rate": format_decimal(self.rate),
            "total": format_decimal(self.total),
        }

    def to_row(self) -> List[str]:
        """CSV field order: date, client, sub client, hours, job, rate, total."""

        record = self.to_record()
        return [
            record["date"],
            record["client"],
            record["sub_client"],
            record["hours"],
            record["description"],
            record["rate"],
            record["total"],
        ]
