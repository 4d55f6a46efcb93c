from __future__ import annotations

from datetime import date, timedelta
from enum import Enum
from typing import Union


class Month(Enum):
    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12

    @property
    def number(self) -> int:
        return self.value

    @property
    def code(self) -> str:
        """Two-digit month code, e.g. ``"03"``."""

        return f"{self.value:02d}"

    @property
    def label(self) -> str:
        return self.name.capitalize()

    def last_day(self, year: int) -> int:
        """Last calendar day of this month in ``year``.

        Steps back one day from the first of the following month, so leap
        years and the December rollover need no day-count table.
        """

        if self is Month.DECEMBER:
            first_of_next = date(year + 1, 1, 1)
        else:
            first_of_next = date(year, self.value + 1, 1)
        return (first_of_next - timedelta(days=1)).day

    @classmethod
    def from_value(cls, value: Union["Month", int, str]) -> "Month":
        if isinstance(value, Month):
            return value
        if isinstance(value, int):
            return cls(value)
        text = str(value).strip()
        if text.isdigit():
            return cls(int(text))
        try:
            return cls[text.upper()]
        except KeyError:
            raise ValueError(f"Unknown month: {value!r}") from None
