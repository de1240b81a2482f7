from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator, Union


@dataclass(frozen=True)
class MonthPeriod:
    year: int
    month: int

    kind = "month"


@dataclass(frozen=True)
class BimesterPeriod:
    school_year: int
    number: int

    kind = "bimester"


Period = Union[MonthPeriod, BimesterPeriod]


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of local calendar days."""

    start: date
    end: date
    day_count: int

    @classmethod
    def between(cls, start: date, end: date) -> "DateRange":
        return cls(start=start, end=end, day_count=(end - start).days + 1)

    def day_number(self, value: date) -> int | None:
        """1-based position of ``value`` in the range, or None when outside."""
        if value < self.start or value > self.end:
            return None
        return (value - self.start).days + 1

    def days(self) -> Iterator[tuple[int, date]]:
        for offset in range(self.day_count):
            yield offset + 1, self.start + timedelta(days=offset)

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "day_count": self.day_count,
        }


@dataclass(frozen=True)
class BimesterWindow:
    """One row of the academic calendar."""

    school_year: int
    number: int
    start: date
    end: date

    def to_dict(self) -> dict:
        return {
            "school_year": self.school_year,
            "number": self.number,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
        }
