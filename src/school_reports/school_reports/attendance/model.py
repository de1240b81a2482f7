from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Optional

from ..common.datetime_utils import format_clock_time
from ..core.enums import DayStatus
from ..students.model import Student


@dataclass(frozen=True)
class ArrivalRecord:
    """Entidad de dominio: registro de llegada.

    ``status`` is the tag stored at creation time ("A tiempo" / "Tarde"); it is
    kept as stored so that unexpected values reach the classifier untouched.
    """

    arrival_id: int
    student_id: int
    arrival_date: date
    arrival_time: Optional[time]
    status: str
    justification: Optional[str] = None
    registered_by: Optional[int] = None


@dataclass(frozen=True)
class DayCell:
    day: int
    date: date
    status: DayStatus
    time: Optional[time] = None

    def to_dict(self) -> dict:
        return {
            "day": self.day,
            "date": self.date.isoformat(),
            "status": self.status.value,
            "time": format_clock_time(self.time),
        }


@dataclass(frozen=True)
class Totals:
    on_time: int = 0
    late: int = 0
    justified: int = 0
    unjustified: int = 0

    def __add__(self, other: "Totals") -> "Totals":
        return Totals(
            on_time=self.on_time + other.on_time,
            late=self.late + other.late,
            justified=self.justified + other.justified,
            unjustified=self.unjustified + other.unjustified,
        )

    def to_dict(self) -> dict:
        return {
            "on_time": self.on_time,
            "late": self.late,
            "justified": self.justified,
            "unjustified": self.unjustified,
        }


@dataclass(frozen=True)
class MatrixRow:
    """Read-model: one student and one classified cell per day of the range."""

    student: Student
    cells: tuple[DayCell, ...]
    totals: Totals = field(default_factory=Totals)

    def to_dict(self) -> dict:
        return {
            "student": self.student.to_dict(),
            "days": [c.to_dict() for c in self.cells],
            "totals": self.totals.to_dict(),
        }


@dataclass(frozen=True)
class ArrivalDaySummary:
    """Arrivals registered on one local day, tallied by classified status."""

    date: date
    total: int
    totals: Totals

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "total": self.total, **self.totals.to_dict()}
