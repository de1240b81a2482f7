from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..attendance.model import MatrixRow, Totals
from ..incidents.model import FaultFrequency, GroupSummary, IncidentOverview
from ..periods.model import DateRange
from ..students.model import StudentFilters


@dataclass(frozen=True)
class AttendanceReport:
    date_range: DateRange
    filters: StudentFilters
    rows: list[MatrixRow]
    totals: Totals

    def to_dict(self) -> dict:
        return {
            "date_range": self.date_range.to_dict(),
            "filters": self.filters.to_dict(),
            "rows": [r.to_dict() for r in self.rows],
            "totals": self.totals.to_dict(),
        }


@dataclass(frozen=True)
class IncidentSummary:
    filters: StudentFilters
    overview: IncidentOverview
    by_grade: list[GroupSummary]
    by_section: list[GroupSummary]
    top_faults: list[FaultFrequency]
    date_range: Optional[DateRange] = None

    def to_dict(self) -> dict:
        return {
            "date_range": self.date_range.to_dict() if self.date_range else None,
            "filters": self.filters.to_dict(),
            "overview": self.overview.to_dict(),
            "by_grade": [g.to_dict() for g in self.by_grade],
            "by_section": [g.to_dict() for g in self.by_section],
            "top_faults": [f.to_dict() for f in self.top_faults],
        }
