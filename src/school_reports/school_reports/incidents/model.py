from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.constants import GROUP_LABEL_SEPARATOR
from ..core.enums import EducationalLevel


@dataclass(frozen=True)
class FaultType:
    """Catálogo de faltas."""

    fault_id: int
    name: str
    category: Optional[str] = None
    is_serious: bool = False
    points: int = 0


@dataclass(frozen=True)
class Incident:
    """Entidad de dominio: incidencia.

    ``educational_level`` / ``grade`` / ``section`` are the student's
    classification as joined by the store; any of them may be missing.
    """

    incident_id: int
    student_id: int
    reincidence_level: int
    status: str
    registered_at: datetime
    educational_level: Optional[str] = None
    grade: Optional[str] = None
    section: Optional[str] = None
    fault: Optional[FaultType] = None
    observations: Optional[str] = None

    @property
    def fault_name(self) -> Optional[str]:
        return self.fault.name if self.fault else None

    def to_dict(self) -> dict:
        return {
            "incident_id": self.incident_id,
            "student_id": self.student_id,
            "educational_level": self.educational_level,
            "grade": self.grade,
            "section": self.section,
            "fault_type": self.fault_name,
            "reincidence_level": self.reincidence_level,
            "status": self.status,
            "registered_at": self.registered_at.isoformat(),
            "observations": self.observations,
        }


@dataclass(frozen=True)
class GroupKey:
    """Composite grouping key; parts not used by a grouping stay ``None``."""

    educational_level: Optional[str] = None
    grade: Optional[str] = None
    section: Optional[str] = None
    fault_type: Optional[str] = None

    @property
    def label(self) -> str:
        parts = (self.educational_level, self.grade, self.section, self.fault_type)
        return GROUP_LABEL_SEPARATOR.join(p for p in parts if p is not None)

    def sort_key(self) -> tuple:
        return (
            EducationalLevel.rank(self.educational_level),
            self.educational_level or "",
            self.grade or "",
            self.section or "",
            self.fault_type or "",
        )

    def to_dict(self) -> dict:
        out = {
            "educational_level": self.educational_level,
            "grade": self.grade,
            "section": self.section,
            "fault_type": self.fault_type,
        }
        return {k: v for k, v in out.items() if v is not None}


@dataclass(frozen=True)
class GroupSummary:
    key: GroupKey
    count: int
    distinct_students: int
    average_level: float
    level_histogram: Optional[tuple[int, ...]] = None

    def to_dict(self) -> dict:
        out = {
            "key": self.key.to_dict(),
            "label": self.key.label,
            "count": self.count,
            "distinct_students": self.distinct_students,
            "average_level": self.average_level,
        }
        if self.level_histogram is not None:
            out["level_histogram"] = {str(level): n for level, n in enumerate(self.level_histogram)}
        return out


@dataclass(frozen=True)
class FaultFrequency:
    fault_type: str
    count: int

    def to_dict(self) -> dict:
        return {"fault_type": self.fault_type, "count": self.count}


@dataclass(frozen=True)
class IncidentOverview:
    """Dashboard cards: totals over the filtered active incidents."""

    total: int
    distinct_students: int
    average_level: float
    level_histogram: tuple[int, ...]
    today: int
    this_week: int
    this_month: int
    distinct_students_this_month: int

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "distinct_students": self.distinct_students,
            "average_level": self.average_level,
            "level_histogram": {str(level): n for level, n in enumerate(self.level_histogram)},
            "today": self.today,
            "this_week": self.this_week,
            "this_month": self.this_month,
            "distinct_students_this_month": self.distinct_students_this_month,
        }
