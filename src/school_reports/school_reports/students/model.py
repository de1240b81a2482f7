from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Entidad de dominio: estudiante."""

    student_id: int
    full_name: str
    educational_level: Optional[str]
    grade: Optional[str]
    section: Optional[str]
    is_active: bool = True
    barcode: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "full_name": self.full_name,
            "educational_level": self.educational_level,
            "grade": self.grade,
            "section": self.section,
        }


@dataclass(frozen=True)
class StudentFilters:
    """Level / grade / section selectors shared by every report.

    A field left as ``None`` does not constrain the result.
    """

    level: Optional[str] = None
    grade: Optional[str] = None
    section: Optional[str] = None

    def matches(self, *, level: Optional[str], grade: Optional[str], section: Optional[str]) -> bool:
        if self.level is not None and level != self.level:
            return False
        if self.grade is not None and grade != self.grade:
            return False
        if self.section is not None and section != self.section:
            return False
        return True

    def matches_student(self, student: Student) -> bool:
        return self.matches(level=student.educational_level, grade=student.grade, section=student.section)

    def to_dict(self) -> dict:
        return {"level": self.level, "grade": self.grade, "section": self.section}
