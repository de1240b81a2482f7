from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def list_students(
        self,
        *,
        level: Optional[str] = None,
        grade: Optional[str] = None,
        section: Optional[str] = None,
        active_only: bool = True,
    ) -> Sequence[Student]:
        raise NotImplementedError
