from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Student
from .repository import StudentRepository

_COLUMNS = "student_id, full_name, educational_level, grade, section, is_active, barcode"


def _to_student(r: Dict[str, Any]) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        full_name=r["full_name"],
        educational_level=r.get("educational_level"),
        grade=r.get("grade"),
        section=r.get("section"),
        is_active=bool(r.get("is_active", 1)),
        barcode=r.get("barcode"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (int(student_id),))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def list_students(
        self,
        *,
        level: Optional[str] = None,
        grade: Optional[str] = None,
        section: Optional[str] = None,
        active_only: bool = True,
    ) -> Sequence[Student]:
        clauses: list[str] = []
        params: list[object] = []

        if level is not None:
            clauses.append("educational_level=%s")
            params.append(level)
        if grade is not None:
            clauses.append("grade=%s")
            params.append(grade)
        if section is not None:
            clauses.append("section=%s")
            params.append(section)
        if active_only:
            clauses.append("is_active=1")

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM students
                {where}
                ORDER BY full_name ASC
                """,
                tuple(params),
            )
            return [_to_student(r) for r in fetchall(cur)]
