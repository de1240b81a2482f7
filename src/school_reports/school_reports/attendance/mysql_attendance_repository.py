from __future__ import annotations

from datetime import date, time
from typing import Any, Dict, Optional, Sequence

from ..core.enums import ArrivalStatus, JustificationStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, normalize_mysql_time
from ..periods.model import DateRange
from .model import ArrivalRecord
from .repository import ArrivalRepository

_COLUMNS = "arrival_id, student_id, arrival_date, arrival_time, status, justification, registered_by"


def _to_record(r: Dict[str, Any]) -> ArrivalRecord:
    return ArrivalRecord(
        arrival_id=int(r["arrival_id"]),
        student_id=int(r["student_id"]),
        arrival_date=r["arrival_date"],
        arrival_time=normalize_mysql_time(r.get("arrival_time")),
        status=r["status"],
        justification=r.get("justification"),
        registered_by=r.get("registered_by"),
    )


class MySQLArrivalRepository(ArrivalRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, arrival_id: int) -> Optional[ArrivalRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM arrival_records WHERE arrival_id=%s", (int(arrival_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_student_and_date(self, student_id: int, arrival_date: date) -> Optional[ArrivalRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM arrival_records
                WHERE student_id=%s AND arrival_date=%s
                ORDER BY arrival_time ASC
                LIMIT 1
                """,
                (int(student_id), arrival_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_students(self, student_ids: Sequence[int], date_range: DateRange) -> Sequence[ArrivalRecord]:
        if not student_ids:
            return []

        ids = [int(i) for i in student_ids]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM arrival_records
                WHERE arrival_date BETWEEN %s AND %s
                  AND student_id IN ({in_clause(ids)})
                ORDER BY arrival_date ASC, arrival_time ASC
                """,
                (date_range.start, date_range.end, *ids),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_date(self, arrival_date: date) -> Sequence[ArrivalRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM arrival_records
                WHERE arrival_date=%s
                ORDER BY arrival_time ASC
                """,
                (arrival_date,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create_arrival(
        self,
        *,
        student_id: int,
        arrival_date: date,
        arrival_time: time,
        status: ArrivalStatus,
        registered_by: Optional[int] = None,
        note: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO arrival_records(student_id, arrival_date, arrival_time, status, registered_by, note)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(student_id), arrival_date, arrival_time, status.value, registered_by, note),
            )
            return int(cur.lastrowid)

    def update_justification(self, *, arrival_id: int, justification: JustificationStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE arrival_records
                SET justification=%s
                WHERE arrival_id=%s AND justification IS NULL
                """,
                (justification.value, int(arrival_id)),
            )
            return cur.rowcount > 0
