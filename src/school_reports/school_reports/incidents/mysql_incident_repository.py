from __future__ import annotations

from typing import Any, Dict, Optional, Sequence
from zoneinfo import ZoneInfo

from ..common.datetime_utils import day_bounds_utc
from ..core.enums import IncidentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from ..periods.model import DateRange
from .model import FaultType, Incident
from .repository import IncidentRepository

_SELECT = """
    SELECT
        i.incident_id, i.student_id, i.reincidence_level, i.status, i.registered_at, i.observations,
        s.educational_level, s.grade, s.section,
        f.fault_id, f.fault_name, f.category, f.is_serious, f.points
    FROM incidents i
    LEFT JOIN students s ON s.student_id = i.student_id
    LEFT JOIN fault_types f ON f.fault_id = i.fault_id
"""


def _to_incident(r: Dict[str, Any]) -> Incident:
    fault = None
    if r.get("fault_id") is not None:
        fault = FaultType(
            fault_id=int(r["fault_id"]),
            name=r["fault_name"],
            category=r.get("category"),
            is_serious=bool(r.get("is_serious") or 0),
            points=int(r.get("points") or 0),
        )

    return Incident(
        incident_id=int(r["incident_id"]),
        student_id=int(r["student_id"]),
        reincidence_level=int(r.get("reincidence_level") or 0),
        status=r["status"],
        registered_at=r["registered_at"],
        educational_level=r.get("educational_level"),
        grade=r.get("grade"),
        section=r.get("section"),
        fault=fault,
        observations=r.get("observations"),
    )


class MySQLIncidentRepository(IncidentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, incident_id: int) -> Optional[Incident]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE i.incident_id=%s", (int(incident_id),))
            r = fetchone(cur)
            return _to_incident(r) if r else None

    def list_incidents(
        self,
        *,
        timezone: ZoneInfo,
        date_range: Optional[DateRange] = None,
        level: Optional[str] = None,
        grade: Optional[str] = None,
        section: Optional[str] = None,
        status_in: Optional[Sequence[IncidentStatus]] = None,
    ) -> Sequence[Incident]:
        clauses: list[str] = []
        params: list[object] = []

        if date_range is not None:
            lower, upper = day_bounds_utc(date_range.start, date_range.end, timezone)
            clauses.append("i.registered_at >= %s AND i.registered_at < %s")
            params.extend([lower, upper])
        if level is not None:
            clauses.append("s.educational_level=%s")
            params.append(level)
        if grade is not None:
            clauses.append("s.grade=%s")
            params.append(grade)
        if section is not None:
            clauses.append("s.section=%s")
            params.append(section)
        if status_in:
            statuses = [IncidentStatus(s).value for s in status_in]
            clauses.append(f"i.status IN ({in_clause(statuses)})")
            params.extend(statuses)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                {where}
                ORDER BY i.registered_at ASC, i.incident_id ASC
                """,
                tuple(params),
            )
            return [_to_incident(r) for r in fetchall(cur)]

    def update_status(
        self,
        *,
        incident_id: int,
        status: IncidentStatus,
        resolved_by: int,
        reason: str,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE incidents
                SET status=%s, resolved_by=%s, resolution_reason=%s, resolved_at=UTC_TIMESTAMP()
                WHERE incident_id=%s AND status=%s
                """,
                (status.value, int(resolved_by), reason, int(incident_id), IncidentStatus.ACTIVE.value),
            )
            return cur.rowcount > 0
