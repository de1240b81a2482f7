from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .attendance.mysql_attendance_repository import MySQLArrivalRepository
from .attendance.service import ArrivalService
from .common.datetime_utils import get_zone, parse_clock_time
from .core.constants import DEFAULT_ARRIVAL_CUTOFF, DEFAULT_REPORTING_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .incidents.mysql_incident_repository import MySQLIncidentRepository
from .incidents.service import IncidentService
from .periods.calendar import AcademicCalendar
from .periods.resolver import DateRangeResolver
from .reports.service import ReportingService
from .settings.mysql_config_repository import MySQLConfigRepository
from .students.mysql_student_repository import MySQLStudentRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    students_repo: MySQLStudentRepository
    arrivals_repo: MySQLArrivalRepository
    incidents_repo: MySQLIncidentRepository
    config_repo: MySQLConfigRepository

    arrival_service: ArrivalService
    incident_service: IncidentService
    reporting_service: ReportingService


def build_container(
    *,
    db_config: Mapping,
    reporting_timezone: str = DEFAULT_REPORTING_TIMEZONE,
    arrival_cutoff: Optional[str] = None,
    calendar: Optional[AcademicCalendar] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(dict(db_config)))
    tz = get_zone(reporting_timezone)
    default_cutoff = parse_clock_time(arrival_cutoff) if arrival_cutoff else DEFAULT_ARRIVAL_CUTOFF

    students_repo = MySQLStudentRepository(conn)
    arrivals_repo = MySQLArrivalRepository(conn)
    incidents_repo = MySQLIncidentRepository(conn)
    config_repo = MySQLConfigRepository(conn)

    arrival_service = ArrivalService(
        arrivals_repo,
        students_repo,
        config_repo,
        timezone=tz,
        default_cutoff=default_cutoff,
    )
    incident_service = IncidentService(incidents_repo, timezone=tz)
    reporting_service = ReportingService(
        students_repo,
        arrivals_repo,
        incidents_repo,
        timezone=tz,
        resolver=DateRangeResolver(calendar or AcademicCalendar()),
    )

    return Container(
        conn=conn,
        students_repo=students_repo,
        arrivals_repo=arrivals_repo,
        incidents_repo=incidents_repo,
        config_repo=config_repo,
        arrival_service=arrival_service,
        incident_service=incident_service,
        reporting_service=reporting_service,
    )
