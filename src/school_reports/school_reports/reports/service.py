from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, TypeVar
from zoneinfo import ZoneInfo

from ..attendance.classifier import StatusClassifier
from ..attendance.matrix import MatrixBuilder, count_statuses, index_records
from ..attendance.model import ArrivalDaySummary
from ..attendance.repository import ArrivalRepository
from ..common.datetime_utils import as_local
from ..core.enums import IncidentStatus
from ..core.exceptions import FetchFailed
from ..incidents.aggregator import BY_GRADE, BY_SECTION, GroupedAggregator
from ..incidents.repository import IncidentRepository
from ..periods.model import DateRange, Period
from ..periods.resolver import DateRangeResolver
from ..students.model import StudentFilters
from ..students.repository import StudentRepository
from .model import AttendanceReport, IncidentSummary

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ReportingService:
    """Read-only facade: resolve the period, fetch once, build the result.

    Store errors surface as FetchFailed; nothing here retries or writes.
    """

    def __init__(
        self,
        students: StudentRepository,
        arrivals: ArrivalRepository,
        incidents: IncidentRepository,
        *,
        timezone: ZoneInfo,
        resolver: Optional[DateRangeResolver] = None,
        matrix_builder: Optional[MatrixBuilder] = None,
        aggregator: Optional[GroupedAggregator] = None,
        classifier: Optional[StatusClassifier] = None,
    ):
        self._students = students
        self._arrivals = arrivals
        self._incidents = incidents
        self._tz = timezone
        self._resolver = resolver or DateRangeResolver()
        self._matrix = matrix_builder or MatrixBuilder()
        self._aggregator = aggregator or GroupedAggregator()
        self._classifier = classifier or StatusClassifier()

    @property
    def timezone(self) -> ZoneInfo:
        return self._tz

    def resolve_period(self, period: Period) -> DateRange:
        return self._resolver.resolve(period)

    def _fetch(self, what: str, read: Callable[[], T]) -> T:
        try:
            return read()
        except FetchFailed:
            raise
        except Exception as e:
            logger.error("Fetching %s failed: %s", what, e)
            raise FetchFailed(f"No se pudo obtener {what}: {e}") from e

    def build_attendance_report(self, period: Period, filters: Optional[StudentFilters] = None) -> AttendanceReport:
        filters = filters or StudentFilters()
        date_range = self._resolver.resolve(period)

        students = self._fetch(
            "estudiantes",
            lambda: self._students.list_students(
                level=filters.level,
                grade=filters.grade,
                section=filters.section,
                active_only=True,
            ),
        )

        student_ids = [s.student_id for s in students]
        records = []
        if student_ids:
            records = self._fetch(
                "registros de llegada",
                lambda: self._arrivals.list_for_students(student_ids, date_range),
            )

        rows = self._matrix.build(students, date_range, index_records(records, date_range), filters)
        return AttendanceReport(
            date_range=date_range,
            filters=filters,
            rows=rows,
            totals=self._matrix.global_totals(rows),
        )

    def build_incident_summary(
        self,
        filters: Optional[StudentFilters] = None,
        *,
        period: Optional[Period] = None,
        now: Optional[datetime] = None,
    ) -> IncidentSummary:
        filters = filters or StudentFilters()
        date_range = self._resolver.resolve(period) if period is not None else None
        today = as_local(now, self._tz).date()

        incidents = self._fetch(
            "incidencias",
            lambda: self._incidents.list_incidents(
                date_range=date_range,
                level=filters.level,
                grade=filters.grade,
                section=filters.section,
                status_in=[IncidentStatus.ACTIVE],
                timezone=self._tz,
            ),
        )

        return IncidentSummary(
            filters=filters,
            date_range=date_range,
            overview=self._aggregator.overview(incidents, filters, today=today, timezone=self._tz),
            by_grade=self._aggregator.aggregate(incidents, BY_GRADE, filters),
            by_section=self._aggregator.aggregate(incidents, BY_SECTION, filters),
            top_faults=self._aggregator.top_faults(incidents, filters),
        )

    def build_arrival_day_summary(self, *, now: Optional[datetime] = None) -> ArrivalDaySummary:
        """Today's arrivals (reporting timezone) counted by classified status."""
        today = as_local(now, self._tz).date()
        records = self._fetch("registros de llegada", lambda: self._arrivals.list_for_date(today))

        return ArrivalDaySummary(
            date=today,
            total=len(records),
            totals=count_statuses(self._classifier.classify(r) for r in records),
        )
