"""Attendance matrix: one row per student, one classified cell per day."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional, Sequence

from ..core.enums import DayStatus
from ..periods.model import DateRange
from ..students.model import Student, StudentFilters
from .classifier import StatusClassifier
from .model import ArrivalRecord, DayCell, MatrixRow, Totals

logger = logging.getLogger(__name__)

RecordsByStudentAndDay = Mapping[int, Mapping[int, ArrivalRecord]]


def index_records(records: Iterable[ArrivalRecord], date_range: DateRange) -> dict[int, dict[int, ArrivalRecord]]:
    """Group arrivals as ``{student_id: {day_number: record}}``.

    The first record seen for a (student, day) pair wins; records outside the
    range are ignored.
    """
    index: dict[int, dict[int, ArrivalRecord]] = {}
    ignored = 0

    for record in records:
        day = date_range.day_number(record.arrival_date)
        if day is None:
            ignored += 1
            continue
        index.setdefault(record.student_id, {}).setdefault(day, record)

    if ignored:
        logger.debug("Ignored %s arrival records outside %s..%s", ignored, date_range.start, date_range.end)
    return index


def count_statuses(statuses: Iterable[DayStatus]) -> Totals:
    """Tally the four recorded states; NO_RECORD is not counted."""
    on_time = late = justified = unjustified = 0
    for status in statuses:
        if status == DayStatus.ON_TIME:
            on_time += 1
        elif status == DayStatus.LATE:
            late += 1
        elif status == DayStatus.JUSTIFIED:
            justified += 1
        elif status == DayStatus.UNJUSTIFIED:
            unjustified += 1
    return Totals(on_time=on_time, late=late, justified=justified, unjustified=unjustified)


def count_totals(cells: Iterable[DayCell]) -> Totals:
    return count_statuses(c.status for c in cells)


class MatrixBuilder:
    def __init__(self, classifier: Optional[StatusClassifier] = None):
        self._classifier = classifier or StatusClassifier()

    def build(
        self,
        students: Sequence[Student],
        date_range: DateRange,
        records_by_student_and_day: RecordsByStudentAndDay,
        filters: Optional[StudentFilters] = None,
    ) -> list[MatrixRow]:
        """Build the rows of the report, sorted by student name.

        Students without records still get a full row of NO_RECORD cells.
        """
        filters = filters or StudentFilters()
        selected = [s for s in students if filters.matches_student(s)]
        selected.sort(key=lambda s: (s.full_name, s.student_id))

        return [self._build_row(s, date_range, records_by_student_and_day.get(s.student_id, {})) for s in selected]

    def _build_row(self, student: Student, date_range: DateRange, by_day: Mapping[int, ArrivalRecord]) -> MatrixRow:
        cells: list[DayCell] = []
        for day, current in date_range.days():
            record = by_day.get(day)
            status = self._classifier.classify(record)
            cells.append(
                DayCell(
                    day=day,
                    date=current,
                    status=status,
                    # unknown stored statuses read as NO_RECORD and carry no time
                    time=record.arrival_time if status != DayStatus.NO_RECORD else None,
                )
            )
        return MatrixRow(student=student, cells=tuple(cells), totals=count_totals(cells))

    @staticmethod
    def global_totals(rows: Iterable[MatrixRow]) -> Totals:
        total = Totals()
        for row in rows:
            total = total + row.totals
        return total
