from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import ArrivalStatus, JustificationStatus
from ..periods.model import DateRange
from .model import ArrivalRecord


class ArrivalRepository(Protocol):
    def get_by_id(self, arrival_id: int) -> Optional[ArrivalRecord]:
        raise NotImplementedError

    def get_for_student_and_date(self, student_id: int, arrival_date: date) -> Optional[ArrivalRecord]:
        raise NotImplementedError

    def list_for_students(self, student_ids: Sequence[int], date_range: DateRange) -> Sequence[ArrivalRecord]:
        raise NotImplementedError

    def list_for_date(self, arrival_date: date) -> Sequence[ArrivalRecord]:
        raise NotImplementedError

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
        raise NotImplementedError

    def update_justification(self, *, arrival_id: int, justification: JustificationStatus) -> bool:
        """Set the justification once; returns False when already set."""

        raise NotImplementedError
