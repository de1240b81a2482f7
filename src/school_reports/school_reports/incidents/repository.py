from __future__ import annotations

from typing import Optional, Protocol, Sequence
from zoneinfo import ZoneInfo

from ..core.enums import IncidentStatus
from ..periods.model import DateRange
from .model import Incident


class IncidentRepository(Protocol):
    def get_by_id(self, incident_id: int) -> Optional[Incident]:
        raise NotImplementedError

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
        """``date_range`` days are local days in ``timezone``."""

        raise NotImplementedError

    def update_status(
        self,
        *,
        incident_id: int,
        status: IncidentStatus,
        resolved_by: int,
        reason: str,
    ) -> bool:
        """Move an active incident to ``status``; returns False when it was not active."""

        raise NotImplementedError
