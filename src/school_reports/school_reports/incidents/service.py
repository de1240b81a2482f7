from __future__ import annotations

import logging
from typing import Optional, Sequence
from zoneinfo import ZoneInfo

from ..common.validators import require_min_length
from ..core.constants import MIN_RESOLUTION_REASON_LENGTH
from ..core.enums import IncidentStatus
from ..core.exceptions import ValidationError
from ..periods.model import DateRange
from ..students.model import StudentFilters
from .model import Incident
from .repository import IncidentRepository

logger = logging.getLogger(__name__)


class IncidentService:
    """Status transitions for incidents: Activa -> Justificada / Anulada."""

    def __init__(self, incidents: IncidentRepository, *, timezone: ZoneInfo):
        self._incidents = incidents
        self._tz = timezone

    def list_incidents(
        self,
        *,
        filters: Optional[StudentFilters] = None,
        date_range: Optional[DateRange] = None,
        status_in: Optional[Sequence[IncidentStatus]] = None,
    ) -> Sequence[Incident]:
        filters = filters or StudentFilters()
        return self._incidents.list_incidents(
            timezone=self._tz,
            date_range=date_range,
            level=filters.level,
            grade=filters.grade,
            section=filters.section,
            status_in=status_in,
        )

    def justify(self, incident_id: int, *, user_id: int, reason: str) -> None:
        self._resolve(incident_id, IncidentStatus.JUSTIFIED, user_id=user_id, reason=reason)

    def annul(self, incident_id: int, *, user_id: int, reason: str) -> None:
        self._resolve(incident_id, IncidentStatus.ANNULLED, user_id=user_id, reason=reason)

    def _resolve(self, incident_id: int, status: IncidentStatus, *, user_id: int, reason: str) -> None:
        reason = require_min_length(reason or "", "El motivo", MIN_RESOLUTION_REASON_LENGTH)

        incident = self._incidents.get_by_id(incident_id)
        if not incident:
            raise ValidationError("Incidencia no encontrada")
        if incident.status != IncidentStatus.ACTIVE:
            raise ValidationError("Solo se pueden modificar incidencias activas")

        ok = self._incidents.update_status(
            incident_id=incident_id,
            status=status,
            resolved_by=user_id,
            reason=reason,
        )
        if not ok:
            raise ValidationError("La incidencia ya no está activa")
        logger.info("Incident %s -> %s by user %s", incident_id, status.value, user_id)
