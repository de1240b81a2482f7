from __future__ import annotations

import logging
from datetime import datetime, time
from typing import Optional
from zoneinfo import ZoneInfo

from ..common.datetime_utils import as_local, parse_clock_time
from ..core.constants import ARRIVAL_CUTOFF_CONFIG_KEY, DEFAULT_ARRIVAL_CUTOFF
from ..core.enums import JustificationStatus
from ..core.exceptions import ValidationError
from ..settings.repository import ConfigRepository
from ..students.repository import StudentRepository
from .factory import ArrivalStrategyFactory
from .model import ArrivalRecord
from .repository import ArrivalRepository

logger = logging.getLogger(__name__)


class ArrivalService:
    """Record-creation path: registers arrivals and their justification.

    The on-time/late decision happens here, once, using the cutoff configured
    at that moment.
    """

    def __init__(
        self,
        arrivals: ArrivalRepository,
        students: StudentRepository,
        config: Optional[ConfigRepository] = None,
        *,
        timezone: ZoneInfo,
        strategy_factory: Optional[ArrivalStrategyFactory] = None,
        default_cutoff: time = DEFAULT_ARRIVAL_CUTOFF,
    ):
        self._arrivals = arrivals
        self._students = students
        self._config = config
        self._tz = timezone
        self._factory = strategy_factory or ArrivalStrategyFactory()
        self._default_cutoff = default_cutoff

    def current_cutoff(self) -> time:
        if self._config is None:
            return self._default_cutoff

        raw = self._config.get_value(ARRIVAL_CUTOFF_CONFIG_KEY)
        if not raw:
            return self._default_cutoff
        try:
            return parse_clock_time(raw)
        except ValueError:
            logger.warning(
                "Invalid %s=%r, using %s",
                ARRIVAL_CUTOFF_CONFIG_KEY,
                raw,
                self._default_cutoff.strftime("%H:%M"),
            )
            return self._default_cutoff

    def register_arrival(
        self,
        student_id: int,
        *,
        registered_by: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> ArrivalRecord:
        now = as_local(now, self._tz)
        today = now.date()
        arrival_time = now.time().replace(microsecond=0)

        student = self._students.get_by_id(student_id)
        if not student or not student.is_active:
            raise ValidationError("Estudiante no encontrado o inactivo")

        if self._arrivals.get_for_student_and_date(student_id, today):
            raise ValidationError("La llegada de este estudiante ya fue registrada hoy")

        cutoff = self.current_cutoff()
        strategy = self._factory.for_arrival(arrival_time=arrival_time, cutoff=cutoff)
        decision = strategy.decide(arrival_time=arrival_time, cutoff=cutoff)

        arrival_id = self._arrivals.create_arrival(
            student_id=student_id,
            arrival_date=today,
            arrival_time=arrival_time,
            status=decision.status,
            registered_by=registered_by,
            note=decision.note,
        )
        logger.info("Arrival %s: student=%s status=%s", arrival_id, student_id, decision.status.value)

        return ArrivalRecord(
            arrival_id=arrival_id,
            student_id=student_id,
            arrival_date=today,
            arrival_time=arrival_time,
            status=decision.status.value,
            registered_by=registered_by,
        )

    def justify_arrival(self, arrival_id: int, *, justified: bool) -> None:
        record = self._arrivals.get_by_id(arrival_id)
        if not record:
            raise ValidationError("Registro de llegada no encontrado")
        if record.justification:
            raise ValidationError("El registro de llegada ya tiene una justificación")

        status = JustificationStatus.JUSTIFIED if justified else JustificationStatus.UNJUSTIFIED
        if not self._arrivals.update_justification(arrival_id=arrival_id, justification=status):
            raise ValidationError("No se pudo actualizar la justificación")
