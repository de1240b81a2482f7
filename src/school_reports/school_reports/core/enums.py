from __future__ import annotations

from enum import Enum


class EducationalLevel(str, Enum):
    """Nivel educativo. Declaration order is the reporting order."""

    PRIMARIA = "Primaria"
    SECUNDARIA = "Secundaria"

    @classmethod
    def rank(cls, value: str | None) -> int:
        for idx, member in enumerate(cls):
            if member.value == value:
                return idx
        return len(cls.__members__)


class ArrivalStatus(str, Enum):
    """Estado de llegada guardado al registrar el ingreso."""

    ON_TIME = "A tiempo"
    LATE = "Tarde"


class JustificationStatus(str, Enum):
    JUSTIFIED = "Justificada"
    UNJUSTIFIED = "Injustificada"


class DayStatus(str, Enum):
    """Estado de una celda del reporte de asistencia."""

    ON_TIME = "A_tiempo"
    LATE = "Tarde"
    JUSTIFIED = "Justificada"
    UNJUSTIFIED = "Injustificada"
    NO_RECORD = "Sin_registro"


class IncidentStatus(str, Enum):
    ACTIVE = "Activa"
    JUSTIFIED = "Justificada"
    ANNULLED = "Anulada"
