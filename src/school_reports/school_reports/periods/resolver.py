from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping

from ..common.validators import optional_arg
from ..core.exceptions import InvalidPeriod
from .calendar import AcademicCalendar, current_school_year
from .model import BimesterPeriod, DateRange, MonthPeriod, Period


@dataclass(frozen=True)
class DateRangeResolver:
    """Turn a reporting period selector into a concrete inclusive DateRange."""

    calendar: AcademicCalendar = field(default_factory=AcademicCalendar)

    def resolve(self, period: Period) -> DateRange:
        if isinstance(period, MonthPeriod):
            return self._resolve_month(period)
        if isinstance(period, BimesterPeriod):
            return self._resolve_bimester(period)
        raise InvalidPeriod(f"Periodo no soportado: {period!r}")

    def _resolve_month(self, period: MonthPeriod) -> DateRange:
        if not 1 <= period.month <= 12:
            raise InvalidPeriod(f"Mes inválido: {period.month} (debe estar entre 1 y 12)")
        if not 1 <= period.year <= 9999:
            raise InvalidPeriod(f"Año inválido: {period.year}")

        last_day = monthrange(period.year, period.month)[1]
        start = date(period.year, period.month, 1)
        end = date(period.year, period.month, last_day)
        return DateRange(start=start, end=end, day_count=end.day)

    def _resolve_bimester(self, period: BimesterPeriod) -> DateRange:
        window = self.calendar.window(period.school_year, period.number)
        if window.end < window.start:
            raise InvalidPeriod(
                f"Bimestre {period.number} de {period.school_year} tiene un rango vacío "
                f"({window.start.isoformat()} - {window.end.isoformat()})"
            )
        return DateRange.between(window.start, window.end)


def _int_arg(args: Mapping[str, Any], name: str) -> int:
    value = optional_arg(args, name)
    if value is None:
        raise InvalidPeriod(f"Falta el parámetro {name}")
    try:
        return int(value)
    except ValueError as e:
        raise InvalidPeriod(f"Parámetro {name} inválido: {value!r}") from e


def period_from_args(args: Mapping[str, Any], *, today: date) -> Period:
    """Build a period from request arguments.

    ``period=month&year=2024&month=2`` or
    ``period=bimester&school_year=2024&bimester=1``; also accepts
    ``month=2024-02``. Without arguments the current month is used.
    """

    kind = (optional_arg(args, "period") or "month").lower()

    if kind in {"bimester", "bimestral", "bimestre"}:
        school_year = current_school_year(today) if optional_arg(args, "school_year") is None else _int_arg(args, "school_year")
        return BimesterPeriod(school_year=school_year, number=_int_arg(args, "bimester"))

    if kind not in {"month", "monthly", "mensual"}:
        raise InvalidPeriod(f"Tipo de periodo desconocido: {kind!r}")

    month_value = optional_arg(args, "month")
    if month_value is not None and "-" in month_value:
        year_s, _, month_s = month_value.partition("-")
        return MonthPeriod(
            year=_int_arg({"year": year_s}, "year"),
            month=_int_arg({"month": month_s}, "month"),
        )

    year = today.year if optional_arg(args, "year") is None else _int_arg(args, "year")
    month = today.month if month_value is None else _int_arg(args, "month")
    return MonthPeriod(year=year, month=month)
