"""Academic calendar: four contiguous bimesters per school year.

The school year starts in March. January and February belong to the school
year that started the previous March.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Mapping, Optional

from ..core.exceptions import InvalidPeriod
from .model import BimesterWindow

BIMESTER_NUMBERS = (1, 2, 3, 4)

# (start month, start day, end month, end day) within the school year.
DEFAULT_BIMESTER_DATES: Mapping[int, tuple[int, int, int, int]] = {
    1: (3, 1, 5, 15),
    2: (5, 16, 7, 31),
    3: (8, 1, 10, 15),
    4: (10, 16, 12, 31),
}


def current_school_year(today: date) -> int:
    if today.month in (1, 2):
        return today.year - 1
    return today.year


@dataclass(frozen=True)
class AcademicCalendar:
    """Bimester table keyed by (school_year, number).

    ``overrides`` replaces the default dates for specific school years.
    """

    overrides: Mapping[tuple[int, int], tuple[date, date]] = field(default_factory=dict)

    def window(self, school_year: int, number: int) -> BimesterWindow:
        if number not in BIMESTER_NUMBERS:
            raise InvalidPeriod(f"Bimestre inválido: {number} (debe estar entre 1 y 4)")

        override = self.overrides.get((school_year, number))
        if override is not None:
            start, end = override
        else:
            start_month, start_day, end_month, end_day = DEFAULT_BIMESTER_DATES[number]
            try:
                start = date(school_year, start_month, start_day)
                end = date(school_year, end_month, end_day)
            except ValueError as e:
                raise InvalidPeriod(f"Año escolar inválido: {school_year}") from e

        return BimesterWindow(school_year=school_year, number=number, start=start, end=end)

    def all_bimesters(self, school_year: int) -> list[BimesterWindow]:
        return [self.window(school_year, n) for n in BIMESTER_NUMBERS]

    def bimester_for(self, value: date, school_year: Optional[int] = None) -> Optional[BimesterWindow]:
        """Bimester containing ``value``; None for vacation days."""
        year = current_school_year(value) if school_year is None else school_year
        for window in self.all_bimesters(year):
            if window.start <= value <= window.end:
                return window
        return None
