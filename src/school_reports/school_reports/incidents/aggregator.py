"""Grouped incident statistics.

Only active incidents take part: justified and annulled ones are resolved
matters and are left out of every comparison.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Sequence
from zoneinfo import ZoneInfo

from ..common.datetime_utils import start_of_week, to_local_date
from ..core.constants import MAX_REINCIDENCE_LEVEL, TOP_FAULTS_LIMIT
from ..core.enums import IncidentStatus
from ..core.exceptions import PartialClassification
from ..students.model import StudentFilters
from .model import FaultFrequency, GroupKey, GroupSummary, Incident, IncidentOverview

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Grouping:
    """Which incident fields make up the group key."""

    name: str
    fields: tuple[str, ...]
    with_histogram: bool = False

    def key_for(self, incident: Incident) -> GroupKey:
        values = {}
        for name in self.fields:
            value = incident.fault_name if name == "fault_type" else getattr(incident, name)
            if value is None or value == "":
                raise PartialClassification(f"incident {incident.incident_id} has no {name}")
            values[name] = value
        return GroupKey(**values)


BY_LEVEL = Grouping("level", ("educational_level",))
BY_GRADE = Grouping("grade", ("educational_level", "grade"), with_histogram=True)
BY_SECTION = Grouping("section", ("educational_level", "grade", "section"))
BY_FAULT_TYPE = Grouping("fault_type", ("fault_type",))


def round_half_up(value: float, places: int = 2) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _average_level(incidents: Sequence[Incident]) -> float:
    if not incidents:
        return 0.0
    return round_half_up(sum(i.reincidence_level for i in incidents) / len(incidents))


def _histogram(incidents: Iterable[Incident]) -> tuple[int, ...]:
    counts = [0] * (MAX_REINCIDENCE_LEVEL + 1)
    for incident in incidents:
        if 0 <= incident.reincidence_level <= MAX_REINCIDENCE_LEVEL:
            counts[incident.reincidence_level] += 1
    return tuple(counts)


class GroupedAggregator:
    def active(self, records: Iterable[Incident], filters: Optional[StudentFilters] = None) -> list[Incident]:
        """Active incidents matching the level/grade/section filters."""
        filters = filters or StudentFilters()
        return [
            r
            for r in records
            if r.status == IncidentStatus.ACTIVE
            and filters.matches(level=r.educational_level, grade=r.grade, section=r.section)
        ]

    def aggregate(
        self,
        records: Iterable[Incident],
        grouping: Grouping = BY_GRADE,
        filters: Optional[StudentFilters] = None,
    ) -> list[GroupSummary]:
        groups: dict[GroupKey, list[Incident]] = {}
        skipped = 0

        for incident in self.active(records, filters):
            try:
                key = grouping.key_for(incident)
            except PartialClassification as e:
                skipped += 1
                logger.warning("Skipping incident in %s grouping: %s", grouping.name, e)
                continue
            groups.setdefault(key, []).append(incident)

        if skipped:
            logger.info("%s incidents left out of %s grouping", skipped, grouping.name)

        summaries = [
            GroupSummary(
                key=key,
                count=len(members),
                distinct_students=len({m.student_id for m in members}),
                average_level=_average_level(members),
                level_histogram=_histogram(members) if grouping.with_histogram else None,
            )
            for key, members in groups.items()
        ]
        summaries.sort(key=lambda s: s.key.sort_key())
        return summaries

    def top_faults(
        self,
        records: Iterable[Incident],
        filters: Optional[StudentFilters] = None,
        limit: int = TOP_FAULTS_LIMIT,
    ) -> list[FaultFrequency]:
        """Most frequent fault types; ties keep first-seen order."""
        counts: dict[str, int] = {}
        for incident in self.active(records, filters):
            name = incident.fault_name
            if not name:
                logger.warning("Skipping incident %s in fault ranking: no fault type", incident.incident_id)
                continue
            counts[name] = counts.get(name, 0) + 1

        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        return [FaultFrequency(fault_type=name, count=n) for name, n in ranked[: max(limit, 0)]]

    def overview(
        self,
        records: Iterable[Incident],
        filters: Optional[StudentFilters] = None,
        *,
        today: date,
        timezone: ZoneInfo,
    ) -> IncidentOverview:
        active = self.active(records, filters)
        week_start = start_of_week(today)
        month_start = today.replace(day=1)

        local_days = [to_local_date(i.registered_at, timezone) for i in active]
        this_month = [i for i, d in zip(active, local_days) if month_start <= d <= today]
        return IncidentOverview(
            total=len(active),
            distinct_students=len({i.student_id for i in active}),
            average_level=_average_level(active),
            level_histogram=_histogram(active),
            today=sum(1 for d in local_days if d == today),
            this_week=sum(1 for d in local_days if week_start <= d <= today),
            this_month=len(this_month),
            distinct_students_this_month=len({i.student_id for i in this_month}),
        )
