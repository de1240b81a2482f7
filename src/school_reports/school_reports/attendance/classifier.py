from __future__ import annotations

from typing import Mapping, Optional

from ..core.enums import ArrivalStatus, DayStatus, JustificationStatus
from .model import ArrivalRecord

_FROM_JUSTIFICATION: Mapping[str, DayStatus] = {
    JustificationStatus.JUSTIFIED.value: DayStatus.JUSTIFIED,
    JustificationStatus.UNJUSTIFIED.value: DayStatus.UNJUSTIFIED,
}

_FROM_ARRIVAL: Mapping[str, DayStatus] = {
    ArrivalStatus.ON_TIME.value: DayStatus.ON_TIME,
    ArrivalStatus.LATE.value: DayStatus.LATE,
}


class StatusClassifier:
    """Map a stored arrival (or its absence) to the status of a report cell.

    Only echoes what was stored: the on-time/late decision was taken when the
    record was created, so later cutoff changes do not reclassify history.
    """

    def classify(self, record: Optional[ArrivalRecord]) -> DayStatus:
        if record is None:
            return DayStatus.NO_RECORD

        if record.justification:
            justified = _FROM_JUSTIFICATION.get(record.justification)
            if justified is not None:
                return justified

        return _FROM_ARRIVAL.get(record.status, DayStatus.NO_RECORD)
