from __future__ import annotations

from datetime import time

from ...core.enums import ArrivalStatus
from .base import ArrivalStrategy, StatusDecision


class LateStrategy(ArrivalStrategy):
    """Arrival after the cutoff; the note records how late it was."""

    def decide(self, *, arrival_time: time, cutoff: time) -> StatusDecision:
        minutes = (arrival_time.hour * 60 + arrival_time.minute) - (cutoff.hour * 60 + cutoff.minute)
        return StatusDecision(status=ArrivalStatus.LATE, note=f"{minutes} min tarde")
