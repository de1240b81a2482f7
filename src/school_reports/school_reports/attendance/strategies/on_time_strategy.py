from __future__ import annotations

from datetime import time

from ...core.enums import ArrivalStatus
from .base import ArrivalStrategy, StatusDecision


class OnTimeStrategy(ArrivalStrategy):
    """Arrival at or before the cutoff."""

    def decide(self, *, arrival_time: time, cutoff: time) -> StatusDecision:
        return StatusDecision(status=ArrivalStatus.ON_TIME)
