from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from .strategies.base import ArrivalStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class ArrivalStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on the cutoff rule.

    Clock times are compared at minute precision: 08:00:59 is still 08:00.
    """

    def for_arrival(self, *, arrival_time: time, cutoff: time) -> ArrivalStrategy:
        arrived = arrival_time.replace(second=0, microsecond=0, tzinfo=None)
        limit = cutoff.replace(second=0, microsecond=0, tzinfo=None)
        if arrived <= limit:
            return OnTimeStrategy()
        return LateStrategy()
