from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import time
from typing import Optional

from ...core.enums import ArrivalStatus


@dataclass(frozen=True)
class StatusDecision:
    status: ArrivalStatus
    note: Optional[str] = None


class ArrivalStrategy(ABC):
    """Strategy Pattern: encapsulate how an arrival status is decided."""

    @abstractmethod
    def decide(self, *, arrival_time: time, cutoff: time) -> StatusDecision:
        raise NotImplementedError
