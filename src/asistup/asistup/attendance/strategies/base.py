from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ...settings.model import WorkSchedule


@dataclass(frozen=True)
class MarkDecision:
    is_late: bool
    minutes_late: int = 0


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how a mark's lateness is decided."""

    @abstractmethod
    def decide(self, *, now: datetime, schedule: WorkSchedule) -> MarkDecision:
        raise NotImplementedError
