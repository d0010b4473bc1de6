from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from ..core.constants import DEFAULT_LATE_THRESHOLD_MINUTES
from ..core.enums import AttendanceType
from ..settings.model import WorkSchedule
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy
from .strategies.unchecked_strategy import UncheckedStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the lateness strategy for a mark."""

    threshold_minutes: int = DEFAULT_LATE_THRESHOLD_MINUTES

    def for_mark(self, *, mark_type: AttendanceType, now: datetime, schedule: WorkSchedule) -> AttendanceStrategy:
        if mark_type != AttendanceType.IN:
            return UncheckedStrategy()

        start = datetime.combine(now.date(), schedule.weekday_start)
        if now - start > timedelta(minutes=self.threshold_minutes):
            return LateStrategy()
        return OnTimeStrategy()
