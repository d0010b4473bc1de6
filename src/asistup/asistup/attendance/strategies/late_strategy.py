from __future__ import annotations

from datetime import datetime

from ...settings.model import WorkSchedule
from .base import AttendanceStrategy, MarkDecision


class LateStrategy(AttendanceStrategy):
    """Check-in past the tolerance window; reports whole minutes after the start boundary."""

    def decide(self, *, now: datetime, schedule: WorkSchedule) -> MarkDecision:
        start = datetime.combine(now.date(), schedule.weekday_start)
        minutes = int((now - start).total_seconds() // 60)
        return MarkDecision(is_late=True, minutes_late=minutes)
