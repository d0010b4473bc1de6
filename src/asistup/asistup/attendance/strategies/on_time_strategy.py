from __future__ import annotations

from datetime import datetime

from ...settings.model import WorkSchedule
from .base import AttendanceStrategy, MarkDecision


class OnTimeStrategy(AttendanceStrategy):
    """Check-in within the tolerance window."""

    def decide(self, *, now: datetime, schedule: WorkSchedule) -> MarkDecision:
        return MarkDecision(is_late=False)
