from __future__ import annotations

from datetime import datetime

from ...settings.model import WorkSchedule
from .base import AttendanceStrategy, MarkDecision


class UncheckedStrategy(AttendanceStrategy):
    """Check-out and half-day marks: lateness does not apply."""

    def decide(self, *, now: datetime, schedule: WorkSchedule) -> MarkDecision:
        return MarkDecision(is_late=False)
