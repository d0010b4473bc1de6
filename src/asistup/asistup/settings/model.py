from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from decimal import Decimal
from typing import Any, Optional

from ..common.datetime_utils import format_hhmm, parse_hhmm
from ..common.validators import to_decimal
from ..core.constants import DEFAULT_IESS_RATE, DEFAULT_RESERVE_RATE, DEFAULT_SBU
from ..core.enums import DayPeriod


@dataclass(frozen=True)
class TimeWindow:
    start: time
    end: time

    def contains(self, moment: time) -> bool:
        return self.start <= moment < self.end

    def to_document(self) -> dict:
        return {"start": format_hhmm(self.start), "end": format_hhmm(self.end)}

    @classmethod
    def from_document(cls, doc: Optional[dict], default: "TimeWindow") -> "TimeWindow":
        if not doc:
            return default
        return cls(start=parse_hhmm(doc["start"]), end=parse_hhmm(doc["end"]))


@dataclass(frozen=True)
class WorkSchedule:
    """Horario oficial: jornada partida entre semana, sábado de media jornada
    y una media jornada libre recurrente (por defecto miércoles por la tarde)."""

    weekday_morning: TimeWindow = TimeWindow(time(8, 30), time(13, 0))
    weekday_afternoon: TimeWindow = TimeWindow(time(15, 0), time(18, 0))
    saturday: TimeWindow = TimeWindow(time(8, 30), time(13, 0))
    half_day_off_weekday: int = 2
    half_day_off_period: DayPeriod = DayPeriod.AFTERNOON

    @property
    def weekday_start(self) -> time:
        return self.weekday_morning.start

    def to_document(self) -> dict:
        return {
            "weekdays": {
                "morning": self.weekday_morning.to_document(),
                "afternoon": self.weekday_afternoon.to_document(),
            },
            "saturday": self.saturday.to_document(),
            "half_day_off": {
                "weekday": self.half_day_off_weekday,
                "period": self.half_day_off_period.value,
            },
        }

    @classmethod
    def from_document(cls, doc: Optional[dict]) -> "WorkSchedule":
        default = cls()
        if not doc:
            return default
        weekdays = doc.get("weekdays") or {}
        half_day = doc.get("half_day_off") or {}
        return cls(
            weekday_morning=TimeWindow.from_document(weekdays.get("morning"), default.weekday_morning),
            weekday_afternoon=TimeWindow.from_document(weekdays.get("afternoon"), default.weekday_afternoon),
            saturday=TimeWindow.from_document(doc.get("saturday"), default.saturday),
            half_day_off_weekday=int(half_day.get("weekday", default.half_day_off_weekday)),
            half_day_off_period=DayPeriod(half_day.get("period", default.half_day_off_period.value)),
        )


@dataclass(frozen=True)
class GlobalSettings:
    """Statutory rates and the official schedule, replaced as a whole."""

    sbu: Decimal = DEFAULT_SBU
    iess_rate: Decimal = DEFAULT_IESS_RATE
    reserve_rate: Decimal = DEFAULT_RESERVE_RATE
    schedule: WorkSchedule = field(default_factory=WorkSchedule)

    def to_document(self) -> dict:
        return {
            "sbu": str(self.sbu),
            "iess_rate": str(self.iess_rate),
            "reserve_rate": str(self.reserve_rate),
            "schedule": self.schedule.to_document(),
        }

    @classmethod
    def from_document(cls, doc: Optional[dict[str, Any]]) -> "GlobalSettings":
        if not doc:
            return cls()
        return cls(
            sbu=to_decimal(doc.get("sbu", DEFAULT_SBU)),
            iess_rate=to_decimal(doc.get("iess_rate", DEFAULT_IESS_RATE)),
            reserve_rate=to_decimal(doc.get("reserve_rate", DEFAULT_RESERVE_RATE)),
            schedule=WorkSchedule.from_document(doc.get("schedule")),
        )
