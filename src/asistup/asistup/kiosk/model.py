from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import KioskState


@dataclass(frozen=True)
class TimeoutEvent:
    """Deadline-based transition delivered to a kiosk session.

    ``token`` ties the event to the display that scheduled it; events whose
    token is no longer current are ignored.
    """

    state: KioskState
    token: int


@dataclass(frozen=True)
class KioskView:
    """Read-model of a kiosk session for the presentation layer (never exposes PIN digits)."""

    session_id: str
    state: KioskState
    pin_length: int
    employee_name: Optional[str]
    message: Optional[str]
    error: Optional[str]
    busy: bool
    can_retry: bool
    closed: bool

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "state": self.state.value,
            "pin_length": self.pin_length,
            "employee_name": self.employee_name,
            "message": self.message,
            "error": self.error,
            "busy": self.busy,
            "can_retry": self.can_retry,
            "closed": self.closed,
        }
