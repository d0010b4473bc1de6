from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def add(self, record: AttendanceRecord) -> None:
        """Append a new record (ids are never reused)."""

        raise NotImplementedError

    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_by_status(self, status: AttendanceStatus) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str, *, limit: int = 30) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_period(
        self,
        *,
        year: int,
        month: Optional[int] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records whose timestamp falls in ``year`` (and ``month`` when given), oldest first."""

        raise NotImplementedError

    def transition_if_pending(
        self,
        *,
        record_id: str,
        status: AttendanceStatus,
        validated_at: datetime,
    ) -> Optional[AttendanceRecord]:
        """Move a pending record to ``status`` in one conditional write.

        Returns None when the record is no longer pending; raises NotFound when it
        does not exist.
        """

        raise NotImplementedError

    def delete(self, record_id: str) -> bool:
        """Privileged removal; used only as an audit exception."""

        raise NotImplementedError
