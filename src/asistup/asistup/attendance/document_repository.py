from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..core.constants import COLLECTION_ATTENDANCE
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFound
from ..database.store import DocumentStore
from .model import AttendanceRecord
from .repository import AttendanceRepository


class DocumentAttendanceRepository(AttendanceRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    def _all(self) -> list[AttendanceRecord]:
        return [AttendanceRecord.from_document(d) for d in self._store.list(COLLECTION_ATTENDANCE)]

    def add(self, record: AttendanceRecord) -> None:
        self._store.put(COLLECTION_ATTENDANCE, record.record_id, record.to_document())

    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        doc = self._store.get(COLLECTION_ATTENDANCE, record_id)
        return AttendanceRecord.from_document(doc) if doc else None

    def list_by_status(self, status: AttendanceStatus) -> Sequence[AttendanceRecord]:
        items = [r for r in self._all() if r.status == status]
        items.sort(key=lambda r: r.timestamp)
        return items

    def list_for_employee(self, employee_id: str, *, limit: int = 30) -> Sequence[AttendanceRecord]:
        items = [r for r in self._all() if r.employee_id == employee_id]
        items.sort(key=lambda r: r.timestamp, reverse=True)
        return items[:limit]

    def list_for_period(
        self,
        *,
        year: int,
        month: Optional[int] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        items = [
            r
            for r in self._all()
            if r.timestamp.year == year
            and (month is None or r.timestamp.month == month)
            and (employee_id is None or r.employee_id == employee_id)
        ]
        items.sort(key=lambda r: (r.timestamp, r.record_id))
        return items

    def transition_if_pending(
        self,
        *,
        record_id: str,
        status: AttendanceStatus,
        validated_at: datetime,
    ) -> Optional[AttendanceRecord]:
        current = self.get_by_id(record_id)
        if not current:
            raise NotFound("Registro de asistencia no existe")
        if not current.is_pending:
            return None
        updated = replace(current, status=status, validated_at=validated_at)
        written = self._store.put_if(
            COLLECTION_ATTENDANCE,
            record_id,
            updated.to_document(),
            expected={"status": AttendanceStatus.PENDING_APPROVAL.value},
        )
        return updated if written else None

    def delete(self, record_id: str) -> bool:
        return self._store.delete(COLLECTION_ATTENDANCE, record_id)
