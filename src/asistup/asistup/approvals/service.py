from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, NotFound, NotPending

audit = logging.getLogger("asistup.audit")


class ApprovalService:
    """Review of records waiting in pending_approval.

    approve/reject are the only transitions out of pending_approval and both
    are terminal.
    """

    def __init__(self, attendance: AttendanceRepository, *, clock: Callable[[], datetime] = now_local):
        self._attendance = attendance
        self._clock = clock

    def list_pending(self, *, current_role: Role) -> Sequence[AttendanceRecord]:
        if not current_role.is_admin:
            raise AuthorizationError("No tiene permisos para esta acción")
        return self._attendance.list_by_status(AttendanceStatus.PENDING_APPROVAL)

    def approve(self, *, current_role: Role, record_id: str) -> AttendanceRecord:
        return self._decide(current_role=current_role, record_id=record_id, status=AttendanceStatus.CONFIRMED)

    def reject(self, *, current_role: Role, record_id: str) -> AttendanceRecord:
        return self._decide(current_role=current_role, record_id=record_id, status=AttendanceStatus.REJECTED)

    def _decide(self, *, current_role: Role, record_id: str, status: AttendanceStatus) -> AttendanceRecord:
        if not current_role.is_admin:
            raise AuthorizationError("No tiene permisos para esta acción")

        record = self._attendance.get_by_id(record_id)
        if not record:
            raise NotFound("Registro de asistencia no existe")
        if not record.is_pending:
            raise NotPending(f"El registro ya fue procesado ({record.status.value})")

        updated = self._attendance.transition_if_pending(
            record_id=record.record_id,
            status=status,
            validated_at=self._clock(),
        )
        if updated is None:
            # decided concurrently by another reviewer
            raise NotPending("El registro ya fue procesado")
        audit.info("attendance %s %s by %s", record_id, status.value, current_role.value)
        return updated

    def delete(self, *, current_role: Role, record_id: str) -> None:
        """Permanent removal regardless of status (audit exception)."""
        if current_role != Role.SUPER_ADMIN:
            raise AuthorizationError("Solo el Super Administrador puede eliminar registros")

        record = self._attendance.get_by_id(record_id)
        if not record:
            raise NotFound("Registro de asistencia no existe")
        if not self._attendance.delete(record_id):
            raise NotFound("Registro de asistencia no existe")
        audit.warning(
            "attendance %s deleted by %s (employee=%s status=%s timestamp=%s)",
            record_id,
            current_role.value,
            record.employee_id,
            record.status.value,
            record.timestamp.isoformat(),
        )
