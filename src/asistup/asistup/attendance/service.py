from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local, to_local_naive
from ..common.generators import SecretGenerator
from ..common.validators import require_non_empty
from ..core.enums import AttendanceStatus, AttendanceType, NotificationKind
from ..core.exceptions import AuthenticationFailed, NotFound, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..employees.service import AdminAuthService
from ..notifications.dispatcher import Notification, NotificationDispatcher, dispatch_best_effort
from ..settings.model import GlobalSettings
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: emit attendance records (kiosk marks and forgotten marks)."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        generator: SecretGenerator,
        notifier: Optional[NotificationDispatcher] = None,
        admin_auth: Optional[AdminAuthService] = None,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._employees = employees
        self._generator = generator
        self._notifier = notifier
        self._admin_auth = admin_auth
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._clock = clock

    def _active_employee(self, employee_id: str) -> Employee:
        emp = self._employees.get_by_id(employee_id)
        if not emp:
            raise NotFound("Empleado no existe")
        if not emp.is_active:
            raise ValidationError("El empleado no está activo")
        return emp

    def register_mark(
        self,
        employee_id: str,
        mark_type: AttendanceType,
        *,
        settings: GlobalSettings,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        now = to_local_naive(now or self._clock())
        emp = self._active_employee(employee_id)

        strategy = self._factory.for_mark(mark_type=mark_type, now=now, schedule=settings.schedule)
        decision = strategy.decide(now=now, schedule=settings.schedule)

        record = AttendanceRecord(
            record_id=self._generator.new_id(),
            employee_id=emp.employee_id,
            timestamp=now,
            type=mark_type,
            status=AttendanceStatus.CONFIRMED,
            is_late=decision.is_late,
        )
        self._attendance.add(record)

        if decision.is_late:
            logger.warning("Late arrival: employee %s, %d minutes", emp.employee_id, decision.minutes_late)
            dispatch_best_effort(
                self._notifier,
                Notification(
                    kind=NotificationKind.CRITICAL_LATENESS,
                    title="Atraso crítico",
                    body=(
                        f"{emp.full_name} registró su ingreso a las {now:%H:%M} "
                        f"({decision.minutes_late} min después del inicio de jornada)."
                    ),
                    created_at=now,
                ),
            )
        return record

    def register_forgotten_mark(
        self,
        *,
        pin: str,
        mark_type: AttendanceType,
        timestamp: datetime,
        justification: str,
        admin_secret: str,
        settings: GlobalSettings,
    ) -> AttendanceRecord:
        """Extemporaneous mark authorized by an administrator; waits for approval."""
        timestamp = to_local_naive(timestamp)
        if self._admin_auth is None:
            raise AuthenticationFailed("Autorización administrativa no disponible")
        self._admin_auth.authenticate(admin_secret)

        justification = require_non_empty(justification, "Justificación")

        emp = next((e for e in self._employees.list_all() if e.is_active and e.pin == pin), None)
        if not emp:
            raise AuthenticationFailed("PIN de empleado no encontrado")

        strategy = self._factory.for_mark(mark_type=mark_type, now=timestamp, schedule=settings.schedule)
        decision = strategy.decide(now=timestamp, schedule=settings.schedule)

        record = AttendanceRecord(
            record_id=self._generator.new_id(),
            employee_id=emp.employee_id,
            timestamp=timestamp,
            type=mark_type,
            status=AttendanceStatus.PENDING_APPROVAL,
            is_late=decision.is_late,
            justification=justification,
        )
        self._attendance.add(record)
        logger.info("Forgotten mark %s registered for employee %s", record.record_id, emp.employee_id)
        return record

    def history(self, employee_id: str, *, limit: int = 30) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_employee(employee_id, limit=limit)
