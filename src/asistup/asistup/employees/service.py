from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional, Sequence

from werkzeug.security import check_password_hash

from ..common.datetime_utils import now_local
from ..common.generators import SecretGenerator
from ..common.validators import is_valid_pin, require_decimal, require_non_empty, require_pin
from ..core.enums import EmployeeStatus, NotificationKind, OverSalaryType, Role, TerminationReason
from ..core.exceptions import (
    AuthenticationFailed,
    AuthorizationError,
    InvalidPinRotation,
    NotFound,
    ValidationError,
)
from ..notifications.dispatcher import Notification, NotificationDispatcher, dispatch_best_effort
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)
audit = logging.getLogger("asistup.audit")

MAX_PIN_ATTEMPTS = 50


def _require_admin(role: Role) -> None:
    if not role.is_admin:
        raise AuthorizationError("No tiene permisos para esta acción")


class AdminAuthService:
    """Use case: authenticate an administrative actor (master password or admin PIN)."""

    def __init__(self, employees: EmployeeRepository, *, admin_password_hash: Optional[str]):
        self._employees = employees
        self._admin_password_hash = admin_password_hash

    def authenticate(self, secret: str) -> Role:
        secret = secret or ""
        if self._admin_password_hash and secret:
            try:
                ok = check_password_hash(self._admin_password_hash, secret)
            except ValueError:
                # malformed hash in configuration
                logger.error("ADMIN_PASSWORD_HASH is not a valid werkzeug hash")
                ok = False
            if ok:
                return Role.SUPER_ADMIN

        if is_valid_pin(secret):
            for emp in self._employees.list_all():
                if emp.is_active and emp.role.is_admin and emp.pin == secret:
                    return emp.role

        raise AuthenticationFailed("Credencial no válida o sin privilegios")


class EmployeeService:
    """Use case: employee administration plus kiosk PIN rotation."""

    def __init__(
        self,
        employees: EmployeeRepository,
        *,
        generator: SecretGenerator,
        notifier: NotificationDispatcher,
        clock: Callable[[], datetime] = now_local,
    ):
        self._employees = employees
        self._generator = generator
        self._notifier = notifier
        self._clock = clock

    def get(self, employee_id: str) -> Employee:
        emp = self._employees.get_by_id(employee_id)
        if not emp:
            raise NotFound("Empleado no existe")
        return emp

    def list_all(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def _pin_taken(self, pin: str, *, exclude_id: Optional[str] = None) -> bool:
        return any(
            e.is_active and e.pin == pin and e.employee_id != exclude_id
            for e in self._employees.list_all()
        )

    def _temporary_pin(self) -> str:
        for _ in range(MAX_PIN_ATTEMPTS):
            pin = self._generator.new_pin()
            if is_valid_pin(pin) and not self._pin_taken(pin):
                return pin
        raise ValidationError("No se pudo generar un PIN temporal único")

    @staticmethod
    def _normalize(employee: Employee) -> Employee:
        if not employee.is_affiliated and employee.over_salary_type != OverSalaryType.NONE:
            return replace(employee, over_salary_type=OverSalaryType.NONE)
        return employee

    def create(
        self,
        *,
        current_role: Role,
        name: str,
        identification: str,
        salary: Decimal | str | int,
        surname: str = "",
        role: Role = Role.EMPLOYEE,
        is_fixed: bool = True,
        is_affiliated: bool = True,
        over_salary_type: OverSalaryType = OverSalaryType.ACCUMULATE,
        start_date: Optional[date] = None,
        birth_date: Optional[date] = None,
    ) -> Employee:
        _require_admin(current_role)
        if role == Role.SUPER_ADMIN and current_role != Role.SUPER_ADMIN:
            raise AuthorizationError("Solo el Super Administrador puede crear administradores totales")

        employee = self._normalize(
            Employee(
                employee_id=self._generator.new_id(),
                name=require_non_empty(name, "Nombre"),
                surname=(surname or "").strip(),
                identification=require_non_empty(identification, "Identificación"),
                role=role,
                pin=self._temporary_pin(),
                salary=require_decimal(salary, "Sueldo", minimum=Decimal("0")),
                is_fixed=bool(is_fixed),
                is_affiliated=bool(is_affiliated),
                over_salary_type=OverSalaryType(over_salary_type),
                start_date=start_date or self._clock().date(),
                birth_date=birth_date,
            )
        )
        self._employees.replace(employee)
        audit.info("employee %s created by %s", employee.employee_id, current_role.value)
        return employee

    def replace(self, *, current_role: Role, employee: Employee) -> Employee:
        _require_admin(current_role)
        if employee.role == Role.SUPER_ADMIN and current_role != Role.SUPER_ADMIN:
            raise AuthorizationError("Solo el Super Administrador puede asignar el rol de administrador total")
        if not self._employees.get_by_id(employee.employee_id):
            raise NotFound("Empleado no existe")

        require_non_empty(employee.name, "Nombre")
        require_pin(employee.pin)
        require_decimal(employee.salary, "Sueldo", minimum=Decimal("0"))
        if employee.is_active and self._pin_taken(employee.pin, exclude_id=employee.employee_id):
            raise ValidationError("El PIN ya está asignado a otro empleado activo")

        employee = self._normalize(employee)
        self._employees.replace(employee)
        return employee

    def terminate(
        self,
        *,
        current_role: Role,
        employee_id: str,
        termination_date: date,
        reason: TerminationReason,
        details: str = "",
    ) -> Employee:
        _require_admin(current_role)
        emp = self.get(employee_id)
        if emp.status != EmployeeStatus.ACTIVE:
            raise ValidationError("Solo se puede desvincular a un empleado activo")

        updated = replace(
            emp,
            status=EmployeeStatus.TERMINATED,
            termination_date=termination_date,
            termination_reason=TerminationReason(reason),
            termination_details=(details or "").strip() or None,
        )
        self._employees.replace(updated)
        audit.info("employee %s terminated (%s) by %s", employee_id, updated.termination_reason.value, current_role.value)
        return updated

    def archive(self, *, current_role: Role, employee_id: str) -> Employee:
        _require_admin(current_role)
        emp = self.get(employee_id)
        updated = replace(emp, status=EmployeeStatus.ARCHIVED)
        self._employees.replace(updated)
        audit.info("employee %s archived by %s", employee_id, current_role.value)
        return updated

    def require_pin_reset(self, *, current_role: Role, employee_id: str) -> Employee:
        _require_admin(current_role)
        updated = replace(self.get(employee_id), pin_needs_reset=True)
        self._employees.replace(updated)
        audit.info("employee %s flagged for PIN reset by %s", employee_id, current_role.value)
        return updated

    def rotate_pin(self, employee_id: str, new_pin: str) -> Employee:
        """Kiosk-side PIN rotation. Notifies administrators on success."""
        emp = self.get(employee_id)
        if not is_valid_pin(new_pin):
            raise InvalidPinRotation("El nuevo PIN debe tener exactamente 6 dígitos")
        if new_pin == emp.pin:
            raise InvalidPinRotation("El nuevo PIN debe ser distinto del actual")
        if self._pin_taken(new_pin, exclude_id=emp.employee_id):
            raise InvalidPinRotation("El nuevo PIN no está disponible, elija otro")

        updated = replace(emp, pin=new_pin, pin_changed=True, pin_needs_reset=False)
        self._employees.replace(updated)
        logger.info("PIN rotated for employee %s", emp.employee_id)

        dispatch_best_effort(
            self._notifier,
            Notification(
                kind=NotificationKind.PIN_ROTATED,
                title="Cambio de PIN",
                body=f"{updated.full_name} actualizó su PIN de acceso.",
                created_at=self._clock(),
            ),
        )
        return updated
