from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from ..common.datetime_utils import optional_date
from ..common.validators import to_decimal
from ..core.enums import EmployeeStatus, OverSalaryType, Role, TerminationReason


@dataclass(frozen=True)
class Employee:
    """Entidad de dominio: Empleado (identidad + atributos contractuales).

    Objeto de datos puro; el acceso al almacén vive en los repositorios.
    """

    employee_id: str
    name: str
    pin: str
    salary: Decimal = Decimal("0")
    surname: str = ""
    identification: str = ""
    role: Role = Role.EMPLOYEE
    pin_changed: bool = False
    pin_needs_reset: bool = False
    is_fixed: bool = False
    is_affiliated: bool = False
    over_salary_type: OverSalaryType = OverSalaryType.NONE
    start_date: Optional[date] = None
    birth_date: Optional[date] = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    termination_date: Optional[date] = None
    termination_reason: Optional[TerminationReason] = None
    termination_details: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.surname}".strip()

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE

    @property
    def must_rotate_pin(self) -> bool:
        return not self.pin_changed or self.pin_needs_reset

    def to_document(self) -> dict:
        return {
            "id": self.employee_id,
            "name": self.name,
            "surname": self.surname,
            "identification": self.identification,
            "role": self.role.value,
            "pin": self.pin,
            "pin_changed": self.pin_changed,
            "pin_needs_reset": self.pin_needs_reset,
            "salary": str(self.salary),
            "is_fixed": self.is_fixed,
            "is_affiliated": self.is_affiliated,
            "over_salary_type": self.over_salary_type.value,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "birth_date": self.birth_date.isoformat() if self.birth_date else None,
            "status": self.status.value,
            "termination_date": self.termination_date.isoformat() if self.termination_date else None,
            "termination_reason": self.termination_reason.value if self.termination_reason else None,
            "termination_details": self.termination_details,
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Employee":
        reason = doc.get("termination_reason")
        return cls(
            employee_id=str(doc["id"]),
            name=str(doc.get("name") or ""),
            surname=str(doc.get("surname") or ""),
            identification=str(doc.get("identification") or ""),
            role=Role(doc.get("role") or Role.EMPLOYEE.value),
            pin=str(doc.get("pin") or ""),
            pin_changed=bool(doc.get("pin_changed", False)),
            pin_needs_reset=bool(doc.get("pin_needs_reset", False)),
            salary=to_decimal(doc.get("salary")),
            is_fixed=bool(doc.get("is_fixed", False)),
            is_affiliated=bool(doc.get("is_affiliated", False)),
            over_salary_type=OverSalaryType(doc.get("over_salary_type") or OverSalaryType.NONE.value),
            start_date=optional_date(doc.get("start_date")),
            birth_date=optional_date(doc.get("birth_date")),
            status=EmployeeStatus(doc.get("status") or EmployeeStatus.ACTIVE.value),
            termination_date=optional_date(doc.get("termination_date")),
            termination_reason=TerminationReason(reason) if reason else None,
            termination_details=doc.get("termination_details"),
        )
