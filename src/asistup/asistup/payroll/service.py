from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import EmployeeStatus
from ..core.exceptions import NotFound, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..payments.repository import PaymentRepository
from ..settings.service import SettingsService
from .calculator.base import PayrollCalculator
from .calculator.statutory_calculator import StatutoryPayrollCalculator
from .model import PayrollBreakdown


@dataclass(frozen=True)
class RollReport:
    month: int
    year: int
    rows: list[dict]
    totals: dict


def _check_period(month: int, year: int) -> None:
    if not 1 <= int(month) <= 12:
        raise ValidationError("Mes no válido")
    if int(year) < 1900:
        raise ValidationError("Año no válido")


def in_roll(employee: Employee, year: int) -> bool:
    """Active employees, plus those terminated during ``year``."""
    if employee.status == EmployeeStatus.ACTIVE:
        return True
    if employee.status == EmployeeStatus.TERMINATED and employee.termination_date:
        return employee.termination_date.year == year
    return False


class PayrollReportService:
    def __init__(
        self,
        employees: EmployeeRepository,
        payments: PaymentRepository,
        settings: SettingsService,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._employees = employees
        self._payments = payments
        self._settings = settings
        self._calculator = calculator or StatutoryPayrollCalculator()

    def preview(self, employee: Employee, *, month: int, year: int, as_of: date) -> PayrollBreakdown:
        """What-if computation for a single employee value (saved or not)."""
        _check_period(month, year)
        payments = self._payments.list_for_period(month=month, year=year, employee_id=employee.employee_id)
        return self._calculator.compute(
            employee,
            self._settings.current(),
            payments,
            month=month,
            year=year,
            as_of=as_of,
        )

    def breakdown_for(self, employee_id: str, *, month: int, year: int, as_of: date) -> PayrollBreakdown:
        emp = self._employees.get_by_id(employee_id)
        if not emp:
            raise NotFound("Empleado no existe")
        return self.preview(emp, month=month, year=year, as_of=as_of)

    def build_roll(self, *, month: int, year: int, as_of: date) -> RollReport:
        _check_period(month, year)
        settings = self._settings.current()
        payments = self._payments.list_for_period(month=month, year=year)

        by_employee: dict[str, list] = {}
        for p in payments:
            by_employee.setdefault(p.employee_id, []).append(p)

        employees = [e for e in self._employees.list_all() if in_roll(e, year)]
        employees.sort(key=lambda e: (e.surname.lower(), e.name.lower()))

        rows: list[dict] = []
        total = PayrollBreakdown()
        for emp in employees:
            breakdown = self._calculator.compute(
                emp,
                settings,
                by_employee.get(emp.employee_id, []),
                month=month,
                year=year,
                as_of=as_of,
            )
            total = total + breakdown
            rows.append(
                {
                    "employee_id": emp.employee_id,
                    "full_name": emp.full_name,
                    "identification": emp.identification,
                    "status": emp.status.value,
                    **breakdown.rounded().to_dict(),
                }
            )

        return RollReport(month=int(month), year=int(year), rows=rows, totals=total.rounded().to_dict())
