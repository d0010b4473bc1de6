from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..core.constants import MONEY_QUANTUM
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFound, ValidationError
from ..employees.repository import EmployeeRepository
from ..payments.repository import PaymentRepository


@dataclass(frozen=True)
class AttendanceReport:
    year: int
    month: Optional[int]
    employee_id: Optional[str]
    rows: list[dict]
    summary: list[dict]


@dataclass(frozen=True)
class PaymentsReport:
    year: Optional[int]
    employee_id: Optional[str]
    rows: list[dict]
    total: str


def _check_year(year: Optional[int]) -> None:
    if year is not None and int(year) < 1900:
        raise ValidationError("Año no válido")


class ReportService:
    """Read-only history views for the admin dashboard.

    Attendance is filtered by calendar year (and optionally month); the payments
    ledger lists disbursements already paid.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        payments: PaymentRepository,
        employees: EmployeeRepository,
    ):
        self._attendance = attendance
        self._payments = payments
        self._employees = employees

    def _names(self) -> dict[str, str]:
        return {e.employee_id: e.full_name for e in self._employees.list_all()}

    def _check_employee(self, employee_id: Optional[str]) -> None:
        if employee_id is not None and not self._employees.get_by_id(employee_id):
            raise NotFound("Empleado no existe")

    def attendance(
        self,
        *,
        year: int,
        month: Optional[int] = None,
        employee_id: Optional[str] = None,
    ) -> AttendanceReport:
        _check_year(year)
        if month is not None and not 1 <= int(month) <= 12:
            raise ValidationError("Mes no válido")
        self._check_employee(employee_id)

        names = self._names()
        records = self._attendance.list_for_period(year=year, month=month, employee_id=employee_id)

        rows: list[dict] = []
        per_employee: dict[str, dict] = {}
        for r in records:
            full_name = names.get(r.employee_id, "")
            rows.append({**r.to_document(), "full_name": full_name})

            entry = per_employee.setdefault(
                r.employee_id,
                {"employee_id": r.employee_id, "full_name": full_name, "marks": 0, "late": 0, "pending": 0, "rejected": 0},
            )
            entry["marks"] += 1
            # rejected marks do not count as lateness
            if r.is_late and r.status != AttendanceStatus.REJECTED:
                entry["late"] += 1
            if r.status == AttendanceStatus.PENDING_APPROVAL:
                entry["pending"] += 1
            elif r.status == AttendanceStatus.REJECTED:
                entry["rejected"] += 1

        summary = sorted(per_employee.values(), key=lambda e: (e["full_name"].lower(), e["employee_id"]))
        return AttendanceReport(year=int(year), month=month, employee_id=employee_id, rows=rows, summary=summary)

    def payments(self, *, year: Optional[int] = None, employee_id: Optional[str] = None) -> PaymentsReport:
        _check_year(year)
        self._check_employee(employee_id)

        names = self._names()
        total = Decimal("0")
        rows: list[dict] = []
        for p in self._payments.list_paid(year=year, employee_id=employee_id):
            total += p.amount
            rows.append(
                {
                    "id": p.payment_id,
                    "date": p.date,
                    "employee_id": p.employee_id,
                    "full_name": names.get(p.employee_id, ""),
                    "amount": str(p.amount.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)),
                    "type": p.type.value,
                    "concept": p.concept,
                    "month": p.month,
                    "year": p.ledger_year,
                }
            )

        return PaymentsReport(
            year=year,
            employee_id=employee_id,
            rows=rows,
            total=str(total.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)),
        )
