from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Rol del actor para autorización."""

    SUPER_ADMIN = "super_admin"
    PARTIAL_ADMIN = "partial_admin"
    EMPLOYEE = "employee"

    @property
    def is_admin(self) -> bool:
        return self in (Role.SUPER_ADMIN, Role.PARTIAL_ADMIN)


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    TERMINATED = "terminated"
    ARCHIVED = "archived"


class OverSalaryType(str, Enum):
    """How 13th/14th salary is disbursed."""

    MONTHLY = "monthly"
    ACCUMULATE = "accumulate"
    NONE = "none"


class TerminationReason(str, Enum):
    VOLUNTARY = "Renuncia Voluntaria"
    LAYOFF = "Despido"
    UNILATERAL = "Terminación unilateral"
    BILATERAL = "Terminación bilateral"
    VISTO_BUENO = "Visto Bueno"
    OTHER = "Otro"


class AttendanceType(str, Enum):
    IN = "in"
    OUT = "out"
    HALF_DAY = "half_day"


class AttendanceStatus(str, Enum):
    """Estado del registro de asistencia. Solo PENDING_APPROVAL es no terminal."""

    CONFIRMED = "confirmed"
    PENDING_APPROVAL = "pending_approval"
    REJECTED = "rejected"


class PaymentType(str, Enum):
    SALARY = "Salary"
    LOAN = "Loan"
    BONUS = "Bonus"
    SETTLEMENT = "Settlement"
    EMERGENCY = "Emergency"
    THIRTEENTH = "Thirteenth"
    FOURTEENTH = "Fourteenth"
    VACATION = "Vacation"


class PaymentStatus(str, Enum):
    PAID = "paid"
    VOID = "void"


class DayPeriod(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"


class KioskState(str, Enum):
    IDLE = "idle"
    IDENTIFYING = "identifying"
    CONFIRM = "confirm"
    CHANGE_PIN = "change_pin"
    ERROR = "error"
    SUCCESS = "success"


class NotificationKind(str, Enum):
    CRITICAL_LATENESS = "critical_lateness"
    PIN_ROTATED = "pin_rotated"
