from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from ..common.validators import to_decimal
from ..core.enums import PaymentStatus, PaymentType


def _optional_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class Payment:
    """Ledger entry. ``month``/``year`` name the payroll period, independent of ``date``.

    A negative amount on a Bonus entry is a penalty (withholding).
    """

    payment_id: str
    employee_id: str
    amount: Decimal
    month: Optional[int]
    year: Optional[int]
    type: PaymentType
    status: PaymentStatus = PaymentStatus.PAID
    date: Optional[str] = None
    concept: str = ""

    @property
    def is_paid(self) -> bool:
        return self.status == PaymentStatus.PAID

    @property
    def ledger_year(self) -> Optional[int]:
        if self.year is not None:
            return self.year
        return _optional_int((self.date or "")[:4])

    def to_document(self) -> dict:
        return {
            "id": self.payment_id,
            "employee_id": self.employee_id,
            "amount": str(self.amount),
            "month": self.month,
            "year": self.year,
            "type": self.type.value,
            "status": self.status.value,
            "date": self.date,
            "concept": self.concept,
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Payment":
        return cls(
            payment_id=str(doc["id"]),
            employee_id=str(doc.get("employee_id") or ""),
            amount=to_decimal(doc.get("amount")),
            month=_optional_int(doc.get("month")),
            year=_optional_int(doc.get("year")),
            type=PaymentType(doc.get("type") or PaymentType.SALARY.value),
            status=PaymentStatus(doc.get("status") or PaymentStatus.PAID.value),
            date=doc.get("date"),
            concept=str(doc.get("concept") or ""),
        )
