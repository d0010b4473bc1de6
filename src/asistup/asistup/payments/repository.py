from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Payment


class PaymentRepository(Protocol):
    """Read-only view of the treasury ledger."""

    def list_for_period(
        self,
        *,
        month: int,
        year: Optional[int] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[Payment]:
        raise NotImplementedError

    def list_paid(
        self,
        *,
        year: Optional[int] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[Payment]:
        """Paid entries only, by payment date. Entries without a period year use the year of ``date``."""

        raise NotImplementedError
