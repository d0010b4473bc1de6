from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, Optional

from ...employees.model import Employee
from ...payments.model import Payment
from ...settings.model import GlobalSettings
from ..model import PayrollBreakdown


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(
        self,
        employee: Employee,
        settings: GlobalSettings,
        month_payments: Iterable[Payment],
        *,
        month: int,
        as_of: date,
        year: Optional[int] = None,
    ) -> PayrollBreakdown:
        raise NotImplementedError
