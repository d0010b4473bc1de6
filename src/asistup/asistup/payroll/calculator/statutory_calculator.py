from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from ...common.datetime_utils import whole_years_between
from ...common.validators import to_decimal
from ...core.constants import MONTHS_PER_YEAR
from ...core.enums import OverSalaryType, PaymentType
from ...employees.model import Employee
from ...payments.model import Payment
from ...settings.model import GlobalSettings
from ..model import ZERO, PayrollBreakdown
from .base import PayrollCalculator


def _in_period(payment: Payment, month: int, year: Optional[int]) -> bool:
    if not payment.is_paid or payment.month != month:
        return False
    return year is None or payment.year is None or payment.year == year


class StatutoryPayrollCalculator(PayrollCalculator):
    """Ecuadorian monthly payroll rule.

    Income: salary, reserve fund (fixed contract, >= 1 year, mensualized),
    13th = salary/12 and 14th = SBU/12 when mensualized. Every statutory
    component requires IESS affiliation.
    Expenses: IESS contribution, paid loans of the month and paid penalties
    (negative Bonus entries) of the month.

    Pure: no rounding, no mutation of inputs, missing data counts as zero.
    """

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
        salary = to_decimal(employee.salary)
        sbu = to_decimal(settings.sbu)
        monthly = employee.over_salary_type == OverSalaryType.MONTHLY
        affiliated = bool(employee.is_affiliated)

        reserve_fund = ZERO
        thirteenth = ZERO
        fourteenth = ZERO
        iess = ZERO
        if affiliated:
            tenure = whole_years_between(employee.start_date, as_of)
            if employee.is_fixed and tenure >= 1 and monthly:
                reserve_fund = salary * to_decimal(settings.reserve_rate)
            if monthly:
                thirteenth = salary / Decimal(MONTHS_PER_YEAR)
                fourteenth = sbu / Decimal(MONTHS_PER_YEAR)
            iess = salary * to_decimal(settings.iess_rate)

        loans = ZERO
        penalties = ZERO
        for p in month_payments:
            if not _in_period(p, month, year):
                continue
            amount = to_decimal(p.amount)
            if p.type == PaymentType.LOAN:
                loans += amount
            elif p.type == PaymentType.BONUS and amount < 0:
                penalties += abs(amount)

        total_income = salary + reserve_fund + thirteenth + fourteenth
        total_expenses = iess + loans + penalties
        return PayrollBreakdown(
            salary=salary,
            reserve_fund=reserve_fund,
            thirteenth=thirteenth,
            fourteenth=fourteenth,
            total_income=total_income,
            iess_contribution=iess,
            loans=loans,
            penalties=penalties,
            total_expenses=total_expenses,
            net_to_receive=total_income - total_expenses,
        )
