from __future__ import annotations

from dataclasses import dataclass, fields, replace
from decimal import ROUND_HALF_UP, Decimal

from ..core.constants import MONEY_QUANTUM

ZERO = Decimal("0")


@dataclass(frozen=True)
class PayrollBreakdown:
    """Monthly payroll figures for one employee.

    Values are kept unrounded; ``rounded()`` is the presentation step.
    """

    salary: Decimal = ZERO
    reserve_fund: Decimal = ZERO
    thirteenth: Decimal = ZERO
    fourteenth: Decimal = ZERO
    total_income: Decimal = ZERO
    iess_contribution: Decimal = ZERO
    loans: Decimal = ZERO
    penalties: Decimal = ZERO
    total_expenses: Decimal = ZERO
    net_to_receive: Decimal = ZERO

    def rounded(self) -> "PayrollBreakdown":
        return replace(
            self,
            **{f.name: getattr(self, f.name).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP) for f in fields(self)},
        )

    def to_dict(self) -> dict[str, str]:
        return {f.name: str(getattr(self, f.name)) for f in fields(self)}

    def __add__(self, other: "PayrollBreakdown") -> "PayrollBreakdown":
        return PayrollBreakdown(**{f.name: getattr(self, f.name) + getattr(other, f.name) for f in fields(self)})
