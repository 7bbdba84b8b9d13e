from __future__ import annotations

from dataclasses import asdict, dataclass

from ..data_model import VAUD_INCOME_2025, VAUD_WEALTH_2025, VAUD_WEALTH_EXEMPTION, BracketTable
from .interpolate import interpolate

CHILD_DEDUCTION = 6500.0
MARRIED_DEDUCTION = 2600.0


@dataclass
class TaxInput:
    income: float
    wealth: float = 0.0
    children: int = 0
    married: bool = False
    third_pillar_deduction: float = 0.0
    mortgage_interest: float = 0.0
    other_deductions: float = 0.0

    def total_deductions(self) -> float:
        declared = self.third_pillar_deduction + self.mortgage_interest + self.other_deductions
        family = max(0, self.children) * CHILD_DEDUCTION + (MARRIED_DEDUCTION if self.married else 0.0)
        return declared + family


@dataclass
class TaxEstimate:
    jurisdiction: str
    income: float
    taxable_income: float
    wealth: float
    deductions: float
    income_tax: float
    wealth_tax: float
    total_tax: float
    effective_rate: float

    def to_dict(self) -> dict:
        return asdict(self)


class TaxEstimator:
    """Income and wealth tax for one jurisdiction and year.

    The bracket tables are the only jurisdiction-specific input; swapping them
    retargets the estimator without touching the interpolation.
    """

    def __init__(
        self,
        income_table: BracketTable = VAUD_INCOME_2025,
        wealth_table: BracketTable = VAUD_WEALTH_2025,
        wealth_exemption: float = VAUD_WEALTH_EXEMPTION,
        jurisdiction: str = "VD-2025",
    ) -> None:
        self.income_table = income_table
        self.wealth_table = wealth_table
        self.wealth_exemption = wealth_exemption
        self.jurisdiction = jurisdiction

    def income_tax(self, income: float) -> float:
        return interpolate(income, self.income_table)

    def wealth_tax(self, wealth: float) -> float:
        if wealth < self.wealth_exemption:
            return 0.0
        return interpolate(wealth, self.wealth_table)

    def estimate(self, values: TaxInput) -> TaxEstimate:
        deductions = values.total_deductions()
        taxable_income = max(0.0, values.income - deductions)
        wealth = max(0.0, values.wealth)
        income_tax = self.income_tax(taxable_income)
        wealth_tax = self.wealth_tax(wealth)
        total = income_tax + wealth_tax
        effective_rate = (total / values.income) * 100.0 if values.income > 0 else 0.0
        return TaxEstimate(
            jurisdiction=self.jurisdiction,
            income=values.income,
            taxable_income=taxable_income,
            wealth=wealth,
            deductions=deductions,
            income_tax=income_tax,
            wealth_tax=wealth_tax,
            total_tax=total,
            effective_rate=effective_rate,
        )


VAUD_2025 = TaxEstimator()


def income_tax(income: float) -> float:
    return VAUD_2025.income_tax(income)


def wealth_tax(wealth: float) -> float:
    return VAUD_2025.wealth_tax(wealth)
