from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import date

from ..data_model import ThirdPillarAccount

DEFAULT_RETIREMENT_AGE = 65
MAX_AGE = 120
# Capital is converted to a level annual rent paid over this many years
RENT_DIVISION_YEARS = 20


@dataclass
class ThirdPillarProjection:
    account_id: str
    institution_name: str
    account_type: str
    current_amount: float
    annual_contribution: float
    years_to_retirement: int
    return_rate: float
    projected_amount: float
    projected_annual_rent: float

    def to_dict(self) -> dict:
        return asdict(self)


def age_from_birth_date(birth_date: date, today: date | None = None) -> int:
    """Whole-year age from calendar years only; month and day are ignored."""
    today = today or date.today()
    return today.year - birth_date.year


def years_to_retirement(current_age: int, retirement_age: int = DEFAULT_RETIREMENT_AGE) -> int:
    return max(0, int(retirement_age) - int(current_age))


def future_value(current_amount: float, annual_contribution: float, return_rate: float, years: int) -> float:
    """Compounds once a year, then adds the contribution at year end."""
    growth = 1.0 + return_rate / 100.0
    amount = current_amount
    for _ in range(max(0, years)):
        amount = amount * growth + annual_contribution
    return amount


def project(
    account: ThirdPillarAccount,
    current_age: int,
    retirement_age: int = DEFAULT_RETIREMENT_AGE,
) -> ThirdPillarProjection:
    years = years_to_retirement(current_age, retirement_age)
    projected_amount = future_value(account.current_amount, account.annual_contribution, account.return_rate, years)
    if not math.isfinite(projected_amount):
        raise ValueError(f"Projection for account {account.id} does not stay finite over {years} years.")
    return ThirdPillarProjection(
        account_id=account.id,
        institution_name=account.institution_name,
        account_type=account.account_type,
        current_amount=account.current_amount,
        annual_contribution=account.annual_contribution,
        years_to_retirement=years,
        return_rate=account.return_rate,
        projected_amount=projected_amount,
        projected_annual_rent=projected_amount / RENT_DIVISION_YEARS,
    )
