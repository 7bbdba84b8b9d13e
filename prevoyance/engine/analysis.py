"""Per-domain analyses composed from the projection engine and the reducers.

Callers pass active records only; nothing here filters or mutates them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from ..data_model import (
    ACCOUNT_TYPES,
    INSURANCE_BUCKETS,
    InsuranceContract,
    LPPAccount,
    ThirdPillarAccount,
    insurance_bucket,
)
from ..data_model.lpp import EARLY_RETIREMENT_AGES
from .aggregate import CategoryTotal, sum_fields, summarize_by_category
from .projection import DEFAULT_RETIREMENT_AGE, ThirdPillarProjection, project


@dataclass
class InsuranceAnalysis:
    total_annual_premium: float
    total_death_capital: float
    total_disability_rent: float
    by_type: Dict[str, CategoryTotal]
    contracts: List[InsuranceContract] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalAnnualPremium": self.total_annual_premium,
            "totalDeathCapital": self.total_death_capital,
            "totalDisabilityRent": self.total_disability_rent,
            "byType": {
                bucket: {"count": total.count, "premium": total.total} for bucket, total in self.by_type.items()
            },
            "contracts": [contract.to_dict() for contract in self.contracts],
        }


def analyze_insurance(contracts: Sequence[InsuranceContract]) -> InsuranceAnalysis:
    totals = sum_fields(contracts, ["annual_premium", "death_capital", "disability_rent_annual"])
    by_type = summarize_by_category(contracts, insurance_bucket, "annual_premium", INSURANCE_BUCKETS)
    return InsuranceAnalysis(
        total_annual_premium=totals["annual_premium"],
        total_death_capital=totals["death_capital"],
        total_disability_rent=totals["disability_rent_annual"],
        by_type=by_type,
        contracts=list(contracts),
    )


@dataclass
class ThirdPillarAnalysis:
    current_age: int
    retirement_age: int
    total_current_amount: float
    total_annual_contribution: float
    total_projected_amount: float
    total_projected_annual_rent: float
    by_account_type: Dict[str, CategoryTotal]
    accounts: List[ThirdPillarProjection] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "currentAge": self.current_age,
            "retirementAge": self.retirement_age,
            "totalCurrentAmount": self.total_current_amount,
            "totalAnnualContribution": self.total_annual_contribution,
            "totalProjectedAmount": self.total_projected_amount,
            "totalProjectedAnnualRent": self.total_projected_annual_rent,
            "byAccountType": {
                account_type: {"count": total.count, "projectedAmount": total.total}
                for account_type, total in self.by_account_type.items()
            },
            "accounts": [projection.to_dict() for projection in self.accounts],
        }


def analyze_third_pillar(
    accounts: Sequence[ThirdPillarAccount],
    current_age: int,
    retirement_age: int = DEFAULT_RETIREMENT_AGE,
) -> ThirdPillarAnalysis:
    projections = [project(account, current_age, retirement_age) for account in accounts]
    totals = sum_fields(
        projections,
        ["current_amount", "annual_contribution", "projected_amount", "projected_annual_rent"],
    )
    by_account_type = summarize_by_category(
        projections, lambda p: p.account_type, "projected_amount", ACCOUNT_TYPES
    )
    return ThirdPillarAnalysis(
        current_age=current_age,
        retirement_age=retirement_age,
        total_current_amount=totals["current_amount"],
        total_annual_contribution=totals["annual_contribution"],
        total_projected_amount=totals["projected_amount"],
        total_projected_annual_rent=totals["projected_annual_rent"],
        by_account_type=by_account_type,
        accounts=projections,
    )


def monthly(annual: float) -> int:
    # half-up, not banker's rounding
    return int(math.floor(annual / 12 + 0.5))


@dataclass
class LPPRetirementOption:
    age: int
    annual_rent: float
    monthly_rent: int


@dataclass
class LPPRetirementResult:
    account_id: str
    provider_name: str
    current_savings: float
    projected_savings_65: float
    annual_rent_65: float
    monthly_rent_65: int
    retirement_options: List[LPPRetirementOption] = field(default_factory=list)


@dataclass
class LPPDisabilityResult:
    account_id: str
    provider_name: str
    disability_rent_annual: float
    disability_rent_monthly: int
    child_disability_rent_annual: float
    child_disability_rent_monthly: int
    waiting_period_days: int


@dataclass
class LPPDeathResult:
    account_id: str
    provider_name: str
    death_capital_total: float
    widow_rent_annual: float
    widow_rent_monthly: int
    orphan_rent_annual: float
    orphan_rent_monthly: int


def lpp_retirement(account: LPPAccount) -> LPPRetirementResult:
    options = []
    for age in EARLY_RETIREMENT_AGES:
        rent = account.early_retirement_rents.get(age, 0.0)
        if rent > 0:
            options.append(LPPRetirementOption(age=age, annual_rent=rent, monthly_rent=monthly(rent)))
    return LPPRetirementResult(
        account_id=account.id,
        provider_name=account.provider_name,
        current_savings=account.current_retirement_savings,
        projected_savings_65=account.projected_savings_at_65,
        annual_rent_65=account.projected_retirement_rent_at_65,
        monthly_rent_65=monthly(account.projected_retirement_rent_at_65),
        retirement_options=options,
    )


def lpp_disability(account: LPPAccount) -> LPPDisabilityResult:
    return LPPDisabilityResult(
        account_id=account.id,
        provider_name=account.provider_name,
        disability_rent_annual=account.disability_rent_annual,
        disability_rent_monthly=monthly(account.disability_rent_annual),
        child_disability_rent_annual=account.child_disability_rent_annual,
        child_disability_rent_monthly=monthly(account.child_disability_rent_annual),
        waiting_period_days=account.waiting_period_days,
    )


def lpp_death(account: LPPAccount) -> LPPDeathResult:
    return LPPDeathResult(
        account_id=account.id,
        provider_name=account.provider_name,
        death_capital_total=account.death_capital + account.additional_death_capital,
        widow_rent_annual=account.widow_rent_annual,
        widow_rent_monthly=monthly(account.widow_rent_annual),
        orphan_rent_annual=account.orphan_rent_annual,
        orphan_rent_monthly=monthly(account.orphan_rent_annual),
    )


@dataclass
class LPPAnalysis:
    total_accounts: int
    total_current_savings: float
    total_projected_savings_65: float
    total_annual_rent_65: float
    total_monthly_rent_65: int
    total_disability_rent_annual: float
    total_disability_rent_monthly: int
    total_death_capital: float
    total_widow_rent_monthly: int
    total_orphan_rent_monthly: int
    accounts_details: List[LPPAccount] = field(default_factory=list)

    def to_dict(self) -> dict:
        payload = {key: value for key, value in self.__dict__.items() if key != "accounts_details"}
        payload["accounts_details"] = [account.to_dict() for account in self.accounts_details]
        return payload


def analyze_lpp(accounts: Sequence[LPPAccount]) -> LPPAnalysis:
    totals = sum_fields(
        accounts,
        [
            "current_retirement_savings",
            "projected_savings_at_65",
            "projected_retirement_rent_at_65",
            "disability_rent_annual",
            "death_capital",
            "additional_death_capital",
            "widow_rent_annual",
            "orphan_rent_annual",
        ],
    )
    return LPPAnalysis(
        total_accounts=len(accounts),
        total_current_savings=totals["current_retirement_savings"],
        total_projected_savings_65=totals["projected_savings_at_65"],
        total_annual_rent_65=totals["projected_retirement_rent_at_65"],
        total_monthly_rent_65=monthly(totals["projected_retirement_rent_at_65"]),
        total_disability_rent_annual=totals["disability_rent_annual"],
        total_disability_rent_monthly=monthly(totals["disability_rent_annual"]),
        total_death_capital=totals["death_capital"] + totals["additional_death_capital"],
        total_widow_rent_monthly=monthly(totals["widow_rent_annual"]),
        total_orphan_rent_monthly=monthly(totals["orphan_rent_annual"]),
        accounts_details=list(accounts),
    )
