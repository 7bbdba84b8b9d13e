from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict

from .base import check_amounts, coerce_amount, parse_flag, require_text

EARLY_RETIREMENT_AGES = (60, 61, 62, 63, 64)

MONEY_FIELDS = [
    "current_retirement_savings",
    "projected_savings_at_65",
    "projected_retirement_rent_at_65",
    "disability_rent_annual",
    "child_disability_rent_annual",
    "death_capital",
    "additional_death_capital",
    "widow_rent_annual",
    "orphan_rent_annual",
]


@dataclass
class LPPAccount:
    """Second-pillar pension fund certificate, as entered by the user."""

    id: str
    profile_id: str
    provider_name: str
    plan_name: str | None = None
    current_retirement_savings: float = 0.0
    projected_savings_at_65: float = 0.0
    projected_retirement_rent_at_65: float = 0.0
    # age -> projected annual rent for early retirement
    early_retirement_rents: Dict[int, float] = field(default_factory=dict)
    disability_rent_annual: float = 0.0
    child_disability_rent_annual: float = 0.0
    waiting_period_days: int = 0
    death_capital: float = 0.0
    additional_death_capital: float = 0.0
    widow_rent_annual: float = 0.0
    orphan_rent_annual: float = 0.0
    created_at: str | None = None
    is_active: bool = True

    def __post_init__(self) -> None:
        check_amounts(self, MONEY_FIELDS)
        self.early_retirement_rents = {
            int(age): float(rent or 0.0) for age, rent in (self.early_retirement_rents or {}).items()
        }
        self.waiting_period_days = int(self.waiting_period_days or 0)

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload.pop("early_retirement_rents")
        for age in EARLY_RETIREMENT_AGES:
            payload[f"projected_retirement_rent_at_{age}"] = self.early_retirement_rents.get(age, 0.0)
        return payload


def lpp_account_from_row(row: dict[str, Any]) -> LPPAccount:
    rents = {age: coerce_amount(row, f"projected_retirement_rent_at_{age}") for age in EARLY_RETIREMENT_AGES}
    return LPPAccount(
        id=str(row.get("id") or ""),
        profile_id=require_text(row, "profile_id"),
        provider_name=require_text(row, "provider_name"),
        plan_name=row.get("plan_name") or None,
        current_retirement_savings=coerce_amount(row, "current_retirement_savings"),
        projected_savings_at_65=coerce_amount(row, "projected_savings_at_65"),
        projected_retirement_rent_at_65=coerce_amount(row, "projected_retirement_rent_at_65"),
        early_retirement_rents=rents,
        disability_rent_annual=coerce_amount(row, "disability_rent_annual"),
        child_disability_rent_annual=coerce_amount(row, "child_disability_rent_annual"),
        waiting_period_days=int(coerce_amount(row, "waiting_period_days")),
        death_capital=coerce_amount(row, "death_capital"),
        additional_death_capital=coerce_amount(row, "additional_death_capital"),
        widow_rent_annual=coerce_amount(row, "widow_rent_annual"),
        orphan_rent_annual=coerce_amount(row, "orphan_rent_annual"),
        created_at=row.get("created_at") or None,
        is_active=parse_flag(row, "is_active"),
    )
