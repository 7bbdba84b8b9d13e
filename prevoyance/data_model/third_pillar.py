from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, List

from ..errors import RecordValidationError
from .base import ColumnDefinition, TableModel, check_amounts, coerce_amount, parse_flag, require_text

ACCOUNT_TYPES = ["3a_bank", "3a_insurance", "3b"]

ACCOUNT_TYPE_LABELS = {
    "3a_bank": "Pilier 3a bancaire",
    "3a_insurance": "Pilier 3a assurance",
    "3b": "Pilier 3b (libre)",
}


@dataclass
class ThirdPillarAccount:
    id: str
    profile_id: str
    account_type: str
    institution_name: str
    current_amount: float = 0.0
    annual_contribution: float = 0.0
    return_rate: float = 0.0  # percent per year, may be negative
    contract_number: str | None = None
    start_date: str | None = None
    created_at: str | None = None
    is_active: bool = True
    notes: str | None = None

    def __post_init__(self) -> None:
        if self.account_type not in ACCOUNT_TYPES:
            raise RecordValidationError(f"Unknown account type '{self.account_type}'.", field="account_type")
        check_amounts(self, ["current_amount", "annual_contribution"])
        if self.return_rate is None:
            self.return_rate = 0.0
        if not math.isfinite(self.return_rate) or self.return_rate <= -100.0:
            raise RecordValidationError("'return_rate' must be a finite percentage above -100.", field="return_rate")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _third_pillar_defaults() -> List[dict[str, Any]]:
    return [
        {
            "account_type": "3a_bank",
            "institution_name": "Banque cantonale",
            "contract_number": "",
            "current_amount": 25000.0,
            "annual_contribution": 7258.0,
            "return_rate": 1.0,
            "start_date": "",
        },
        {
            "account_type": "3a_insurance",
            "institution_name": "Assurance vie",
            "contract_number": "",
            "current_amount": 12000.0,
            "annual_contribution": 3000.0,
            "return_rate": 0.5,
            "start_date": "",
        },
    ]


class ThirdPillarTableModel(TableModel):
    def __init__(self) -> None:
        columns = [
            ColumnDefinition(
                "account_type",
                "Type de compte",
                kind="select",
                default="3a_bank",
                options=ACCOUNT_TYPES,
                required=True,
            ),
            ColumnDefinition("institution_name", "Institution", required=True),
            ColumnDefinition("contract_number", "Numéro de contrat"),
            ColumnDefinition(
                "current_amount",
                "Montant actuel (CHF)",
                kind="number",
                default=0.0,
                min_value=0.0,
                step=500.0,
                format="%.2f",
            ),
            ColumnDefinition(
                "annual_contribution",
                "Versement annuel (CHF)",
                kind="number",
                default=0.0,
                min_value=0.0,
                step=100.0,
                format="%.2f",
            ),
            ColumnDefinition("return_rate", "Rendement (%)", kind="number", default=0.0, step=0.25, help="Rendement annuel fixe"),
            ColumnDefinition("start_date", "Ouverture", kind="date", default=""),
        ]
        super().__init__("third_pillar_accounts", columns, _third_pillar_defaults())


def account_from_row(row: dict[str, Any]) -> ThirdPillarAccount:
    return ThirdPillarAccount(
        id=str(row.get("id") or ""),
        profile_id=require_text(row, "profile_id"),
        account_type=require_text(row, "account_type"),
        institution_name=require_text(row, "institution_name"),
        current_amount=coerce_amount(row, "current_amount"),
        annual_contribution=coerce_amount(row, "annual_contribution"),
        return_rate=coerce_amount(row, "return_rate", allow_negative=True),
        contract_number=row.get("contract_number") or None,
        start_date=row.get("start_date") or None,
        created_at=row.get("created_at") or None,
        is_active=parse_flag(row, "is_active"),
        notes=row.get("notes") or None,
    )
