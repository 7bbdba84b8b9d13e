from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List

from ..errors import RecordValidationError
from .base import ColumnDefinition, TableModel, check_amounts, coerce_amount, parse_flag, require_text

INSURANCE_TYPES = [
    "health_basic",
    "health_complementary",
    "household",
    "liability",
    "vehicle",
    "legal_protection",
    "life",
    "disability",
    "loss_of_earnings",
]

INSURANCE_TYPE_LABELS: Dict[str, str] = {
    "health_basic": "Assurance maladie de base (LAMal)",
    "health_complementary": "Assurance complémentaire (LCA)",
    "household": "Assurance ménage",
    "liability": "Responsabilité civile",
    "vehicle": "Assurance véhicule",
    "legal_protection": "Protection juridique",
    "life": "Assurance vie",
    "disability": "Assurance invalidité",
    "loss_of_earnings": "Perte de gain",
}

INSURANCE_BUCKETS = ("health", "protection", "property")

# Every insurance type belongs to exactly one bucket.
INSURANCE_TYPE_BUCKETS: Dict[str, str] = {
    "health_basic": "health",
    "health_complementary": "health",
    "life": "protection",
    "disability": "protection",
    "loss_of_earnings": "protection",
    "household": "property",
    "liability": "property",
    "vehicle": "property",
    "legal_protection": "property",
}

MONEY_FIELDS = [
    "annual_premium",
    "deductible",
    "coverage_amount",
    "disability_rent_annual",
    "death_capital",
]


@dataclass
class InsuranceContract:
    id: str
    profile_id: str
    insurance_type: str
    company_name: str
    annual_premium: float = 0.0
    contract_number: str | None = None
    deductible: float = 0.0
    coverage_amount: float = 0.0
    disability_rent_annual: float = 0.0
    death_capital: float = 0.0
    start_date: str | None = None
    end_date: str | None = None
    is_active: bool = True
    notes: str | None = None

    def __post_init__(self) -> None:
        if self.insurance_type not in INSURANCE_TYPE_BUCKETS:
            raise RecordValidationError(
                f"Unknown insurance type '{self.insurance_type}'.", field="insurance_type"
            )
        check_amounts(self, MONEY_FIELDS)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def insurance_bucket(contract: InsuranceContract) -> str:
    return INSURANCE_TYPE_BUCKETS[contract.insurance_type]


def _insurance_defaults() -> List[dict[str, Any]]:
    return [
        {
            "insurance_type": "health_basic",
            "company_name": "Caisse maladie",
            "contract_number": "",
            "annual_premium": 4800.0,
            "deductible": 2500.0,
            "coverage_amount": 0.0,
            "disability_rent_annual": 0.0,
            "death_capital": 0.0,
        },
        {
            "insurance_type": "liability",
            "company_name": "Assureur RC",
            "contract_number": "",
            "annual_premium": 180.0,
            "deductible": 200.0,
            "coverage_amount": 5000000.0,
            "disability_rent_annual": 0.0,
            "death_capital": 0.0,
        },
    ]


class InsuranceContractTableModel(TableModel):
    def __init__(self) -> None:
        columns = [
            ColumnDefinition(
                "insurance_type",
                "Type d'assurance",
                kind="select",
                default="health_basic",
                options=INSURANCE_TYPES,
                required=True,
            ),
            ColumnDefinition("company_name", "Compagnie", required=True),
            ColumnDefinition("contract_number", "Numéro de contrat"),
            ColumnDefinition(
                "annual_premium",
                "Prime annuelle (CHF)",
                kind="number",
                default=0.0,
                min_value=0.0,
                step=50.0,
                format="%.2f",
            ),
            ColumnDefinition("deductible", "Franchise (CHF)", kind="number", default=0.0, min_value=0.0, step=100.0),
            ColumnDefinition(
                "coverage_amount", "Somme d'assurance (CHF)", kind="number", default=0.0, min_value=0.0, step=1000.0
            ),
            ColumnDefinition(
                "disability_rent_annual",
                "Rente invalidité annuelle (CHF)",
                kind="number",
                default=0.0,
                min_value=0.0,
                step=1000.0,
            ),
            ColumnDefinition("death_capital", "Capital décès (CHF)", kind="number", default=0.0, min_value=0.0, step=1000.0),
            ColumnDefinition("start_date", "Début", kind="date", default=""),
            ColumnDefinition("end_date", "Fin", kind="date", default=""),
        ]
        super().__init__("insurance_contracts", columns, _insurance_defaults())


def contract_from_row(row: dict[str, Any]) -> InsuranceContract:
    insurance_type = require_text(row, "insurance_type")
    return InsuranceContract(
        id=str(row.get("id") or ""),
        profile_id=require_text(row, "profile_id"),
        insurance_type=insurance_type,
        company_name=require_text(row, "company_name"),
        contract_number=row.get("contract_number") or None,
        annual_premium=coerce_amount(row, "annual_premium"),
        deductible=coerce_amount(row, "deductible"),
        coverage_amount=coerce_amount(row, "coverage_amount"),
        disability_rent_annual=coerce_amount(row, "disability_rent_annual"),
        death_capital=coerce_amount(row, "death_capital"),
        start_date=row.get("start_date") or None,
        end_date=row.get("end_date") or None,
        is_active=parse_flag(row, "is_active"),
        notes=row.get("notes") or None,
    )
