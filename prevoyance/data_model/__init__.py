from .base import ColumnDefinition, TableModel
from .brackets import (
    VAUD_INCOME_2025,
    VAUD_WEALTH_2025,
    VAUD_WEALTH_EXEMPTION,
    Bracket,
    BracketTable,
)
from .insurance import (
    INSURANCE_BUCKETS,
    INSURANCE_TYPE_BUCKETS,
    INSURANCE_TYPE_LABELS,
    INSURANCE_TYPES,
    InsuranceContract,
    InsuranceContractTableModel,
    contract_from_row,
    insurance_bucket,
)
from .lpp import LPPAccount, lpp_account_from_row
from .profile import Profile, parse_birth_date, profile_from_row
from .third_pillar import (
    ACCOUNT_TYPE_LABELS,
    ACCOUNT_TYPES,
    ThirdPillarAccount,
    ThirdPillarTableModel,
    account_from_row,
)

__all__ = [
    "ACCOUNT_TYPES",
    "ACCOUNT_TYPE_LABELS",
    "Bracket",
    "BracketTable",
    "ColumnDefinition",
    "INSURANCE_BUCKETS",
    "INSURANCE_TYPES",
    "INSURANCE_TYPE_BUCKETS",
    "INSURANCE_TYPE_LABELS",
    "InsuranceContract",
    "InsuranceContractTableModel",
    "LPPAccount",
    "Profile",
    "TableModel",
    "ThirdPillarAccount",
    "ThirdPillarTableModel",
    "VAUD_INCOME_2025",
    "VAUD_WEALTH_2025",
    "VAUD_WEALTH_EXEMPTION",
    "account_from_row",
    "contract_from_row",
    "insurance_bucket",
    "lpp_account_from_row",
    "parse_birth_date",
    "profile_from_row",
]
