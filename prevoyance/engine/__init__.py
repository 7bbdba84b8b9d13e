from .aggregate import CategoryTotal, records_to_frame, sum_fields, summarize_by_category
from .analysis import (
    InsuranceAnalysis,
    LPPAnalysis,
    ThirdPillarAnalysis,
    analyze_insurance,
    analyze_lpp,
    analyze_third_pillar,
    lpp_death,
    lpp_disability,
    lpp_retirement,
)
from .avs import avs_monthly_pension, avs_pensions
from .interpolate import interpolate
from .projection import (
    DEFAULT_RETIREMENT_AGE,
    MAX_AGE,
    RENT_DIVISION_YEARS,
    ThirdPillarProjection,
    age_from_birth_date,
    future_value,
    project,
    years_to_retirement,
)
from .tax import TaxEstimate, TaxEstimator, TaxInput, income_tax, wealth_tax

__all__ = [
    "CategoryTotal",
    "DEFAULT_RETIREMENT_AGE",
    "MAX_AGE",
    "InsuranceAnalysis",
    "LPPAnalysis",
    "RENT_DIVISION_YEARS",
    "TaxEstimate",
    "TaxEstimator",
    "TaxInput",
    "ThirdPillarAnalysis",
    "ThirdPillarProjection",
    "age_from_birth_date",
    "analyze_insurance",
    "analyze_lpp",
    "analyze_third_pillar",
    "avs_monthly_pension",
    "avs_pensions",
    "future_value",
    "income_tax",
    "interpolate",
    "lpp_death",
    "lpp_disability",
    "lpp_retirement",
    "project",
    "records_to_frame",
    "sum_fields",
    "summarize_by_category",
    "wealth_tax",
    "years_to_retirement",
]
