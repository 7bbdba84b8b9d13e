"""
AVS (first pillar) pension lookup on the Échelle 44 (2025).

Amounts are full pensions for a complete contribution period; the scale maps
the average determining annual income to a monthly pension in CHF.
"""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import asdict, dataclass

# (income ceiling per year, monthly pension)
ECHELLE_44_2025: list[tuple[float, float]] = [
    (15120, 1260), (16800, 1285), (18480, 1310), (20160, 1335), (21840, 1360),
    (23520, 1385), (25200, 1410), (26880, 1435), (28560, 1460), (30240, 1485),
    (31920, 1510), (33600, 1535), (35280, 1560), (36960, 1585), (38640, 1610),
    (40320, 1635), (42000, 1660), (43680, 1685), (45360, 1710), (47040, 1735),
    (48720, 1760), (50400, 1785), (52080, 1810), (53760, 1835), (55440, 1860),
    (57120, 1885), (58800, 1910), (60480, 1935), (62160, 1960), (63840, 1985),
    (65520, 2010), (67200, 2035), (68880, 2060), (70560, 2085), (72240, 2110),
    (73920, 2135), (75600, 2160), (77280, 2185), (78960, 2210), (80640, 2235),
    (82320, 2260), (84000, 2285), (85680, 2310), (87360, 2335), (89040, 2360),
    (90720, 2520),
]

MIN_PENSION = 1260.0
MAX_PENSION = 2520.0
MIN_INCOME = 15120.0
MAX_INCOME = 90720.0

_CEILINGS = [ceiling for ceiling, _ in ECHELLE_44_2025]


@dataclass
class AVSPensions:
    rente_vieillesse_mensuelle: float
    rente_vieillesse_annuelle: float
    rente_invalidite_mensuelle: float
    rente_invalidite_annuelle: float
    revenu_annuel_determinant: float

    def to_dict(self) -> dict:
        return asdict(self)


def avs_monthly_pension(annual_income: float) -> float:
    if not annual_income or annual_income <= 0:
        return 0.0
    if annual_income <= MIN_INCOME:
        return MIN_PENSION
    if annual_income >= MAX_INCOME:
        return MAX_PENSION
    # first step whose ceiling covers the income
    idx = bisect_left(_CEILINGS, annual_income)
    return float(ECHELLE_44_2025[idx][1])


def avs_pensions(annual_income: float) -> AVSPensions:
    monthly = avs_monthly_pension(annual_income)
    # disability pension equals the old-age pension for AVS
    return AVSPensions(
        rente_vieillesse_mensuelle=monthly,
        rente_vieillesse_annuelle=monthly * 12,
        rente_invalidite_mensuelle=monthly,
        rente_invalidite_annuelle=monthly * 12,
        revenu_annuel_determinant=annual_income,
    )
