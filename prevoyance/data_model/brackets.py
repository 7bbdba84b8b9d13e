from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Tuple

from ..errors import BracketTableError


@dataclass(frozen=True)
class Bracket:
    threshold: float
    tax: float


@dataclass(frozen=True)
class BracketTable:
    """Sorted (threshold, cumulative tax) pairs describing a piecewise-linear tax curve.

    Rows are sorted on construction. The table needs at least two rows, a
    positive first threshold and strictly increasing thresholds so that every
    segment (including the one through the origin) has a finite slope.
    Cumulative tax starts at zero or above and never decreases.
    """

    name: str
    rows: Tuple[Bracket, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        rows = tuple(sorted(self.rows, key=lambda row: row.threshold))
        if len(rows) < 2:
            raise BracketTableError(f"Bracket table '{self.name}' needs at least two rows, got {len(rows)}.")
        for row in rows:
            if not (math.isfinite(row.threshold) and math.isfinite(row.tax)):
                raise BracketTableError(f"Bracket table '{self.name}' contains a non-finite value: {row}.")
        if rows[0].threshold <= 0:
            raise BracketTableError(f"Bracket table '{self.name}' must start at a positive threshold.")
        if rows[0].tax < 0:
            raise BracketTableError(f"Bracket table '{self.name}' has a negative tax at {rows[0].threshold}.")
        for current, nxt in zip(rows, rows[1:]):
            if nxt.threshold == current.threshold:
                raise BracketTableError(
                    f"Bracket table '{self.name}' has a zero-width interval at {current.threshold}."
                )
            if nxt.tax < current.tax:
                raise BracketTableError(
                    f"Bracket table '{self.name}' decreases between {current.threshold} and {nxt.threshold}."
                )
        object.__setattr__(self, "rows", rows)

    @classmethod
    def from_pairs(cls, name: str, pairs: Iterable[Tuple[float, float]]) -> "BracketTable":
        return cls(name, tuple(Bracket(float(threshold), float(tax)) for threshold, tax in pairs))

    @property
    def first(self) -> Bracket:
        return self.rows[0]

    @property
    def last(self) -> Bracket:
        return self.rows[-1]

    def thresholds(self) -> list[float]:
        return [row.threshold for row in self.rows]

    def __len__(self) -> int:
        return len(self.rows)


# Barème 2025 de l'impôt cantonal vaudois sur le revenu (paliers principaux)
VAUD_INCOME_2025 = BracketTable.from_pairs(
    "vaud-income-2025",
    [
        (100, 1.00), (500, 5.00), (1000, 10.00), (1700, 18.00), (2000, 24.00),
        (2500, 34.00), (3000, 44.00), (3500, 55.00), (4000, 70.00), (4500, 85.00),
        (5000, 99.00), (6000, 139.00), (7000, 179.00), (8000, 219.00), (9000, 266.00),
        (10000, 313.00), (11000, 360.00), (12000, 407.00), (13000, 454.00), (14000, 505.00),
        (15000, 556.00), (16000, 607.00), (17000, 658.00), (18000, 713.00), (19000, 768.00),
        (20000, 823.00), (22000, 943.00), (25000, 1120.00), (30000, 1466.00), (35000, 1849.00),
        (40000, 2269.00), (45000, 2726.00), (50000, 3220.00), (55000, 3751.00), (60000, 4294.00),
        (70000, 5488.00), (80000, 6802.00), (90000, 8236.00), (100000, 9790.00),
        (110000, 11464.00), (120000, 13168.00), (130000, 14992.00), (140000, 17056.00),
        (150000, 19140.00), (160000, 21454.00), (180000, 26362.00), (200000, 31780.00),
        (250000, 46530.00), (300000, 63030.00), (400000, 100530.00), (500000, 143030.00),
    ],
)

# Barème 2025 de l'impôt cantonal vaudois sur la fortune
VAUD_WEALTH_2025 = BracketTable.from_pairs(
    "vaud-wealth-2025",
    [
        (50000, 22.95), (55000, 27.80), (60000, 32.65), (65000, 37.50), (70000, 42.35),
        (75000, 47.20), (80000, 52.05), (85000, 56.90), (90000, 61.75), (95000, 66.60),
        (100000, 75.05), (110000, 91.95), (120000, 108.85), (130000, 125.75), (140000, 142.65),
        (150000, 163.55), (160000, 180.45), (170000, 197.35), (180000, 218.25), (190000, 239.15),
        (200000, 260.05), (220000, 301.85), (250000, 364.80), (300000, 479.55), (350000, 594.30),
        (400000, 724.05), (450000, 853.80), (500000, 983.55), (600000, 1258.05), (700000, 1547.55),
        (800000, 1852.05), (900000, 2171.55), (1000000, 2506.05), (1200000, 3219.05),
        (1500000, 4217.55), (2000000, 5925.05),
    ],
)

# Franchise: no wealth tax below this amount
VAUD_WEALTH_EXEMPTION = 50_000.0
