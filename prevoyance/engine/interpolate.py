from __future__ import annotations

import math
from bisect import bisect_left

from ..data_model import BracketTable


def _slope(x0: float, y0: float, x1: float, y1: float) -> float:
    return (y1 - y0) / (x1 - x0)


def interpolate(value: float, table: BracketTable) -> float:
    """Reads the piecewise-linear tax curve described by ``table`` at ``value``.

    Below the first threshold the curve runs through the origin; above the
    last one it keeps the slope of the last segment.
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot interpolate a non-finite value: {value!r}")
    if value <= 0:
        return 0.0

    rows = table.rows
    first, last = rows[0], rows[-1]
    if value <= first.threshold:
        return value * first.tax / first.threshold

    if value >= last.threshold:
        before_last = rows[-2]
        increment = _slope(before_last.threshold, before_last.tax, last.threshold, last.tax)
        return last.tax + (value - last.threshold) * increment

    # first threshold < value < last threshold, so 1 <= idx <= len(rows) - 1
    idx = bisect_left(table.thresholds(), value)
    current, nxt = rows[idx - 1], rows[idx]
    ratio = (value - current.threshold) / (nxt.threshold - current.threshold)
    return current.tax + ratio * (nxt.tax - current.tax)
