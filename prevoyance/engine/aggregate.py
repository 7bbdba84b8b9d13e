from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Mapping, Sequence

import pandas as pd

from ..errors import RecordValidationError


@dataclass
class CategoryTotal:
    count: int = 0
    total: float = 0.0

    def to_dict(self) -> dict:
        return {"count": self.count, "total": self.total}


def _field_value(record: Any, field: str) -> float:
    if isinstance(record, Mapping):
        value = record.get(field)
    else:
        value = getattr(record, field, None)
    return float(value or 0.0)


def records_to_frame(records: Iterable[Any], fields: Sequence[str]) -> pd.DataFrame:
    """Numeric snapshot of ``records``; absent fields become 0."""
    rows = [{field: _field_value(record, field) for field in fields} for record in records]
    return pd.DataFrame(rows, columns=list(fields)).astype(float)


def sum_fields(records: Iterable[Any], fields: Sequence[str]) -> Dict[str, float]:
    frame = records_to_frame(records, fields)
    return {field: float(frame[field].sum()) for field in fields}


def summarize_by_category(
    records: Iterable[Any],
    classify: Callable[[Any], str],
    amount_field: str,
    categories: Sequence[str],
) -> Dict[str, CategoryTotal]:
    """Count and sum ``amount_field`` per category.

    Every category in ``categories`` appears in the result. A record that
    ``classify`` maps outside of ``categories`` is rejected.
    """
    records = list(records)
    tags = [classify(record) for record in records]
    unknown = sorted(set(tags).difference(categories))
    if unknown:
        raise RecordValidationError(f"Unmapped categories: {', '.join(map(str, unknown))}")

    frame = records_to_frame(records, [amount_field])
    frame["category"] = tags
    grouped = (
        frame.groupby("category")[amount_field]
        .agg(["count", "sum"])
        .reindex(list(categories), fill_value=0)
    )
    return {
        category: CategoryTotal(count=int(row["count"]), total=float(row["sum"]))
        for category, row in grouped.iterrows()
    }
