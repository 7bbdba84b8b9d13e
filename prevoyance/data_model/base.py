from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, List, Mapping

import pandas as pd

from ..config import TRUTHY
from ..errors import RecordValidationError


@dataclass
class ColumnDefinition:
    """Form field descriptor served to the front-end editors."""

    field: str
    label: str
    kind: str = "text"  # text | number | select | date | bool
    default: Any = ""
    options: List[str] | None = None
    min_value: float | None = None
    step: float | None = None
    format: str | None = None
    help: str | None = None
    required: bool = False

    def to_payload(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "label": self.label,
            "kind": self.kind,
            "default": self.default,
            "options": self.options or [],
            "min": self.min_value,
            "step": self.step,
            "format": self.format,
            "help": self.help,
            "required": self.required,
        }


@dataclass
class TableModel:
    """Container for a record schema plus example rows."""

    name: str
    columns: List[ColumnDefinition]
    default_rows: List[dict[str, Any]] = field(default_factory=list)

    def create_default_df(self) -> pd.DataFrame:
        if self.default_rows:
            return pd.DataFrame(self.default_rows, columns=[col.field for col in self.columns])
        seed = {col.field: col.default for col in self.columns}
        return pd.DataFrame([seed])

    def required_fields(self) -> list[str]:
        return [col.field for col in self.columns if col.required]


def coerce_amount(row: Mapping[str, Any], key: str, allow_negative: bool = False) -> float:
    """Reads a money field, treating missing/blank values as zero."""
    raw = row.get(key)
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return 0.0
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise RecordValidationError(f"'{key}' must be a number, got {raw!r}.", field=key) from exc
    if not math.isfinite(value):
        raise RecordValidationError(f"'{key}' must be a finite number.", field=key)
    if value < 0 and not allow_negative:
        raise RecordValidationError(f"'{key}' cannot be negative.", field=key)
    return value


def check_amounts(record: Any, fields: List[str]) -> None:
    for name in fields:
        value = getattr(record, name)
        if value is None:
            setattr(record, name, 0.0)
            continue
        if not math.isfinite(value):
            raise RecordValidationError(f"'{name}' must be a finite number.", field=name)
        if value < 0:
            raise RecordValidationError(f"'{name}' cannot be negative.", field=name)


def parse_flag(row: Mapping[str, Any], key: str, default: bool = True) -> bool:
    """Reads a boolean that may arrive as a form string such as "false" or "0"."""
    raw = row.get(key)
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return default
    if isinstance(raw, str):
        return raw.strip().lower() in TRUTHY
    return bool(raw)


def require_text(row: Mapping[str, Any], key: str) -> str:
    value = str(row.get(key) or "").strip()
    if not value:
        raise RecordValidationError(f"'{key}' is required.", field=key)
    return value
