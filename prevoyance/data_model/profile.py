# data_model/profile.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any

from ..errors import RecordValidationError
from .base import require_text


@dataclass
class Profile:
    id: str
    first_name: str
    last_name: str
    date_naissance: date | None = None
    canton: str = "VD"

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["date_naissance"] = self.date_naissance.isoformat() if self.date_naissance else None
        return payload


def parse_birth_date(raw: Any) -> date | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, date):
        return raw
    try:
        return date.fromisoformat(str(raw)[:10])
    except ValueError as exc:
        raise RecordValidationError(f"Invalid birth date {raw!r}, expected YYYY-MM-DD.", field="date_naissance") from exc


def profile_from_row(row: dict[str, Any]) -> Profile:
    return Profile(
        id=str(row.get("id") or ""),
        first_name=require_text(row, "first_name"),
        last_name=require_text(row, "last_name"),
        date_naissance=parse_birth_date(row.get("date_naissance")),
        canton=str(row.get("canton") or "VD").upper(),
    )
