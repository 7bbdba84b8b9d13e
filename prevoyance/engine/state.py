# engine/state.py
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from ..data_model import (
    InsuranceContract,
    LPPAccount,
    Profile,
    ThirdPillarAccount,
    account_from_row,
    contract_from_row,
    lpp_account_from_row,
    profile_from_row,
)
from ..data_model.base import parse_flag
from ..logging_config import setup_logger
from .storage import load_records, save_records

logger = setup_logger(__name__)

T = TypeVar("T")


@dataclass
class OperationResult:
    success: bool
    error: str | None = None
    data: dict | None = None

    def to_dict(self) -> dict:
        payload: Dict[str, Any] = {"success": self.success}
        if self.error:
            payload["error"] = self.error
        if self.data is not None:
            payload["data"] = self.data
        return payload


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class RecordState(Generic[T]):
    """JSON-file record store standing in for the hosted database tables.

    Reads return parsed snapshots; writes validate the payload through
    ``parse`` before anything touches the file.
    """

    def __init__(
        self,
        storage_path: str,
        parse: Callable[[dict], T],
        sort_key: Callable[[dict], Any] | None = None,
        descending: bool = False,
    ) -> None:
        self.storage_path = storage_path
        self.parse = parse
        self.sort_key = sort_key
        self.descending = descending
        self.records: Dict[str, dict] = load_records(storage_path)

    def _ordered(self, rows: List[dict]) -> List[dict]:
        if self.sort_key is None:
            return rows
        return sorted(rows, key=self.sort_key, reverse=self.descending)

    def list_all(self) -> List[T]:
        return [self.parse(row) for row in self._ordered(list(self.records.values()))]

    def list_for_profile(self, profile_id: str, active_only: bool = True) -> List[T]:
        rows = [
            row
            for row in self.records.values()
            if row.get("profile_id") == profile_id and (not active_only or parse_flag(row, "is_active"))
        ]
        return [self.parse(row) for row in self._ordered(rows)]

    def get(self, record_id: str) -> Optional[T]:
        row = self.records.get(record_id)
        return self.parse(row) if row is not None else None

    def save(self, payload: dict) -> OperationResult:
        """Updates the record named by ``payload['id']`` or inserts a new one.

        Raises RecordValidationError for an invalid payload; storage failures
        come back as an unsuccessful result.
        """
        record_id = str(payload.get("id") or "").strip()
        if record_id:
            existing = self.records.get(record_id)
            if existing is None:
                return OperationResult(success=False, error=f"Record {record_id} not found.")
            row = {**existing, **payload, "id": record_id}
        else:
            record_id = uuid.uuid4().hex
            row = {**payload, "id": record_id, "created_at": _now()}

        record = self.parse(row)
        clean = record.to_dict()
        clean.setdefault("created_at", row.get("created_at"))

        previous = self.records.get(record_id)
        self.records[record_id] = clean
        try:
            self._save()
        except (OSError, TypeError, ValueError) as exc:
            logger.error(f"Saving record {record_id} to {self.storage_path} failed: {exc}")
            if previous is None:
                self.records.pop(record_id, None)
            else:
                self.records[record_id] = previous
            return OperationResult(success=False, error=str(exc))
        logger.info(f"Saved record {record_id} in {self.storage_path}")
        return OperationResult(success=True, data=clean)

    def delete(self, record_id: str) -> OperationResult:
        previous = self.records.pop(record_id, None)
        if previous is None:
            return OperationResult(success=False, error=f"Record {record_id} not found.")
        try:
            self._save()
        except (OSError, TypeError, ValueError) as exc:
            logger.error(f"Deleting record {record_id} from {self.storage_path} failed: {exc}")
            self.records[record_id] = previous
            return OperationResult(success=False, error=str(exc))
        logger.info(f"Deleted record {record_id} from {self.storage_path}")
        return OperationResult(success=True)

    def _save(self) -> None:
        save_records(self.storage_path, self.records)


class InsuranceState(RecordState[InsuranceContract]):
    def __init__(self, storage_path: str = "user_data/insurance_contracts.json"):
        super().__init__(storage_path, contract_from_row, sort_key=lambda row: str(row.get("insurance_type", "")))


class ThirdPillarState(RecordState[ThirdPillarAccount]):
    def __init__(self, storage_path: str = "user_data/third_pillar_accounts.json"):
        super().__init__(
            storage_path, account_from_row, sort_key=lambda row: str(row.get("created_at") or ""), descending=True
        )


class LPPState(RecordState[LPPAccount]):
    def __init__(self, storage_path: str = "user_data/lpp_accounts.json"):
        super().__init__(
            storage_path, lpp_account_from_row, sort_key=lambda row: str(row.get("created_at") or ""), descending=True
        )


class ProfileState(RecordState[Profile]):
    def __init__(self, storage_path: str = "user_data/profiles.json"):
        super().__init__(storage_path, profile_from_row, sort_key=lambda row: str(row.get("last_name", "")))
