# engine/storage.py
import json
import math
import os
from typing import Any, Dict

from ..logging_config import setup_logger

logger = setup_logger(__name__)


def ensure_user_data_dir(path: str) -> None:
    folder = os.path.dirname(path)
    if folder and not os.path.exists(folder):
        os.makedirs(folder, exist_ok=True)


def _sanitize_json_compat(value: Any):
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return value
    if isinstance(value, dict):
        return {key: _sanitize_json_compat(val) for key, val in value.items()}
    if isinstance(value, list):
        return [_sanitize_json_compat(item) for item in value]
    return value


def load_records(path: str) -> Dict[str, dict]:
    """Reads an id -> record mapping; a missing or unreadable file is an empty store."""
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw_text = f.read().strip()
            if not raw_text:
                return {}
            data = json.loads(raw_text)
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning(f"Could not read record store {path}: {exc}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring record store {path}: expected an object, got {type(data).__name__}")
        return {}
    return _sanitize_json_compat(data)


def save_records(path: str, records: Dict[str, dict]) -> None:
    ensure_user_data_dir(path)
    tmp_path = f"{path}.tmp"
    clean = _sanitize_json_compat(records)
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(clean, f, allow_nan=False, ensure_ascii=False, indent=2)
    os.replace(tmp_path, path)
