from __future__ import annotations

import os
from dataclasses import dataclass

TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    data_dir: str = "user_data"
    retirement_age: int = 65
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"
    log_file: str | None = None

    def storage_path(self, collection: str) -> str:
        return os.path.join(self.data_dir, f"{collection}.json")


def load_settings_from_env() -> Settings:
    """Builds settings from env vars.

    Env vars:
      PREVOYANCE_DATA_DIR=<dir>          -> folder holding the JSON record stores
      PREVOYANCE_RETIREMENT_AGE=65       -> default retirement age for projections
      PREVOYANCE_PORT=8000               -> port used by `python -m prevoyance.backend`
      PREVOYANCE_DEBUG=1                 -> run Flask in debug mode
      LOG_LEVEL=INFO                     -> logging level for every module
      PREVOYANCE_LOG_FILE=<path>         -> optional copy of the log output
    """
    try:
        retirement_age = int(os.getenv("PREVOYANCE_RETIREMENT_AGE", 65))
    except ValueError:
        retirement_age = 65
    try:
        port = int(os.getenv("PREVOYANCE_PORT", 8000))
    except ValueError:
        port = 8000
    return Settings(
        data_dir=os.getenv("PREVOYANCE_DATA_DIR", "user_data"),
        retirement_age=retirement_age,
        port=port,
        debug=str(os.getenv("PREVOYANCE_DEBUG", "")).lower() in TRUTHY,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_file=os.getenv("PREVOYANCE_LOG_FILE") or None,
    )
